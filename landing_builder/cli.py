"""Command line interface for the landing page build server."""

import asyncio
import sys

import click

from landing_builder.core.domain.entities import BuildTask
from landing_builder.core.exceptions import BuildException, FatalException
from landing_builder.core.services.build_executor import BuildExecutor
from landing_builder.utils.logging import setup_logging
from landing_builder.settings import get_settings


@click.group()
def cli():
    """Landing page build server CLI."""
    setup_logging()


@cli.command()
@click.option("--host", default=None, help="Interface to bind, overrides HOST")
@click.option("--port", type=int, default=None, help="Port to listen on, overrides PORT")
def serve(host, port):
    """Run the HTTP build server."""
    from landing_builder.main import run_server

    try:
        run_server(host=host, port=port)
    except FatalException as e:
        click.echo(f"✗ {e.message}", err=True)
        sys.exit(1)


@cli.command()
@click.argument("landing_page_id")
def build(landing_page_id: str):
    """Run one build in the foreground, bypassing the queue."""
    settings = get_settings()
    executor = BuildExecutor(
        project_path=settings.project_path,
        command=settings.build_command,
        output_path=settings.build_output_path,
    )
    task = BuildTask(landing_page_id=landing_page_id)

    click.echo(f"Building landing page {landing_page_id} (task {task.task_id})...")
    try:
        result = asyncio.run(executor.execute(task))
    except BuildException as e:
        click.echo(f"✗ {e.message}", err=True)
        sys.exit(1)

    click.echo(f"✓ Build written to {result.output_path}")


@cli.command()
def show_config():
    """Display current configuration settings."""
    settings = get_settings()

    click.echo("Current configuration:")
    click.echo(f"  Host: {settings.host}")
    click.echo(f"  Port: {settings.port}")
    click.echo(f"  Project path: {settings.project_path}")
    click.echo(f"  Build command: {settings.build_command}")
    click.echo(f"  Build output: {settings.build_output_path}")
    click.echo(f"  Build timeout: {settings.build_timeout_seconds}s (not enforced)")
    click.echo(f"  Log level: {settings.log_level}")
    click.echo(f"  Log format: {settings.log_format}")
    click.echo(f"  Log dir: {settings.log_dir or '(disabled)'}")


if __name__ == "__main__":
    cli()
