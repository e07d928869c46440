"""CLI interface for storagemeta.

Provides commands for:
- Applying the storage metadata to a Hasura instance
- Printing the request bodies without sending them
- Showing the active configuration
"""

import json

import click

from storagemeta import __version__
from storagemeta.apply import apply_metadata
from storagemeta.client import MetadataClient, OutcomeStatus
from storagemeta.config import get_settings
from storagemeta.errors import MetadataApplyError
from storagemeta.logging import bind_context, clear_context, configure_logging
from storagemeta.metrics import metrics
from storagemeta.plan import storage_metadata_plan


def _mask(secret: str) -> str:
    if not secret:
        return "(not set)"
    return "*" * 8


@click.group()
@click.version_option(version=__version__, prog_name="storagemeta")
def cli() -> None:
    """storagemeta - Hasura metadata for the storage service.

    Tracks the storage.buckets and storage.files tables and creates
    their relationships through the Hasura metadata API.
    """
    pass


@cli.command()
@click.option("--endpoint", "-e", default=None, help="Hasura API base URL (metadata is posted to <endpoint>/metadata)")
@click.option("--admin-secret", default=None, help="Hasura admin secret")
@click.option("--timeout", default=None, type=float, help="Per-request timeout in seconds")
@click.option("--json-logs/--console-logs", default=None, help="Log format (defaults to settings)")
@click.option("--metrics", "show_metrics", is_flag=True, help="Print request metrics after the run")
def apply(
    endpoint: str | None,
    admin_secret: str | None,
    timeout: float | None,
    json_logs: bool | None,
    show_metrics: bool,
) -> None:
    """Apply the storage metadata."""
    settings = get_settings()

    actual_endpoint = endpoint or settings.hasura_endpoint
    actual_secret = admin_secret if admin_secret is not None else settings.hasura_admin_secret
    actual_timeout = timeout or settings.timeout
    json_format = settings.json_logs if json_logs is None else json_logs

    configure_logging(json_format=json_format, level=settings.log_level)
    clear_context()
    bind_context(endpoint=actual_endpoint)

    try:
        with MetadataClient(actual_endpoint, actual_secret, timeout=actual_timeout) as client:
            report = apply_metadata(client)
    except MetadataApplyError as exc:
        raise click.ClickException(str(exc)) from exc
    finally:
        clear_context()
        if show_metrics:
            click.echo(metrics.to_prometheus())

    click.echo(
        click.style("✓ Metadata applied", fg="green")
        + f" ({report.count(OutcomeStatus.APPLIED)} applied,"
        f" {report.count(OutcomeStatus.ALREADY_APPLIED)} already applied)"
    )
    for warning in report.warnings:
        click.echo(click.style(f"! {warning}", fg="yellow"), err=True)


@cli.command()
def plan() -> None:
    """Print the metadata requests without sending them."""
    for index, operation in enumerate(storage_metadata_plan(), start=1):
        click.echo(
            f"# {index}. {operation.kind.value} {operation.name} ({operation.criticality.value})"
        )
        click.echo(json.dumps(operation.to_dict(), indent=2))


@cli.command()
def info() -> None:
    """Show configuration."""
    settings = get_settings()

    click.echo("storagemeta configuration:\n")
    click.echo(f"  Endpoint:     {settings.hasura_endpoint}")
    click.echo(f"  Admin secret: {_mask(settings.hasura_admin_secret)}")
    click.echo(f"  Timeout:      {settings.timeout}s")
    click.echo(f"  Log Level:    {settings.log_level}")
    click.echo(f"  JSON logs:    {settings.json_logs}")


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
