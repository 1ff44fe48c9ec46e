"""
Command-line interface for shiptrack.
Provides commands for tracking shipments and checking configuration.
"""

import asyncio
import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.panel import Panel
from pathlib import Path

from shiptrack import __version__

console = Console()


def _fmt(value) -> str:
    if value is None:
        return "[dim]-[/dim]"
    return escape(str(value))


@click.group()
@click.version_option(version=__version__, prog_name="shiptrack")
@click.option(
    "--config", "-c",
    "config_path",
    type=click.Path(exists=True),
    help="Path to configuration file"
)
@click.pass_context
def cli(ctx, config_path):
    """shiptrack - UPS shipment tracking"""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


@cli.command()
@click.argument("tracking_number")
@click.option("--test", is_flag=True, help="Use the UPS test environment")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.option("--verbose", "-v", is_flag=True, help="Log requests to stderr")
@click.pass_context
def track(ctx, tracking_number, test, as_json, verbose):
    """Track a UPS shipment."""
    from shiptrack.config import init_config
    from shiptrack.logging_config import setup_logging
    from shiptrack.tracking import UPS, TrackingError

    config = init_config(ctx.obj.get("config_path"))
    if test:
        config.ups_test_mode = True
    setup_logging(config, console=verbose)

    errors = config.validate()
    if errors:
        for error in errors:
            console.print(f"[red]✗ {error}[/red]")
        ctx.exit(1)

    service = UPS.from_config(config).track(tracking_number)

    try:
        details = asyncio.run(service.details())
    except TrackingError as e:
        console.print(f"[red]✗ Tracking failed: {escape(str(e))}[/red]")
        ctx.exit(1)

    if as_json:
        click.echo(details.model_dump_json(indent=2))
        return

    table = Table(title=f"UPS {escape(tracking_number)}")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Service", _fmt(details.service_type))
    table.add_row("Status", _fmt(details.status))
    table.add_row("Origin", _fmt(", ".join(
        v for v in (details.origin_city, details.origin_state, details.origin_country) if v
    ) or None))
    table.add_row("Destination", _fmt(", ".join(
        v for v in (
            details.destination_city,
            details.destination_state,
            details.destination_zip,
            details.destination_country,
        ) if v
    ) or None))
    table.add_row("Ship Date", _fmt(details.ship_date and details.ship_date.date()))
    table.add_row("Estimated Delivery", _fmt(details.estimated_delivery_at))
    table.add_row("Delivered At", _fmt(details.delivery_at))
    table.add_row("Signed By", _fmt(details.signature_name))

    console.print(table)

    if details.events:
        events = Table(title="Activity")
        events.add_column("When", style="cyan")
        events.add_column("Status")
        events.add_column("Location", style="green")

        for event in details.events:
            location = ", ".join(v for v in (event.city, event.state, event.country) if v)
            events.add_row(_fmt(event.occurred_at), _fmt(event.name), _fmt(location or None))

        console.print(events)


@cli.command()
@click.pass_context
def config(ctx):
    """Show configuration status."""
    from shiptrack.config import get_config, init_config
    from shiptrack.tracking import HTTPTransport

    config_path = ctx.obj.get("config_path")
    cfg = init_config(config_path) if config_path else get_config()

    console.print(Panel.fit(
        f"[bold]shiptrack v{__version__}[/bold]",
        title="Status"
    ))

    base_url = cfg.ups_base_url or (HTTPTransport.TEST_URL if cfg.ups_test_mode else HTTPTransport.LIVE_URL)

    table = Table(title="Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("UPS License", "set" if cfg.ups_access_license_number else "[dim]Not set[/dim]")
    table.add_row("UPS User ID", escape(cfg.ups_user_id) or "[dim]Not set[/dim]")
    table.add_row("UPS Password", "set" if cfg.ups_password else "[dim]Not set[/dim]")
    table.add_row("UPS URL", base_url)
    table.add_row("Timeout", f"{cfg.request_timeout:g}s")
    table.add_row("Log Level", cfg.log_level)
    table.add_row("Log File", cfg.log_file or "[dim]Not set[/dim]")

    console.print(table)

    for error in cfg.validate():
        console.print(f"[yellow]! {error}[/yellow]")


@cli.command()
@click.argument("config_path", type=click.Path())
def init(config_path):
    """Initialize configuration file."""
    config_path = Path(config_path)

    if config_path.exists():
        if not click.confirm(f"{config_path} already exists. Overwrite?"):
            return

    template = '''# shiptrack Configuration

# UPS Credentials
UPS_ACCESS_LICENSE_NUMBER=your-license-number
UPS_USER_ID=your-user-id
UPS_PASSWORD=your-password

# Use the UPS test environment
UPS_TEST_MODE=false

# Seconds
REQUEST_TIMEOUT=30

# Logging
LOG_LEVEL=INFO
LOG_FILE=
'''

    config_path.write_text(template, encoding='utf-8')
    console.print(f"[green]✓ Configuration file created: {config_path}[/green]")
    console.print("\nEdit this file with your settings, then run:")
    console.print(f"  shiptrack --config {config_path} track <number>")


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
