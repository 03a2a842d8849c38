"""Configuration command for TradeLens CLI."""

import click
from rich.panel import Panel

from tradelens.cli.common import console, get_settings
from tradelens.config import CONFIG_PATH, create_template_config


@click.command()
@click.option("--init", "init", is_flag=True, default=False, help="Write a template config file.")
@click.option("--force", is_flag=True, default=False, help="Overwrite an existing config file.")
@click.pass_context
def config(ctx: click.Context, init: bool, force: bool) -> None:
    """Show the active configuration, or create one with --init.

    \b
    Examples:
      tradelens config           # Show settings in effect
      tradelens config --init    # Create ~/.config/tradelens/config.toml
    """
    config_path = ctx.obj.get("config_path") or CONFIG_PATH

    if init:
        if config_path.exists() and not force:
            console.print(Panel(
                f"[yellow]Config already exists at {config_path}[/yellow]\n\n"
                "Use [cyan]--force[/cyan] to overwrite it.",
                title="[bold yellow]Config[/bold yellow]",
                border_style="yellow",
            ))
            return

        path = create_template_config(config_path)
        console.print(Panel(
            f"[green]Config template created at:[/green]\n{path}\n\n"
            "[dim]Set data.trades_file to your journal to skip --trades.[/dim]",
            title="[bold green]Config[/bold green]",
            border_style="green",
        ))
        return

    settings = get_settings(ctx)
    source = str(config_path) if config_path.exists() else "defaults (no config file)"

    config_text = (
        f"[bold]Source:[/bold] {source}\n\n"
        f"[bold]\\[analytics][/bold]\n"
        f"  recent_days     = {settings.analytics.recent_days}\n"
        f"[bold]\\[data][/bold]\n"
        f"  trades_file     = {settings.data.trades_file or '-'}\n"
        f"  strategies_file = {settings.data.strategies_file or '-'}\n"
        f"[bold]\\[display][/bold]\n"
        f"  currency        = {settings.display.currency}"
    )

    console.print(Panel(
        config_text,
        title="[bold cyan]Config[/bold cyan]",
        border_style="cyan",
    ))
