"""CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console

if TYPE_CHECKING:
    from stagegate.config import Config

app = typer.Typer(
    name="stagegate",
    help="Staging gate - keep preview deployments private and out of search engines.",
    no_args_is_help=True,
)
console = Console()


def _get_config() -> Config:
    """Lazy import and load config."""
    from stagegate.config import Config

    return Config.load()


@app.command()
def serve(
    directory: Annotated[
        Path,
        typer.Argument(exists=True, file_okay=False, help="Static site directory to serve"),
    ],
    host: Annotated[
        str | None, typer.Option(help="Bind address (overrides config)")
    ] = None,
    port: Annotated[
        int | None, typer.Option(help="Port number (overrides config)")
    ] = None,
) -> None:
    """Serve a static site behind the staging gate."""
    import uvicorn

    from stagegate.app import create_app

    cfg = _get_config()
    bind_host = host or cfg.host
    bind_port = int(port or cfg.port)

    app_ = create_app(cfg, directory)
    _print_banner(cfg, bind_host, bind_port, directory)

    uvicorn.run(app_, host=bind_host, port=bind_port, log_level="info")


@app.command()
def status() -> None:
    """Show whether this environment would be protected."""
    from stagegate.environment import classify
    from stagegate.paths import PUBLIC_PREFIXES

    cfg = _get_config()
    settings = cfg.settings()
    env = classify(settings)

    if env.is_protected:
        console.print(f"[bold]Protection:[/bold] [green]enabled[/green] [dim]({env.reason})[/dim]")
    else:
        console.print("[bold]Protection:[/bold] [yellow]disabled[/yellow]")
    console.print(f"  node_env:       {settings.node_env or '-'}")
    console.print(f"  vercel_env:     {settings.vercel_env or '-'}")
    console.print(f"  public_env:     {settings.public_env or '-'}")
    console.print(f"  deployment_url: {settings.deployment_url or '-'}")
    for name, desc, enabled in cfg.get_toggles():
        mark = "[green]on[/green]" if enabled else "[dim]off[/dim]"
        console.print(f"  {name}: {mark} [dim]{desc}[/dim]")

    if settings.has_credentials:
        console.print("[bold]Credentials:[/bold] [green]configured[/green]")
    else:
        console.print(
            "[bold]Credentials:[/bold] [red]missing[/red] "
            "[dim](protected requests will always be refused)[/dim]"
        )

    public = ", ".join(PUBLIC_PREFIXES + settings.public_paths)
    console.print(f"[bold]Public paths:[/bold] {public} [dim](+ any path with a '.')[/dim]")


@app.command()
def probe(
    url: Annotated[str, typer.Argument(help="Deployment URL to check")],
    username: Annotated[
        str | None, typer.Option("--username", "-u", help="Username to test with")
    ] = None,
    password: Annotated[
        str | None, typer.Option("--password", "-p", help="Password to test with")
    ] = None,
) -> None:
    """Check that a deployment challenges anonymous requests and sends no-index headers."""
    from stagegate.probe import probe as run_probe

    report = run_probe(url, username, password)

    console.print(f"[bold]Probing[/bold] [cyan]{report.url}[/cyan]")
    for check in report.checks:
        mark = "[green]PASS[/green]" if check.passed else "[red]FAIL[/red]"
        detail = f" [dim]{check.detail}[/dim]" if check.detail and not check.passed else ""
        console.print(f"  {mark} {check.name}{detail}")

    if not report.ok:
        raise typer.Exit(1)


def _print_banner(cfg: Config, host: str, port: int, directory: Path) -> None:
    """Print server startup info."""
    from stagegate.environment import classify

    settings = cfg.settings()
    env = classify(settings)
    base_url = f"http://{host}:{port}"

    console.print()
    console.print("[bold]stagegate[/bold]")
    console.print(f"  Listening on [cyan]{base_url}[/cyan]")
    console.print(f"  Serving:    [green]{directory}[/green]")
    if env.is_protected:
        console.print(f"  Protection: [green]enabled[/green] [dim]({env.reason})[/dim]")
    else:
        console.print("  Protection: [yellow]disabled[/yellow]")
    if env.is_protected and not settings.has_credentials:
        console.print(
            "[yellow]Warning:[/yellow] staging_username/staging_password not set; "
            "every protected request will get a 401."
        )
    console.print("\n[dim]Press Ctrl+C to stop.[/dim]\n")


def main() -> None:
    app()
