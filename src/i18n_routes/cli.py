"""
CLI for i18n-routes.

Provides commands for token scanning, locale generation, route listing and
request-time locale lookups.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from i18n_routes.build import BuildResult, I18nBuild
from i18n_routes.config import Settings, create_default_config, load_config
from i18n_routes.errors import ConfigError, I18nRoutesError
from i18n_routes.log import setup_logging
from i18n_routes.resolver import LocaleResolver
from i18n_routes.routes import Route, RouteTable, generate_routes
from i18n_routes.scanner import TokenScanner, get_directory_files
from i18n_routes.store import LocaleStore
from i18n_routes.translation import TranslationStatus

app = typer.Typer(
    name="i18n-routes",
    help="Translated routes and locale dictionaries for site builds.",
    add_completion=False,
)

console = Console()


def get_settings(config_path: Path | None = None, *, debug: bool = False) -> Settings:
    """Load settings and configure logging."""
    try:
        settings = load_config(config_path)
    except ConfigError as e:
        _fail(str(e))
    setup_logging(settings.logging, debug=debug or settings.i18n.debug, console=console)
    return settings


def _display_config(settings: Settings) -> None:
    """Display the configuration being used."""
    config_table = Table(show_header=False, box=None, padding=(0, 2))
    config_table.add_column("Key", style="cyan")
    config_table.add_column("Value", style="green")

    config_table.add_row("Project", settings.project.name)
    config_table.add_row("Default locale", settings.i18n.default_locale)
    config_table.add_row(
        "Locales", ", ".join(f"{d.code} ({d.name})" for d in settings.i18n.locales)
    )
    config_table.add_row("Mode", "generate" if settings.i18n.generate else "reuse")
    config_table.add_row("Routes", str(settings.paths.routes_dir))
    config_table.add_row("Locale files", str(settings.paths.locales_dir))
    if settings.i18n.generate:
        config_table.add_row(
            "Translation",
            f"{settings.translation.provider.value} ({settings.translation.model})",
        )
        config_table.add_row(
            "API key",
            "configured" if settings.translation.api_key else "[red]not set[/red]",
        )

    console.print(
        Panel(config_table, title="[bold blue]i18n-routes[/bold blue]", border_style="blue")
    )


def _routes_table(routes: list[Route], title: str = "Routes") -> Table:
    table = Table(title=title)
    table.add_column("Pattern", style="cyan")
    table.add_column("Entry point", style="dim")
    for route in routes:
        table.add_row(escape(route.pattern), escape(route.entry_point))
    return table


def _fail(message: str) -> NoReturn:
    console.print(f"[red]Error: {escape(message)}[/red]")
    raise typer.Exit(1)


@app.command()
def init(
    path: Path = typer.Argument(Path("i18n-routes.yaml"), help="Config file to create"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
) -> None:
    """Create a default configuration file."""
    if path.exists() and not force:
        _fail(f"{path} already exists (use --force to overwrite)")
    create_default_config(path)
    console.print(f"[green]Created {path}[/green]")


@app.command()
def scan(
    src_dir: Path | None = typer.Argument(None, help="Source directory (default: paths.src_dir)"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Show the translation tokens found in the sources."""
    settings = get_settings(config)
    root = src_dir or settings.paths.src_dir

    try:
        tokens = TokenScanner().extract(root)
    except (FileNotFoundError, ValueError) as e:
        _fail(str(e))

    table = Table(title=f"Tokens in {root}")
    table.add_column("Kind", style="magenta")
    table.add_column("Token", style="cyan")
    for path in tokens.sorted_paths():
        table.add_row("path", escape(path))
    for text in tokens.sorted_texts():
        table.add_row("text", escape(text))

    console.print(table)
    console.print(f"[green]{len(tokens.paths)} paths, {len(tokens.texts)} texts[/green]")


@app.command()
def build(
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
    generate: bool | None = typer.Option(
        None, "--generate/--reuse", help="Override i18n.generate"
    ),
    debug: bool = typer.Option(False, "--debug", "-d", help="Verbose output"),
) -> None:
    """Build locale dictionaries and write the route manifest."""
    settings = get_settings(config, debug=debug)
    if generate is not None:
        settings.i18n.generate = generate

    _display_config(settings)

    router = RouteTable()
    try:
        result: BuildResult = asyncio.run(I18nBuild(settings).run(router))
    except (I18nRoutesError, FileNotFoundError) as e:
        _fail(str(e))

    if result.report is not None:
        table = Table(title="Translations")
        table.add_column("Locale", style="cyan")
        table.add_column("Status")
        table.add_column("Error", style="dim")
        for outcome in result.report.outcomes:
            style = {
                TranslationStatus.SOURCE: "blue",
                TranslationStatus.TRANSLATED: "green",
                TranslationStatus.FALLBACK: "yellow",
            }[outcome.status]
            table.add_row(
                outcome.code,
                f"[{style}]{outcome.status.value}[/{style}]",
                escape(outcome.error or ""),
            )
        console.print(table)

    manifest = settings.paths.routes_manifest
    manifest.parent.mkdir(parents=True, exist_ok=True)
    manifest.write_text(
        json.dumps(router.to_manifest(), indent=2, ensure_ascii=False), encoding="utf-8"
    )

    console.print(_routes_table(result.routes))
    console.print(
        f"[green]{len(result.routes)} routes for {len(result.store)} locales "
        f"written to {manifest}[/green]"
    )


@app.command()
def routes(
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """List the routes generated from the cached locales, without building."""
    settings = get_settings(config)
    store = LocaleStore.from_cache(settings.paths.cache_file)
    if not store:
        console.print("[yellow]No cached locales, run `i18n-routes build` first[/yellow]")
        raise typer.Exit(1)

    try:
        route_files = get_directory_files(settings.paths.routes_dir)
    except FileNotFoundError as e:
        _fail(str(e))

    generated = generate_routes(
        route_files,
        store,
        RouteTable(),
        routes_dir=settings.paths.routes_dir.as_posix(),
    )
    console.print(_routes_table(generated))


@app.command()
def match(
    accept_language: str = typer.Argument(..., help="Accept-Language header value"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Resolve the best locale for an Accept-Language header."""
    settings = get_settings(config)
    code = LocaleResolver.from_cache(settings.paths.cache_file).match_locale(accept_language)
    if code is None:
        _fail("no locales cached")
    console.print(code)


@app.command()
def locale(
    url: str = typer.Argument(..., help="URL or path, e.g. /fr/dashboard"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Resolve the locale a URL starts with."""
    settings = get_settings(config)
    code = LocaleResolver.from_cache(settings.paths.cache_file).locale_from_url(url)
    if code is None:
        console.print(f"[yellow]No locale in {url}[/yellow]")
        raise typer.Exit(1)
    console.print(code)


@app.command()
def pages(
    code: str = typer.Argument(..., help="Locale code"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """List the top-level pages of a locale."""
    settings = get_settings(config)
    found = LocaleResolver.from_cache(settings.paths.cache_file).pages_for_locale(code)
    if found is None:
        _fail(f"unknown locale {code!r}")
    for page in found:
        console.print(escape(page))


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
