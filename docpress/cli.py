"""CLI entry point for docpress."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from docpress.config import DocpressConfig, load_config
from docpress.config.loader import DEFAULT_CONFIG_TEMPLATE
from docpress.output import ArtifactWriter
from docpress.pipeline import BatchReport, ContentPipeline
from docpress.vcs import create_enricher

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="docpress",
    help="Convert markdown documentation trees into JSON content artifacts.",
)

config_app = typer.Typer(help="Manage docpress configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: DocpressConfig | None = None


class ErrorPolicy(str, Enum):
    fail_fast = "fail_fast"
    collect = "collect"


_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


def _get_config() -> DocpressConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to docpress.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    logging.basicConfig(
        level=_LOG_LEVELS[_config.log_level],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _display_reports(reports: list[BatchReport]) -> None:
    table = Table(title=f"Converted sites ({len(reports)})")
    table.add_column("Source", style="cyan")
    table.add_column("Assets", style="green")
    table.add_column("Files", justify="right")
    table.add_column("Errors", justify="right", style="red")
    table.add_column("Time", justify="right")
    for r in reports:
        table.add_row(
            r.source,
            r.assets,
            str(r.converted),
            str(len(r.errors)) if r.errors else "-",
            f"{r.duration:.2f}s",
        )
    rprint(table)

    for r in reports:
        for err in r.errors:
            rprint(f"[red]✗[/red] {escape(err.path)}: {escape(err.error)}")


@app.command()
def build(
    dry_run: bool = typer.Option(False, "--dry-run", help="Render without clearing or writing assets"),
    enrich: bool = typer.Option(True, "--enrich/--no-enrich", help="Fetch commit history attribution"),
    on_error: Annotated[
        ErrorPolicy | None,
        typer.Option("--on-error", help="fail_fast aborts a site on the first error; collect reports all"),
    ] = None,
) -> None:
    """Convert every configured markdown tree."""
    cfg = _get_config()
    if on_error is not None:
        cfg = cfg.model_copy(update={"on_error": on_error.value})

    if not cfg.sites:
        rprint("[yellow]No sites configured.[/yellow] Run `docpress config init` to create docpress.yaml.")
        raise typer.Exit(1)

    try:
        enricher = create_enricher(cfg.github) if enrich else None
    except ValueError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    pipeline = ContentPipeline(cfg, ArtifactWriter(cfg.output, dry_run=dry_run), enricher)
    if dry_run:
        rprint("[yellow](dry run: no assets cleared or written)[/yellow]\n")

    try:
        reports = asyncio.run(pipeline.run())
    except Exception as e:
        logger.debug("build failed", exc_info=True)
        rprint(f"[red]Build failed:[/red] {type(e).__name__}: {escape(str(e))}")
        raise typer.Exit(1)

    _display_reports(reports)
    if any(not r.ok for r in reports):
        raise typer.Exit(1)


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(mode="json"), default_flow_style=False, sort_keys=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default docpress.yaml in current directory."""
    target = Path("docpress.yaml")
    if target.exists() and not force:
        rprint("[yellow]docpress.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")


if __name__ == "__main__":
    app()
