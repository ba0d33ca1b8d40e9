from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from bibnotes.config import (
    SETTINGS_KEYS,
    ImportConfig,
    coerce_setting,
    load_config,
    load_env,
    save_config,
)
from bibnotes.exceptions import ConfigError
from bibnotes.models import RunOutcome
from bibnotes.pipeline import run_import, template_location
from bibnotes.store import FileSystemStore
from bibnotes.template import DEFAULT_TEMPLATE

app = typer.Typer(help="Turn BibTeX/BibLaTeX entries into templated Markdown literature notes")
console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=False)],
        force=True,
    )


def _paths(vault: Path | None, settings: Path | None) -> tuple[Path, Path]:
    env = load_env()
    root = vault or env.vault
    if settings is not None:
        return root, settings
    if vault is not None:
        return root, vault / env.settings_path.name
    return root, env.settings_path


def _load(settings_path: Path) -> ImportConfig:
    try:
        return load_config(settings_path)
    except ConfigError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=2) from exc


@app.command("import")
def import_cmd(
    vault: Path | None = typer.Option(None, help="Vault root to scan for .bib files"),
    settings: Path | None = typer.Option(None, help="Settings JSON (default: <vault>/.bibnotes.json)"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show the notes that would be created"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every pipeline step"),
) -> None:
    _setup_logging(verbose)
    root, settings_path = _paths(vault, settings)
    config = _load(settings_path)
    summary = run_import(config, FileSystemStore(root), dry_run=dry_run)

    if summary.outcome is RunOutcome.FAILED:
        console.print(f"[bold red]{summary.message}[/bold red]")
        raise typer.Exit(code=1)
    if summary.outcome is RunOutcome.NO_FILES:
        console.print(f"[yellow]{summary.message}[/yellow]")
        return
    color = "green" if not summary.failed else "yellow"
    console.print(f"[bold {color}]{summary.message}[/bold {color}]")
    for result in summary.failed:
        console.print(f"[yellow]- {result.path}: {result.reason}[/yellow]")


@app.command("settings")
def settings_cmd(
    key: str | None = typer.Argument(None, help=f"Setting to change: {', '.join(SETTINGS_KEYS)}"),
    value: str | None = typer.Argument(None, help="New value"),
    vault: Path | None = typer.Option(None, help="Vault root"),
    settings: Path | None = typer.Option(None, help="Settings JSON path"),
) -> None:
    _, settings_path = _paths(vault, settings)
    config = _load(settings_path)
    if key is not None:
        if value is None:
            console.print("[red]A value is required when a key is given.[/red]")
            raise typer.Exit(code=2)
        try:
            config = config.replace(**{SETTINGS_KEYS.get(key, key): coerce_setting(key, value)})
        except (ConfigError, TypeError) as exc:
            console.print(f"[red]{exc}[/red]")
            raise typer.Exit(code=2) from exc
        save_config(settings_path, config)
        console.print(f"[bold green]Saved[/bold green] {key} -> {settings_path}")
    for name, current in config.as_settings().items():
        console.print(f"{name}: {current!r}")


@app.command("init-template")
def init_template_cmd(
    vault: Path | None = typer.Option(None, help="Vault root"),
    settings: Path | None = typer.Option(None, help="Settings JSON path"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing template"),
) -> None:
    root, settings_path = _paths(vault, settings)
    config = _load(settings_path)
    target = root / template_location(config, FileSystemStore(root))
    if target.exists() and not force:
        console.print(f"[yellow]Template already exists:[/yellow] {target}")
        raise typer.Exit(code=1)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(DEFAULT_TEMPLATE, encoding="utf-8")
    console.print(f"[bold green]Wrote template[/bold green] {target}")


if __name__ == "__main__":
    app()
