"""CLI entry point for unembed."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer
import yaml
from pydantic import ValidationError
from rich import print as rprint
from rich.syntax import Syntax
from rich.table import Table

from unembed.config import ConverterSettings, SettingsStore, UnembedConfig, load_config, resolve_config_path
from unembed.config.loader import DEFAULT_CONFIG_TEMPLATE
from unembed.extract import ConversionReport, ImageExtractor
from unembed.logging_utils import configure_logging
from unembed.vault import ConsoleNotifier, FileEditor, LocalVault, LogNotifier, VaultError

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="unembed",
    help="Move base64 images embedded in markdown notes into image files.",
)

config_app = typer.Typer(help="Manage unembed configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: UnembedConfig | None = None
_config_path: str | None = None

_SETTABLE = tuple(ConverterSettings.model_fields)


def _get_config() -> UnembedConfig:
    if _config is None:
        return load_config(_config_path)
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to unembed.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config, _config_path
    _config_path = config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
    configure_logging(_config.log_level, _config.log_format)


def _open_vault(vault: str) -> LocalVault:
    root = Path(vault or _get_config().vault_path)
    if not root.is_dir():
        rprint(f"[red]Error:[/red] vault directory not found: {root}")
        raise typer.Exit(1)
    return LocalVault(root)


def _note_path(local: LocalVault, note: str) -> str:
    """Accept either a filesystem path or a vault-relative path."""
    candidate = Path(note)
    if candidate.is_file():
        try:
            return local.relative(candidate)
        except ValueError:
            rprint(f"[red]Error:[/red] {note} is outside the vault {local.root}")
            raise typer.Exit(1)
    try:
        if local.exists(note):
            return note
    except VaultError:
        pass
    rprint(f"[red]Error:[/red] note not found: {note}")
    raise typer.Exit(1)


def _print_report(title: str, report: ConversionReport) -> None:
    table = Table(title=title)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right", style="green")
    table.add_row("Documents", str(report.documents_total))
    table.add_row("Modified", str(len(report.documents_modified)))
    table.add_row("Images found", str(report.matched))
    table.add_row("Images converted", str(report.converted))
    table.add_row("Errors", str(len(report.errors) + len(report.document_errors)))
    table.add_row("Duration", f"{report.duration:.2f}s")
    rprint(table)

    for doc_err in report.document_errors:
        rprint(f"  [red]error:[/red] {doc_err.document}: {doc_err.error}")
    for err in report.errors:
        rprint(f"  [red]error:[/red] {err.document} image {err.index}: {err.message}")


# ---------------------------------------------------------------------------
# Conversion commands
# ---------------------------------------------------------------------------


@app.command()
def convert(
    note: str = typer.Argument(..., help="Note to convert (vault-relative or filesystem path)"),
    vault: Annotated[str, typer.Option("--vault", "-v", help="Vault root directory")] = "",
) -> None:
    """Convert embedded base64 images in a single note."""
    cfg = _get_config()
    local = _open_vault(vault)
    editor = FileEditor(local, _note_path(local, note))
    extractor = ImageExtractor(local, ConsoleNotifier())

    report = asyncio.run(extractor.convert_current(editor, cfg.converter))
    if report.document_errors:
        raise typer.Exit(1)


@app.command(name="convert-all")
def convert_all(
    vault: Annotated[str, typer.Option("--vault", "-v", help="Vault root directory")] = "",
    dry_run: Annotated[bool, typer.Option("--dry-run", help="List notes that would be converted")] = False,
) -> None:
    """Convert embedded base64 images in every note of the vault."""
    cfg = _get_config()
    local = _open_vault(vault)

    if dry_run:
        extractor = ImageExtractor(local, LogNotifier())
        found = asyncio.run(extractor.find_embedded())
        if not found:
            rprint("[yellow]No notes with embedded images found.[/yellow]")
            raise typer.Exit(0)
        table = Table(title="Dry Run — notes that would be converted")
        table.add_column("Note", style="cyan")
        table.add_column("Images", justify="right", style="green")
        for path, count in found.items():
            table.add_row(path, str(count))
        rprint(table)
        return

    extractor = ImageExtractor(local, ConsoleNotifier())
    report = asyncio.run(extractor.convert_all(cfg.converter))
    _print_report("Vault Conversion", report)


@app.command()
def watch(
    vault: Annotated[str, typer.Option("--vault", "-v", help="Vault root directory")] = "",
) -> None:
    """Convert notes automatically whenever they change (requires auto_convert)."""
    cfg = _get_config()
    if not cfg.converter.auto_convert:
        rprint(
            "[yellow]Auto convert is disabled.[/yellow] "
            "Enable it with: unembed config set auto_convert true"
        )
        raise typer.Exit(1)
    local = _open_vault(vault)

    from unembed.watch import AutoConverter, VaultWatcher

    extractor = ImageExtractor(local, ConsoleNotifier())
    auto = AutoConverter(extractor, cfg.converter, delay=cfg.paste_debounce_ms / 1000)

    async def _serve() -> None:
        loop = asyncio.get_running_loop()

        def _on_change(path: Path) -> None:
            editor = FileEditor(local, local.relative(path))
            loop.call_soon_threadsafe(auto.on_paste, editor)

        watcher = VaultWatcher(local.root, _on_change)
        watcher.start()
        try:
            while True:
                await asyncio.sleep(1)
        finally:
            watcher.stop()
            await auto.drain()

    rprint(f"[bold]Watching[/bold] {local.root} (Ctrl+C to stop)")
    try:
        asyncio.run(_serve())
    except KeyboardInterrupt:
        rprint("Watcher stopped.")


# ---------------------------------------------------------------------------
# Config commands
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False, sort_keys=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default unembed.yaml in current directory."""
    target = Path("unembed.yaml")
    if target.exists() and not force:
        rprint("[yellow]unembed.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")


@config_app.command("set")
def config_set(
    key: str = typer.Argument(..., help=f"One of: {', '.join(_SETTABLE)}"),
    value: str = typer.Argument(..., help="New value"),
) -> None:
    """Change one converter setting and save it."""
    if key not in _SETTABLE:
        rprint(f"[red]Unknown setting[/red] {key!r}; expected one of: {', '.join(_SETTABLE)}")
        raise typer.Exit(1)

    store = SettingsStore(resolve_config_path(_config_path))
    raw = store.load()
    try:
        cfg = UnembedConfig(**raw)
        converter = ConverterSettings(**{**cfg.converter.model_dump(), key: value})
    except ValidationError as e:
        rprint(f"[red]Invalid value[/red] for {key}: {e.errors()[0]['msg']}")
        raise typer.Exit(1) from e

    store.save(cfg.model_copy(update={"converter": converter}))
    rprint(f"[green]Saved[/green] {key} = {getattr(converter, key)!r} to {store.path}")


if __name__ == "__main__":
    app()
