"""
Command-line interface for i18n-adapt.

Provides commands for:
- Initializing a project for internationalization
- Extracting, translating and merging UI strings
- Patching UI files for language-responsive layouts
- Managing translation API keys

Usage:
    i18n-adapt run --language es --key $GEMINI_API_KEY --path ./my-app
    i18n-adapt run --init-only --path ./my-app
    i18n-adapt run --extract-only --no-ui-fix
    i18n-adapt keys set gemini
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from getpass import getpass
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table

from i18n_adapt import __version__
from i18n_adapt.config import DEFAULT_BATCH_DELAY, DEFAULT_BATCH_SIZE
from i18n_adapt.errors import I18nAdaptError, ResourceWriteError
from i18n_adapt.models import ExpansionReport
from i18n_adapt.pipeline import PipelineConfig, source_entries
from i18n_adapt.translate.base import language_name
from i18n_adapt.workflow import (
    Analysis,
    TranslationRun,
    analyze_project,
    generate_translations,
    init_project,
    update_ui,
)

app = typer.Typer(
    name="i18n-adapt",
    help="i18n-adapt: Automatically internationalize and adapt UI for multiple languages",
    add_completion=False,
)
console = Console()


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False, show_time=verbose)],
        force=True,
    )


def version_callback(value: bool):
    if value:
        console.print(f"i18n-adapt v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """i18n-adapt: Internationalization automation for React, Vue and Angular."""


@app.command()
def run(
    language: str = typer.Option(
        "es", "--language", "-l",
        help="Target language code (es, zh, hi, etc.)",
    ),
    key: Optional[str] = typer.Option(
        None, "--key", "-k",
        help="Translation API key (defaults to env var / stored key)",
    ),
    path: Path = typer.Option(
        Path("."), "--path", "-p",
        help="Path to project root",
    ),
    force_all: bool = typer.Option(
        False, "--force-all", "-f",
        help="Force retranslation: replace the language's existing translations",
    ),
    ui_fix: bool = typer.Option(
        True, "--ui-fix/--no-ui-fix",
        help="Apply UI responsiveness fixes",
    ),
    service: str = typer.Option(
        "gemini", "--service", "-s",
        help="Translation service (gemini, openai, google, azure, dummy)",
    ),
    model: Optional[str] = typer.Option(
        None, "--model", "-m",
        help="Model name for the translation service",
    ),
    extract_only: bool = typer.Option(
        False, "--extract-only",
        help="Only extract strings, no translation",
    ),
    init_only: bool = typer.Option(
        False, "--init-only",
        help="Only initialize i18n structure",
    ),
    batch_size: int = typer.Option(
        DEFAULT_BATCH_SIZE, "--batch-size",
        min=1,
        help="Strings sent per translation request",
    ),
    delay: float = typer.Option(
        DEFAULT_BATCH_DELAY, "--delay",
        min=0.0,
        help="Seconds to wait between translation requests",
    ),
    verbose: bool = typer.Option(
        False, "--verbose",
        help="Show debug logging",
    ),
):
    """Extract, translate and merge UI strings for one language."""
    setup_logging(verbose)
    console.print("[bold blue]🌍 i18n-adapt - Internationalization Automation Tool[/]")

    try:
        if init_only:
            structure, created = init_project(path)
            for file in created:
                console.print(f"[green]✓[/] Created {file}")
            console.print(f"[green]✅ Project initialized for internationalization[/] ({structure.framework.value})")
            return

        analysis = analyze_project(path)
        console.print(
            f"[blue]📊 Analysis complete:[/] Found {len(analysis.phrases)} strings, "
            f"framework: {analysis.framework.value}"
        )

        if extract_only:
            show_extracted(analysis)
        else:
            config = PipelineConfig(
                target_lang=language,
                service=service,
                model=model,
                api_key=key,
                batch_size=batch_size,
                batch_delay=delay,
            )
            run_translation(analysis, config, force_all)

        if ui_fix:
            changed = update_ui(analysis)
            console.print(f"[green]✓[/] UI updated for language responsiveness ({len(changed)} files)")

    except ResourceWriteError as e:
        console.print(f"[red]❌ Error:[/] {escape(str(e))}")
        if e.backup_path is not None:
            console.print(f"[yellow]Restore manually from:[/] {e.backup_path}")
        raise typer.Exit(1)
    except I18nAdaptError as e:
        console.print(f"[red]❌ Error:[/] {escape(str(e))}")
        raise typer.Exit(1)

    console.print("\n[bold green]✅ Internationalization complete![/]")


def run_translation(analysis: Analysis, config: PipelineConfig, force: bool) -> TranslationRun:
    """Translate with a progress bar; Ctrl-C stops before the next batch."""
    console.print(
        f"[blue]🌐 Generating translations for {config.target_lang} "
        f"({language_name(config.target_lang)}) using {config.service}...[/]"
    )
    cancel = threading.Event()

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        console=console,
    ) as progress:
        task = progress.add_task("Translating...", total=100)

        def update_progress(msg: str, pct: float):
            progress.update(task, description=msg, completed=int(pct * 100))

        with ThreadPoolExecutor(max_workers=1) as executor:
            future = executor.submit(
                generate_translations,
                analysis,
                config,
                force,
                progress_callback=update_progress,
                cancel_event=cancel,
            )
            while True:
                try:
                    result = future.result(timeout=0.2)
                    break
                except FutureTimeout:
                    continue
                except KeyboardInterrupt:
                    console.print("[yellow]Cancelling after the current batch...[/]")
                    cancel.set()

        progress.update(task, description="[green]Complete!", completed=100)

    show_translation_run(result)
    return result


def show_extracted(analysis: Analysis) -> None:
    entries = source_entries(analysis.phrases)
    table = Table(title=f"Extracted strings ({len(analysis.phrases)})")
    table.add_column("Namespace", style="cyan")
    table.add_column("Key", style="green")
    table.add_column("Text")
    for namespace, keys in entries.items():
        for key, text in keys.items():
            table.add_row(namespace, escape(key) or "[dim](empty)[/]", escape(text))
    console.print(table)


def show_translation_run(run: TranslationRun) -> None:
    for note in run.notes:
        console.print(f"[yellow]⚠️ {note}[/]")

    if run.outcome is not None:
        outcome = run.outcome
        table = Table(title="Translation Statistics")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="green")
        for name, value in run.result.stats.items():
            table.add_row(name.replace("_", " ").title(), str(value))
        table.add_row("Added", str(outcome.added))
        table.add_row("Updated", str(outcome.updated))
        table.add_row("Removed", str(outcome.removed))
        console.print(table)
        if outcome.changed:
            console.print(f"[green]✓[/] Updated translations in {outcome.path}")
        else:
            console.print(f"[green]✓[/] Translations already up to date in {outcome.path}")
        if outcome.backup_path:
            console.print(f"[dim]Backup: {outcome.backup_path}[/]")

    if run.expansion is not None:
        show_expansion(run.expansion)


def show_expansion(report: ExpansionReport) -> None:
    console.print(
        f"[blue]📏 Text expansion for {report.language}:[/] "
        f"x{report.expansion_factor:.2f} overall"
    )
    if not report.has_critical:
        return
    table = Table(title="Strings at risk of overflowing their layout")
    table.add_column("Source", style="cyan")
    table.add_column("Translation", style="green")
    table.add_column("Factor", style="yellow", justify="right")
    for entry in report.critical:
        table.add_row(escape(entry.source), escape(entry.translated), f"{entry.factor:.2f}")
    console.print(table)


@app.command()
def keys(
    action: str = typer.Argument(..., help="Action: list, set, status, delete"),
    service: Optional[str] = typer.Argument(None, help="Service name (gemini, openai, ...)"),
):
    """Manage translation API keys.

    Examples:
        i18n-adapt keys list              # List all keys
        i18n-adapt keys set gemini        # Set Gemini key
        i18n-adapt keys status gemini     # Check Gemini key status
        i18n-adapt keys delete gemini     # Delete Gemini key
    """
    from i18n_adapt.credentials import SERVICES, KeyManager

    km = KeyManager()

    if action == "list":
        table = Table(title="API Keys Status")
        table.add_column("Service", style="cyan")
        table.add_column("Status", style="green")
        table.add_column("Source", style="yellow")
        table.add_column("Value", style="dim")

        for key_info in km.list_keys():
            status = "[green]✓ Set[/]" if key_info.is_set else "[red]✗ Not set[/]"
            table.add_row(
                key_info.service,
                status,
                key_info.source,
                key_info.masked_value if key_info.is_set else "-",
            )

        console.print(table)
        console.print("\n[dim]Priority: env > keychain > config file[/]")
        return

    if action not in ("set", "status", "delete"):
        console.print(f"[red]Error:[/] Unknown action: {action}")
        console.print("Available actions: list, set, status, delete")
        raise typer.Exit(1)

    if not service:
        console.print("[red]Error:[/] Service name required")
        console.print(f"Available services: {', '.join(SERVICES)}")
        raise typer.Exit(1)

    if action == "set":
        value = getpass(f"Enter API key for {service}: ")
        if not value:
            console.print("[red]Error:[/] Key cannot be empty")
            raise typer.Exit(1)
        storage = km.set_key(service, value)
        console.print(f"[green]✓[/] API key for {service} saved to {storage}")
        if storage == "config":
            console.print(f"[yellow]Note:[/] Key stored in local file ({km.config_file})")

    elif action == "status":
        key_info = km.get_key_info(service)
        if key_info.is_set:
            console.print(f"[green]✓[/] API key for {service} is set")
            console.print(f"    Source: {key_info.source}")
            console.print(f"    Value: {key_info.masked_value}")
        else:
            console.print(f"[red]✗[/] No API key for {service}")
            console.print(f"Set with: [cyan]i18n-adapt keys set {service}[/]")

    elif action == "delete":
        if km.delete_key(service):
            console.print(f"[green]✓[/] Deleted API key for {service}")
        else:
            console.print(f"[yellow]No stored key for {service}[/]")


if __name__ == "__main__":
    app()
