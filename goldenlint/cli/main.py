"""goldenlint CLI – Typer multi-command application."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.panel import Panel
from rich.text import Text

from goldenlint.config.settings import ConfigError, GoldenLintSettings, load_settings
from goldenlint.core.engine import LintEngine, LintResult
from goldenlint.core.reports import write_reports
from goldenlint.core.triage import Triager
from goldenlint.rules.base_rule import ViolationSeverity
from goldenlint.rules.registry import build_registry
from goldenlint.utils.logger import (
    SEVERITY_STYLE, configure_logging, console, create_panel, create_table,
    print_error, print_info, print_success, print_warning,
)

__all__ = ["app"]

app = typer.Typer(
    name="goldenlint",
    help="Line-based advisory linter for Bun/TypeScript projects.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.callback()
def _main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")) -> None:
    configure_logging(verbose)


def _load(config: Path | None, project_dir: Path | None) -> tuple[GoldenLintSettings, Path]:
    root = (project_dir or Path.cwd()).resolve()
    try:
        settings = load_settings(config_path=config, search_dir=root)
    except ConfigError as exc:
        print_error(str(exc))
        raise typer.Exit(code=2)
    return settings, root


def _check_format(output_format: str) -> None:
    if output_format not in ("text", "json"):
        print_error(f"Unknown format '{output_format}' – expected text or json.")
        raise typer.Exit(code=2)


def _resolve_targets(paths: list[Path]) -> list[Path]:
    """Resolve CLI paths against the working directory; exit 2 if any is missing."""
    resolved = [p.expanduser().resolve() for p in paths]
    missing = [str(p) for p in resolved if not p.exists()]
    if missing:
        print_error(f"No such file or directory: {', '.join(missing)}")
        raise typer.Exit(code=2)
    return resolved


def _emit_json(result: LintResult) -> None:
    typer.echo(json.dumps(result.to_dict(), indent=2))
    raise typer.Exit(code=result.exit_code)


def _banner() -> None:
    console.print(Panel(
        Text("goldenlint", style="bold magenta", justify="center"),
        subtitle="golden rules for Bun projects",
        border_style="magenta", expand=False, padding=(0, 4),
    ))
    console.print()


def _print_violations(result: LintResult) -> None:
    for file, violations in result.by_file().items():
        console.print(Panel(f"[bold]{file}[/bold]  ({len(violations)} issue(s))", border_style="yellow", expand=True))
        for v in violations:
            style = SEVERITY_STYLE.get(v.severity.value, "white")
            where = f"L{v.line}" if v.line is not None else "file"
            console.print(f"  [{style}]● {v.severity.value.upper()}[/{style}]  [dim]{where}[/dim]  {v.message}  [dim]({v.rule})[/dim]")
            if v.suggestion:
                console.print(f"    [dim]Suggestion:[/dim] {v.suggestion}")
        console.print()


def _print_summary(result: LintResult) -> None:
    warns = result.count(ViolationSeverity.WARNING)
    errs = result.count(ViolationSeverity.ERROR)
    console.print(create_panel(
        f"[bold]Files: {result.files_scanned}[/bold]  [bold]Total: {len(result.violations)}[/bold]  "
        f"[red]Error: {errs}[/red]  [yellow]Warning: {warns}[/yellow]",
        title="📋 Lint Summary",
    ))


@app.command()
def lint(
    paths: Optional[List[Path]] = typer.Argument(
        None, help="Files or directories to lint, relative to the working directory (default: whole project)",
    ),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to goldenlint.yaml"),
    project_dir: Optional[Path] = typer.Option(None, "--dir", "-d", help="Project root directory"),
    output_format: str = typer.Option("text", "--format", "-F", help="Output format: text|json"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the JSON report to this file"),
) -> None:
    """Lint project files and report advisory violations."""
    _check_format(output_format)
    targets = _resolve_targets(paths) if paths else None
    settings, root = _load(config, project_dir)
    result = LintEngine(settings=settings, root_dir=root).run_lint(targets)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(json.dumps(result.to_dict(), indent=2), encoding="utf-8")

    if output_format == "json":
        _emit_json(result)

    _banner()
    if not result.violations:
        print_success(f"{result.files_scanned} file(s) passed all golden rules.")
        raise typer.Exit(code=0)
    _print_violations(result)
    _print_summary(result)
    if output is not None:
        print_info(f"Report written to {output}")
    raise typer.Exit(code=result.exit_code)


@app.command("check-file")
def check_file(
    file: Path = typer.Argument(..., help="Single file to lint"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to goldenlint.yaml"),
    project_dir: Optional[Path] = typer.Option(
        None, "--dir", "-d", help="Project root directory (default: working directory)",
    ),
    output_format: str = typer.Option("text", "--format", "-F", help="Output format: text|json"),
) -> None:
    """Lint exactly one file, classified by its path under the project root."""
    _check_format(output_format)
    if not file.is_file():
        print_error(f"No such file: {file}")
        raise typer.Exit(code=2)
    settings, root = _load(config, project_dir)
    result = LintEngine(settings=settings, root_dir=root).run_check_file(file.expanduser().resolve())

    if output_format == "json":
        _emit_json(result)

    if not result.violations:
        print_success(f"{file} passed all golden rules.")
        raise typer.Exit(code=0)
    _print_violations(result)
    raise typer.Exit(code=result.exit_code)


@app.command()
def triage(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to goldenlint.yaml"),
    project_dir: Optional[Path] = typer.Option(None, "--dir", "-d", help="Project root directory"),
    limit: int = typer.Option(5, "--limit", "-n", help="Number of rules to show in the top list"),
    output_dir: Optional[Path] = typer.Option(
        None, "--output-dir", "-o", help="Write the markdown triage reports into this directory",
    ),
) -> None:
    """Categorise and prioritise violations across the project."""
    _banner()
    settings, root = _load(config, project_dir)
    result = LintEngine(settings=settings, root_dir=root).run_lint()
    summary = Triager().summarize(result.violations)

    if output_dir is not None:
        written = write_reports(summary, output_dir)
        print_info(f"{len(written)} report(s) written to {output_dir}")

    if summary.total == 0:
        print_success("No violations to triage.")
        raise typer.Exit(code=0)

    sev = summary.by_severity
    console.print(create_table(
        "📊 Overview",
        [("Metric", "bold"), ("Count", "cyan")],
        [
            ["Total", str(summary.total)],
            ["Critical", str(len(summary.critical))],
            ["Errors", str(sev["error"])],
            ["Warnings", str(sev["warning"])],
            ["Quick wins", str(len(summary.quick_wins))],
        ],
    ))
    console.print(create_table(
        "🏆 Top rules",
        [("Rule", "bold"), ("Violations", "cyan")],
        [[rule, str(count)] for rule, count in summary.top_rules(limit)],
    ))
    console.print(create_table(
        "📈 By category",
        [("Category", "bold"), ("Violations", "cyan")],
        [[cat, str(count)] for cat, count in sorted(summary.by_category.items())],
    ))
    if summary.quick_wins:
        console.print(create_table(
            "⚡ Quick wins",
            [("File", "green"), ("Line", "dim"), ("Message", "")],
            [
                [i.violation.file, str(i.violation.line or "-"), i.violation.message]
                for i in summary.quick_wins
            ],
        ))
    if summary.critical:
        print_warning(f"{len(summary.critical)} critical violation(s) need attention.")
    raise typer.Exit(code=result.exit_code)


@app.command()
def rules(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to goldenlint.yaml"),
    project_dir: Optional[Path] = typer.Option(None, "--dir", "-d", help="Project root directory"),
) -> None:
    """List registered rules and whether they are enabled."""
    settings, _ = _load(config, project_dir)
    rows = [
        [entry.key, entry.rule.name, "[green]on[/green]" if entry.enabled else "[dim]off[/dim]", entry.rule.description]
        for entry in build_registry(settings)
    ]
    console.print(create_table(
        "Rules",
        [("Key", "bold"), ("Name", "cyan"), ("State", ""), ("Description", "")],
        rows,
    ))


if __name__ == "__main__":
    app()
