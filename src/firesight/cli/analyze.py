"""Heat analysis command: score a repository's recent history and show the tree."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from ..api import HeatmapReport, analyze as run_analysis
from ..config import MAX_TIME_RANGE_DAYS
from ..exceptions import FireSightError
from ..heat.models import FileNode
from ..logging_config import setup_logging
from ..server.serializers import report_to_response
from . import app
from ._common import console, heat_style, resolve_config


@app.command()
def analyze(
    repo: str = typer.Argument(".", help="Repository URL or local path"),
    branch: Optional[str] = typer.Option(None, "--branch", "-b", help="Branch to analyze"),
    days: Optional[int] = typer.Option(
        None, "--days", "-d", help="Days of history to include", min=1, max=MAX_TIME_RANGE_DAYS
    ),
    token: Optional[str] = typer.Option(
        None, "--token", envvar="FIRESIGHT_TOKEN", help="Access token for private repositories"
    ),
    fmt: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich (human-readable) or json (same payload as the HTTP API)",
    ),
    depth: int = typer.Option(3, "--depth", help="Tree levels to display", min=1),
    top: int = typer.Option(10, "--top", help="Hottest files to list", min=0),
    dead_code: bool = typer.Option(
        False, "--dead-code", help="List files the dead-code heuristic flags"
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress logging"),
):
    """
    Score how actively each file of a repository is changing.

    [bold cyan]Examples:[/bold cyan]

      firesight analyze https://github.com/pallets/flask --days 90

      firesight analyze . --branch develop --format json > heat.json

      firesight analyze . --dead-code --top 20
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)

    if fmt not in ("rich", "json"):
        console.print(f"[red]Error:[/red] unknown format '{fmt}' (expected rich or json)")
        raise typer.Exit(2)

    try:
        settings = resolve_config(config=config, verbose=verbose, quiet=quiet)

        if fmt == "rich" and not quiet:
            with console.status(f"[cyan]Analyzing {repo}..."):
                report = run_analysis(
                    repo, branch=branch, time_range_days=days, auth_token=token, config=settings
                )
        else:
            report = run_analysis(
                repo, branch=branch, time_range_days=days, auth_token=token, config=settings
            )

        if fmt == "json":
            payload = report_to_response(report)
            if dead_code:
                payload["dead_code"] = report.dead_code_paths(config=settings)
            print(json.dumps(payload, indent=2))
        else:
            _output_rich(report, depth=depth, top=top)
            if dead_code:
                _output_dead_code(report.dead_code_paths(config=settings))

    except typer.Exit:
        raise
    except FireSightError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except Exception as e:
        logger.exception("Unexpected error")
        console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)


def _output_rich(report: HeatmapReport, depth: int, top: int) -> None:
    result = report.result
    console.print()
    console.print("[bold cyan]FIRESIGHT - Code Heat[/bold cyan]")
    console.print(
        f"  {escape(result.repo_url)} @ [bold]{escape(result.branch)}[/bold], "
        f"last {result.time_range_days} days: "
        f"[green]{result.commit_count}[/green] commits, "
        f"[green]{len(report.heat_scores)}[/green] files "
        f"[dim]({report.duration_seconds:.2f}s)[/dim]"
    )
    console.print()

    if not report.heat_scores:
        console.print("[yellow]No changes in the selected window[/yellow]")
        return

    tree = Tree(_node_label(report.tree))
    _add_children(tree, report.tree, depth)
    console.print(tree)

    if top:
        console.print()
        table = Table(title=f"Hottest {min(top, len(report.heat_scores))} files")
        table.add_column("Heat", justify="right")
        table.add_column("File")
        table.add_column("Changes", justify="right")
        table.add_column("Per week", justify="right")
        table.add_column("Days idle", justify="right")
        for score in report.hottest(top):
            table.add_row(
                f"[{heat_style(score.score)}]{score.score:.1f}[/]",
                escape(score.path),
                str(score.total_file_changes),
                f"{score.change_frequency:.2f}",
                str(score.days_since_edit),
            )
        console.print(table)


def _node_label(node: FileNode) -> str:
    style = heat_style(node.score)
    if node.is_file:
        return f"[{style}]{node.score:5.1f}[/] {escape(node.name)}"
    return (
        f"[{style}]{node.score:5.1f}[/] [bold]{escape(node.name)}/[/bold] "
        f"[dim]{node.file_count} files, {node.total_file_changes} changes[/dim]"
    )


def _add_children(branch: Tree, node: FileNode, depth: int) -> None:
    if depth <= 0:
        if node.children:
            branch.add("[dim]…[/dim]")
        return
    for child in node.children:
        sub = branch.add(_node_label(child))
        if not child.is_file:
            _add_children(sub, child, depth - 1)


def _output_dead_code(paths: list[str]) -> None:
    console.print()
    if not paths:
        console.print("[green]No dead-code candidates[/green]")
        return
    console.print(f"[bold yellow]Dead-code candidates ({len(paths)})[/bold yellow]")
    for path in paths:
        console.print(f"  {escape(path)}")
