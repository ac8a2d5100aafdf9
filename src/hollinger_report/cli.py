from pathlib import Path
import json
import logging

import typer
from rich.console import Console
from rich.markup import escape

from hollinger_report.config import settings
from hollinger_report.errors import ReportError

app = typer.Typer(add_completion=False)
console = Console()


def _configure_logging(verbose: bool) -> None:
    from rich.logging import RichHandler

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _fail(e: ReportError) -> None:
    console.print(f"[red]ERROR[/red] {escape(str(e))}")
    raise typer.Exit(code=1)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log aggregation details."),
) -> None:
    """Hollinger box summary workbook."""
    _configure_logging(verbose)


@app.command()
def generate(
    out: Path | None = typer.Option(None, help="Target .xlsx (default: settings.output_path)."),
    db: Path | None = typer.Option(None, exists=True, file_okay=True, dir_okay=False, help="SQLite archive database."),
    snapshot: Path | None = typer.Option(
        None, exists=True, file_okay=True, dir_okay=False, help="YAML snapshot of the archive records."
    ),
) -> None:
    """Generate the summary + per-congress workbook."""
    from hollinger_report.services.report import generate_report

    target = out or settings.output_path
    try:
        source = settings.source_config(database=db, snapshot=snapshot)
        result = generate_report(target, source=source, options=settings.workbook_options())
    except ReportError as e:
        _fail(e)
        return

    t = result.totals
    console.print(f"[green]OK[/green] wrote {result.path}")
    console.print(
        f"- sheets: {len(result.sheet_names)} "
        f"(congresses={t.congresses}, inquiries={t.inquiries}, boxes={t.archive_boxes})"
    )
    if t.excluded_from_summary:
        console.print(
            f"[yellow]WARN[/yellow] {t.excluded_from_summary} box(es) with unresolved congress/subcommittee "
            "left out of the summary sheet"
        )


@app.command()
def summary(
    db: Path | None = typer.Option(None, exists=True, file_okay=True, dir_okay=False),
    snapshot: Path | None = typer.Option(None, exists=True, file_okay=True, dir_okay=False),
    json_only: bool = typer.Option(False, "--json", help="Print JSON to stdout."),
) -> None:
    """Print per-congress box counts without writing a workbook."""
    from rich.table import Table

    from hollinger_report.services.aggregate import HollingerAggregator

    try:
        report = HollingerAggregator(settings.source_config(database=db, snapshot=snapshot)).aggregate()
    except ReportError as e:
        _fail(e)
        return

    if json_only:
        print(json.dumps(report.to_dict(), ensure_ascii=False, indent=2))
        return

    table = Table(title="Hollinger boxes")
    table.add_column("congress")
    table.add_column("inquiry")
    table.add_column("total", justify="right")
    table.add_column("filling", justify="right")
    table.add_column("adjust", justify="right")
    table.add_column("closed", justify="right")
    table.add_column("printed", justify="right")

    for g in report.summary_groups:
        for r in g.rows:
            table.add_row(
                g.heading,
                r.subcommittee,
                str(r.total_boxes),
                str(r.filling_count),
                str(r.adjust_count),
                str(r.closed_not_printed),
                str(r.closed_printed),
            )

    console.print(table)
    t = report.totals
    console.print(f"Congresses: {t.congresses}  Inquiries: {t.inquiries}  Hollinger Boxes: {t.archive_boxes}")


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1"),
    port: int = typer.Option(8000),
    reload: bool = typer.Option(False),
) -> None:
    """Run API server."""
    import uvicorn

    uvicorn.run("hollinger_report.api:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
