"""CLI for pdfjoin: list / test / join commands."""

import logging
from pathlib import Path
from typing import List, NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .config import get_config
from .converters.assembler import assemble
from .converters.join_list import load_join_list
from .converters.validator import validate
from .documents import inventory
from .exceptions import JoinError
from .models import JoinItem, ValidationResult

app = typer.Typer(name="pdfjoin", help="Join and manage PDF files with flexible page selection")
console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)
logger = logging.getLogger(__name__)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"pdfjoin {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
) -> None:
    """Join and manage PDF files with flexible page selection."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else get_config().log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _fail(message: str) -> NoReturn:
    err_console.print(f"[red]{escape(message)}[/red]")
    raise typer.Exit(code=1)


def _read_join_list(
    join_file: Optional[Path],
    inline: Optional[str],
    join_format: Optional[str],
) -> List[JoinItem]:
    """Decode the join list from --join FILE or --inline TEXT."""
    if join_file is None and inline is None:
        _fail("Missing --join <file> or --inline <list> argument")
    if join_file is not None and inline is not None:
        _fail("Use either --join or --inline, not both")

    try:
        if inline is not None:
            return load_join_list(inline, "inline")
        text = join_file.read_text(encoding="utf-8")
        return load_join_list(text, join_format or get_config().join.default_join_format)
    except OSError as e:
        _fail(f"Cannot read join list {join_file}: {e.strerror or e}")
    except JoinError as e:
        _fail(f"Error reading join list: {e}")


def _print_validation(result: ValidationResult) -> None:
    if result.errors:
        err_console.print("\n[bold yellow]Validation Errors:[/bold yellow]")
        for error in result.errors:
            err_console.print(f" - {escape(error)}")
    else:
        console.print("[green]No validation errors found.[/green]")

    console.print("\n[bold]Usage Summary:[/bold]")
    for usage in result.usage:
        used = ", ".join(
            f"{page}({count}×)" for page, count in sorted(usage.used_pages.items())
        )
        console.print(
            f"- {escape(Path(usage.file).name)}: {used or 'no pages used'} / total {usage.total_pages}"
        )


JOIN_OPTION = typer.Option(None, "--join", "-j", help="File defining the join list")
INLINE_OPTION = typer.Option(
    None, "--inline", "-i", help='Inline join list, e.g. "0:1,blank,1:2-4"'
)
FORMAT_OPTION = typer.Option(None, "--format", "-f", help="Encoding of the --join file: json or inline")


@app.command("list")
def run_list(
    pdfs: List[Path] = typer.Argument(..., help="PDF file paths"),
) -> None:
    """List all PDFs with their total page counts."""
    try:
        infos = inventory(pdfs)
    except JoinError as e:
        _fail(f"Error listing PDFs: {e}")

    table = Table(title="Documents")
    table.add_column("#", justify="right")
    table.add_column("File", style="cyan")
    table.add_column("Pages", justify="right")
    for index, info in enumerate(infos):
        table.add_row(str(index), Path(info.file).name, str(info.total_pages))
    console.print(table)


@app.command("test")
def run_test(
    pdfs: List[Path] = typer.Argument(..., help="PDF file paths"),
    join_file: Optional[Path] = JOIN_OPTION,
    inline: Optional[str] = INLINE_OPTION,
    join_format: Optional[str] = FORMAT_OPTION,
    strict: bool = typer.Option(True, "--strict/--no-strict", help="Exit with code 1 on validation errors"),
) -> None:
    """Validate a join list against PDFs (page existence and usage)."""
    items = _read_join_list(join_file, inline, join_format)

    try:
        result = validate(pdfs, items)
    except JoinError as e:
        _fail(f"Error testing join list: {e}")

    _print_validation(result)
    if result.errors and strict:
        raise typer.Exit(code=1)


@app.command("join")
def run_join(
    pdfs: List[Path] = typer.Argument(..., help="PDF file paths"),
    join_file: Optional[Path] = JOIN_OPTION,
    inline: Optional[str] = INLINE_OPTION,
    join_format: Optional[str] = FORMAT_OPTION,
    out: Path = typer.Option(Path("output.pdf"), "--out", "-o", help="Output PDF file name"),
    check: bool = typer.Option(True, "--validate/--no-validate", help="Validate the join list before building"),
) -> None:
    """Join PDFs according to a join list into one output file."""
    items = _read_join_list(join_file, inline, join_format)
    console.print(f"Combining {len(pdfs)} PDFs from {len(items)} join list entries...")

    try:
        if check:
            result = validate(pdfs, items)
            if result.errors:
                _print_validation(result)
                _fail("Join list has errors, no output written")
        data = assemble(pdfs, items)
    except JoinError as e:
        _fail(f"Error joining PDFs: {e}")

    try:
        out.write_bytes(data)
    except OSError as e:
        _fail(f"Cannot write {out}: {e.strerror or e}")

    logger.debug(f"Wrote {len(data)} bytes to {out}")
    console.print(f"[green]Output written to {escape(str(out))}[/green]")


if __name__ == "__main__":
    app()
