import json
from dataclasses import asdict
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from tripleslash import __version__
from tripleslash.config import load_doc_config
from tripleslash.extension import document_file
from tripleslash.outline import outline_file

app = typer.Typer(
    help="tripleslash - generate XML documentation comments for C# members",
    no_args_is_help=True,
)

console = Console()


@app.command()
def document(
    file: Path,
    line: int = typer.Argument(..., help="1-based line ending with '//'"),
    column: Optional[int] = typer.Option(None, "--column", "-c", help="1-based caret column, end of line by default"),
    write: bool = typer.Option(False, "--write", "-w", help="Write the result back to the file"),
):
    """Type the third '/' on a line and generate the documentation comment.

    Args:
        file: C# source file
        line: Line of the caret, which must end with '//'

    Examples:
        tripleslash document src/Session.cs 12
        tripleslash document src/Session.cs 12 --write
    """
    config = load_doc_config(file.resolve().parent)
    try:
        if line < 1:
            raise ValueError(f"Line must be 1 or greater, got {line}")
        if column is not None and column < 1:
            raise ValueError(f"Column must be 1 or greater, got {column}")
        outcome = document_file(
            file,
            line - 1,
            column - 1 if column is not None else None,
            config=config,
        )
    except (FileNotFoundError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)

    if outcome.result is None:
        typer.echo(f"Error: Nothing to document at {file}:{line}", err=True)
        raise typer.Exit(code=1)

    if write:
        with open(file, "w", encoding="utf-8", newline="") as f:
            f.write(outcome.text)
        typer.echo(f"✓ Documented {file}:{line}")
    else:
        typer.echo(outcome.text, nl=False)


@app.command()
def members(file: Path):
    """List the types and members of a source file as JSON.

    Args:
        file: C# source file
    """
    try:
        entries = outline_file(file)
    except (FileNotFoundError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)

    # Drop container for top-level types
    results = []
    for entry in entries:
        entry_dict = asdict(entry)
        if entry_dict["container"] is None:
            del entry_dict["container"]
        results.append(entry_dict)

    typer.echo(json.dumps(results, indent=2))


def _version_callback(value: bool):
    """Show version and exit."""
    if value:
        console.print(f"tripleslash version {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    )):
    pass
