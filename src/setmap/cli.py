__all__ = ["app"]

from pathlib import Path
from typing import Annotated

import typer
from returns.result import Failure, Success

from ._parser import deparse_entry, deparse_value, load_entries, parse_key

app = typer.Typer()


@app.command()
def setmap(
    input_path: Annotated[
        Path,
        typer.Argument(
            exists=True,
            dir_okay=False,
            readable=True,
            show_default=False,
            help="A file of entries, one per line, e.g. {a, b} = 1.",
        ),
    ],
    queries: Annotated[
        list[str],
        typer.Option(
            "--query",
            "-q",
            help=(
                "A key to look up, e.g. {b, a}. Can be mentioned multiple times. If not "
                "specified, every stored entry is printed."
            ),
        ),
    ] = [],  # noqa: B006; Typer does not support Sequence or tuple
):
    # Load entries
    match load_entries(input_path.read_text().splitlines()):
        case Failure(error):
            typer.echo(f"Failed to load entries:\n{error}", err=True)
            raise typer.Exit(1)
        case Success(set_map):
            pass
        case _:
            raise NotImplementedError()

    if len(queries) == 0:
        for key, value in set_map.entries():
            typer.echo(deparse_entry(key, value))
        return

    # Parse and answer queries
    for query in queries:
        match parse_key(query):
            case Failure(error):
                typer.echo(f"Failed to parse query:\n{error}", err=True)
                raise typer.Exit(1)
            case Success(key):
                pass
            case _:
                raise NotImplementedError()

        typer.echo(set_map.lookup(key).map(deparse_value).value_or("<absent>"))
