"""CLI entry point: registers all subcommands."""

import typer

from ._common import console  # noqa: F401

app = typer.Typer(
    name="firesight",
    help="FireSight - which files in a repository are hot, and which have gone cold",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .analyze import analyze as _analyze  # noqa: F401, E402
from .serve import serve as _serve  # noqa: F401, E402
