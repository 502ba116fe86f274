"""Allow ``python -m firesight``."""

from .cli import app

app()
