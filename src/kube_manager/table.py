"""Fixed-width table output."""

from __future__ import annotations

from typing import Iterable, Sequence

import click

from .config import SEPARATOR

Columns = Sequence[tuple[str, int]]


def format_row(columns: Columns, values: Sequence[str]) -> str:
    """Left-align each value to its column width, one space between columns."""
    fmt = " ".join(f"{{{i}:<{width}}}" for i, (_, width) in enumerate(columns))
    return fmt.format(*values)


def format_table(columns: Columns, rows: Iterable[Sequence[str]]) -> list[str]:
    lines = [format_row(columns, [header for header, _ in columns]), SEPARATOR]
    lines.extend(format_row(columns, row) for row in rows)
    return lines


def print_table(columns: Columns, rows: Iterable[Sequence[str]]) -> None:
    for line in format_table(columns, rows):
        click.echo(line)
