from __future__ import annotations

from typing import Iterable

from rich.console import Console
from rich.table import Table

from .algebra import Matrix4, Vector4
from .frame import Frame


def vertex_table(vertices: Iterable[Vector4], title: str | None = "Vertices") -> Table:
    table = Table(title=title)
    table.add_column("#", justify="right", style="dim")
    for name in ("x", "y", "z"):
        table.add_column(name, justify="right")
    for index, vertex in enumerate(vertices):
        table.add_row(str(index), f"{vertex.x:.2f}", f"{vertex.y:.2f}", f"{vertex.z:.2f}")
    return table


def matrix_table(matrix: Matrix4, title: str | None = None) -> Table:
    table = Table(title=title, show_header=False)
    for _ in range(4):
        table.add_column(justify="right")
    for row in matrix.rows():
        table.add_row(*(f"{value:.2f}" for value in row))
    return table


class ConsoleReadout:
    """Frame listener that prints the post-transform vertices after each frame."""

    def __init__(self, console: Console) -> None:
        self.console = console

    def on_frame(self, frame: Frame) -> None:
        self.console.print(vertex_table(frame.vertices))
