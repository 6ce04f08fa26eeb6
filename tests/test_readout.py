from __future__ import annotations

from rich.console import Console

from wireview.frame import FrameInput, ViewerSession
from wireview.readout import ConsoleReadout, matrix_table, vertex_table
from wireview.transforms import translation_x


def _render(renderable) -> str:
    console = Console(record=True, width=120)
    console.print(renderable)
    return console.export_text()


def test_vertex_table_rows(cube):
    table = vertex_table(cube.vertices)
    assert table.row_count == 8
    text = _render(table)
    assert "-1.00" in text
    assert "5.00" in text


def test_matrix_table_formats_values():
    table = matrix_table(translation_x(2.5))
    assert table.row_count == 4
    assert "2.50" in _render(table)


def test_console_readout_prints_each_frame():
    console = Console(record=True, width=120)
    session = ViewerSession(listeners=[ConsoleReadout(console)])
    session.submit(FrameInput("translate_x", 7.0))
    assert "8.00" in console.export_text()
