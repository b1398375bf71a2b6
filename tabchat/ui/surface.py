"""Drawing surface abstraction for the tab bar."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

# Attribute bit OR-ed into the foreground color, termbox style
UNDERLINE = 0x0200


class Surface(Protocol):
    def change_cell(self, x: int, y: int, ch: str, fg: int, bg: int) -> None:
        ...


@dataclass(slots=True)
class Cell:
    ch: str = " "
    fg: int = 0
    bg: int = 0


class CellBuffer:
    """In-memory grid of cells; writes outside the grid are ignored."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.cells = [[Cell() for _ in range(width)] for _ in range(height)]

    def change_cell(self, x: int, y: int, ch: str, fg: int, bg: int) -> None:
        if 0 <= x < self.width and 0 <= y < self.height:
            self.cells[y][x] = Cell(ch, fg, bg)

    def cell(self, x: int, y: int) -> Cell:
        return self.cells[y][x]

    def row_text(self, y: int) -> str:
        return "".join(c.ch for c in self.cells[y])

    def clear(self) -> None:
        for row in self.cells:
            for i in range(len(row)):
                row[i] = Cell()


__all__ = ["UNDERLINE", "Surface", "Cell", "CellBuffer"]
