from typing import Iterable

from termimgview.engine import Cell, CellGrid

RESET = "\033[0m"


def emit(glyph: str, colour: tuple[int, int, int]) -> str:
    """A glyph preceded by a truecolor foreground escape; background untouched."""
    r, g, b = colour
    return f"\033[38;2;{r};{g};{b}m{glyph}"


def format_row(cells: Iterable[Cell]) -> str:
    """Join cells, only re-emitting the colour escape when the colour changes."""
    parts = []
    current = None
    for cell in cells:
        if cell.colour is None:
            if current is not None:
                parts.append(RESET)
                current = None
            parts.append(" ")
        elif cell.colour == current:
            parts.append(cell.glyph)
        else:
            parts.append(emit(cell.glyph, cell.colour))
            current = cell.colour
    if current is not None:
        parts.append(RESET)
    return "".join(parts)


def format_grid(grid: CellGrid, colour: bool = True) -> str:
    if not colour:
        return "\n".join("".join(cell.glyph for cell in row) for row in grid.rows())
    return "\n".join(format_row(row) for row in grid.rows())
