from __future__ import annotations

from protocol import MoveSet, Outcome, build_matrix

HEADER = "PC Moves"
CELL_TEXT: dict[Outcome, str] = {"win": "Win", "lose": "Lose", "draw": "Draw"}


def format_help_table(moves: MoveSet) -> str:
    """Render the outcome matrix; rows are your move, columns the computer's."""
    width = max(len(label) for label in (HEADER, *moves, *CELL_TEXT.values())) + 2
    columns = len(moves) + 1
    separator = "+" + "+".join("-" * width for _ in range(columns)) + "+"

    lines: list[str] = ["Help:", separator, _row([HEADER, *moves], width), separator]
    for label, outcomes in zip(moves, build_matrix(moves)):
        lines.append(_row([label, *(CELL_TEXT[o] for o in outcomes)], width))
        lines.append(separator)
    return "\n".join(lines)


def format_menu(moves: MoveSet) -> str:
    lines = ["Available moves:"]
    lines.extend(f"{i} - {label}" for i, label in enumerate(moves, start=1))
    lines.append("0 - exit")
    lines.append("? - help")
    return "\n".join(lines)


def _row(cells: list[str], width: int) -> str:
    return "|" + "|".join(f"{cell:>{width}}" for cell in cells) + "|"
