from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Sequence

from protocol import MoveSet

USAGE_EXAMPLE = "Example: rps play rock paper scissors lizard Spock"

ChoiceKind = Literal["move", "help", "exit"]

EXIT_TOKEN = "0"
HELP_TOKEN = "?"


class InvalidMoveSet(ValueError):
    pass


class InvalidMoveChoice(ValueError):
    pass


@dataclass(frozen=True)
class MoveChoice:
    kind: ChoiceKind
    index: int | None = None


def validate_moves(labels: Sequence[str]) -> MoveSet:
    """Check a raw label list and build the MoveSet the game runs on.

    Labels are compared exactly, so "Rock" and "rock" are distinct moves.
    """
    if len(labels) < 3 or len(labels) % 2 == 0:
        raise InvalidMoveSet(
            f"Incorrect number of moves ({len(labels)}). Must be an odd number >= 3."
        )
    if any(not label for label in labels):
        raise InvalidMoveSet("Moves must be non-empty.")
    for label in labels:
        try:
            label.encode("utf-8")
        except UnicodeEncodeError:
            raise InvalidMoveSet("Moves must be valid UTF-8 text.") from None
    if len(set(labels)) != len(labels):
        dupes = sorted({label for label in labels if labels.count(label) > 1})
        raise InvalidMoveSet("Moves must be non-repeating (repeated: " + ", ".join(dupes) + ").")
    return MoveSet.from_labels(labels)


def parse_choice(answer: str, moves: MoveSet) -> MoveChoice:
    value = answer.strip()
    if value == EXIT_TOKEN:
        return MoveChoice(kind="exit")
    if value == HELP_TOKEN:
        return MoveChoice(kind="help")

    if not (value.isascii() and value.isdigit()):
        raise InvalidMoveChoice(f"Invalid move: {answer!r}")
    index = int(value) - 1
    if not 0 <= index < len(moves):
        raise InvalidMoveChoice(f"Invalid move: {answer!r}")
    return MoveChoice(kind="move", index=index)
