from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Iterable, Iterator, Literal

Outcome = Literal["win", "lose", "draw"]


class IndexOutOfRange(IndexError):
    pass


@dataclass(frozen=True)
class MoveSet:
    # Labels are validated by validation.validate_moves before construction.
    labels: tuple[str, ...]
    half_span: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "half_span", (len(self.labels) - 1) // 2)

    @classmethod
    def from_labels(cls, labels: Iterable[str]) -> "MoveSet":
        return cls(labels=tuple(labels))

    def __len__(self) -> int:
        return len(self.labels)

    def __iter__(self) -> Iterator[str]:
        return iter(self.labels)

    def label_at(self, index: int) -> str:
        _check_index(self, index)
        return self.labels[index]

    def index_of(self, label: str) -> int:
        return self.labels.index(label)


@dataclass(frozen=True)
class Round:
    human_index: int
    opponent_index: int
    outcome: Outcome


def circular_distance(a: int, b: int, n: int) -> int:
    """Steps from a to b moving forward around a ring of n positions."""
    return (b - a) % n


def resolve(moves: MoveSet, actor_index: int, opponent_index: int) -> Outcome:
    """Outcome for the actor: each move beats the half_span moves before it.

    With ["rock", "paper", "scissors"] paper beats rock, scissors beats paper
    and rock beats scissors (wrapping around the end of the list).
    """
    _check_index(moves, actor_index)
    _check_index(moves, opponent_index)

    if actor_index == opponent_index:
        return "draw"

    d = circular_distance(opponent_index, actor_index, len(moves))
    return "win" if 1 <= d <= moves.half_span else "lose"


def resolve_by_comparison(moves: MoveSet, i: int, j: int) -> Outcome:
    # Same rule written without wraparound; must agree with resolve() everywhere.
    _check_index(moves, i)
    _check_index(moves, j)

    if i == j:
        return "draw"

    half = moves.half_span
    if (i > j and i <= j + half) or (i < j and i < j - half):
        return "win"
    return "lose"


@lru_cache(maxsize=32)
def build_matrix(moves: MoveSet) -> tuple[tuple[Outcome, ...], ...]:
    """Row i, column j holds the outcome of move i played against move j."""
    n = len(moves)
    return tuple(tuple(resolve(moves, i, j) for j in range(n)) for i in range(n))


def _check_index(moves: MoveSet, index: int) -> None:
    if not isinstance(index, int) or not 0 <= index < len(moves):
        raise IndexOutOfRange(f"move index {index!r} outside [0, {len(moves)})")
