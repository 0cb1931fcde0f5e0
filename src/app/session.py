from __future__ import annotations

from commit_reveal import FairChoice, Reveal
from logger import get_logger
from protocol import MoveSet, Round

log = get_logger(__name__)


class GameSession:
    """One commit, one round, one reveal.

    Each session owns its own FairChoice; nothing is shared between sessions.
    """

    def __init__(self, moves: MoveSet) -> None:
        self.moves = moves
        self._choice = FairChoice(moves)
        self._round: Round | None = None

    @property
    def digest(self) -> str:
        return self._choice.publish_digest()

    def play(self, human_index: int) -> Round:
        if self._round is not None:
            raise RuntimeError("round already played in this session")

        self._round = self._choice.settle(human_index)
        log.info(
            "round resolved: %s vs %s -> %s",
            self.moves.label_at(self._round.human_index),
            self.moves.label_at(self._round.opponent_index),
            self._round.outcome,
        )
        return self._round

    def reveal(self) -> Reveal:
        return self._choice.reveal()
