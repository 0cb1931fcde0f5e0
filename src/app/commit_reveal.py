from __future__ import annotations

import hashlib
import hmac
import secrets
from dataclasses import dataclass
from typing import Final

from logger import get_logger
from protocol import MoveSet, Round, resolve

KEY_BYTES: Final[int] = 32
DIGEST_NAME: Final[str] = "sha3_256"

log = get_logger(__name__)


class RandomnessUnavailable(RuntimeError):
    pass


@dataclass(frozen=True)
class Commitment:
    key: bytes
    move_index: int
    move: str
    digest: str

    @property
    def key_hex(self) -> str:
        return self.key.hex()


@dataclass(frozen=True)
class Reveal:
    key: str
    move_index: int
    move: str


def generate_key(num_bytes: int = KEY_BYTES) -> bytes:
    try:
        return secrets.token_bytes(num_bytes)
    except (OSError, NotImplementedError) as exc:
        # Never fall back to a weaker generator.
        raise RandomnessUnavailable(f"secure random source failed: {exc}") from exc


def choose_index(n: int) -> int:
    try:
        return secrets.randbelow(n)
    except (OSError, NotImplementedError) as exc:
        raise RandomnessUnavailable(f"secure random source failed: {exc}") from exc


def compute_digest(key: bytes, move: str) -> str:
    return hmac.new(key, move.encode("utf-8"), getattr(hashlib, DIGEST_NAME)).hexdigest()


def verify_commitment(*, expected_digest: str, key_hex: str, move: str) -> bool:
    if not expected_digest.isascii():
        return False
    try:
        key = bytes.fromhex(key_hex)
    except ValueError:
        return False
    computed = compute_digest(key, move)
    return hmac.compare_digest(expected_digest.strip().lower(), computed)


class FairChoice:
    """Commits to a random move before the other party chooses.

    The key, the move and the digest are all produced in the constructor, so
    there is no instance from which the move can be read before its digest
    exists. Call publish_digest() before asking for the human's move and
    reveal() only after the round is resolved.
    """

    def __init__(self, moves: MoveSet) -> None:
        self._moves = moves
        key = generate_key()
        index = choose_index(len(moves))
        move = moves.label_at(index)
        self._commitment = Commitment(
            key=key,
            move_index=index,
            move=move,
            digest=compute_digest(key, move),
        )
        log.debug("committed to one of %d moves: %s", len(moves), self._commitment.digest)

    def settle(self, human_index: int) -> Round:
        """Resolve the human's move against the committed one without exposing it."""
        opponent_index = self._commitment.move_index
        outcome = resolve(self._moves, human_index, opponent_index)
        return Round(human_index=human_index, opponent_index=opponent_index, outcome=outcome)

    def publish_digest(self) -> str:
        return self._commitment.digest

    def reveal(self) -> Reveal:
        log.debug("revealing key for digest %s", self._commitment.digest)
        return Reveal(
            key=self._commitment.key_hex,
            move_index=self._commitment.move_index,
            move=self._commitment.move,
        )
