"""Career randomness: one master seed, many named streams.

A session is reproducible from its master seed alone.  Nothing draws from
the master stream directly; each consumer asks for a named stream instead
(``"training:0"``, ``"race:0"``, ``"character:0"``, ``"agent"``), so adding
a roll in one place never shifts the numbers another place sees.
"""

from __future__ import annotations

import hashlib
import random
import secrets
from typing import Sequence, TypeVar

T = TypeVar("T")

# Child seeds are the first 8 bytes of the digest.
_CHILD_SEED_BYTES = 8


def _derive_seed(parent: int, name: str) -> int:
    digest = hashlib.sha256(f"{parent}:{name}".encode()).digest()
    return int.from_bytes(digest[:_CHILD_SEED_BYTES], "big")


class CareerRNG:
    """Seeded source for every dice roll in a career.

    Parameters
    ----------
    seed:
        Master seed.  Saved with the career so a session can be replayed.
    """

    def __init__(self, seed: int) -> None:
        self._seed = seed
        self._rng = random.Random(seed)

    @classmethod
    def from_entropy(cls) -> CareerRNG:
        """Fresh seed from the OS, for interactive play with no ``--seed``."""
        return cls(secrets.randbits(63))

    @property
    def seed(self) -> int:
        return self._seed

    # -- draws ---------------------------------------------------------------

    def random_int(self, low: int, high: int) -> int:
        """Inclusive on both ends: stat rolls use ``random_int(15, 25)``."""
        return self._rng.randint(low, high)

    def chance(self, probability: float) -> bool:
        """Bernoulli trial, e.g. a form-improvement roll."""
        return self._rng.random() < probability

    def random_choice(self, seq: Sequence[T]) -> T:
        return self._rng.choice(seq)

    # -- streams -------------------------------------------------------------

    def fork(self, name: str) -> CareerRNG:
        """Named sub-stream.

        Depends only on the master seed and *name*, never on how many
        draws this RNG has made, so ``fork("race:0")`` gives the same race
        noise whether the player trained three times or thirty.
        """
        return CareerRNG(_derive_seed(self._seed, name))

    def __repr__(self) -> str:
        return f"CareerRNG(seed={self._seed})"
