from __future__ import annotations

import pytest

from termtris.tetromino import TetrominoKind


class FakeClock:
    def __init__(self) -> None:
        self.current = 0.0

    def advance(self, delta: float) -> None:
        self.current += delta

    def __call__(self) -> float:
        return self.current


class FixedRng:
    """Stand-in for ``random.Random`` that hands out kinds in order."""

    def __init__(self, *kinds: TetrominoKind) -> None:
        self._kinds = list(kinds)

    def choice(self, seq):
        kind = self._kinds.pop(0) if len(self._kinds) > 1 else self._kinds[0]
        assert kind in seq
        return kind


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
