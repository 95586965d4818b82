"""
Boxes
=====

Green and blue boxes absorb token weights and turn their absorption
history into a score.

- Green: square of the mean of the most recent ``window`` tokens
  (all tokens if fewer have been absorbed).
- Blue: Cantor pairing of the smallest and largest token absorbed so far.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Tuple


class BoxKind(Enum):
    """The two box variants."""
    GREEN = "green"
    BLUE = "blue"


def pairing(a: int, b: int) -> float:
    """
    Cantor pairing function.

    Evaluated on Python ints so large 32-bit weights cannot wrap,
    then widened to float.
    """
    s = a + b
    return float(s * (s + 1) // 2 + b)


class Box(ABC):
    """
    A stateful accumulator of token weights.

    The current weight is the initial weight plus every absorbed token.
    It decides which box absorbs the next token; the score depends
    only on the absorbed history.
    """

    kind: BoxKind

    def __init__(self, initial_weight: float):
        self._initial_weight = float(initial_weight)
        self._weight = float(initial_weight)
        self._absorbed: List[int] = []

    @property
    def initial_weight(self) -> float:
        return self._initial_weight

    @property
    def current_weight(self) -> float:
        """Initial weight plus the sum of all absorbed tokens."""
        return self._weight

    @property
    def absorbed_weights(self) -> Tuple[int, ...]:
        """Absorbed tokens in absorption order."""
        return tuple(self._absorbed)

    @property
    def absorbed_count(self) -> int:
        return len(self._absorbed)

    def absorb(self, weight: int) -> None:
        """Add a token to the history and to the current weight."""
        self._absorbed.append(weight)
        self._weight += float(weight)

    @abstractmethod
    def score(self) -> float:
        """Score for the current history (0.0 when nothing was absorbed)."""

    def __lt__(self, other: Box) -> bool:
        return self._weight < other._weight

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(weight={self._weight:g}, "
                f"absorbed={self._absorbed})")


class GreenBox(Box):
    """Scores the squared mean of its most recent tokens."""

    kind = BoxKind.GREEN

    def __init__(self, initial_weight: float, window: int = 3):
        super().__init__(initial_weight)
        if window < 1:
            raise ValueError(f"window must be >= 1, got {window}")
        self._window = window

    @property
    def window(self) -> int:
        return self._window

    def score(self) -> float:
        recent = self._absorbed[-self._window:]
        if not recent:
            return 0.0
        mean = sum(float(w) for w in recent) / len(recent)
        return mean * mean


class BlueBox(Box):
    """Scores the Cantor pairing of its smallest and largest tokens."""

    kind = BoxKind.BLUE

    def score(self) -> float:
        if not self._absorbed:
            return 0.0
        return pairing(min(self._absorbed), max(self._absorbed))


def make_green_box(initial_weight: float, window: int = 3) -> GreenBox:
    """Create a green box."""
    return GreenBox(initial_weight, window)


def make_blue_box(initial_weight: float) -> BlueBox:
    """Create a blue box."""
    return BlueBox(initial_weight)


def make_box(kind: BoxKind | str, initial_weight: float, green_window: int = 3) -> Box:
    """
    Create a box of the given kind.

    Args:
        kind: BoxKind or its string value ("green" / "blue").
        initial_weight: Weight before any absorption.
        green_window: Window size used if the box is green.

    Returns:
        The new box.

    Raises:
        ValueError: If kind is not a known box kind.
    """
    kind = BoxKind(kind)
    if kind is BoxKind.GREEN:
        return make_green_box(initial_weight, green_window)
    if kind is BoxKind.BLUE:
        return make_blue_box(initial_weight)
    raise ValueError(f"Unknown box kind: {kind}")
