"""
Scoring System
==============

Per-player score accumulation and the record of each scoring turn.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Tuple

from box_game.box_core.box_set import BoxSet
from box_game.box_core.boxes import BoxKind


@dataclass(frozen=True)
class ScoreEvent:
    """Record of one turn's absorption and the points it produced."""
    turn: int
    player: str
    box_index: int
    box_kind: BoxKind
    token: int
    points: float

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["box_kind"] = self.box_kind.value
        return data

    def __repr__(self) -> str:
        return (f"ScoreEvent(turn={self.turn}, player={self.player}, "
                f"box={self.box_index}:{self.box_kind.value}, "
                f"token={self.token}, points={self.points:g})")


class Player:
    """
    Tracks a player's running score.

    Box scores are never negative, so the score only grows.
    """

    def __init__(self, name: str):
        self._name = name
        self._score: float = 0.0
        self._turns: int = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def score(self) -> float:
        """Current total score."""
        return self._score

    @property
    def turns(self) -> int:
        """Number of turns taken."""
        return self._turns

    def take_turn(self, token: int, boxes: BoxSet) -> Tuple[int, float]:
        """
        Let the lightest box absorb a token and credit its score.

        Args:
            token: Token weight for this turn.
            boxes: The box set being played against.

        Returns:
            (box_index, points) for the box that absorbed the token.
        """
        index = boxes.find_smallest()
        box = boxes[index]
        box.absorb(token)
        points = box.score()
        self.add_score(points)
        return index, points

    def add_score(self, points: float) -> None:
        """Credit the points of one turn."""
        self._score += points
        self._turns += 1

    def reset(self) -> None:
        """Reset score to zero."""
        self._score = 0.0
        self._turns = 0

    def __repr__(self) -> str:
        return f"Player({self._name}, score={self._score:g})"
