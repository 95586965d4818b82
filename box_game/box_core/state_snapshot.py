"""
State Snapshot
==============

Packs game state into fixed-size numpy arrays, one slot per box.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, TYPE_CHECKING
import numpy as np

from box_game.box_core.boxes import BoxKind
from box_game.box_core.config_loader import GameConfig, get_config

if TYPE_CHECKING:
    from box_game.box_core.box_set import BoxSet
    from box_game.box_core.scoring import Player

# Integer codes used in box_kinds
KIND_CODES: Dict[BoxKind, int] = {
    BoxKind.GREEN: 0,
    BoxKind.BLUE: 1,
}


@dataclass
class GameSnapshot:
    """
    Game state at a turn boundary.

    Arrays are indexed by box position in the set.
    """
    turn: int
    status: str
    score_a: float
    score_b: float
    next_player: str
    next_box_index: int

    box_weights: np.ndarray      # (NUM_BOXES,) float64
    box_kinds: np.ndarray        # (NUM_BOXES,) int8, see KIND_CODES
    box_absorbed: np.ndarray     # (NUM_BOXES,) int64, tokens absorbed
    box_scores: np.ndarray       # (NUM_BOXES,) float64, current box score

    @property
    def scores(self) -> Tuple[float, float]:
        return (self.score_a, self.score_b)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "turn": self.turn,
            "status": self.status,
            "score_a": self.score_a,
            "score_b": self.score_b,
            "next_player": self.next_player,
            "next_box_index": self.next_box_index,
            "box_weights": self.box_weights.tolist(),
            "box_kinds": self.box_kinds.tolist(),
            "box_absorbed": self.box_absorbed.tolist(),
            "box_scores": self.box_scores.tolist(),
        }


class SnapshotBuilder:
    """Builds GameSnapshot objects from live game state."""

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._config = config
        self._num_boxes = config.num_boxes

    def build(
        self,
        boxes: BoxSet,
        players: Tuple[Player, Player],
        turn: int,
        status: str,
        next_player: str
    ) -> GameSnapshot:
        """
        Build a snapshot.

        Args:
            boxes: The game's box set.
            players: (player_a, player_b).
            turn: Number of turns played so far.
            status: Game status value.
            next_player: Name of the player who would act next.

        Returns:
            GameSnapshot with one array slot per box.
        """
        n = self._num_boxes
        weights = np.zeros(n, dtype=np.float64)
        kinds = np.zeros(n, dtype=np.int8)
        absorbed = np.zeros(n, dtype=np.int64)
        scores = np.zeros(n, dtype=np.float64)

        for i, box in enumerate(boxes):
            weights[i] = box.current_weight
            kinds[i] = KIND_CODES[box.kind]
            absorbed[i] = box.absorbed_count
            scores[i] = box.score()

        return GameSnapshot(
            turn=turn,
            status=status,
            score_a=players[0].score,
            score_b=players[1].score,
            next_player=next_player,
            next_box_index=boxes.find_smallest(),
            box_weights=weights,
            box_kinds=kinds,
            box_absorbed=absorbed,
            box_scores=scores,
        )
