"""
Box Set
=======

The fixed set of four boxes a game is played against.
"""

from __future__ import annotations

from typing import Iterator, Optional, Tuple

from box_game.box_core.boxes import Box, BoxKind, make_box
from box_game.box_core.config_loader import STANDARD_LAYOUT, GameConfig, get_config


class BoxSet:
    """
    Ordered, exclusively owned collection of boxes.

    Order is fixed at construction: [green, green, blue, blue] with
    initial weights 0.0, 0.1, 0.2, 0.3. The order breaks ties when
    selecting the lightest box.
    """

    def __init__(self, boxes: Tuple[Box, ...]):
        """
        Wrap already-built boxes.

        Args:
            boxes: Two green boxes followed by two blue boxes. Initial
                weights are free, which lets callers set up tie positions.

        Raises:
            ValueError: If the boxes are not in the standard layout.
        """
        boxes = tuple(boxes)
        kinds = tuple(b.kind.value for b in boxes)
        if kinds != STANDARD_LAYOUT:
            raise ValueError(
                f"BoxSet requires layout {list(STANDARD_LAYOUT)}, got {list(kinds)}"
            )
        self._boxes = boxes

    @classmethod
    def from_config(cls, config: Optional[GameConfig] = None) -> BoxSet:
        """
        Build a fresh box set from the configured layout.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        window = config.scoring.green_window
        return cls(tuple(
            make_box(b.kind, b.initial_weight, green_window=window)
            for b in config.boxes
        ))

    @classmethod
    def standard(cls) -> BoxSet:
        """Box set with the default layout."""
        return cls.from_config()

    def __len__(self) -> int:
        return len(self._boxes)

    def __getitem__(self, index: int) -> Box:
        return self._boxes[index]

    def __iter__(self) -> Iterator[Box]:
        return iter(self._boxes)

    @property
    def weights(self) -> Tuple[float, ...]:
        """Current weight of every box, in set order."""
        return tuple(b.current_weight for b in self._boxes)

    @property
    def kinds(self) -> Tuple[BoxKind, ...]:
        return tuple(b.kind for b in self._boxes)

    def find_smallest(self) -> int:
        """
        Index of the lightest box.

        Linear scan keeping the strict minimum, so on equal weights the
        earliest box in set order wins.
        """
        smallest = 0
        for idx in range(1, len(self._boxes)):
            if self._boxes[idx] < self._boxes[smallest]:
                smallest = idx
        return smallest

    def smallest(self) -> Box:
        """The lightest box (see find_smallest)."""
        return self._boxes[self.find_smallest()]

    def __repr__(self) -> str:
        return f"BoxSet({list(self._boxes)})"
