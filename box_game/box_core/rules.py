"""
Game Rules
==========

Handles turn order, token acceptance, and game status.
"""

from __future__ import annotations

import numbers
from enum import Enum
from typing import Optional, Tuple

from box_game.box_core.config_loader import GameConfig, get_config


class GameStatus(Enum):
    """Lifecycle of a game."""
    NOT_STARTED = "not_started"
    RUNNING = "running"
    FINISHED = "finished"


class InvalidTokenError(ValueError):
    """Raised when a token weight is not an unsigned 32-bit integer."""

    def __init__(self, token, reason: str, turn: Optional[int] = None):
        self.token = token
        self.reason = reason
        self.turn = turn
        where = f" at turn {turn}" if turn is not None else ""
        super().__init__(f"Invalid token {token!r}{where}: {reason}")


class GameFinishedError(RuntimeError):
    """Raised when a finished game is asked to take another turn."""


class TurnRules:
    """
    Turn order and token rules.

    - Player A acts on even turn indices, player B on odd ones.
    - Tokens are integers in [0, max_weight].
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize turn rules.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._players: Tuple[str, str] = config.report.players
        self._max_weight = config.tokens.max_weight

    @property
    def players(self) -> Tuple[str, str]:
        """Player names in turn order."""
        return self._players

    @property
    def max_weight(self) -> int:
        """Largest accepted token weight."""
        return self._max_weight

    def actor_index(self, turn: int) -> int:
        """Index (0 or 1) of the player acting on a turn."""
        return turn % 2

    def actor(self, turn: int) -> str:
        """Name of the player acting on a turn."""
        return self._players[self.actor_index(turn)]

    def validate_token(self, token, turn: Optional[int] = None) -> int:
        """
        Check a token weight and return it as a plain int.

        Args:
            token: Candidate token weight.
            turn: Turn index, for error messages.

        Raises:
            InvalidTokenError: If the token is not an integer in range.
        """
        # bool is an int subclass but never a weight
        if isinstance(token, bool) or not isinstance(token, numbers.Integral):
            raise InvalidTokenError(token, "must be an integer", turn)

        value = int(token)
        if value < 0:
            raise InvalidTokenError(token, "must be non-negative", turn)
        if value > self._max_weight:
            raise InvalidTokenError(token, f"exceeds maximum {self._max_weight}", turn)
        return value
