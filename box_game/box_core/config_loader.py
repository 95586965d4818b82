"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to the rule constants.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple, Optional

import yaml


# Box kinds in the only layout the game is played with
STANDARD_LAYOUT: Tuple[str, ...] = ("green", "green", "blue", "blue")

# Locked scoring and token constants
GREEN_WINDOW = 3
MAX_TOKEN_WEIGHT = 2**32 - 1


@dataclass(frozen=True)
class BoxConfig:
    """A single box slot in the box set."""
    kind: str                # "green" or "blue"
    initial_weight: float    # Weight before any token is absorbed


@dataclass(frozen=True)
class ScoringConfig:
    """Scoring parameters."""
    green_window: int        # Number of recent tokens averaged by green boxes


@dataclass(frozen=True)
class TokenConfig:
    """Token input limits."""
    max_weight: int


@dataclass(frozen=True)
class ReportConfig:
    """Display settings for summaries."""
    players: Tuple[str, str]


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    boxes: Tuple[BoxConfig, ...]
    scoring: ScoringConfig
    tokens: TokenConfig
    report: ReportConfig

    @property
    def num_boxes(self) -> int:
        """Number of boxes in the set."""
        return len(self.boxes)

    @property
    def initial_weights(self) -> Tuple[float, ...]:
        """Initial weight of every box, in set order."""
        return tuple(b.initial_weight for b in self.boxes)

    def get_box(self, index: int) -> BoxConfig:
        """Get box config by position in the set."""
        if 0 <= index < len(self.boxes):
            return self.boxes[index]
        raise ValueError(f"Invalid box index: {index}")


def _section(raw: dict, name: str) -> dict:
    """Get an optional mapping section; an empty section counts as absent."""
    data = raw.get(name)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Section '{name}' must be a mapping, got {type(data).__name__}")
    return data


def _parse_box(box_data: dict) -> BoxConfig:
    """Parse a single box entry from YAML."""
    if not isinstance(box_data, dict):
        raise ValueError(f"Box entry must be a mapping, got {box_data!r}")
    try:
        return BoxConfig(
            kind=str(box_data["kind"]).lower(),
            initial_weight=float(box_data["initial_weight"]),
        )
    except KeyError as e:
        raise ValueError(f"Box entry missing key {e}: {box_data!r}") from e
    except TypeError as e:
        raise ValueError(f"Invalid box entry {box_data!r}: {e}") from e


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    kinds = tuple(b.kind for b in config.boxes)
    if kinds != STANDARD_LAYOUT:
        raise ValueError(
            f"Box layout must be {list(STANDARD_LAYOUT)}, got {list(kinds)}"
        )

    # Initial weights double as a tie-free starting order
    weights = config.initial_weights
    for prev, cur in zip(weights, weights[1:]):
        if cur <= prev:
            raise ValueError(f"Initial weights must be strictly increasing, got {list(weights)}")

    if weights[0] < 0.0:
        raise ValueError(f"Initial weights must be non-negative, got {list(weights)}")

    if config.scoring.green_window != GREEN_WINDOW:
        raise ValueError(
            f"green_window is locked to {GREEN_WINDOW}, got {config.scoring.green_window}"
        )

    if config.tokens.max_weight != MAX_TOKEN_WEIGHT:
        raise ValueError(
            f"tokens.max_weight is locked to {MAX_TOKEN_WEIGHT}, got {config.tokens.max_weight}"
        )

    players = config.report.players
    if len(players) != 2:
        raise ValueError(f"Exactly two player names required, got {list(players)}")
    if players[0] == players[1]:
        raise ValueError(f"Player names must be distinct, got {list(players)}")


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(raw, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")

    boxes_data = raw.get("boxes")
    if not isinstance(boxes_data, list):
        raise ValueError(f"Config needs a 'boxes' list: {config_path}")
    boxes = tuple(_parse_box(b) for b in boxes_data)

    try:
        scoring_data = _section(raw, "scoring")
        scoring = ScoringConfig(
            green_window=int(scoring_data.get("green_window", GREEN_WINDOW))
        )

        tokens_data = _section(raw, "tokens")
        tokens = TokenConfig(
            max_weight=int(tokens_data.get("max_weight", MAX_TOKEN_WEIGHT))
        )

        report_data = _section(raw, "report")
        players = report_data.get("players", ["A", "B"])
        if not isinstance(players, list):
            raise ValueError(f"report.players must be a list, got {players!r}")
        report = ReportConfig(players=tuple(str(p) for p in players))
    except TypeError as e:
        raise ValueError(f"Invalid value in {config_path}: {e}") from e

    config = GameConfig(
        boxes=boxes,
        scoring=scoring,
        tokens=tokens,
        report=report
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
