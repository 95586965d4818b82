"""
Box Core - The heart of the game.

This module provides the boxes, the game loop, and all supporting systems
(box selection, scoring, rules, snapshots, replays).

Main exports:
- play: Play a full game and return (score_a, score_b)
- CoreGame: Turn-by-turn game simulation
- BoxSet: The four boxes a game is played against
- GreenBox / BlueBox: The two box variants
- GameConfig: Configuration loaded from game_config.yaml
"""

from box_game.box_core.config_loader import GameConfig, load_config
from box_game.box_core.boxes import (
    Box,
    BoxKind,
    GreenBox,
    BlueBox,
    pairing,
    make_box,
    make_green_box,
    make_blue_box,
)
from box_game.box_core.box_set import BoxSet
from box_game.box_core.scoring import Player, ScoreEvent
from box_game.box_core.rules import (
    GameStatus,
    GameFinishedError,
    InvalidTokenError,
)
from box_game.box_core.game import CoreGame, GameResult, StepResult, play, format_scores
from box_game.box_core.replay_recorder import (
    ReplayRecorder,
    record_game,
    load_replay,
    verify_replay,
    generate_replay_filename,
)

__all__ = [
    "GameConfig",
    "load_config",
    "Box",
    "BoxKind",
    "GreenBox",
    "BlueBox",
    "pairing",
    "make_box",
    "make_green_box",
    "make_blue_box",
    "BoxSet",
    "Player",
    "ScoreEvent",
    "GameStatus",
    "GameFinishedError",
    "InvalidTokenError",
    "CoreGame",
    "GameResult",
    "StepResult",
    "play",
    "format_scores",
    "ReplayRecorder",
    "record_game",
    "load_replay",
    "verify_replay",
    "generate_replay_filename",
]
