"""
Replay Recorder
===============

Records games turn by turn so they can be saved and checked later.

Usage:
    from box_game.box_core import CoreGame, ReplayRecorder

    recorder = ReplayRecorder(CoreGame(), name="fibonacci")
    recorder.reset()
    for token in [1, 1, 2, 3]:
        recorder.step(token)
    recorder.finish()

    recorder.save("fibonacci.json")

A saved replay can be re-simulated with verify_replay(load_replay(path)).
"""

from __future__ import annotations

import json
import hashlib
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from box_game.box_core.config_loader import GameConfig
from box_game.box_core.game import CoreGame, GameResult, StepResult


def generate_replay_filename(
    name: str = "replay",
    directory: Optional[Union[str, Path]] = None
) -> Path:
    """
    Generate a timestamped replay filename.

    Format: {name}_{YYYYMMDD_HHMMSS}.json

    Args:
        name: Label for the game.
        directory: Directory for the file. Defaults to current directory.

    Returns:
        Path object for the replay file.
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    filename = f"{name}_{timestamp}.json"

    if directory:
        return Path(directory) / filename
    return Path(filename)


def compute_config_hash(config: GameConfig) -> str:
    """Compute a hash of the rule constants for replay validation."""
    hash_data = {
        "boxes": [
            {"kind": b.kind, "initial_weight": b.initial_weight}
            for b in config.boxes
        ],
        "green_window": config.scoring.green_window,
        "max_weight": config.tokens.max_weight,
    }
    return hashlib.md5(json.dumps(hash_data, sort_keys=True).encode()).hexdigest()[:8]


class ReplayRecorder:
    """
    Wrapper that records game turns for replay.

    Attributes:
        game: The wrapped CoreGame.
        recording: Whether currently recording.
    """

    def __init__(
        self,
        game: Optional[CoreGame] = None,
        name: str = "replay",
        auto_save_path: Optional[str] = None
    ):
        """
        Initialize the replay recorder.

        Args:
            game: The game to wrap. A new CoreGame if None.
            name: Label stored in replay metadata.
            auto_save_path: If provided, automatically save replay when the game finishes.
        """
        self.game = game if game is not None else CoreGame()
        self.name = name
        self.auto_save_path = auto_save_path

        self._recording = False
        self._tokens: List[int] = []
        self._steps: List[StepResult] = []
        self._result: Optional[GameResult] = None
        self._config_hash = compute_config_hash(self.game.config)

    @property
    def recording(self) -> bool:
        """Whether currently recording."""
        return self._recording

    def reset(self) -> None:
        """Reset the game and start recording."""
        self._tokens = []
        self._steps = []
        self._result = None
        self._recording = True
        self.game.reset()

    def step(self, token: int) -> StepResult:
        """Play one turn and record it."""
        result = self.game.step(token)

        if self._recording:
            self._tokens.append(result.event.token)
            self._steps.append(result)

        return result

    def finish(self) -> GameResult:
        """Finish the game, stop recording, and auto-save if configured."""
        self._result = self.game.finish()
        self._recording = False

        if self.auto_save_path:
            self.save(self.auto_save_path)

        return self._result

    def get_replay_data(self) -> Dict[str, Any]:
        """
        Get the current replay data as a dictionary.

        Returns:
            Dictionary containing all replay data.
        """
        score_a, score_b = self.game.scores
        winner = self._result.winner if self._result is not None else None
        return {
            "name": self.name,
            "config_hash": self._config_hash,
            "players": list(self.game.rules.players),
            "tokens": self._tokens.copy(),
            "turns": [s.event.to_dict() for s in self._steps],
            "running_scores": [[s.score_a, s.score_b] for s in self._steps],
            "final_scores": [score_a, score_b],
            "winner": winner,
            "finished": self._result is not None,
            "total_turns": len(self._steps),
        }

    def save(
        self,
        path: Optional[Union[str, Path]] = None,
        overwrite: bool = True,
        directory: Optional[Union[str, Path]] = None,
        verbose: bool = False
    ) -> Path:
        """
        Save the replay to a JSON file.

        Args:
            path: Path to save the replay. If None, auto-generates a timestamped name.
            overwrite: If True, overwrite existing file.
            directory: Directory for auto-generated filename (only used if path is None).
            verbose: If True, print a short summary.

        Returns:
            Path where the replay was saved.
        """
        if path is None:
            path = generate_replay_filename(name=self.name, directory=directory)
        else:
            path = Path(path)

        if path.exists() and not overwrite:
            raise FileExistsError(f"Replay file already exists: {path}")

        path.parent.mkdir(parents=True, exist_ok=True)

        replay_data = self.get_replay_data()

        with open(path, "w") as f:
            json.dump(replay_data, f, indent=2)

        if verbose:
            print(f"Replay saved: {path}")
            print(f"  Turns: {replay_data['total_turns']}")
            print(f"  Final scores: {replay_data['final_scores']}")

        return path


def load_replay(path: Union[str, Path]) -> Dict[str, Any]:
    """Load replay data from a JSON file."""
    with open(path, "r") as f:
        return json.load(f)


def verify_replay(
    replay_data: Dict[str, Any],
    config: Optional[GameConfig] = None
) -> bool:
    """
    Re-simulate a replay and compare it with the recorded scores.

    Args:
        replay_data: Data as produced by ReplayRecorder.get_replay_data().
        config: Game configuration. Uses default if None.

    Returns:
        True if the replay reproduces the recorded turns and final scores.

    Raises:
        ValueError: If the replay was recorded with different rule constants.
    """
    game = CoreGame(config)
    expected_hash = compute_config_hash(game.config)
    if replay_data.get("config_hash") != expected_hash:
        raise ValueError(
            f"Replay config hash {replay_data.get('config_hash')} "
            f"does not match current config {expected_hash}"
        )

    result = game.run(replay_data["tokens"])
    turns = [e.to_dict() for e in result.events]
    return (
        turns == replay_data["turns"]
        and list(result.scores) == list(replay_data["final_scores"])
    )


def record_game(
    tokens: Iterable[int],
    save_path: Optional[str] = None,
    name: str = "replay",
    config: Optional[GameConfig] = None
) -> Dict[str, Any]:
    """
    Convenience function to record a single game.

    Args:
        tokens: Token weights in play order.
        save_path: If provided, save replay to this path.
        name: Label for the game.
        config: Game configuration. Uses default if None.

    Returns:
        Replay data dictionary.
    """
    recorder = ReplayRecorder(CoreGame(config), name=name)
    recorder.reset()

    for token in tokens:
        recorder.step(token)
    recorder.finish()

    replay_data = recorder.get_replay_data()

    if save_path:
        recorder.save(save_path)

    return replay_data
