"""
Core Game
=========

Main game orchestrator combining the box set, players, scoring, and rules.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from box_game.box_core.box_set import BoxSet
from box_game.box_core.config_loader import GameConfig, get_config
from box_game.box_core.rules import GameFinishedError, GameStatus, TurnRules
from box_game.box_core.scoring import Player, ScoreEvent
from box_game.box_core.state_snapshot import GameSnapshot, SnapshotBuilder


@dataclass
class StepResult:
    """Result of a single turn."""
    event: ScoreEvent
    score_a: float
    score_b: float
    status: GameStatus

    @property
    def points(self) -> float:
        return self.event.points


@dataclass
class GameResult:
    """Final outcome of a game."""
    score_a: float
    score_b: float
    winner: Optional[str]        # None on a tie
    turns: int
    events: Tuple[ScoreEvent, ...]

    @property
    def scores(self) -> Tuple[float, float]:
        return (self.score_a, self.score_b)


class CoreGame:
    """
    Main game simulation class.

    Orchestrates:
    - Box set (selection and absorption)
    - Two players (score accumulation)
    - Turn rules (actor order, token checks)
    - State snapshots

    One step = one token: the acting player's lightest box absorbs it
    and the box score is credited to that player.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize game.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._rules = TurnRules(config)
        self._snapshot_builder = SnapshotBuilder(config)

        self._boxes = BoxSet.from_config(config)
        name_a, name_b = self._rules.players
        self._players: Tuple[Player, Player] = (Player(name_a), Player(name_b))

        self._turn: int = 0
        self._status = GameStatus.NOT_STARTED
        self._events: List[ScoreEvent] = []

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def rules(self) -> TurnRules:
        return self._rules

    @property
    def boxes(self) -> BoxSet:
        """The box set being played against."""
        return self._boxes

    @property
    def players(self) -> Tuple[Player, Player]:
        return self._players

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def turn(self) -> int:
        """Number of turns played."""
        return self._turn

    @property
    def scores(self) -> Tuple[float, float]:
        """Current (score_a, score_b)."""
        return (self._players[0].score, self._players[1].score)

    @property
    def events(self) -> Tuple[ScoreEvent, ...]:
        """Every scoring event so far, in turn order."""
        return tuple(self._events)

    @property
    def is_over(self) -> bool:
        """True if game has ended."""
        return self._status is GameStatus.FINISHED

    @property
    def current_player(self) -> Player:
        """Player who acts on the next turn."""
        return self._players[self._rules.actor_index(self._turn)]

    def reset(self) -> GameSnapshot:
        """
        Reset game to initial state with a fresh box set.

        Returns:
            Initial game snapshot.
        """
        self._boxes = BoxSet.from_config(self._config)
        for player in self._players:
            player.reset()

        self._turn = 0
        self._status = GameStatus.NOT_STARTED
        self._events = []

        return self.snapshot()

    def start(self) -> None:
        """Move from NOT_STARTED to RUNNING."""
        if self._status is GameStatus.FINISHED:
            raise GameFinishedError("Game already finished. Call reset() first.")
        self._status = GameStatus.RUNNING

    def step(self, token: int) -> StepResult:
        """
        Play one turn with the given token.

        Args:
            token: Token weight, an unsigned 32-bit integer.

        Returns:
            StepResult for the turn.

        Raises:
            InvalidTokenError: If the token is out of range.
            GameFinishedError: If the game already finished.
        """
        if self._status is GameStatus.FINISHED:
            raise GameFinishedError("Game already finished. Call reset() first.")

        token = self._rules.validate_token(token, self._turn)
        if self._status is GameStatus.NOT_STARTED:
            self.start()

        player = self.current_player
        box_index, points = player.take_turn(token, self._boxes)

        event = ScoreEvent(
            turn=self._turn,
            player=player.name,
            box_index=box_index,
            box_kind=self._boxes[box_index].kind,
            token=token,
            points=points,
        )
        self._events.append(event)
        self._turn += 1

        score_a, score_b = self.scores
        return StepResult(
            event=event,
            score_a=score_a,
            score_b=score_b,
            status=self._status,
        )

    def finish(self) -> GameResult:
        """End the game and return the result."""
        self._status = GameStatus.FINISHED
        return self.result()

    def result(self) -> GameResult:
        """Result for the scores so far."""
        score_a, score_b = self.scores
        if score_a > score_b:
            winner = self._players[0].name
        elif score_b > score_a:
            winner = self._players[1].name
        else:
            winner = None

        return GameResult(
            score_a=score_a,
            score_b=score_b,
            winner=winner,
            turns=self._turn,
            events=self.events,
        )

    def run(self, tokens: Iterable[int]) -> GameResult:
        """
        Play every token in order and finish the game.

        All tokens are checked before the first turn, so a bad token
        leaves the game untouched.

        Args:
            tokens: Token weights, consumed once, left to right.

        Returns:
            GameResult with final scores.
        """
        tokens = [
            self._rules.validate_token(t, self._turn + i)
            for i, t in enumerate(tokens)
        ]

        self.start()
        for token in tokens:
            self.step(token)
        return self.finish()

    def snapshot(self) -> GameSnapshot:
        """Build a snapshot of the current state."""
        return self._snapshot_builder.build(
            boxes=self._boxes,
            players=self._players,
            turn=self._turn,
            status=self._status.value,
            next_player=self.current_player.name,
        )


def play(
    input_weights: Iterable[int],
    config: Optional[GameConfig] = None
) -> Tuple[float, float]:
    """
    Play a full game and return the final scores.

    Args:
        input_weights: Token weights in play order.
        config: Game configuration. Uses default if None.

    Returns:
        (score_a, score_b). An empty input gives (0.0, 0.0).
    """
    return CoreGame(config).run(input_weights).scores


def format_scores(
    score_a: float,
    score_b: float,
    players: Tuple[str, str] = ("A", "B")
) -> str:
    """Human-readable summary line for a pair of scores."""
    return (f"Scores: player {players[0]} {score_a:g}, "
            f"player {players[1]} {score_b:g}")
