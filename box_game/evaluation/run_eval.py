"""
Evaluation Harness
==================

Plays token sequences from the input bank (or the command line) and
summarizes the scores.

Usage:
    python -m box_game.evaluation.run_eval --tokens 1 1 2 3
    python -m box_game.evaluation.run_eval --bank path/to/input_bank.json
"""

from __future__ import annotations

import argparse
import json
import os
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence
import numpy as np

from box_game.box_core.config_loader import GameConfig, get_config, load_config
from box_game.box_core.game import CoreGame, format_scores
from box_game.box_core.replay_recorder import ReplayRecorder


@dataclass
class EvalResult:
    """Result for a single input sequence."""
    name: str
    tokens: List[int]
    score_a: float
    score_b: float
    winner: Optional[str]
    turns: int
    elapsed_time: float


@dataclass
class EvalSummary:
    """Summary of evaluation across all inputs."""
    mean_total: float
    std_total: float
    median_total: float
    min_total: float
    max_total: float
    wins: Dict[str, int]
    ties: int
    total_time: float
    results: List[EvalResult]


def load_input_bank(path: Optional[str] = None) -> Dict[str, List[int]]:
    """
    Load the evaluation input bank.

    Args:
        path: Path to input_bank.json. Uses default if None.

    Returns:
        Mapping of input name to token list, in file order.

    Raises:
        ValueError: If the file is not a valid input bank.
    """
    if path is None:
        path = os.path.join(os.path.dirname(__file__), "input_bank.json")

    with open(path, "r") as f:
        data = json.load(f)

    inputs = data.get("inputs") if isinstance(data, dict) else None
    if not isinstance(inputs, dict):
        raise ValueError(f"Input bank must be an object with an 'inputs' mapping: {path}")

    bank: Dict[str, List[int]] = {}
    for name, tokens in inputs.items():
        if not isinstance(tokens, list):
            raise ValueError(f"Input '{name}' must be a list of token weights, got {tokens!r}")
        bank[name] = list(tokens)
    return bank


def evaluate_inputs(
    name: str,
    tokens: Sequence[int],
    config: Optional[GameConfig] = None,
    record_path: Optional[str] = None,
    verbose: bool = False
) -> EvalResult:
    """
    Play one token sequence.

    Args:
        name: Label for the input.
        tokens: Token weights in play order.
        config: Game configuration. Uses default if None.
        record_path: If provided, save a replay of the game there.
        verbose: If True, print the score summary.

    Returns:
        EvalResult for this input.
    """
    game = CoreGame(config)
    start_time = time.time()

    if record_path:
        recorder = ReplayRecorder(game, name=name)
        recorder.reset()
        for token in tokens:
            recorder.step(token)
        result = recorder.finish()
        recorder.save(record_path, verbose=verbose)
    else:
        result = game.run(tokens)

    elapsed = time.time() - start_time

    if verbose:
        print(f"  {name}: {format_scores(result.score_a, result.score_b, game.rules.players)}")

    return EvalResult(
        name=name,
        tokens=list(tokens),
        score_a=result.score_a,
        score_b=result.score_b,
        winner=result.winner,
        turns=result.turns,
        elapsed_time=elapsed
    )


def summarize_results(
    results: List[EvalResult],
    players: Sequence[str],
    total_time: float
) -> EvalSummary:
    """
    Aggregate per-input results.

    Statistics are over score_a + score_b of each game; an empty result
    list gives all-zero statistics.
    """
    totals = np.array([r.score_a + r.score_b for r in results], dtype=np.float64)
    if totals.size == 0:
        totals = np.zeros(1, dtype=np.float64)

    wins = {player: 0 for player in players}
    ties = 0
    for r in results:
        if r.winner is None:
            ties += 1
        else:
            wins[r.winner] += 1

    return EvalSummary(
        mean_total=float(np.mean(totals)),
        std_total=float(np.std(totals)),
        median_total=float(np.median(totals)),
        min_total=float(np.min(totals)),
        max_total=float(np.max(totals)),
        wins=wins,
        ties=ties,
        total_time=total_time,
        results=results
    )


def evaluate_bank(
    inputs: Optional[Dict[str, List[int]]] = None,
    config: Optional[GameConfig] = None,
    verbose: bool = True
) -> EvalSummary:
    """
    Play every input in the bank.

    Args:
        inputs: Mapping of name to tokens. Uses input_bank.json if None.
        config: Game configuration. Uses default if None.
        verbose: If True, print progress.

    Returns:
        EvalSummary with aggregate statistics over the score totals.
    """
    if inputs is None:
        inputs = load_input_bank()
    if config is None:
        config = get_config()

    if verbose:
        print(f"Evaluating {len(inputs)} inputs...")

    results: List[EvalResult] = []
    total_start = time.time()

    for i, (name, tokens) in enumerate(inputs.items()):
        if verbose:
            print(f"[{i+1}/{len(inputs)}] Playing {name} ({len(tokens)} tokens)...")

        results.append(evaluate_inputs(name, tokens, config=config, verbose=verbose))

    total_time = time.time() - total_start
    summary = summarize_results(results, config.report.players, total_time)
    wins, ties = summary.wins, summary.ties

    if verbose:
        print()
        print("=" * 50)
        print("EVALUATION SUMMARY")
        print("=" * 50)
        print(f"Inputs played:   {len(results)}")
        print(f"Mean total:      {summary.mean_total:.2f}")
        print(f"Std deviation:   {summary.std_total:.2f}")
        print(f"Median total:    {summary.median_total:.2f}")
        print(f"Min total:       {summary.min_total:g}")
        print(f"Max total:       {summary.max_total:g}")
        for player, count in wins.items():
            print(f"Wins player {player}:  {count}")
        print(f"Ties:            {ties}")
        print(f"Total time:      {total_time:.4f}s")
        print("=" * 50)

    return summary


def save_results(
    summary: EvalSummary,
    output_path: str,
    verbose: bool = True
) -> None:
    """Save evaluation results to JSON."""
    data = {
        "timestamp": time.strftime("%Y-%m-%d %H:%M:%S"),
        "mean_total": summary.mean_total,
        "std_total": summary.std_total,
        "median_total": summary.median_total,
        "min_total": summary.min_total,
        "max_total": summary.max_total,
        "wins": summary.wins,
        "ties": summary.ties,
        "total_time": summary.total_time,
        "results": [
            {
                "name": r.name,
                "tokens": r.tokens,
                "score_a": r.score_a,
                "score_b": r.score_b,
                "winner": r.winner,
                "turns": r.turns,
                "elapsed_time": r.elapsed_time
            }
            for r in summary.results
        ]
    }

    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(data, f, indent=2)

    if verbose:
        print(f"Results saved to {output_path}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Play the box game on token sequences")
    parser.add_argument(
        "--tokens",
        type=int,
        nargs="*",
        default=None,
        help="Token weights for a single game (e.g. --tokens 1 1 2 3)"
    )
    parser.add_argument(
        "--bank",
        type=str,
        default=None,
        help="Path to input bank JSON (uses default if not specified)"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to game_config.yaml (uses default if not specified)"
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Path to save results JSON"
    )
    parser.add_argument(
        "--record",
        type=str,
        default=None,
        help="Save a replay of the --tokens game to this path"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Reduce output verbosity"
    )

    args = parser.parse_args(argv)
    verbose = not args.quiet

    if args.record and args.tokens is None:
        print("Error: --record requires --tokens")
        return 1

    try:
        config = load_config(args.config)
    except (OSError, ValueError) as e:
        print(f"Error loading config: {e}")
        return 1

    if args.tokens is not None:
        try:
            result = evaluate_inputs(
                "cli",
                args.tokens,
                config=config,
                record_path=args.record,
                verbose=False
            )
        except ValueError as e:
            print(f"Error: {e}")
            return 1

        # The summary line is the program's output, --quiet does not hide it
        print(format_scores(result.score_a, result.score_b, config.report.players))
        if verbose and result.winner is not None:
            print(f"Winner: player {result.winner}")
        elif verbose:
            print("Tie")

        if args.output:
            summary = summarize_results([result], config.report.players, result.elapsed_time)
            save_results(summary, args.output, verbose=verbose)
        return 0

    try:
        inputs = load_input_bank(args.bank)
    except (OSError, ValueError) as e:
        print(f"Error loading input bank: {e}")
        return 1

    try:
        summary = evaluate_bank(inputs, config=config, verbose=verbose)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    if args.output:
        save_results(summary, args.output, verbose=verbose)

    return 0


if __name__ == "__main__":
    sys.exit(main())
