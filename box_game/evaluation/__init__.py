"""
Evaluation Package
==================

Contains the input bank and the harness that plays and summarizes games.
"""

from box_game.evaluation.run_eval import evaluate_bank, load_input_bank

__all__ = ["evaluate_bank", "load_input_bank"]
