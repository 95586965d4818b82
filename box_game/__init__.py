"""
Box Game Package
================

A deterministic two-player scoring game played against four boxes.

- box_core: boxes, box set, scoring, rules, and the game loop
- evaluation: input bank runner and command line entry point

The rule constants live in game_config.yaml and are locked.
"""
