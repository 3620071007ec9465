"""
Box Stacker Package
===================

Core simulation of the "stack the falling box" arcade game, plus the
evaluation harness used to score automated players.

- stack_core: game state, mode state machine, alignment, camera, renderers
- evaluation: seed bank and agent evaluation

All tunable parameters are in game_config.yaml.
"""
