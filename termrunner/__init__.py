"""
TermRunner Package
==================

A terminal side-scrolling avoidance game. The player jumps over enemies that
scroll in from the right; score grows with survival time and the game ends
on the first collision.

- runner_core: simulation and rendering engine, message pump, Gym wrapper
- game_config.yaml: all tunable parameters
"""
