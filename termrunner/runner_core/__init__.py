"""
Runner Core - The simulation and rendering engine.

This module provides the engine, its bodies and frame buffer, the message
pump that feeds it, and a Gymnasium environment for headless agents.

Main exports:
- CoreGame: Engine (tick, spawn, input, render)
- MessagePump: Tick/spawn timers and the serialized inbox
- RunnerEnv: Gymnasium environment with a fixed simulation step
- GameConfig: Configuration loaded from game_config.yaml
"""

from termrunner.runner_core.config_loader import GameConfig, load_config
from termrunner.runner_core.sprite import Sprite
from termrunner.runner_core.frame_buffer import FrameBuffer
from termrunner.runner_core.player import Player
from termrunner.runner_core.enemy import Enemy
from termrunner.runner_core.messages import KeyPress, Message, Quit, Spawn, Tick
from termrunner.runner_core.game import CoreGame, StepResult
from termrunner.runner_core.message_pump import MessagePump
from termrunner.runner_core.env_gym import RunnerEnv

__all__ = [
    "GameConfig",
    "load_config",
    "Sprite",
    "FrameBuffer",
    "Player",
    "Enemy",
    "KeyPress",
    "Message",
    "Quit",
    "Spawn",
    "Tick",
    "CoreGame",
    "StepResult",
    "MessagePump",
    "RunnerEnv",
]
