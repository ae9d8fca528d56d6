"""
Terminal Play Mode
==================

Play the runner in the terminal. Takes over the screen (alternate buffer,
raw input, hidden cursor) and feeds the engine from the message pump.

Controls:
    - SPACE: Jump
    - Q / Ctrl-C: Quit

Usage:
    python -m tools.play_terminal [--config PATH] [--fps FPS] [--spawn-interval SECONDS]
                                  [--spawn-log PATH] [--debug]
"""

from __future__ import annotations

import argparse
import curses
import os
import sys
from typing import List, Optional, TextIO, Tuple

from termrunner.runner_core.config_loader import GameConfig, load_config
from termrunner.runner_core.game import CoreGame
from termrunner.runner_core.message_pump import MessagePump
from termrunner.runner_core.messages import KeyPress

# Seconds the consumer waits for a message before polling the keyboard again
INPUT_POLL_INTERVAL = 0.005

_KEY_NAMES = {
    ord(" "): " ",
    ord("q"): "q",
    ord("Q"): "q",
    3: "ctrl+c",
}


def get_terminal_size() -> Tuple[int, int]:
    """
    Query the terminal attached to stdin.

    Returns:
        (width, height) in cells.

    Raises:
        OSError: If stdin is not a terminal.
    """
    size = os.get_terminal_size(sys.stdin.fileno())
    return size.columns, size.lines


def decode_key(code: int) -> Optional[str]:
    """Map a curses key code to a key name, or None for keys nobody handles."""
    return _KEY_NAMES.get(code)


class SpawnLog:
    """Appends the running spawn count to a file, one line per spawn."""

    def __init__(self, path: str):
        self._file: TextIO = open(path, "a")

    def __call__(self, count: int) -> None:
        self._file.write(f"{count}\n")
        self._file.flush()

    def close(self) -> None:
        self._file.close()


class TerminalPlayer:
    """
    Drives one game session inside a curses screen.

    The consumer loop is the only code touching the engine; timers and the
    keyboard only enqueue messages.
    """

    def __init__(self, game: CoreGame, pump: MessagePump, debug: bool = False):
        self._game = game
        self._pump = pump
        self._debug = debug
        self._frames = 0

    @property
    def frames(self) -> int:
        """Frames pushed to the screen so far."""
        return self._frames

    def run(self, stdscr) -> float:
        """
        Play until the player quits.

        Args:
            stdscr: Window from curses.wrapper.

        Returns:
            Final score.
        """
        curses.raw()
        stdscr.nodelay(True)
        stdscr.keypad(True)
        try:
            curses.curs_set(0)
        except curses.error:
            pass  # Terminal cannot hide the cursor

        self._pump.start()
        try:
            self._draw(stdscr, self._game.render())
            while True:
                for key in self._read_keys(stdscr):
                    self._pump.send(KeyPress(key))

                message = self._pump.get(timeout=INPUT_POLL_INTERVAL)
                if message is None:
                    continue
                if self._game.update(message) is not None:
                    break
                self._draw(stdscr, self._game.render())
        finally:
            self._pump.stop()

        return self._game.score

    def _read_keys(self, stdscr) -> List[str]:
        """Drain pending key presses without blocking."""
        keys = []
        while True:
            code = stdscr.getch()
            if code == -1:
                return keys
            key = decode_key(code)
            if key is not None:
                keys.append(key)

    def _draw(self, stdscr, frame: str) -> None:
        """Push a rendered frame to the alternate screen."""
        stdscr.erase()
        for row, line in enumerate(frame.splitlines()):
            try:
                stdscr.addstr(row, 0, line)
            except curses.error:
                # Writing the bottom-right cell moves the cursor off screen
                pass
        if self._debug:
            status = f" ticks={self._game.tick_count} spawns={self._game.spawn_count} "
            try:
                stdscr.addstr(0, 0, status[:self._game.screen_width])
            except curses.error:
                pass
        stdscr.refresh()
        self._frames += 1


def build_game(config: GameConfig, spawn_log: Optional[SpawnLog] = None) -> CoreGame:
    """
    Create an engine sized to the current terminal.

    Raises:
        OSError: If the terminal size is unavailable.
        ValueError: If the terminal is too small.
    """
    width, height = get_terminal_size()
    return CoreGame(config=config.with_screen(width, height), on_spawn=spawn_log)


def main():
    parser = argparse.ArgumentParser(description="Play the runner in the terminal")
    parser.add_argument("--config", type=str, default=None, help="Path to game_config.yaml")
    parser.add_argument("--fps", type=int, default=None, help="Tick rate (default: from config)")
    parser.add_argument("--spawn-interval", type=float, default=None,
                        help="Seconds between enemies (default: from config)")
    parser.add_argument("--spawn-log", type=str, default=None,
                        help="Append the spawn counter to this file")
    parser.add_argument("--debug", action="store_true", help="Show tick/spawn counters")

    args = parser.parse_args()

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    spawn_log = SpawnLog(args.spawn_log) if args.spawn_log else None
    try:
        try:
            game = build_game(config, spawn_log)
        except OSError as e:
            print(f"Failed to get terminal size: {e}")
            return 1
        except ValueError as e:
            print(f"Error: {e}")
            return 1

        fps = args.fps if args.fps is not None else config.timing.fps
        spawn_interval = (
            args.spawn_interval if args.spawn_interval is not None
            else config.timing.spawn_interval
        )
        try:
            pump = MessagePump(fps=fps, spawn_interval=spawn_interval)
        except ValueError as e:
            print(f"Error: {e}")
            return 1

        player = TerminalPlayer(game, pump, debug=args.debug)
        try:
            score = curses.wrapper(player.run)
        except KeyboardInterrupt:
            score = game.score
        print(f"Final Score: {int(score)}")
        return 0
    finally:
        if spawn_log is not None:
            spawn_log.close()


if __name__ == "__main__":
    sys.exit(main())
