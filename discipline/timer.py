"""Countdown rest timer for strength sets.

Pure state machine: something external calls ``tick`` once a second (the
TUI uses a Textual interval) and must stop calling it once ``running`` is
False.
"""

from __future__ import annotations

from typing import Callable


class RestTimer:
    def __init__(self, on_finish: Callable[[], None] | None = None) -> None:
        self.remaining = 0
        self.running = False
        self.on_finish = on_finish
        self.generation = 0

    def start(self, seconds: int) -> int:
        """Start a new countdown, replacing any running one. Returns its generation."""
        self.generation += 1
        self.remaining = max(0, int(seconds))
        self.running = self.remaining > 0
        return self.generation

    def tick(self) -> int:
        if not self.running:
            return self.remaining
        self.remaining = max(0, self.remaining - 1)
        if self.remaining == 0:
            self.running = False
            if self.on_finish is not None:
                self.on_finish()
        return self.remaining

    def cancel(self) -> None:
        self.running = False
        self.remaining = 0

    def display(self) -> str:
        minutes, seconds = divmod(self.remaining, 60)
        return f"{minutes:02d}:{seconds:02d}"
