"""
Terminal output helpers for goco.

All output goes through :func:`click.echo` so that the CLI can be
exercised with :class:`click.testing.CliRunner`.
"""

from __future__ import annotations

import sys
import threading
import time
from typing import Optional

import click


class ProgressIndicator:
    """Spinner rendered by a background thread until stopped.

    ``stop`` signals the render loop and waits for it to exit, so nothing
    is drawn after it returns. It is safe to call more than once.

    Parameters
    ----------
    message : str
        Text shown next to the spinner.
    show_spinner : bool, optional
        Animate the spinner. Defaults to whether stdout is a terminal;
        otherwise a single static line is printed.
    interval : float, optional
        Seconds between frames.
    """

    SPINNER_CHARS = ['⠋', '⠙', '⠹', '⠸', '⠼', '⠴', '⠦', '⠧', '⠇', '⠏']

    def __init__(self, message: str, show_spinner: Optional[bool] = None, interval: float = 0.1):
        self.message = message
        self.show_spinner = sys.stdout.isatty() if show_spinner is None else show_spinner
        self.interval = interval
        self.start_time: Optional[float] = None
        self.frames_rendered = 0
        self._done = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def elapsed(self) -> float:
        if self.start_time is None:
            return 0.0
        return time.time() - self.start_time

    def start(self) -> "ProgressIndicator":
        self.start_time = time.time()
        if not self.show_spinner:
            click.echo(f"→ {self.message}...")
            return self
        self._thread = threading.Thread(target=self._spin, name="goco-progress", daemon=True)
        self._thread.start()
        return self

    def _spin(self) -> None:
        index = 0
        while not self._done.is_set():
            click.echo(f"\r{self.SPINNER_CHARS[index]} {self.message}...", nl=False)
            self.frames_rendered += 1
            index = (index + 1) % len(self.SPINNER_CHARS)
            self._done.wait(self.interval)

    def stop(self) -> None:
        """Signal completion and wait until the spinner has stopped."""
        if self._done.is_set():
            return
        self._done.set()
        if self._thread is not None:
            self._thread.join()
            # Wipe the spinner line
            click.echo("\r" + " " * (len(self.message) + 6) + "\r", nl=False)

    def __enter__(self) -> "ProgressIndicator":
        return self.start()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
        return False


def print_info(message: str, indent: int = 0):
    """Print an info message."""
    prefix = "  " * indent
    click.echo(f"{prefix}ℹ {message}")


def print_success(message: str, indent: int = 0):
    """Print a success message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✓ {message}")


def print_warning(message: str, indent: int = 0):
    prefix = "  " * indent
    click.echo(f"{prefix}⚠ {message}")


def print_error(message: str, indent: int = 0):
    """Print an error message to stderr."""
    prefix = "  " * indent
    click.echo(f"{prefix}✗ {message}", err=True)


def print_box(title: str, text: str, color: str = "green", width: int = 80):
    """Print ``text`` inside a titled box, splitting lines wider than the box."""
    inner = width - 4
    click.echo(click.style(f" {title} ", fg="white", bg=color, bold=True))
    click.echo(click.style(f"┌{'─' * (width - 2)}┐", fg=color))
    for line in (text.rstrip("\n").splitlines() or [""]):
        line = line.expandtabs(4)
        while len(line) > inner:
            click.echo(click.style("│ ", fg=color) + line[:inner] + click.style(" │", fg=color))
            line = line[inner:]
        click.echo(click.style("│ ", fg=color) + line.ljust(inner) + click.style(" │", fg=color))
    click.echo(click.style(f"└{'─' * (width - 2)}┘", fg=color))
