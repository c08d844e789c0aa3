"""
Editing a generated commit message in an external editor.

The editor is chosen from ``EDITOR``, then ``VISUAL``, then the first
of :data:`FALLBACK_EDITORS` found on ``PATH``. Values of the environment
variables may carry arguments (``code --wait``).
"""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
import tempfile
from typing import Callable, List, Mapping, Optional

from goco.errors import EditorError, NoEditorError


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


FALLBACK_EDITORS = ("vim", "nano", "vi", "emacs", "notepad")


def resolve_editor(
    environ: Optional[Mapping[str, str]] = None,
    which: Callable[[str], Optional[str]] = shutil.which,
) -> List[str]:
    """Return the editor command line to use.

    Raises
    ------
    NoEditorError
        If neither variable is set and no fallback editor is installed.
    EditorError
        If the variable's value cannot be split into a command line.
    """
    env = os.environ if environ is None else environ
    for var in ("EDITOR", "VISUAL"):
        value = env.get(var, "").strip()
        if value:
            logger.debug("Using editor from %s: %s", var, value)
            try:
                return shlex.split(value, posix=os.name != "nt")
            except ValueError as exc:
                raise EditorError(f"cannot parse {var} value '{value}': {exc}", cause=exc) from exc
    for candidate in FALLBACK_EDITORS:
        path = which(candidate)
        if path:
            logger.debug("Using fallback editor: %s", path)
            return [path]
    raise NoEditorError()


def edit_message(
    message: str,
    editor: Optional[List[str]] = None,
    run: Callable[..., subprocess.CompletedProcess] = subprocess.run,
) -> str:
    """Let the user edit ``message`` and return the result.

    The message is written to a private temporary file which is removed
    whatever happens. The editor inherits the terminal. If the edited
    text is blank the original ``message`` is returned unchanged.

    Raises
    ------
    NoEditorError
        If no editor can be resolved.
    EditorError
        If the editor fails or the file cannot be read back.
    """
    command = editor if editor is not None else resolve_editor()
    fd, tmp_path = tempfile.mkstemp(prefix="goco-commit-", suffix=".txt")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(message)

        try:
            result = run(command + [tmp_path])
        except OSError as exc:
            raise EditorError(f"failed to start editor '{command[0]}': {exc}", cause=exc) from exc
        if result.returncode != 0:
            raise EditorError(f"editor '{command[0]}' exited with status {result.returncode}")

        try:
            with open(tmp_path, "r", encoding="utf-8") as handle:
                edited = handle.read().strip()
        except OSError as exc:
            raise EditorError(f"failed to read edited message: {exc}", cause=exc) from exc
    finally:
        try:
            os.unlink(tmp_path)
        except FileNotFoundError:
            pass

    if not edited:
        logger.debug("Edited message is empty, keeping the original")
        return message
    return edited
