"""
Git client implementation for goco.

This module wraps the handful of Git commands the commit pipeline needs:
reading the status, diff and staged file list, staging tracked changes
and committing. Every failure is raised as a :class:`~goco.errors.GitError`
naming the failing subcommand. Commands are run synchronously, one at a
time, so that unit tests can mock ``subprocess.run`` easily.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from goco.errors import GitError, NoStagedFilesError, NotARepositoryError


logger = logging.getLogger(__name__)
# Attach a null handler to avoid logging errors when the root logger is not
# configured. Logs propagate to the root when configured by the CLI.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


@dataclass(frozen=True)
class GitSnapshot:
    """Point-in-time view of the repository.

    Attributes
    ----------
    status : str
        Output of ``git status --short``, verbatim.
    diff : str
        Output of ``git diff`` (working tree or index), verbatim.
    staged_files : Tuple[str, ...]
        Paths in the index, in git's order.
    """

    status: str
    diff: str
    staged_files: Tuple[str, ...]


class GitClient:
    """Client for interacting with a Git repository."""

    def __init__(self, repo_root: Path) -> None:
        self.repo_root = repo_root

    # ------------------------------------------------------------------
    # Static helpers
    # ------------------------------------------------------------------
    @staticmethod
    def find_repo_root(start: Path) -> Optional[Path]:
        """Find the root of the Git repository starting from ``start``.

        Walk upwards until a ``.git`` entry is found or the filesystem
        root is reached. ``.git`` may be a file for worktrees.
        """
        current = start.resolve()
        while True:
            if (current / ".git").exists():
                return current
            if current.parent == current:
                return None
            current = current.parent

    @classmethod
    def open(cls, start: Path) -> "GitClient":
        """Return a client for the repository containing ``start``.

        Raises
        ------
        NotARepositoryError
            If ``start`` is not inside a Git repository.
        """
        root = cls.find_repo_root(start)
        if root is None:
            raise NotARepositoryError()
        logger.debug("Found Git repository at: %s", root)
        return cls(root)

    # ------------------------------------------------------------------
    # Basic Git commands
    # ------------------------------------------------------------------
    def _run(self, args: List[str]) -> str:
        """Run a Git command in the repository root and return its stdout.

        Raises
        ------
        GitError
            If git cannot be started or exits with a non-zero status.
        """
        full_cmd = ["git"] + args
        command = args[0] if args else "git"
        logger.debug("Executing Git command: %s", " ".join(full_cmd))
        try:
            result = subprocess.run(
                full_cmd,
                cwd=self.repo_root,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as exc:
            logger.error("Failed to run git: %s", exc)
            raise GitError(command, str(exc), cause=exc) from exc

        if result.returncode != 0:
            logger.error(
                "Git command failed: %s\nSTDOUT: %s\nSTDERR: %s",
                " ".join(full_cmd),
                result.stdout,
                result.stderr,
            )
            message = result.stderr.strip() or result.stdout.strip()
            raise GitError(command, message or f"exit status {result.returncode}")
        return result.stdout

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------
    def get_status(self) -> str:
        """Return ``git status --short`` output, empty for a clean tree."""
        return self._run(["status", "--short"])

    def get_diff(self, staged: bool = False) -> str:
        """Return the diff of the index (``staged``) or the working tree."""
        args = ["diff"]
        if staged:
            args.append("--staged")
        args.append("--no-color")
        return self._run(args)

    def get_staged_files(self) -> List[str]:
        """Return the paths currently in the index, in git's order.

        Both sides of a rename are listed, and paths are NUL separated so
        they come back unquoted and can be passed to ``commit --only``.
        """
        output = self._run(["diff", "--name-only", "--cached", "--no-renames", "-z"])
        return [path for path in output.split("\0") if path]

    def capture_snapshot(self, staged: bool = False) -> GitSnapshot:
        """Capture status, diff and staged files.

        Raises
        ------
        GitError
            If the status is empty, before anything else is read.
        NoStagedFilesError
            If ``staged`` is set and nothing is in the index.
        """
        status = self.get_status()
        if not status.strip():
            raise GitError("status", "no changes detected")
        diff = self.get_diff(staged=staged)
        staged_files = tuple(self.get_staged_files())
        if staged and not staged_files:
            raise NoStagedFilesError()
        return GitSnapshot(status=status, diff=diff, staged_files=staged_files)

    # ------------------------------------------------------------------
    # Staging and committing
    # ------------------------------------------------------------------
    def stage_tracked(self) -> None:
        """Stage all modifications and deletions of tracked files."""
        self._run(["add", "-u"])

    def commit(self, message: str, only_paths: Optional[Sequence[str]] = None) -> str:
        """Create a commit with ``message`` and return git's output.

        When ``only_paths`` is given the commit is restricted to exactly
        those paths (``git commit --only``) and ignores the rest of the
        index.
        """
        args = ["commit", "-m", message]
        if only_paths is not None:
            args += ["--only", "--"] + list(only_paths)
        return self._run(args)
