"""
Commit scope resolution.

``WORKING_TREE`` stages every modification of tracked files and commits
the whole index. ``STAGED_ONLY`` leaves the index alone and commits
exactly the paths that are staged at commit time, so that files edited
while the message was being generated cannot slip into the commit.

The staged list is read again right before committing rather than
reusing the list captured before generation. The index can still change
between that read and ``git commit``; that window is not closed.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from goco.errors import NoStagedFilesError
from goco.vcs.git_client import GitClient


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


class CommitScope(enum.Enum):
    WORKING_TREE = "working-tree"
    STAGED_ONLY = "staged-only"

    @classmethod
    def from_staged_flag(cls, staged: bool) -> "CommitScope":
        return cls.STAGED_ONLY if staged else cls.WORKING_TREE


@dataclass(frozen=True)
class CommitPlan:
    """The commit about to be made.

    Attributes
    ----------
    scope : CommitScope
        Scope the plan was built for.
    message : str
        Commit message.
    paths : Tuple[str, ...], optional
        Paths for ``git commit --only``; ``None`` commits the full index.
    """

    scope: CommitScope
    message: str
    paths: Optional[Tuple[str, ...]] = None


def plan_commit(client: GitClient, scope: CommitScope, message: str) -> CommitPlan:
    """Build the commit plan, reading the index again for ``STAGED_ONLY``.

    Raises
    ------
    NoStagedFilesError
        If ``STAGED_ONLY`` and nothing is staged at this point.
    """
    if scope is CommitScope.WORKING_TREE:
        return CommitPlan(scope=scope, message=message)

    staged = client.get_staged_files()
    if not staged:
        raise NoStagedFilesError()
    logger.debug("Committing %d staged path(s) only", len(staged))
    return CommitPlan(scope=scope, message=message, paths=tuple(staged))


def execute_plan(client: GitClient, plan: CommitPlan) -> str:
    """Run the git commands for ``plan`` and return git's commit output."""
    if plan.scope is CommitScope.WORKING_TREE:
        client.stage_tracked()
    return client.commit(plan.message, only_paths=plan.paths)


def commit_changes(client: GitClient, scope: CommitScope, message: str) -> Tuple[CommitPlan, str]:
    """Plan and perform the commit for ``scope``."""
    plan = plan_commit(client, scope, message)
    output = execute_plan(client, plan)
    return plan, output
