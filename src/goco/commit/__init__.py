"""
Committing the generated message.

:mod:`goco.commit.scope` decides which changes a commit may include and
:mod:`goco.commit.editor` lets the user edit the message first.
"""

from .editor import edit_message, resolve_editor  # noqa: F401
from .scope import CommitPlan, CommitScope, commit_changes  # noqa: F401
