"""
Version control integration.

goco only supports Git. :class:`GitClient` reads the repository state
and performs the staging and commit commands the pipeline needs.
"""

from .git_client import GitClient, GitSnapshot  # noqa: F401
