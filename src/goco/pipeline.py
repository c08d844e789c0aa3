"""
The generate-and-commit pipeline.

:func:`run_pipeline` wires the stages together in order: read the git
state, validate the model, generate the message, optionally edit it and
commit with the requested scope. Its collaborators are passed in rather
than looked up, so tests can drive it with fakes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from goco.commit.editor import edit_message
from goco.commit.scope import CommitPlan, CommitScope, commit_changes
from goco.generation import (
    GenerationRequest,
    GenerationResult,
    build_custom_instructions,
    generate_commit_message,
)
from goco.model_validator import validate_model
from goco.providers.base import Provider
from goco.ui import ProgressIndicator, print_box, print_success
from goco.vcs.git_client import GitClient, GitSnapshot


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


@dataclass(frozen=True)
class GenerateOptions:
    """Options of one ``goco generate`` run.

    Attributes
    ----------
    provider : str
        Provider name.
    model : str
        Effective model name.
    staged : bool
        Diff the index and commit only staged paths.
    edit : bool
        Open the generated message in an editor before committing.
    commit_type : str, optional
        Conventional Commit type the message must use.
    breaking_change : bool
        Ask for a breaking change marker.
    instructions : str, optional
        Extra free-form instructions for the model.
    verbose : bool
        Show the captured status and diff.
    """

    provider: str
    model: str
    staged: bool = False
    edit: bool = False
    commit_type: Optional[str] = None
    breaking_change: bool = False
    instructions: Optional[str] = None
    verbose: bool = False

    @property
    def scope(self) -> CommitScope:
        return CommitScope.from_staged_flag(self.staged)

    @property
    def custom_instructions(self) -> str:
        return build_custom_instructions(self.commit_type, self.breaking_change, self.instructions)


@dataclass
class PipelineOutcome:
    snapshot: GitSnapshot
    result: GenerationResult
    plan: CommitPlan
    commit_output: str


def run_pipeline(
    options: GenerateOptions,
    provider: Provider,
    git: GitClient,
    indicator_factory: Callable[[str], ProgressIndicator] = ProgressIndicator,
    editor: Callable[[str], str] = edit_message,
    snapshot: Optional[GitSnapshot] = None,
) -> PipelineOutcome:
    """Generate a commit message for the repository and commit with it.

    A ``snapshot`` captured by the caller is used as is; otherwise the
    repository state is read first.

    Every failure is raised as a :class:`~goco.errors.GocoError`; nothing
    is printed for errors and the process is never exited here.
    """
    if snapshot is None:
        snapshot = git.capture_snapshot(staged=options.staged)
    logger.debug(
        "Captured status (%d chars), diff (%d chars), %d staged file(s)",
        len(snapshot.status),
        len(snapshot.diff),
        len(snapshot.staged_files),
    )
    if options.verbose:
        print_box("📊 Git Status", snapshot.status, color="green")
        print_box("📝 Git Diff", snapshot.diff or "(empty diff)", color="blue")

    validate_model(provider, options.model)

    request = GenerationRequest(
        status=snapshot.status,
        diff=snapshot.diff,
        custom_instructions=options.custom_instructions,
    )
    result = generate_commit_message(provider, request, indicator_factory)
    print_box("✅ Generated Commit Message", result.message, color="green")

    if options.edit:
        edited = editor(result.message)
        if edited != result.message:
            result.message = edited
            result.edited = True
            print_box("✏️  Edited Commit Message", result.message, color="green")

    plan, output = commit_changes(git, options.scope, result.message)
    if output.strip():
        print_success(output.strip().splitlines()[0])
    return PipelineOutcome(snapshot=snapshot, result=result, plan=plan, commit_output=output)
