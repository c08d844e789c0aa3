"""
Command line interface for goco.

``goco`` (or ``goco generate``) reads the repository's changes, asks the
selected AI provider for a Conventional Commit message and commits with
it. ``goco models`` lists the models a provider offers and ``goco
config`` manages the configuration file.

Commands raise classified :class:`~goco.errors.GocoError` exceptions;
:class:`GocoGroup` is the single place that reports them and selects the
process exit code.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import click

from goco import __version__
from goco.config import Config, create_config_file, get_config_path, load_config
from goco.errors import GocoError, describe_error, exit_code_for, EXIT_ERROR
from goco.model_validator import resolve_model
from goco.pipeline import GenerateOptions, run_pipeline
from goco.providers import PROVIDERS, Provider, create_provider
from goco.ui import print_error, print_info, print_success, print_warning
from goco.vcs.git_client import GitClient


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


PROVIDER_CHOICE = click.Choice(sorted(PROVIDERS))


def configure_logging(verbose: bool) -> None:
    # force=True so repeated invocations (tests) reconfigure the handlers
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        force=True,
    )


class GocoGroup(click.Group):
    """Command group that turns classified errors into exit codes."""

    def invoke(self, ctx: click.Context):
        try:
            return super().invoke(ctx)
        except GocoError as exc:
            logger.debug("Command failed: %r", exc)
            print_error(describe_error(exc))
            ctx.exit(exit_code_for(exc))
        except (click.exceptions.Exit, click.exceptions.Abort, click.ClickException):
            raise
        except Exception as exc:
            logging.exception("Unhandled error: %s", exc)
            print_error(f"Unexpected error: {exc}")
            ctx.exit(EXIT_ERROR)


# ---------------------------------------------------------------------------
# API keys
# ---------------------------------------------------------------------------

def _require_non_empty(value: str) -> str:
    if not value.strip():
        raise click.BadParameter("API key cannot be empty")
    return value.strip()


def prompt_for_api_key(env_var: str, provider_label: str) -> str:
    """Ask for an API key and export it for the rest of the session."""
    click.echo(click.style(f"🔑 {provider_label} API Key Required", fg="magenta", bold=True))
    api_key = click.prompt(
        f"Please enter your {provider_label} API key",
        hide_input=True,
        value_proc=_require_non_empty,
    )
    os.environ[env_var] = api_key

    click.echo(click.style("\n✅ API key set for this session!", fg="bright_black", italic=True))
    click.echo(
        "\nTo avoid this prompt in the future, add this to your shell profile:\n"
        f'  export {env_var}="your-api-key-here"\n'
    )
    return api_key


def resolve_api_key(config: Config, provider_name: str, explicit: Optional[str]) -> str:
    """Return the ``--api-key`` value, else the configured env var, else prompt."""
    if explicit:
        return explicit
    api_key = config.get_api_key(provider_name)
    if api_key:
        return api_key
    return prompt_for_api_key(config.api_key_env(provider_name), provider_name.capitalize())


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@click.group(cls=GocoGroup, invoke_without_command=True)
@click.version_option(version=__version__, prog_name="goco")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """🤖 Generate Conventional Commit messages with AI and commit them.

    Without a subcommand, ``goco`` runs ``goco generate``.
    """
    if ctx.invoked_subcommand is None:
        ctx.invoke(generate)


@cli.command()
@click.option("--provider", "-p", type=PROVIDER_CHOICE, default=None,
              help="AI provider to use (defaults to the configured provider).")
@click.option("--api-key", "-k", default=None, help="API key for the provider.")
@click.option("--model", "-m", default=None, help="Model to use (defaults per provider).")
@click.option("--type", "-t", "commit_type", default=None,
              help="Commit type (feat, fix, chore, etc.).")
@click.option("--breaking-change", "-b", is_flag=True, help="Mark commit as breaking change.")
@click.option("--instructions", "-i", default=None, help="Additional instructions for the model.")
@click.option("--staged", "-s", is_flag=True,
              help="Describe and commit only the staged changes.")
@click.option("--edit", "-e", is_flag=True, help="Edit the generated message before committing.")
@click.option("--verbose", is_flag=True, help="Show the git status and diff sent to the model.")
def generate(
    provider: Optional[str],
    api_key: Optional[str],
    model: Optional[str],
    commit_type: Optional[str],
    breaking_change: bool,
    instructions: Optional[str],
    staged: bool,
    edit: bool,
    verbose: bool,
) -> None:
    """Generate a commit message for the current changes and commit."""
    configure_logging(verbose)

    git = GitClient.open(Path.cwd())
    # Read the repository before any API key prompt
    snapshot = git.capture_snapshot(staged=staged)
    config = load_config()
    provider_name = provider or config.get_default_provider()
    model_name = resolve_model(provider_name, model)
    ai_provider = create_provider(
        provider_name, resolve_api_key(config, provider_name, api_key), model_name
    )

    options = GenerateOptions(
        provider=provider_name,
        model=model_name,
        staged=staged,
        edit=edit,
        commit_type=commit_type,
        breaking_change=breaking_change,
        instructions=instructions,
        verbose=verbose,
    )
    print_info(f"Using {ai_provider.display_name}")
    outcome = run_pipeline(options, ai_provider, git, snapshot=snapshot)

    if outcome.plan.paths is not None:
        print_success(f"Committed {len(outcome.plan.paths)} staged file(s)")
    else:
        print_success("Committed all tracked changes")


@cli.command()
@click.option("--provider", "-p", type=PROVIDER_CHOICE, default=None,
              help="AI provider to list models for.")
@click.option("--api-key", "-k", default=None, help="API key for the provider.")
def models(provider: Optional[str], api_key: Optional[str]) -> None:
    """List the models available for a provider."""
    configure_logging(False)

    config = load_config()
    provider_name = provider or config.get_default_provider()
    if provider_name == "groq":
        # Groq's list is curated locally and needs no credentials
        key = api_key or config.get_groq_api_key()
    else:
        key = resolve_api_key(config, provider_name, api_key)
    ai_provider: Provider = create_provider(provider_name, key, resolve_model(provider_name))

    names = ai_provider.list_models()

    click.echo(click.style(f"\n📋 Available {provider_name.capitalize()} Models\n",
                           fg="magenta", bold=True))
    for name in names:
        click.echo(click.style(f"  • {name}", fg="blue"))
    click.echo(
        f"\nUse --model flag to specify a model: "
        f"goco generate --provider {provider_name} --model <model-name>"
    )


@cli.group("config")
def config_group() -> None:
    """Manage the goco configuration file."""


@config_group.command("init")
@click.option("--force", is_flag=True, help="Overwrite an existing configuration file.")
def config_init(force: bool) -> None:
    """Write the default configuration file."""
    path = get_config_path()
    if path.exists() and not force:
        print_warning(f"Configuration already exists at {path} (use --force to overwrite)")
        return
    written = create_config_file(Config(), path)
    print_success(f"Wrote configuration to {written}")


@config_group.command("show")
def config_show() -> None:
    """Show the effective configuration."""
    path = get_config_path()
    config = load_config(path)
    print_info(f"Configuration file: {path}{'' if path.exists() else ' (not found, using defaults)'}")
    click.echo(f"  default_provider:            {config.get_default_provider()}")
    click.echo(f"  api_key_gemini_env_variable: {config.api_key_env('gemini')}")
    click.echo(f"  api_key_groq_env_variable:   {config.api_key_env('groq')}")


def main() -> None:
    """Console script entry point."""
    cli(prog_name="goco")


if __name__ == "__main__":
    main()
