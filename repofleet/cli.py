"""CLI commands for repofleet."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable

import click
import httpx
from click.shell_completion import CompletionItem
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from repofleet import __version__
from repofleet.config import load_config_file
from repofleet.exceptions import ConfigFileError, RepofleetError
from repofleet.logging import LOG_LEVELS, configure_logging
from repofleet.models.listing import PlatformOptions, Repository
from repofleet.models.platform import AutocompleteKind
from repofleet.platforms import complete, list_configs, list_platforms, resolve_version_controller
from repofleet.platforms.base import VersionController

console = Console()


def _override_controller(ctx: click.Context) -> VersionController | None:
    """A controller injected through ctx.obj, used instead of resolving one."""
    obj = ctx.find_object(dict)
    if obj is None:
        return None
    return obj.get("version_controller")


def options_from_params(params: dict[str, Any]) -> PlatformOptions:
    """Build PlatformOptions from click parameters."""
    return PlatformOptions(
        platform=params.get("platform") or "github",
        base_url=params.get("base_url") or None,
        token=params.get("token") or None,
        orgs=list(params.get("orgs") or ()),
        groups=list(params.get("groups") or ()),
        users=list(params.get("users") or ()),
        repos=list(params.get("repos") or ()),
        projects=list(params.get("projects") or ()),
        include_subgroups=bool(params.get("include_subgroups")),
        fork=bool(params.get("fork")),
        merge_types=list(params.get("merge_types") or ()),
    )


def _load_config(ctx: click.Context, param: click.Parameter, value: Path | None) -> None:
    if value is None:
        return
    try:
        defaults = load_config_file(value)
    except ConfigFileError as e:
        raise click.BadParameter(e.message, ctx=ctx, param=param) from e
    ctx.default_map = {**(ctx.default_map or {}), **defaults}


def _complete_platform(ctx: click.Context, param: click.Parameter, incomplete: str) -> list[CompletionItem]:
    return [CompletionItem(name) for name in list_platforms() if name.startswith(incomplete)]


def _autocompleter(kind: AutocompleteKind) -> Callable[[click.Context, click.Parameter, str], list[CompletionItem]]:
    def shell_complete(ctx: click.Context, param: click.Parameter, incomplete: str) -> list[CompletionItem]:
        options = options_from_params(ctx.params)
        values = complete(options, kind, incomplete, override=_override_controller(ctx))
        return [CompletionItem(value) for value in values]

    return shell_complete


def platform_options(f: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the platform selection options to a command."""
    options = [
        click.option(
            "--config", type=click.Path(dir_okay=False, path_type=Path), is_eager=True,
            expose_value=False, callback=_load_config,
            help="YAML file with default values for these options",
        ),
        click.option(
            "--platform", "-p", default="github", show_default=True, shell_complete=_complete_platform,
            help="The platform that is used. Available values: github, gitlab, gitea.",
        ),
        click.option(
            "--base-url", "-g", default=None,
            help="Base URL of the GitHub API (GitHub Enterprise), or the URL of a self-hosted GitLab or Gitea instance.",
        ),
        click.option(
            "--token", "-T", default=None,
            help="Personal access token. Can also be set with GITHUB_TOKEN, GITLAB_TOKEN or GITEA_TOKEN.",
        ),
        click.option(
            "--org", "-O", "orgs", multiple=True, shell_complete=_autocompleter(AutocompleteKind.ORGANIZATIONS),
            help="Organization name, all its repositories are used (can repeat)",
        ),
        click.option("--group", "-G", "groups", multiple=True, help="GitLab group, all its projects are used (can repeat)"),
        click.option(
            "--user", "-U", "users", multiple=True, shell_complete=_autocompleter(AutocompleteKind.USERS),
            help="User name, all repositories owned by the user are used (can repeat)",
        ),
        click.option(
            "--repo", "-R", "repos", multiple=True, shell_complete=_autocompleter(AutocompleteKind.REPOSITORIES),
            help='Repository in the format "owner/name" (can repeat)',
        ),
        click.option(
            "--project", "-P", "projects", multiple=True,
            help='GitLab project in the format "group/name", subgroups allowed (can repeat)',
        ),
        click.option("--include-subgroups", is_flag=True, help="Include GitLab subgroups when using --group"),
        click.option("--fork", is_flag=True, help="Push to a fork instead of the repository (GitHub only)"),
        click.option(
            "--merge-type", "merge_types", multiple=True,
            help="Allowed merge types: merge, squash, rebase (GitHub and Gitea, can repeat)",
        ),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def get_version_controller(ctx: click.Context, params: dict[str, Any], verify: bool = True) -> VersionController:
    """Resolve the controller for a command, or exit with status 1."""
    try:
        return resolve_version_controller(options_from_params(params), verify, _override_controller(ctx))
    except RepofleetError as e:
        console.print(f"[red]Error: {escape(e.message)}[/red]")
        ctx.exit(1)


@click.group()
@click.option("--log-level", type=click.Choice(list(LOG_LEVELS)), default="info", show_default=True,
              help="The level of logging that should be made")
@click.option("--log-format", type=click.Choice(["text", "json"]), default="text", show_default=True,
              help="The formatting of the logs")
@click.option("--log-file", default=None, help='The file where all logs should be printed to. "-" means stdout')
@click.pass_context
def main(ctx: click.Context, log_level: str, log_format: str, log_file: str | None) -> None:
    """repofleet - act on repositories across GitHub, GitLab and Gitea."""
    ctx.ensure_object(dict)
    configure_logging(log_level, log_format, log_file)


@main.command()
@platform_options
@click.pass_context
def repos(ctx: click.Context, **params: Any) -> None:
    """List the repositories selected by the platform options."""
    vc = get_version_controller(ctx, params)

    async def run() -> list[Repository]:
        try:
            return await vc.get_repositories()
        finally:
            await vc.close()

    try:
        with console.status("Fetching repositories..."):
            repositories = asyncio.run(run())
    except httpx.HTTPError as e:
        console.print(f"[red]API error: {escape(str(e))}[/red]")
        ctx.exit(1)
        return

    table = Table(title=f"Repositories ({vc.config.name})")
    table.add_column("Repository", style="cyan")
    table.add_column("Default Branch", style="green")
    table.add_column("Clone URL", style="dim")

    for repo in repositories:
        table.add_row(repo.full_name, repo.default_branch, repo.clone_url)

    console.print(table)
    console.print(f"[dim]Found {len(repositories)} repositories[/dim]")


@main.command()
def platforms() -> None:
    """Show the supported platforms."""
    table = Table(title="Platforms")
    table.add_column("Platform", style="cyan")
    table.add_column("Token Variable", style="yellow")
    table.add_column("Scopes")
    table.add_column("Merge Types")
    table.add_column("Completion")

    for config in list_configs():
        table.add_row(
            config.id.value,
            config.token_env,
            ", ".join(config.scope_labels),
            ", ".join(mt.value for mt in config.merge_types) or "-",
            ", ".join(kind.value for kind in config.capabilities.autocomplete_kinds) or "-",
        )

    console.print(table)


@main.command()
def version() -> None:
    """Show the repofleet version."""
    console.print(f"repofleet {__version__}")


if __name__ == "__main__":
    main()
