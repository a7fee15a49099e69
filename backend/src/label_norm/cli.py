"""Click CLI entry point.

Usage:
    label-norm normalize PROJ --jira-url https://jira.example.com --auth-file ~/.jira-auth
    label-norm normalize PROJ --max-issues 500 --concurrency 4
    label-norm normalize PROJ --dry-run
    label-norm labels PROJ

JIRA_URL and JIRA_AUTH_FILE (environment or .env) supply the connection
defaults.
"""

from __future__ import annotations

import asyncio

import click

from label_norm.config import settings
from label_norm.utils.logging import BOLD, DIM, GREEN, RESET, get_logger, set_level

log = get_logger()


def _connection_options(fn):
    fn = click.option("--log-level", default=None, help="Log level (default from LOG_LEVEL)")(fn)
    fn = click.option(
        "--max-issues",
        default=None,
        type=click.IntRange(min=1),
        help="Number of issues to look for labels in the project (default 50)",
    )(fn)
    fn = click.option(
        "--auth-file",
        default=None,
        help="File with <user> on line 1 and <pass> on line 2 (default JIRA_AUTH_FILE)",
    )(fn)
    fn = click.option("--jira-url", default=None, help="URL of your Jira instance (default JIRA_URL)")(fn)
    return fn


@click.group()
def cli() -> None:
    """Normalize issue labels in a Jira project."""
    pass


@cli.command()
@click.argument("project")
@_connection_options
@click.option("--concurrency", default=1, type=click.IntRange(min=1), help="Concurrent label updates")
@click.option("--dry-run", is_flag=True, help="Show planned updates without sending them")
def normalize(
    project: str,
    jira_url: str | None,
    auth_file: str | None,
    max_issues: int | None,
    log_level: str | None,
    concurrency: int,
    dry_run: bool,
) -> None:
    """Rewrite every issue's labels onto one canonical spelling."""
    _configure(jira_url, auth_file, max_issues, log_level)
    summary = _run(_normalize(_open_client(), project, concurrency, dry_run))
    if summary.failed:
        click.echo(f"Error: {summary.failed} of {summary.planned} update(s) failed", err=True)
        for result in summary.failures:
            click.echo(f"  {result.issue_key or result.issue_id}: {result.error}", err=True)
        raise SystemExit(1)


async def _normalize(client, project: str, concurrency: int, dry_run: bool):
    from label_norm.pipeline import run_normalize

    async with client:
        return await run_normalize(
            client,
            project,
            max_issues=settings.max_issues,
            concurrency=concurrency,
            dry_run=dry_run,
        )


@cli.command()
@click.argument("project")
@_connection_options
def labels(
    project: str,
    jira_url: str | None,
    auth_file: str | None,
    max_issues: int | None,
    log_level: str | None,
) -> None:
    """List the labels found in a project and their canonical spelling."""
    _configure(jira_url, auth_file, max_issues, log_level)
    issues, mapping = _run(_labels(_open_client(), project))

    click.echo(f"\n{BOLD}Labels in {project}{RESET} ({len(issues)} issues)\n")
    if not mapping:
        click.echo(f"  {DIM}no labels{RESET}\n")
        return

    width = max(len(label) for label in mapping)
    for label in sorted(mapping, key=lambda name: (mapping[name], name)):
        canonical = mapping[label]
        if label == canonical:
            click.echo(f"  {label:<{width}}  {DIM}={RESET}")
        else:
            click.echo(f"  {label:<{width}}  {GREEN}→ {canonical}{RESET}")
    click.echo(f"\n  {len(mapping)} label(s), {len(set(mapping.values()))} canonical\n")


async def _labels(client, project: str):
    from label_norm.pipeline import fetch_mapping

    async with client:
        return await fetch_mapping(client, project, settings.max_issues)


def _configure(
    jira_url: str | None,
    auth_file: str | None,
    max_issues: int | None,
    log_level: str | None,
) -> None:
    """Apply command-line overrides on top of env/.env settings."""
    if jira_url:
        settings.jira_url = jira_url
    if auth_file:
        settings.jira_auth_file = auth_file
    if max_issues is not None:
        settings.max_issues = max_issues
    if log_level:
        settings.log_level = log_level
    try:
        set_level(settings.log_level)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    if not settings.jira_url:
        click.echo("Error: Jira URL not set (use --jira-url or JIRA_URL)", err=True)
        raise SystemExit(1)
    if not settings.jira_auth_file:
        click.echo("Error: auth file not set (use --auth-file or JIRA_AUTH_FILE)", err=True)
        raise SystemExit(1)


def _run(coro):
    """asyncio.run, turning Jira failures into a one-line error and exit 1."""
    from label_norm.errors import JiraError

    try:
        return asyncio.run(coro)
    except JiraError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)


def _open_client():
    from label_norm.credentials import read_credentials
    from label_norm.errors import CredentialsError
    from label_norm.jira import JiraClient

    try:
        creds = read_credentials(settings.jira_auth_file)
    except CredentialsError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)
    return JiraClient(settings.jira_url, creds)


if __name__ == "__main__":
    cli()
