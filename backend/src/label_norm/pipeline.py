"""Label normalization run.

Fetches a project's issues, canonicalizes the labels found across all of them,
plans one label update per issue that would change, and applies the updates.
Updates run concurrently (bounded by a semaphore, paced by a RateLimiter);
each one succeeds or fails on its own and a failure never stops the rest.
"""

from __future__ import annotations

import asyncio

from label_norm.config import settings
from label_norm.errors import JiraError
from label_norm.jira import JiraClient
from label_norm.models import Issue, LabelUpdate, RunSummary, UpdateResult
from label_norm.text.canonical import canonicalize
from label_norm.text.rewrite import plan_updates
from label_norm.utils.logging import GREEN, RED, YELLOW, BOLD, DIM, RESET, get_logger
from label_norm.utils.rate_limit import RateLimiter

log = get_logger()


def collect_labels(issues: list[Issue]) -> list[str]:
    """All label occurrences across ``issues``, in issue order."""
    labels: list[str] = []
    for issue in issues:
        labels.extend(issue.labels)
    return labels


async def fetch_mapping(
    client: JiraClient,
    project: str,
    max_issues: int,
) -> tuple[list[Issue], dict[str, str]]:
    """Fetch the project's issues and build the canonical mapping for them."""
    issues = await client.search_issues(project, max_issues)
    log.info(f"Found {len(issues)} issue(s) in {BOLD}{project}{RESET}")
    mapping = canonicalize(collect_labels(issues))
    return issues, mapping


async def run_normalize(
    client: JiraClient,
    project: str,
    max_issues: int | None = None,
    concurrency: int = 1,
    dry_run: bool = False,
    rate_limit_ms: int | None = None,
) -> RunSummary:
    """Normalize the labels of up to ``max_issues`` issues in ``project``.

    Returns a RunSummary with one UpdateResult per attempted update.
    """
    if max_issues is None:
        max_issues = settings.max_issues
    log.info(f"{BOLD}NORMALIZE{RESET} — {project} (max {max_issues} issues, concurrency={concurrency})")

    issues, mapping = await fetch_mapping(client, project, max_issues)
    updates = plan_updates(issues, mapping)

    summary = RunSummary(
        project=project,
        issues=len(issues),
        labels=len(mapping),
        canonical=len(set(mapping.values())),
        planned=len(updates),
        dry_run=dry_run,
    )
    log.info(
        f"  {summary.labels} distinct label(s) → {summary.canonical} canonical, "
        f"{summary.planned} issue(s) to update"
    )

    if not updates:
        log.info(f"{GREEN}▸{RESET} Nothing to do — all labels already canonical")
        return summary

    if dry_run:
        for update in updates:
            _log_plan(update)
        log.info(f"{YELLOW}–{RESET} Dry run: {len(updates)} update(s) not sent")
        return summary

    limiter = RateLimiter(settings.rate_limit_ms if rate_limit_ms is None else rate_limit_ms)
    results = await apply_updates(client, updates, limiter, concurrency)

    summary.results = results
    summary.updated = sum(1 for r in results if r.ok)
    summary.failed = len(results) - summary.updated

    color = RED if summary.failed else GREEN
    log.info(
        f"{color}▸{RESET} Normalize complete: {summary.updated} updated, "
        f"{summary.failed} failed, {summary.issues - summary.planned} unchanged"
    )
    return summary


async def apply_updates(
    client: JiraClient,
    updates: list[LabelUpdate],
    limiter: RateLimiter,
    concurrency: int = 1,
) -> list[UpdateResult]:
    """Send every update; results come back in the same order as ``updates``."""
    semaphore = asyncio.Semaphore(max(concurrency, 1))

    async def _apply(update: LabelUpdate) -> UpdateResult:
        async with semaphore:
            await limiter.wait()
            try:
                await client.update_labels(update)
            except JiraError as e:
                if e.retry_after:
                    limiter.pause(e.retry_after)
                log.error(f"  {RED}✗{RESET} {update.display_name}: {e}")
                return UpdateResult(
                    issue_id=update.issue_id, issue_key=update.issue_key, ok=False, error=str(e)
                )
            _log_plan(update, done=True)
            return UpdateResult(issue_id=update.issue_id, issue_key=update.issue_key, ok=True)

    return list(await asyncio.gather(*(_apply(u) for u in updates)))


def _log_plan(update: LabelUpdate, done: bool = False) -> None:
    marker = f"{GREEN}✓{RESET}" if done else f"{DIM}·{RESET}"
    parts = []
    if update.removed:
        parts.append("-" + ",".join(sorted(update.removed)))
    if update.added:
        parts.append("+" + ",".join(sorted(update.added)))
    log.info(f"  {marker} {update.display_name}: {' '.join(parts)}")
