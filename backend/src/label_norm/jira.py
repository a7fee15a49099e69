"""Jira REST client: read issue labels for a project, write label updates.

Only the two endpoints this tool needs:
    GET /rest/api/2/search        — issues of a project with their labels
    PUT /rest/api/2/issue/{id}    — replace an issue's labels
"""

from __future__ import annotations

import httpx

from label_norm.config import settings
from label_norm.credentials import Credentials
from label_norm.errors import JiraError
from label_norm.models import Issue, LabelUpdate
from label_norm.utils.logging import DIM, RESET, get_logger

log = get_logger()

_PAGE_SIZE = 100  # Jira's default server-side cap for maxResults


class JiraClient:
    def __init__(
        self,
        base_url: str,
        credentials: Credentials,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not base_url:
            raise JiraError("Jira URL is not set")
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            auth=httpx.BasicAuth(credentials.username, credentials.password),
            headers={"Accept": "application/json", "User-Agent": settings.user_agent},
            timeout=timeout if timeout is not None else settings.request_timeout,
            transport=transport,
        )

    async def __aenter__(self) -> JiraClient:
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def search_issues(self, project: str, max_issues: int) -> list[Issue]:
        """Fetch up to ``max_issues`` issues of ``project`` with their labels."""
        issues: list[Issue] = []
        start_at = 0
        while len(issues) < max_issues:
            page_size = min(_PAGE_SIZE, max_issues - len(issues))
            data = await self._request(
                "GET",
                "/rest/api/2/search",
                params={
                    "jql": f'project = "{project}"',
                    "startAt": start_at,
                    "maxResults": page_size,
                    "fields": "id,labels",
                },
            )
            page = data.get("issues") or []
            for raw in page:
                fields = raw.get("fields") or {}
                issues.append(
                    Issue(id=str(raw["id"]), key=raw.get("key"), labels=fields.get("labels") or [])
                )
            start_at += len(page)
            total = data.get("total", 0)
            if not page or start_at >= total:
                break
            log.debug(f"  {DIM}fetched {start_at}/{total} issues{RESET}")
        return issues[:max_issues]

    async def update_labels(self, update: LabelUpdate) -> None:
        """Replace the labels of one issue with ``update.labels``."""
        payload = {"update": {"labels": [{"set": sorted(update.labels)}]}}
        await self._request("PUT", f"/rest/api/2/issue/{update.issue_id}", json=payload)

    async def _request(self, method: str, url: str, **kwargs) -> dict:
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise JiraError(f"{method} {url} failed: {e}") from e

        if response.is_redirect:
            location = response.headers.get("Location", "?")
            raise JiraError(
                f"{method} {url} redirected ({response.status_code}) to {location}; check the Jira URL",
                status_code=response.status_code,
            )
        if not response.is_success:
            detail = _error_detail(response)
            raise JiraError(
                f"{method} {url} returned {response.status_code}: {detail}",
                status_code=response.status_code,
                retry_after=_retry_after(response),
            )
        if not response.content:
            return {}
        try:
            body = response.json()
        except ValueError as e:
            raise JiraError(f"{method} {url} returned a non-JSON body: {response.text[:200]!r}") from e
        if not isinstance(body, dict):
            raise JiraError(f"{method} {url} returned unexpected JSON ({type(body).__name__})")
        return body


def _error_detail(response: httpx.Response) -> str:
    """Pull Jira's errorMessages/errors out of an error body, if any."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or response.reason_phrase
    if not isinstance(body, dict):
        return response.text[:200] or response.reason_phrase
    messages = list(body.get("errorMessages") or [])
    messages.extend(f"{k}: {v}" for k, v in (body.get("errors") or {}).items())
    return "; ".join(messages) or response.reason_phrase


def _retry_after(response: httpx.Response) -> float | None:
    if response.status_code != 429:
        return None
    try:
        return float(response.headers.get("Retry-After", ""))
    except ValueError:
        return None
