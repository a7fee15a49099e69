import json

import httpx
import pytest

from label_norm.config import settings
from label_norm.credentials import Credentials
from label_norm.jira import JiraClient

JIRA_URL = "https://jira.example.com"


class FakeJira:
    """In-memory Jira answering the search and issue-update endpoints."""

    def __init__(self, issues, fail_ids=(), put_responses=None):
        self.issues = [dict(i) for i in issues]
        self.fail_ids = set(fail_ids)
        # issue id -> canned httpx.Response for its PUT
        self.put_responses = dict(put_responses or {})
        self.requests: list[httpx.Request] = []
        self.updates: dict[str, list[str]] = {}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if request.method == "GET" and path == "/rest/api/2/search":
            start = int(request.url.params.get("startAt", 0))
            size = int(request.url.params["maxResults"])
            page = self.issues[start:start + size]
            return httpx.Response(
                200,
                json={
                    "startAt": start,
                    "maxResults": size,
                    "total": len(self.issues),
                    "issues": [
                        {"id": i["id"], "key": i["key"], "fields": {"labels": i["labels"]}}
                        for i in page
                    ],
                },
            )
        if request.method == "PUT" and path.startswith("/rest/api/2/issue/"):
            issue_id = path.rsplit("/", 1)[1]
            if issue_id in self.put_responses:
                return self.put_responses[issue_id]
            if issue_id in self.fail_ids:
                return httpx.Response(400, json={"errorMessages": [], "errors": {"labels": "rejected"}})
            body = json.loads(request.content)
            self.updates[issue_id] = body["update"]["labels"][0]["set"]
            return httpx.Response(204)
        return httpx.Response(404, json={"errorMessages": ["not found"]})

    def client(self) -> JiraClient:
        return JiraClient(
            JIRA_URL,
            Credentials("alice", "s3cret"),
            transport=httpx.MockTransport(self.handler),
        )


@pytest.fixture
def sample_issues():
    return [
        {"id": "10001", "key": "PROJ-1", "labels": ["My-Label", "Bug"]},
        {"id": "10002", "key": "PROJ-2", "labels": ["mylabel", "bug"]},
        {"id": "10003", "key": "PROJ-3", "labels": ["MY LABEL"]},
        {"id": "10004", "key": "PROJ-4", "labels": ["bug"]},
        {"id": "10005", "key": "PROJ-5", "labels": []},
    ]


@pytest.fixture
def fake_jira(sample_issues):
    return FakeJira(sample_issues)


@pytest.fixture
def make_fake_jira():
    return FakeJira


@pytest.fixture
def clean_settings(monkeypatch):
    """Restore the settings the CLI overrides after each test."""
    for name in ("jira_url", "jira_auth_file", "max_issues", "log_level", "rate_limit_ms"):
        monkeypatch.setattr(settings, name, getattr(settings, name))
    monkeypatch.setattr(settings, "rate_limit_ms", 0)
    return settings
