from pydantic import BaseModel, Field


class Issue(BaseModel):
    id: str
    key: str | None = None
    labels: list[str] = Field(default_factory=list)


class LabelUpdate(BaseModel):
    """Replacement label set for one issue, handed to the issue sink."""

    model_config = {"frozen": True}

    issue_id: str
    issue_key: str | None = None
    current: frozenset[str] = frozenset()
    labels: frozenset[str]

    @property
    def added(self) -> frozenset[str]:
        return self.labels - self.current

    @property
    def removed(self) -> frozenset[str]:
        return self.current - self.labels

    @property
    def display_name(self) -> str:
        return self.issue_key or self.issue_id


class UpdateResult(BaseModel):
    issue_id: str
    issue_key: str | None = None
    ok: bool
    error: str | None = None  # set when ok is False


class RunSummary(BaseModel):
    project: str
    issues: int = 0
    labels: int = 0  # distinct raw labels
    canonical: int = 0  # distinct canonical labels
    planned: int = 0
    updated: int = 0
    failed: int = 0
    dry_run: bool = False
    results: list[UpdateResult] = Field(default_factory=list)

    @property
    def failures(self) -> list[UpdateResult]:
        return [r for r in self.results if not r.ok]
