from __future__ import annotations

from dataclasses import asdict, dataclass, field

SUMMARY_MAX_LENGTH = 300


@dataclass(slots=True)
class Candidate:
    source: str
    title: str
    summary: str
    url: str | None
    published_at: str | None
    location: str | None

    def __post_init__(self) -> None:
        self.summary = (self.summary or "")[:SUMMARY_MAX_LENGTH]

    @property
    def dedup_key(self) -> str:
        if self.url:
            return self.url
        return f"{self.title}{self.published_at or ''}"

    def is_identifiable(self) -> bool:
        return bool(self.url) or bool(self.title and self.published_at)


@dataclass(slots=True)
class SuggestedMember:
    name: str
    specialty: str
    chapter_role: str


@dataclass(slots=True)
class ScoredOpportunity:
    id: str
    source: str
    title: str
    summary: str
    url: str | None
    published_at: str | None
    location: str
    score: float
    matched_industries: list[str]
    signals: list[str]
    suggested_members: list[SuggestedMember]
    opening_line: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(slots=True)
class SearchRequest:
    industries: list[str] = field(default_factory=list)
    locations: list[str] = field(default_factory=list)
    min_budget_rm: float | None = None
    time_range_days: int = 7
    limit: int = 5
    language: str = "en"


@dataclass(slots=True)
class SourceQuery:
    """Parameters handed to a single adapter task."""

    keywords: str
    location: str | None
    language: str
    industries: list[str]
    since: str


@dataclass(slots=True)
class SourceReport:
    name: str
    location: str | None
    count: int
    error: str | None = None
    elapsed_ms: int = 0

    @property
    def label(self) -> str:
        return f"{self.name}@{self.location}" if self.location else self.name


@dataclass(slots=True)
class DeliveryReceipt:
    item_id: str
    recipient: str | None
    status: str
    message: str
