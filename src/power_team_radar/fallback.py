from __future__ import annotations

from datetime import datetime, timedelta, timezone

from .feeds import to_iso
from .models import Candidate

FALLBACK_LIMIT = 3

_EXAMPLES: tuple[dict, ...] = (
    {
        "title": "Example: Corporate wellness program tender for a Klang Valley manufacturer",
        "summary": (
            "Illustrative listing. A manufacturer invites health screening and "
            "corporate wellness providers to an RFP for 800 employees."
        ),
        "url": "https://example.com/opportunities/corporate-wellness-tender",
        "location": "Kuala Lumpur",
        "age_days": 1,
    },
    {
        "title": "Example: New branch grand opening for a physiotherapy clinic",
        "summary": (
            "Illustrative listing. A physiotherapy and rehabilitation centre is "
            "opening a new branch and looking for ergonomics partners."
        ),
        "url": "https://example.com/opportunities/physio-new-branch",
        "location": "Selangor",
        "age_days": 2,
    },
    {
        "title": "Example: Health talk series for a panel clinic network",
        "summary": (
            "Illustrative listing. A TPA panel network is planning a health talk "
            "and awareness campaign across member clinics."
        ),
        "url": "https://example.com/opportunities/panel-clinic-health-talk",
        "location": "Penang",
        "age_days": 3,
    },
)


def fallback_candidates(limit: int, now: datetime | None = None) -> list[Candidate]:
    now = now or datetime.now(timezone.utc)
    count = max(0, min(limit, FALLBACK_LIMIT))
    return [
        Candidate(
            source="fallback",
            title=example["title"],
            summary=example["summary"],
            url=example["url"],
            published_at=to_iso(now - timedelta(days=example["age_days"])),
            location=example["location"],
        )
        for example in _EXAMPLES[:count]
    ]
