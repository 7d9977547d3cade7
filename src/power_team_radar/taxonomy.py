from __future__ import annotations

HEALTH_KEYWORDS: tuple[str, ...] = (
    "health screening",
    "wellness program",
    "corporate wellness",
    "employee wellness",
    "nutrition consultation",
    "dietitian",
    "supplement",
    "USANA",
    "physiotherapy",
    "rehabilitation",
    "chiropractic",
    "ergonomics",
    "posture",
    "TCM",
    "acupuncture",
    "dental clinic",
    "orthodontic",
    "scaling and polishing",
    "medical lab",
    "blood test",
    "DNA test",
    "health talk",
    "awareness campaign",
    "new clinic",
    "new branch",
    "grand opening",
    "expansion",
    "relocation",
    "RFP",
    "tender",
    "invitation to bid",
    "panel clinic",
    "TPA panel",
    "insurance panel",
)

SIGNAL_KEYWORDS: tuple[str, ...] = (
    "opening",
    "grand opening",
    "new branch",
    "expansion",
    "relocation",
    "tender",
    "RFP",
    "invitation to bid",
    "corporate wellness program",
    "health talk",
    "CSR health",
    "panel clinic",
    "insurance panel",
    "TPA panel",
)

ROLE_MAP: dict[str, tuple[str, ...]] = {
    "nutrition": ("Wellness Coach", "Dietitian", "Supplements"),
    "corporate wellness": ("Wellness Coach", "Health Screening"),
    "health screening": ("Medical Lab", "Wellness Coach"),
    "physiotherapy": ("Physio", "Ergonomics"),
    "dental clinic": ("Dentist",),
    "clinic": ("Wellness Center", "Medical Lab"),
    "supplements": ("Supplements", "Wellness Coach"),
}

DEFAULT_ROLES: tuple[str, ...] = ("Wellness Coach", "Medical Lab")
DEFAULT_INDUSTRY = "health"

OPENING_LINES: dict[str, str] = {
    "zh": "嗨，这个健康相关机会看起来挺匹配，要不要我帮你引荐一下？",
    "en": "Hi, this health-related opportunity looks like a fit. Want me to tee up an intro?",
}


def opening_line(language: str) -> str:
    return OPENING_LINES["zh" if language == "zh" else "en"]


def roles_for(industry: str | None) -> tuple[str, ...]:
    return ROLE_MAP.get((industry or DEFAULT_INDUSTRY).lower(), DEFAULT_ROLES)
