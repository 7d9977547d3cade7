from __future__ import annotations

import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)


@dataclass(slots=True)
class FetchConfig:
    timeout_ms: int = 4500
    user_agent: str = BROWSER_USER_AGENT


@dataclass(slots=True)
class SearchConfig:
    home_region: str = "Malaysia"
    country: str = "MY"
    query_terms: int = 6
    time_range_days: int = 7
    limit: int = 5
    fallback_enabled: bool = True


@dataclass(slots=True)
class GoogleNewsConfig:
    enabled: bool = True
    base_url: str = "https://news.google.com/rss/search"


@dataclass(slots=True)
class BingNewsConfig:
    enabled: bool = True
    base_url: str = "https://www.bing.com/news/search"


@dataclass(slots=True)
class AllEventsConfig:
    enabled: bool = True
    url_template: str = "https://allevents.in/{city}/{topic}?format=rss"
    topic: str = "health"


@dataclass(slots=True)
class CommunityEventsConfig:
    enabled: bool = True
    url_template: str = "https://www.meetup.com/find/rss/?location={city}&keywords={topic}"
    default_topic: str = "health"


@dataclass(slots=True)
class RegionalConfig:
    enabled: bool = True
    the_star_url: str = "https://www.thestar.com.my/rss/Lifestyle/Health"
    malay_mail_url: str = "https://www.malaymail.com/feed/rss/malaysia"


@dataclass(slots=True)
class EventbriteConfig:
    enabled: bool = True
    token: str | None = None
    base_url: str = "https://www.eventbriteapi.com/v3/events/search/"


@dataclass(slots=True)
class FacebookConfig:
    enabled: bool = True
    page_token: str | None = None
    page_ids: list[str] = field(default_factory=list)
    graph_url: str = "https://graph.facebook.com/v19.0"
    limit: int = 25


@dataclass(slots=True)
class LinkedinConfig:
    enabled: bool = True
    token: str | None = None
    organization_ids: list[str] = field(default_factory=list)
    base_url: str = "https://api.linkedin.com/rest/posts"
    api_version: str = "202405"
    count: int = 20


@dataclass(slots=True)
class NotifyConfig:
    default_template: str = "opportunity_digest"
    channel: str = "whatsapp"


@dataclass(slots=True)
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8000


@dataclass(slots=True)
class AppConfig:
    fetch: FetchConfig = field(default_factory=FetchConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    google_news: GoogleNewsConfig = field(default_factory=GoogleNewsConfig)
    bing_news: BingNewsConfig = field(default_factory=BingNewsConfig)
    allevents: AllEventsConfig = field(default_factory=AllEventsConfig)
    community_events: CommunityEventsConfig = field(default_factory=CommunityEventsConfig)
    regional: RegionalConfig = field(default_factory=RegionalConfig)
    eventbrite: EventbriteConfig = field(default_factory=EventbriteConfig)
    facebook: FacebookConfig = field(default_factory=FacebookConfig)
    linkedin: LinkedinConfig = field(default_factory=LinkedinConfig)
    notify: NotifyConfig = field(default_factory=NotifyConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    log_level: str = "INFO"
    subscriptions_path: str | None = None


_SECTIONS: dict[str, type] = {
    "fetch": FetchConfig,
    "search": SearchConfig,
    "google_news": GoogleNewsConfig,
    "bing_news": BingNewsConfig,
    "allevents": AllEventsConfig,
    "community_events": CommunityEventsConfig,
    "regional": RegionalConfig,
    "eventbrite": EventbriteConfig,
    "facebook": FacebookConfig,
    "linkedin": LinkedinConfig,
    "notify": NotifyConfig,
    "server": ServerConfig,
}


def _merge(default: Any, override: Any) -> Any:
    if isinstance(default, dict) and isinstance(override, dict):
        merged: dict[str, Any] = {**default}
        for key, value in override.items():
            merged[key] = _merge(default.get(key), value)
        return merged
    return override if override is not None else default


def _split_ids(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def load_config(path: Path | None = None) -> AppConfig:
    data: dict[str, Any] = {}
    if path is not None and path.exists():
        data = _read_toml(path)

    merged = _merge(asdict(AppConfig()), data)
    sections = {name: cls(**merged.get(name, {})) for name, cls in _SECTIONS.items()}
    config = AppConfig(
        **sections,
        log_level=merged.get("log_level", "INFO"),
        subscriptions_path=merged.get("subscriptions_path"),
    )
    _apply_env(config)
    return config


def _apply_env(config: AppConfig) -> None:
    if env_token := os.getenv("EVENTBRITE_TOKEN"):
        config.eventbrite.token = env_token.strip()
    if env_token := os.getenv("FACEBOOK_PAGE_TOKEN"):
        config.facebook.page_token = env_token.strip()
    if env_pages := os.getenv("FACEBOOK_PAGE_IDS"):
        config.facebook.page_ids = _split_ids(env_pages)
    if env_token := os.getenv("LINKEDIN_TOKEN"):
        token = env_token.strip()
        if token.lower().startswith("bearer "):
            token = token[7:].strip()
        config.linkedin.token = token
    if env_orgs := os.getenv("LINKEDIN_ORG_IDS"):
        config.linkedin.organization_ids = _split_ids(env_orgs)
    if env_level := os.getenv("LOG_LEVEL"):
        config.log_level = env_level.upper()
    if env_port := os.getenv("PORT"):
        config.server.port = int(env_port)
    if env_subs := os.getenv("POWER_TEAM_RADAR_SUBSCRIPTIONS"):
        config.subscriptions_path = env_subs


def config_path(cli_path: str | None) -> Path:
    if cli_path:
        return Path(cli_path).expanduser()
    if env_path := os.getenv("POWER_TEAM_RADAR_CONFIG"):
        return Path(env_path).expanduser()
    return Path("config.toml")


def _read_toml(path: Path) -> dict[str, Any]:
    import tomllib

    with path.open("rb") as handle:
        return tomllib.load(handle)
