from __future__ import annotations

import json
import logging
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

from .errors import SubscriptionStoreError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Subscription:
    id: str
    payload: dict[str, Any] = field(default_factory=dict)


class SubscriptionStore(Protocol):
    def add(self, payload: dict[str, Any]) -> Subscription: ...

    def list_all(self) -> list[Subscription]: ...


def new_subscription_id() -> str:
    return f"sub_{uuid.uuid4().hex[:12]}"


class InMemorySubscriptionStore:
    def __init__(self) -> None:
        self._items: list[Subscription] = []

    def add(self, payload: dict[str, Any]) -> Subscription:
        subscription = Subscription(id=new_subscription_id(), payload=dict(payload))
        self._items.append(subscription)
        return subscription

    def list_all(self) -> list[Subscription]:
        return list(self._items)


class JsonSubscriptionStore:
    """Subscriptions kept in a JSON file, rewritten on every add.

    An unreadable file is never overwritten: reads treat it as empty, writes
    refuse with ``SubscriptionStoreError``.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def add(self, payload: dict[str, Any]) -> Subscription:
        items = self._load()
        subscription = Subscription(id=new_subscription_id(), payload=dict(payload))
        items.append(subscription)
        self._save(items)
        return subscription

    def list_all(self) -> list[Subscription]:
        try:
            return self._load()
        except SubscriptionStoreError as exc:
            logger.warning("Ignoring unreadable subscriptions file: %s", exc)
            return []

    def _load(self) -> list[Subscription]:
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text())
        except json.JSONDecodeError as exc:
            raise SubscriptionStoreError(f"{self.path} is not valid JSON ({exc})") from exc
        records = data.get("subscriptions", []) if isinstance(data, dict) else []
        return [
            Subscription(id=record["id"], payload=record.get("payload", {}))
            for record in records
            if isinstance(record, dict) and record.get("id")
        ]

    def _save(self, items: list[Subscription]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {"subscriptions": [{"id": sub.id, "payload": sub.payload} for sub in items]}
        tmp = self.path.with_name(f"{self.path.name}.tmp")
        tmp.write_text(json.dumps(payload, indent=2, sort_keys=True))
        tmp.replace(self.path)


def build_store(path: str | None) -> SubscriptionStore:
    if path:
        return JsonSubscriptionStore(Path(path).expanduser())
    return InMemorySubscriptionStore()
