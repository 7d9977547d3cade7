"""Tests for the notification stub and subscription stores."""

import json

import pytest

from power_team_radar.errors import SubscriptionStoreError
from power_team_radar.notify import NotifyRequest, notify
from power_team_radar.subscriptions import (
    InMemorySubscriptionStore,
    JsonSubscriptionStore,
    build_store,
)


def test_notify_acknowledges_every_item(config):
    result = notify(NotifyRequest(items=["opp_1", "opp_2"], recipient="+6012", template="digest"), config)

    assert result.status == "sent"
    assert result.count == 2
    assert [receipt.status for receipt in result.receipts] == ["sent", "sent"]
    assert result.receipts[0].message == "[whatsapp:digest] opportunity opp_1"


def test_notify_defaults_template(config):
    result = notify(NotifyRequest(items=["opp_1"]), config)

    assert "opportunity_digest" in result.receipts[0].message
    assert result.recipient is None


def test_in_memory_store():
    store = InMemorySubscriptionStore()

    first = store.add({"locations": ["Penang"]})
    second = store.add({})

    assert first.id != second.id
    assert [sub.id for sub in store.list_all()] == [first.id, second.id]


def test_json_store_round_trip(tmp_path):
    path = tmp_path / "subs" / "subscriptions.json"
    store = JsonSubscriptionStore(path)

    added = store.add({"industries": ["nutrition"]})

    reloaded = JsonSubscriptionStore(path).list_all()
    assert [(sub.id, sub.payload) for sub in reloaded] == [(added.id, {"industries": ["nutrition"]})]


def test_json_store_ignores_corrupt_file(tmp_path):
    path = tmp_path / "subscriptions.json"
    path.write_text("{not json")

    assert JsonSubscriptionStore(path).list_all() == []


def test_json_store_add_keeps_unreadable_file(tmp_path):
    path = tmp_path / "subscriptions.json"
    original = '{"subscriptions": [{"id": "sub_1", "payload": {}},]}'
    path.write_text(original)

    with pytest.raises(SubscriptionStoreError):
        JsonSubscriptionStore(path).add({"x": 1})

    assert path.read_text() == original


def test_json_store_add_appends_and_leaves_no_temp_file(tmp_path):
    path = tmp_path / "subscriptions.json"
    path.write_text(json.dumps({"subscriptions": [{"id": "sub_1", "payload": {}}]}))

    added = JsonSubscriptionStore(path).add({"x": 1})

    assert [sub.id for sub in JsonSubscriptionStore(path).list_all()] == ["sub_1", added.id]
    assert [p.name for p in tmp_path.iterdir()] == ["subscriptions.json"]


def test_build_store(tmp_path):
    assert isinstance(build_store(None), InMemorySubscriptionStore)
    assert isinstance(build_store(str(tmp_path / "s.json")), JsonSubscriptionStore)
