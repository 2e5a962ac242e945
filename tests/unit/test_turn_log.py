"""Tests for the JSON lines turn log."""

from __future__ import annotations

from strategos.repository import JsonlTurnLog


def test_empty_log(tmp_path):
    log = JsonlTurnLog(tmp_path / "turns.jsonl")

    assert log.events() == []
    assert log.next_sequence() == 1


def test_append_assigns_increasing_sequences(tmp_path):
    log = JsonlTurnLog(tmp_path / "turns.jsonl")

    first = log.append("combat", "Combat: a attacked b for 12 damage", {"damage": 12})
    second = log.append("heal", "Unit a healed to 100")

    assert first.sequence == 1
    assert second.sequence == 2
    assert second.payload == {}
    assert log.next_sequence() == 3


def test_events_persist_across_instances(tmp_path):
    path = tmp_path / "nested" / "turns.jsonl"
    JsonlTurnLog(path).append("player_created", "Player p1 founded", {"player_id": "p1"})

    events = JsonlTurnLog(path).events()
    assert [event.kind for event in events] == ["player_created"]
    assert events[0].payload == {"player_id": "p1"}
    assert events[0].recorded_at.tzinfo is not None
