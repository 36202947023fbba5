from __future__ import annotations

import json
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from quotebar.core.enums import FontPreset
from quotebar.core.errors import QuoteEditError, StateStoreError
from quotebar.interfaces.view import QuoteView
from quotebar.runtime.controller import QuoteController
from quotebar.runtime.store import MemoryBlobStore, QuoteStateStore
from quotebar.state.models import DisplayStyle, RotationState
from quotebar.telemetry.storage import TelemetryStorage


def _seed(store: QuoteStateStore, t0: datetime, **overrides: object) -> None:
    payload = {"quotes": ("A", "B", "C", "D"), "rotation_hours": 1, "current_index": 0, "last_rotation_at": t0}
    payload.update(overrides)
    store.save(RotationState(**payload))  # type: ignore[arg-type]


def test_launch_should_randomize_and_persist(state_store, clock, t0) -> None:
    _seed(state_store, t0 - timedelta(days=1))
    controller = QuoteController(state_store, now_provider=clock, random_index=lambda upper: 6)
    state = controller.launch()
    assert state.current_index == 2
    assert state.last_rotation_at == t0
    assert state_store.load() == state


def test_launch_should_seed_quotes_only_when_empty(state_store, controller) -> None:
    state = controller.launch(seed_quotes=["First", "  ", "Second"])
    assert state.quotes == ("First", "Second")

    reloaded = QuoteController(state_store).launch(seed_quotes=["Ignored"])
    assert reloaded.quotes == ("First", "Second")


def test_tick_should_rotate_persist_and_render(state_store, controller, clock, t0) -> None:
    _seed(state_store, t0)
    controller.launch()
    views: list[QuoteView] = []
    controller.subscribe(views.append)

    assert controller.tick() is False
    assert views == []

    clock.advance(hours=3, minutes=2)
    assert controller.tick() is True
    assert controller.state.current_index == 3
    assert controller.state.last_rotation_at == t0 + timedelta(hours=3)
    assert state_store.load() == controller.state
    assert views[-1].current_quote == "D"


def test_tick_should_accept_explicit_now(state_store, controller, t0) -> None:
    _seed(state_store, t0)
    controller.launch()
    assert controller.tick(t0 + timedelta(hours=1)) is True
    assert controller.state.current_index == 1


def test_force_next_should_advance_and_reanchor(state_store, controller, clock, t0) -> None:
    _seed(state_store, t0)
    controller.launch()
    clock.advance(seconds=555)
    assert controller.force_next() is True
    assert controller.state.current_index == 1
    assert controller.state.last_rotation_at == t0 + timedelta(seconds=555)


def test_force_next_on_empty_list_should_do_nothing(controller) -> None:
    controller.launch()
    assert controller.force_next() is False
    assert controller.view().next_enabled is False


def test_edits_should_go_through_normalization(controller, state_store, clock) -> None:
    controller.launch()
    controller.add_quote("One")
    controller.add_quote("Two")
    clock.advance(minutes=10)
    controller.edit_quote(1, "Two!")
    controller.set_rotation_interval(0, 45)
    controller.set_display_style(DisplayStyle(font=FontPreset.SERIF))
    state = controller.remove_quote(0)

    assert state.quotes == ("Two!",)
    assert state.current_index == 0
    assert (state.rotation_hours, state.rotation_minutes) == (0, 45)
    assert state.display_style.font is FontPreset.SERIF
    assert state_store.load() == state


def test_rejected_edit_should_leave_state_untouched(controller, state_store) -> None:
    controller.launch(seed_quotes=["Only"])
    before = controller.state
    with pytest.raises(QuoteEditError):
        controller.remove_quote(5)
    with pytest.raises(QuoteEditError):
        controller.set_rotation_interval(0, 0)
    assert controller.state == before


class FailingStore(QuoteStateStore):
    def __init__(self) -> None:
        super().__init__(MemoryBlobStore())

    def save(self, state: RotationState) -> RotationState:
        raise StateStoreError("read-only filesystem")


def test_controller_should_survive_persistence_failure(clock) -> None:
    controller = QuoteController(FailingStore(), now_provider=clock, random_index=lambda upper: 0)
    controller.launch()
    controller.add_quote("Still here")
    assert controller.state.quotes == ("Still here",)


def test_failing_listener_should_not_break_rotation(state_store, controller, clock, t0) -> None:
    _seed(state_store, t0)
    controller.launch()

    def explode(view: QuoteView) -> None:
        raise RuntimeError("render failed")

    controller.subscribe(explode)
    clock.advance(hours=1)
    assert controller.tick() is True


def test_controller_should_record_telemetry_events(tmp_path: Path, state_store, clock, t0) -> None:
    _seed(state_store, t0)
    telemetry = TelemetryStorage(events_dir=tmp_path)
    controller = QuoteController(state_store, now_provider=clock, random_index=lambda upper: 0, telemetry=telemetry)
    controller.launch()
    clock.advance(hours=2)
    controller.tick()
    controller.force_next()
    controller.add_quote("E")

    lines = (tmp_path / "quotes_20240101.jsonl").read_text(encoding="utf-8").splitlines()
    events = [json.loads(line) for line in lines]
    assert [event["event_type"] for event in events] == [
        "quote_rotated",
        "quote_rotated",
        "quote_rotated",
        "quotes_edited",
    ]
    assert [event["payload"].get("reason") for event in events[:3]] == ["launch", "tick", "manual"]
    assert events[1]["payload"]["steps"] == 2
    assert events[3]["payload"]["action"] == "add"
