"""Host-side owner of the current rotation state.

``QuoteController`` holds the single live :class:`RotationState`. Ticks from
the scheduler, manual "next" requests and list edits from the interfaces all
go through it; each produces a new value via the pure functions in
:mod:`quotebar.state` and :mod:`quotebar.rotation`, which is then persisted,
recorded in telemetry and pushed to render listeners. The lock serializes
the scheduler thread and interface handlers.
"""
from __future__ import annotations

import logging
import random
import threading
from datetime import datetime
from typing import Any, Callable, List

from quotebar.core.enums import RotationReason
from quotebar.core.errors import StateStoreError, TelemetryError
from quotebar.core.time_utils import now_utc
from quotebar.core.types import NowProvider, RandomIndexSource
from quotebar.interfaces.view import QuoteView, build_view
from quotebar.rotation.rotation_engine import apply_rotation_if_needed, force_next_quote, rotation_steps
from quotebar.runtime.store import QuoteStateStore
from quotebar.state import edits
from quotebar.state.models import DisplayStyle, RotationState, launch_state, normalize
from quotebar.telemetry.events import TelemetryEvent, edit_event, rotation_event
from quotebar.telemetry.storage import TelemetryStorage

LOGGER = logging.getLogger(__name__)

RenderListener = Callable[[QuoteView], None]
EditMutation = Callable[[RotationState, datetime], RotationState]


class QuoteController:
    """Single writer of the rotation state for one host process."""

    def __init__(
        self,
        store: QuoteStateStore,
        *,
        now_provider: NowProvider = now_utc,
        random_index: RandomIndexSource = random.randrange,
        telemetry: TelemetryStorage | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._store = store
        self._now = now_provider
        self._random_index = random_index
        self._telemetry = telemetry
        self._logger = logger or LOGGER
        self._lock = threading.RLock()
        self._state = RotationState.empty()
        self._listeners: List[RenderListener] = []

    @property
    def state(self) -> RotationState:
        with self._lock:
            return self._state

    def view(self) -> QuoteView:
        return build_view(self.state)

    def subscribe(self, listener: RenderListener) -> None:
        """Register a callback invoked with a fresh view after every change."""

        self._listeners.append(listener)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def launch(self, seed_quotes: List[str] | None = None) -> RotationState:
        """Load the stored state and pick a random starting quote.

        ``seed_quotes`` are imported only when the stored list is empty.
        """

        with self._lock:
            stored = self._store.load()
            now = self._now()
            if stored.is_empty and seed_quotes:
                for text in seed_quotes:
                    if text.strip():
                        stored = edits.add_quote(stored, text, now)
                self._logger.info("Seeded quotes from config", extra={"quote_count": len(stored.quotes)})
            state = launch_state(stored, now, self._random_index)
            self._adopt(state)
            self._logger.info(
                "Launched",
                extra={"quote_count": len(state.quotes), "index": state.current_index},
            )
            if not state.is_empty:
                self._record(
                    rotation_event(
                        timestamp=now,
                        reason=RotationReason.LAUNCH,
                        index=state.current_index,
                        quote_count=len(state.quotes),
                        steps=0,
                    )
                )
            return state

    # ------------------------------------------------------------------
    # Rotation
    # ------------------------------------------------------------------
    def tick(self, now: datetime | None = None) -> bool:
        """Apply a scheduled tick; returns whether anything changed."""

        with self._lock:
            now = now or self._now()
            steps = rotation_steps(self._state, now)
            result = apply_rotation_if_needed(self._state, now)
            if not result.changed:
                return False
            self._adopt(result.state)
            if steps:
                self._logger.info(
                    "Rotated quote",
                    extra={"steps": steps, "index": result.state.current_index},
                )
                self._record(
                    rotation_event(
                        timestamp=now,
                        reason=RotationReason.TICK,
                        index=result.state.current_index,
                        quote_count=len(result.state.quotes),
                        steps=steps,
                    )
                )
            return True

    def force_next(self) -> bool:
        """Advance to the next quote immediately and restart the window."""

        with self._lock:
            now = self._now()
            result = force_next_quote(self._state, now)
            if not result.changed:
                return False
            self._adopt(result.state)
            self._logger.info("Advanced quote manually", extra={"index": result.state.current_index})
            self._record(
                rotation_event(
                    timestamp=now,
                    reason=RotationReason.MANUAL,
                    index=result.state.current_index,
                    quote_count=len(result.state.quotes),
                )
            )
            return True

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------
    def add_quote(self, text: str) -> RotationState:
        return self._edit("add", lambda state, now: edits.add_quote(state, text, now))

    def edit_quote(self, index: int, text: str) -> RotationState:
        return self._edit("edit", lambda state, now: edits.edit_quote(state, index, text, now), index=index)

    def remove_quote(self, index: int) -> RotationState:
        return self._edit("remove", lambda state, now: edits.remove_quote(state, index, now), index=index)

    def set_rotation_interval(self, hours: int, minutes: int) -> RotationState:
        return self._edit(
            "interval",
            lambda state, now: edits.set_rotation_interval(state, hours, minutes, now),
            hours=hours,
            minutes=minutes,
        )

    def set_display_style(self, style: DisplayStyle) -> RotationState:
        return self._edit("style", lambda state, _: edits.set_display_style(state, style))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _edit(self, action: str, mutation: EditMutation, **details: Any) -> RotationState:
        with self._lock:
            now = self._now()
            updated = mutation(self._state, now)
            if updated != self._state:
                self._adopt(updated)
                self._record(edit_event(timestamp=now, action=action, quote_count=len(updated.quotes), **details))
            return self._state

    def _adopt(self, state: RotationState) -> None:
        self._state = normalize(state)
        try:
            self._store.save(self._state)
        except StateStoreError as exc:
            self._logger.error("Failed to persist state", extra={"error": str(exc)})
        view = build_view(self._state)
        for listener in list(self._listeners):
            try:
                listener(view)
            except Exception:
                self._logger.exception("Render listener failed")

    def _record(self, event: TelemetryEvent) -> None:
        if self._telemetry is None:
            return
        try:
            self._telemetry.append_event(event)
        except TelemetryError as exc:  # pragma: no cover - filesystem errors are rare
            self._logger.warning("Failed to record telemetry event: %s", exc)


__all__ = ["QuoteController", "RenderListener"]
