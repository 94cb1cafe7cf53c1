# ==============================================================================
# Session Index - Pure Domain Logic
# ==============================================================================
"""
Per-session aggregation of tracking events.

The index is updated as events are ingested and keeps, for every session id:
- The events attributed to the session
- Page view and conversion counters
- First and last seen server timestamps

Events without a ``sessionId`` are ignored. Ids are compared as strings,
so ``1`` and ``"1"`` share one aggregate. Aggregates are never pruned, so
counters keep counting events that the bounded event store has since evicted.
"""

from collections.abc import Iterator

from storefront.core.models import EventType, SessionAggregate


class SessionIndex:
    """
    Mapping from session id to its running aggregate.

    Works on plain event dicts; no persistence or framework dependencies.
    """

    def __init__(self):
        self._sessions: dict = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id) -> bool:
        return str(session_id) in self._sessions

    def __iter__(self) -> Iterator[SessionAggregate]:
        return iter(self._sessions.values())

    def on_event(self, event: dict) -> SessionAggregate | None:
        """
        Attribute an ingested event to its session.

        The event must already carry its ``serverTimestamp``.

        Args:
            event: Event dict as stored by the event store

        Returns:
            The updated aggregate, or None if the event has no session id
        """
        session_id = event.get("sessionId")
        if not session_id or isinstance(session_id, bool):
            return None
        if not isinstance(session_id, (str, int)):
            return None

        key = str(session_id)
        aggregate = self._sessions.get(key)
        server_timestamp = event.get("serverTimestamp")
        if aggregate is None:
            aggregate = SessionAggregate(session_id=session_id, first_seen=server_timestamp)
            self._sessions[key] = aggregate

        aggregate.events.append(event)
        aggregate.last_seen = server_timestamp

        event_type = event.get("type")
        if event_type == EventType.PAGE_VIEW.value:
            aggregate.page_views += 1
        elif event_type == EventType.CONVERSION.value:
            aggregate.conversions += 1

        return aggregate

    def get(self, session_id) -> SessionAggregate | None:
        """Aggregate for ``session_id``, or None if never seen."""
        return self._sessions.get(str(session_id))

    def sessions_with_conversions(self, min_conversions: int = 1) -> list[SessionAggregate]:
        """
        Sessions with at least ``min_conversions`` conversion events.

        Ordered by conversions descending, then by first appearance.
        """
        matching = [s for s in self._sessions.values() if s.conversions >= min_conversions]
        return sorted(matching, key=lambda s: s.conversions, reverse=True)

    def clear(self) -> None:
        self._sessions.clear()
