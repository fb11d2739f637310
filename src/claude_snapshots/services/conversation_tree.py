"""Resolve the active branch of a transcript's conversation tree.

Rewinding a conversation does not truncate the transcript. New messages are
appended with a ``parentUuid`` pointing back into the earlier history, so the
file holds a tree. The live branch is the chain of parent links from the most
recently appended identified event back to the root.
"""

import logging
from typing import Iterable, Sequence

from claude_snapshots.types.events import Event

logger = logging.getLogger(__name__)


def build_event_index(events: Iterable[Event]) -> dict[str, Event]:
    """Map uuid -> event. Later duplicates replace earlier ones."""
    index: dict[str, Event] = {}
    for event in events:
        if event.uuid:
            index[event.uuid] = event
    return index


def find_head(events: Sequence[Event]) -> Event | None:
    """Return the last event in log order that carries a uuid."""
    for event in reversed(events):
        if event.uuid:
            return event
    return None


def find_active_path(events: Sequence[Event], index: dict[str, Event] | None = None) -> set[str]:
    """Collect the uuids on the root-to-head chain.

    Returns an empty set when no event carries a uuid. Callers must treat
    that as "every event is active" (see is_on_active_path).
    """
    active: set[str] = set()
    head = find_head(events)
    if head is None:
        return active

    if index is None:
        index = build_event_index(events)

    current: Event | None = head
    while current is not None:
        if current.uuid in active:
            logger.warning("Cycle in parent links at %s, stopping walk", current.uuid)
            break
        active.add(current.uuid)
        if not current.parent_uuid:
            break
        current = index.get(current.parent_uuid)

    return active


def is_on_active_path(uuid: str, active: set[str]) -> bool:
    return not active or uuid in active
