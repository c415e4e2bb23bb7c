"""In-process change feed for expense and budget tables.

Every successful mutation publishes a ``ChangeEvent``. Subscribers only use
it as an "invalidated" signal and re-read their data; events carry no diff.
"""

import asyncio
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional, Set

logger = logging.getLogger(__name__)

INSERT = "INSERT"
UPDATE = "UPDATE"
DELETE = "DELETE"


@dataclass(frozen=True)
class ChangeEvent:
    table: str
    event: str
    record_id: str
    user_id: str


class Subscription:
    """Queue of change events visible to one user."""

    def __init__(self, user_id: str, table: Optional[str] = None) -> None:
        self.user_id = user_id
        self.table = table
        self.queue: "asyncio.Queue[ChangeEvent]" = asyncio.Queue()

    def accepts(self, event: ChangeEvent) -> bool:
        if event.user_id != self.user_id:
            return False
        return self.table is None or event.table == self.table

    async def get(self) -> ChangeEvent:
        return await self.queue.get()


class ChangeFeed:
    """Fan-out of change events to the subscriptions of the owning user."""

    def __init__(self) -> None:
        self._subscriptions: Set[Subscription] = set()

    @contextmanager
    def subscribe(self, user_id: str, table: Optional[str] = None) -> Iterator[Subscription]:
        subscription = Subscription(user_id, table)
        self._subscriptions.add(subscription)
        try:
            yield subscription
        finally:
            self._subscriptions.discard(subscription)

    def publish(self, table: str, event: str, record_id: str, user_id: str) -> ChangeEvent:
        change = ChangeEvent(table=table, event=event, record_id=record_id, user_id=user_id)
        delivered = 0
        for subscription in list(self._subscriptions):
            if subscription.accepts(change):
                subscription.queue.put_nowait(change)
                delivered += 1
        logger.debug("Published %s on %s to %d subscriber(s)", event, table, delivered)
        return change

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)


change_feed = ChangeFeed()
