from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Callable, DefaultDict, Iterable, TypeAlias

import structlog

from bowlscore.core.events.base import Event

log = structlog.get_logger()

EventHandler: TypeAlias = Callable[[Event], None]


@dataclass(frozen=True)
class Subscription:
    """
    A handler bound to one event_type.

    game_id=None listens to every game on the bus; otherwise the handler only
    sees events whose `game_id` matches.
    """

    event_type: str
    handler: EventHandler
    game_id: str | None = None

    def accepts(self, event: Event) -> bool:
        return self.game_id is None or getattr(event, "game_id", None) == self.game_id


class EventBus:
    """
    Synchronous in-process event bus, shareable between games.

    - publish(event) dispatches to subscriptions for event.event_type whose
      game scope matches the event
    - dispatch order is subscription order
    - handler failures propagate to the publisher
    """

    def __init__(self) -> None:
        self._subs: DefaultDict[str, list[Subscription]] = defaultdict(list)

    def subscribe(
        self,
        *,
        event_type: str,
        handler: EventHandler,
        game_id: str | None = None,
    ) -> Subscription:
        if not event_type:
            raise ValueError("event_type must be non-empty")
        sub = Subscription(event_type=event_type, handler=handler, game_id=game_id)
        self._subs[event_type].append(sub)
        log.debug(
            "bus.subscribed",
            event_type=event_type,
            game_id=game_id,
            handler=getattr(handler, "__name__", "handler"),
        )
        return sub

    def unsubscribe_game(self, game_id: str) -> int:
        """
        Drop every subscription scoped to `game_id`. Returns how many were removed.
        """
        removed = 0
        for event_type, subs in self._subs.items():
            kept = [s for s in subs if s.game_id != game_id]
            removed += len(subs) - len(kept)
            self._subs[event_type] = kept
        log.debug("bus.unsubscribed_game", game_id=game_id, removed=removed)
        return removed

    def publish(self, event: Event) -> None:
        targets = [s for s in self._subs.get(event.event_type, ()) if s.accepts(event)]
        log.debug(
            "bus.publish",
            event_type=event.event_type,
            game_id=getattr(event, "game_id", None),
            sequence=event.sequence,
            handlers=len(targets),
        )
        for sub in targets:
            sub.handler(event)

    def subscribers_for(self, event_type: str, *, game_id: str | None = None) -> Iterable[EventHandler]:
        """
        Handlers that an event of `event_type` for `game_id` would reach.
        """
        return tuple(
            s.handler
            for s in self._subs.get(event_type, ())
            if s.game_id is None or game_id is None or s.game_id == game_id
        )
