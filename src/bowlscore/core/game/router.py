from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Protocol, Sequence

from bowlscore.core.events.bus import EventBus, EventHandler, Subscription


class GameComponent(Protocol):
    """
    Anything that listens to game events: renderers, reporters, test collectors.
    """

    def subscriptions(self) -> Sequence[tuple[str, EventHandler]]:
        ...


@dataclass(frozen=True, slots=True)
class WiredSubscription:
    component: str
    subscription: Subscription


@dataclass(frozen=True, slots=True)
class RouterWiring:
    """
    What got wired, in order. Handy when debugging a missing handler.
    """

    subscriptions: tuple[WiredSubscription, ...]

    def event_types(self) -> tuple[str, ...]:
        return tuple(w.subscription.event_type for w in self.subscriptions)


class ComponentRouter:
    """
    Registers components onto an EventBus deterministically.

    - components are wired in the order provided
    - each component's subscriptions() order is preserved
    - the same (event_type, handler) pair may only be wired once
    """

    def __init__(self, *, bus: EventBus) -> None:
        self._bus = bus
        self._seen: set[tuple[str, EventHandler]] = set()

    def register(self, components: Iterable[GameComponent], *, game_id: str | None = None) -> RouterWiring:
        """
        Wire `components`; with `game_id` they only hear that game on a shared bus.
        """
        wired: list[WiredSubscription] = []

        for component in components:
            cname = type(component).__name__

            subs = component.subscriptions()
            if not isinstance(subs, Sequence):
                raise TypeError(f"{cname}.subscriptions() must return a Sequence")

            for event_type, handler in subs:
                if not event_type:
                    raise ValueError(f"{cname} produced empty event_type")

                key = (event_type, handler)
                if key in self._seen:
                    raise RuntimeError(f"duplicate subscription detected: component={cname} event_type={event_type}")
                self._seen.add(key)

                s = self._bus.subscribe(event_type=event_type, handler=handler, game_id=game_id)
                wired.append(WiredSubscription(component=cname, subscription=s))

        return RouterWiring(subscriptions=tuple(wired))
