from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, ClassVar, TypeVar
from uuid import UUID, uuid4

E = TypeVar("E", bound="Event")


@dataclass(frozen=True, slots=True)
class Event:
    """
    Base class for everything published on the EventBus.

    - event_type: routing key, declared once per subclass
    - sequence: monotonic per game (GameState.next_sequence), used for ordering
    """

    event_type: ClassVar[str] = "event"

    event_id: UUID
    timestamp_utc: datetime
    sequence: int

    @classmethod
    def create(cls: type[E], *, sequence: int, **fields: Any) -> E:
        return cls(
            event_id=uuid4(),
            timestamp_utc=datetime.now(timezone.utc),
            sequence=sequence,
            **fields,
        )
