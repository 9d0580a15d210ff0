# ABOUTME: Stack event model and the per-operation displayed-event set
# ABOUTME: Keeps any event id from being shown more than once during an operation

"""Stack event types used while streaming operation progress."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class StackEvent:
    """A single entry from describe_stack_events."""

    event_id: str
    timestamp: datetime
    resource_type: str
    logical_resource_id: str
    resource_status: str | None = None
    status_reason: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "StackEvent":
        """Build an event from a boto3 StackEvents item."""
        return cls(
            event_id=data["EventId"],
            timestamp=data["Timestamp"],
            resource_type=data.get("ResourceType", ""),
            logical_resource_id=data.get("LogicalResourceId", ""),
            resource_status=data.get("ResourceStatus"),
            status_reason=data.get("ResourceStatusReason"),
        )


@dataclass
class DisplayedEventSet:
    """
    Event ids already handed out for display.

    The set only grows; it is created empty when an operation starts
    tracking and dropped with the operation.
    """

    seen: set[str] = field(default_factory=set)

    def mark_and_filter(self, events: list[StackEvent]) -> list[StackEvent]:
        """
        Return the events not seen before and record their ids.

        Input order is preserved. Repeats inside the same batch are returned
        only once.
        """
        fresh = []
        for event in events:
            if event.event_id in self.seen:
                continue
            self.seen.add(event.event_id)
            fresh.append(event)
        return fresh

    def __contains__(self, event_id: str) -> bool:
        return event_id in self.seen

    def __len__(self) -> int:
        return len(self.seen)
