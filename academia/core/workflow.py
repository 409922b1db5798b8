"""
Return type shared by the workflow services.

A service method returns its primary result together with the notification
intents it produced. The dispatcher turns those intents into rows inside the
same transaction as the state change, so callers never see one without the
other.
"""

from dataclasses import dataclass
from dataclasses import field
from typing import Generic
from typing import TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of a workflow operation and the side effects it requested."""

    value: T
    notifications: tuple = field(default_factory=tuple)
