from dataclasses import dataclass
from typing import Generic, Literal, Optional, TypeVar

T = TypeVar("T")

OutcomeKind = Literal["live", "fallback", "empty"]


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """
    Result of a best-effort call that may have degraded

    kind:
        live     - produced by the external service
        fallback - substituted locally after the service failed; ``reason`` says why
        empty    - there was no input to work on, so a fixed stub was used
    """
    kind: OutcomeKind
    value: T
    reason: Optional[str] = None

    @property
    def is_live(self) -> bool:
        return self.kind == "live"


def live(value: T) -> Outcome[T]:
    return Outcome(kind="live", value=value)


def fallback(value: T, reason: str) -> Outcome[T]:
    return Outcome(kind="fallback", value=value, reason=reason)


def empty(value: T, reason: Optional[str] = None) -> Outcome[T]:
    return Outcome(kind="empty", value=value, reason=reason)
