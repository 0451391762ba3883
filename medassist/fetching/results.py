"""
Result values returned by the synchronized fetcher.

The fetcher never raises for remote-tier failures; callers branch on
`result.ok` instead.
"""
import enum
from dataclasses import dataclass
from typing import Generic, List, TypeVar, Union

from medassist.schemas.records import BookingConfirmation

T = TypeVar("T")


class Origin(str, enum.Enum):
    """Tier that satisfied a request."""
    CACHE = "cache"
    PRIMARY = "primary"
    SECONDARY = "secondary"


class FailureReason(str, enum.Enum):
    NO_DATA_AVAILABLE = "no_data_available"
    ALL_SOURCES_UNAVAILABLE = "all_sources_unavailable"
    BOTH_SOURCES_FAILED = "both_sources_failed"
    INVALID_REQUEST = "invalid_request"


@dataclass(frozen=True)
class Success(Generic[T]):
    items: List[T]
    origin: Origin
    ok = True

    def __post_init__(self):
        if not self.items:
            raise ValueError("Success requires at least one record")


@dataclass(frozen=True)
class Accepted:
    """A booking confirmed by one of the remote sources."""
    confirmation: BookingConfirmation
    origin: Origin
    ok = True


@dataclass(frozen=True)
class Failure:
    reason: FailureReason
    detail: str = ""
    ok = False


FetchResult = Union[Success, Failure]
SubmitResult = Union[Accepted, Failure]
