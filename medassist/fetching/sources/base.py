"""
Base source contract for remote record fetching.

All sources must implement this contract:
- get_articles() / get_providers() return lists of validated records
- submit_booking() returns the source's confirmation
- Any failure raises a SourceError subclass:
    NetworkError        transport failure (DNS, refused, timeout)
    ServerError         non-2xx HTTP status
    MalformedResponse   body that cannot be decoded into records

Sources own their HTTP session and enforce their own per-request timeouts.
They never retry and never fall back; tier ordering belongs to the fetcher.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Type, TypeVar
from urllib.parse import urljoin

import requests
from pydantic import BaseModel, ValidationError

from medassist.schemas.records import Article, BookingConfirmation, BookingRequest, Provider

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class SourceError(Exception):
    """Exception raised by a source when a call fails."""
    pass


class NetworkError(SourceError):
    pass


class ServerError(SourceError):
    def __init__(self, status: int, message: str = ""):
        super().__init__(f"HTTP {status}{': ' + message if message else ''}")
        self.status = status


class MalformedResponse(SourceError):
    pass


class SourceConfig:
    """Network configuration shared by all sources."""

    def __init__(self, settings=None):
        if settings is None:
            from medassist.config.system_settings import system_settings
            settings = system_settings

        self.connect_timeout = settings.CONNECT_TIMEOUT_SECONDS
        self.read_timeout = settings.READ_TIMEOUT_SECONDS

    @property
    def timeout(self):
        return (self.connect_timeout, self.read_timeout)


class RemoteSource(ABC):
    """
    Abstract base class for remote record sources.

    Primary and secondary sources share this interface so either can be
    placed in either tier.
    """

    # Set by the registry when the class is registered
    kind: Optional[str] = None

    def __init__(
        self,
        base_url: str,
        config: Optional[SourceConfig] = None,
        session: Optional[requests.Session] = None,
        credentials: Optional[Dict[str, Any]] = None,
    ):
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.config = config or SourceConfig()
        self.session = session or requests.Session()
        self.credentials = credentials or {}
        self.name = self.__class__.__name__.replace("Source", "").lower()

    @abstractmethod
    def get_articles(self) -> List[Article]:
        pass

    @abstractmethod
    def get_providers(self) -> List[Provider]:
        pass

    @abstractmethod
    def submit_booking(
        self, request: BookingRequest, user_identity: Optional[str] = None
    ) -> BookingConfirmation:
        """
        Submit a booking.

        Args:
            request: Validated booking request
            user_identity: Authenticated user id; sources that store bookings
                per user attach it, others ignore it
        """
        pass

    def close(self) -> None:
        self.session.close()

    def _request(self, method: str, path: str, **kwargs) -> Any:
        """
        Perform one HTTP call and return the decoded JSON body.

        Raises:
            NetworkError: transport failure
            ServerError: non-2xx response
            MalformedResponse: empty or non-JSON body
        """
        url = urljoin(self.base_url, path)
        kwargs.setdefault("timeout", self.config.timeout)
        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            raise NetworkError(f"{self.name}: {method} {url} failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise ServerError(response.status_code, f"{self.name}: {method} {url}")

        if not response.content:
            raise MalformedResponse(f"{self.name}: empty body from {method} {url}")
        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponse(f"{self.name}: invalid JSON from {method} {url}: {e}") from e

    def _parse_list(self, model: Type[M], payload: Any) -> List[M]:
        if not isinstance(payload, list):
            raise MalformedResponse(
                f"{self.name}: expected a list of {model.__name__}, got {type(payload).__name__}"
            )
        try:
            return [model.model_validate(item) for item in payload]
        except ValidationError as e:
            raise MalformedResponse(f"{self.name}: invalid {model.__name__} record: {e}") from e

    def _parse_one(self, model: Type[M], payload: Dict[str, Any]) -> M:
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            raise MalformedResponse(f"{self.name}: invalid {model.__name__}: {e}") from e
