"""
Connectivity probes used to decide between the offline and online paths.

A probe answers synchronously and has no side effects beyond the check itself.
"""
import logging
from abc import ABC, abstractmethod
from typing import Optional

import requests

logger = logging.getLogger(__name__)


class ConnectivityProbe(ABC):
    @abstractmethod
    def is_online(self) -> bool:
        pass

    def close(self) -> None:
        pass


class HttpConnectivityProbe(ConnectivityProbe):
    """
    Online when the probe URL answers with any HTTP response.

    Connection errors and timeouts count as offline.
    """

    def __init__(self, url: str, timeout: float = 3.0, session: Optional[requests.Session] = None):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def is_online(self) -> bool:
        try:
            response = self.session.head(self.url, timeout=self.timeout, allow_redirects=False)
        except requests.RequestException as e:
            logger.debug(f"Connectivity probe to {self.url} failed: {e}")
            return False

        logger.debug(f"Network available: {self.url} answered {response.status_code}")
        return True

    def close(self) -> None:
        self.session.close()


class StaticConnectivityProbe(ConnectivityProbe):
    """Fixed answer; used for forced offline mode and in tests."""

    def __init__(self, online: bool = True):
        self.online = online

    def is_online(self) -> bool:
        return self.online
