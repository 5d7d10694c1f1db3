"""
API layer for weather data.

Provides the low-level HTTP client and the Open-Meteo archive operations.
"""

import logging
from typing import Optional

from .client import APIClient
from .archive import ArchiveAPI


class OpenMeteoAPI(APIClient, ArchiveAPI):
    """
    Unified API client for the Open-Meteo historical archive.

    Combines the HTTP session handling with archive operations.
    """

    def __init__(
        self,
        base_url: str,
        timeout: int = 30,
        max_retries: int = 3,
        verify_ssl: bool = True,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize unified API client.

        Args:
            base_url: Archive endpoint URL
            timeout: Request timeout in seconds
            max_retries: Maximum number of retry attempts
            verify_ssl: Whether to verify SSL certificates
            logger: Logger instance
        """
        super().__init__(
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries,
            verify_ssl=verify_ssl,
            logger=logger
        )


__all__ = [
    "APIClient",
    "ArchiveAPI",
    "OpenMeteoAPI",
]
