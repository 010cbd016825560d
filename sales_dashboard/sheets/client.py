import logging
from typing import Optional

import requests
from google.api_core import exceptions as core_exceptions
from google.api_core import retry

from .grid import csv_to_grid
from .models import Grid

logger = logging.getLogger(__name__)


class SheetError(Exception):
    """Custom exception for sheet-related errors"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


DEFAULT_RETRY = retry.Retry(
    predicate=retry.if_exception_type(requests.ConnectionError, requests.Timeout),
    initial=0.5,
    maximum=5.0,
    timeout=30.0,
)


class CsvSheetClient:
    """Fetches the published CSV export of the dashboard sheet"""

    NO_CACHE_HEADERS = {"Cache-Control": "no-cache", "Pragma": "no-cache"}

    def __init__(
        self,
        csv_url: str,
        timeout: float = 20.0,
        retry_policy: Optional[retry.Retry] = None,
    ):
        self.csv_url = csv_url
        self.timeout = timeout
        self.retry_policy = retry_policy or DEFAULT_RETRY
        self.session = requests.Session()

    def _get(self) -> requests.Response:
        return self.session.get(
            self.csv_url,
            headers=self.NO_CACHE_HEADERS,
            timeout=self.timeout,
        )

    def fetch_csv(self) -> str:
        """Download the latest CSV snapshot, bypassing any cache.

        Connection errors and timeouts are retried. An HTTP error status is
        returned by the source on purpose and is raised straight away.
        """
        try:
            response = self.retry_policy(self._get)()
        except (requests.RequestException, core_exceptions.RetryError) as e:
            logger.error(f"Error fetching CSV: {e}")
            raise SheetError(f"Failed to fetch CSV ({e.__class__.__name__})")

        if not response.ok:
            logger.error(f"CSV source returned HTTP {response.status_code}")
            raise SheetError(
                f"Failed to fetch CSV ({response.status_code})",
                status_code=response.status_code,
            )

        # Published sheets omit the charset, requests would fall back to latin-1
        if "charset" not in response.headers.get("Content-Type", ""):
            response.encoding = "utf-8"
        return response.text

    def close(self) -> None:
        self.session.close()

    def get_grid(self) -> Grid:
        """Fetch the CSV and parse it into a grid"""
        grid = csv_to_grid(self.fetch_csv())
        logger.info(f"Fetched sheet snapshot with {len(grid)} rows")
        return grid
