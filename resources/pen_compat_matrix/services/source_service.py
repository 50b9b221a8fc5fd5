"""
Dataset source service for Pen Compatibility Matrix.

This module fetches dataset documents from HTTP(S)/file URLs or local paths,
parses and merges them, and keeps the last successfully loaded dataset. It is
the only part of the pipeline that performs I/O.
"""

import http.client
import logging
import threading
from pathlib import Path
from typing import Callable, List, Optional, Sequence
from urllib.error import HTTPError, URLError
from urllib.parse import urlparse
from urllib.request import Request, urlopen

from ..errors import FetchError, PenCompatError
from ..models.dataset import Dataset
from .dataset_parser import load_dataset
from .merge_service import merge_datasets

URL_SCHEMES = ("http", "https", "file")


def is_url(source: str) -> bool:
    return urlparse(source).scheme.lower() in URL_SCHEMES


class SourceService:
    """
    Loads dataset documents and owns the current dataset.

    The current dataset is replaced only after every source of a load has
    been fetched and parsed, so a failed load leaves the previous one intact.
    """

    def __init__(self, timeout: int = 30, user_agent: str = "pen-compat-matrix/1.0",
                 report_conflicts: bool = False):
        """
        Initialize source service.

        Args:
            timeout: Network timeout in seconds
            user_agent: User-Agent header sent with HTTP requests
            report_conflicts: Report definitions redefined by a later source
        """
        self.timeout = timeout
        self.user_agent = user_agent
        self.report_conflicts = report_conflicts

        self.dataset: Optional[Dataset] = None
        self.last_error: Optional[PenCompatError] = None
        self.last_sources: List[str] = []

        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def fetch(self, source: str) -> bytes:
        """
        Fetch the raw bytes of a dataset document.

        Args:
            source: http(s)/file URL or filesystem path

        Returns:
            Document bytes; the XML declaration decides the encoding

        Raises:
            FetchError: If the document cannot be retrieved
        """
        if not is_url(source):
            try:
                return Path(source).expanduser().read_bytes()
            except OSError as e:
                raise FetchError(f"Cannot read {source}: {e}", source=source) from e

        request = Request(source)
        request.add_header('User-Agent', self.user_agent)
        self._logger.debug(f"Fetching {source}")
        try:
            with urlopen(request, timeout=self.timeout) as response:
                return response.read()
        except HTTPError as e:
            raise FetchError(f"Network response was not ok for {source}: {e.code} {e.reason}",
                             source=source, status=e.code) from e
        except (URLError, OSError, http.client.HTTPException) as e:
            raise FetchError(f"Failed to fetch {source}: {e}", source=source) from e

    def load(self, source: str) -> Dataset:
        """
        Fetch and parse a single document.

        Raises:
            FetchError: If the document cannot be retrieved
            ParseError: If the document is not well-formed XML
        """
        dataset = load_dataset(self.fetch(source), source=source)
        self._logger.info(f"Loaded {dataset} from {source}")
        return dataset

    def load_all(self, sources: Sequence[str]) -> Dataset:
        """
        Load and merge several documents, then make the result current.

        Raises:
            FetchError: If any document cannot be retrieved
            ParseError: If any document is not well-formed XML
            ValueError: If no source is given
        """
        if not sources:
            raise ValueError("At least one dataset source is required")

        try:
            datasets = [self.load(source) for source in sources]
        except PenCompatError as e:
            self.last_error = e
            self._logger.error(f"Dataset load failed: {e}")
            raise

        merged = datasets[0] if len(datasets) == 1 else merge_datasets(
            datasets, report_conflicts=self.report_conflicts
        )
        with self._lock:
            self.dataset = merged
            self.last_error = None
            self.last_sources = list(sources)
        return merged

    def reload(self) -> Dataset:
        """Load the sources of the last successful load again."""
        if not self.last_sources:
            raise ValueError("Nothing has been loaded yet")
        return self.load_all(self.last_sources)

    def load_async(self, sources: Sequence[str],
                   on_success: Callable[[Dataset], None],
                   on_error: Callable[[Exception], None]) -> threading.Thread:
        """
        Run load_all on a worker thread.

        Exactly one of the callbacks is invoked, from the worker thread.
        Unexpected failures are logged and handed to on_error as well.

        Returns:
            The started thread
        """
        def worker():
            try:
                dataset = self.load_all(sources)
            except (PenCompatError, ValueError) as e:
                on_error(e)
                return
            except Exception as e:
                self._logger.exception(f"Unexpected error while loading datasets: {e}")
                on_error(e)
                return
            on_success(dataset)

        thread = threading.Thread(target=worker, name="dataset-loader", daemon=True)
        thread.start()
        return thread


# Global source service instance
_global_source_service: Optional[SourceService] = None


def get_source_service() -> SourceService:
    """Get the global source service, creating one with defaults if needed."""
    global _global_source_service
    if _global_source_service is None:
        _global_source_service = SourceService()
    return _global_source_service


def init_source_service(**kwargs) -> SourceService:
    """
    Initialize the global source service.

    Args:
        **kwargs: Arguments for SourceService constructor

    Returns:
        Initialized SourceService instance
    """
    global _global_source_service
    _global_source_service = SourceService(**kwargs)
    return _global_source_service
