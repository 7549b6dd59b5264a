"""
Client for the dataset backend: uploads, dataset detail + summary, reports
and upload history.

The backend does the CSV parsing, summary statistics and PDF rendering;
this module only moves payloads and turns failures into the user-facing
error types.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

import requests

from config.settings import BackendConfig
from core.exceptions import LoadFailure, ReportFailure, UploadFailure
from core.records import LoadedDataset, RecordId


logger = logging.getLogger(__name__)


@dataclass
class UploadResult:
    dataset_id: RecordId
    record_count: int


def _error_message(response: requests.Response, fallback: str) -> str:
    try:
        data = response.json()
    except ValueError:
        return fallback
    if isinstance(data, dict):
        return str(data.get("error") or data.get("detail") or fallback)
    return fallback


class BackendClient:
    def __init__(
        self,
        config: Optional[BackendConfig] = None,
        session: Optional[requests.Session] = None,
        token_provider: Optional[Callable[[], Optional[str]]] = None,
    ):
        self.config = config or BackendConfig()
        self.session = session or requests.Session()
        self.token_provider = token_provider

    def _url(self, path: str) -> str:
        return f"{self.config.base_url.rstrip('/')}/{path.lstrip('/')}"

    def _headers(self) -> Dict[str, str]:
        token = self.token_provider() if self.token_provider else None
        return {"Authorization": f"Token {token}"} if token else {}

    def _get(self, path: str) -> requests.Response:
        response = self.session.get(
            self._url(path), headers=self._headers(), timeout=self.config.timeout
        )
        response.raise_for_status()
        return response

    def upload_file(self, filename: Optional[str], content: Optional[bytes]) -> UploadResult:
        """
        Send a CSV file to the backend.

        Raises:
            UploadFailure: no file, wrong extension, empty content, or the
                backend rejected it (its ``error`` message is kept).
        """
        if not filename:
            raise UploadFailure("Please select a file")
        if not filename.lower().endswith(".csv"):
            raise UploadFailure("Only CSV files are supported")
        if not content:
            raise UploadFailure("The selected file is empty")

        try:
            response = self.session.post(
                self._url("/upload/"),
                files={"file": (filename, content, "text/csv")},
                headers=self._headers(),
                timeout=self.config.timeout,
            )
        except requests.RequestException as exc:
            logger.error("Upload of %s failed: %s", filename, exc)
            raise UploadFailure("Upload failed. Please try again.") from exc

        if not response.ok:
            message = _error_message(response, "Upload failed. Please try again.")
            logger.warning("Backend rejected %s: %s", filename, message)
            raise UploadFailure(message)

        data = response.json()
        return UploadResult(dataset_id=data["dataset_id"], record_count=int(data.get("record_count", 0)))

    def load_dataset(self, dataset_id: RecordId) -> LoadedDataset:
        """
        Fetch detail and summary concurrently; both must succeed.

        Raises:
            LoadFailure: either request failed or returned unusable data.
        """
        with ThreadPoolExecutor(max_workers=2) as pool:
            detail_future = pool.submit(self._get, f"/datasets/{dataset_id}/")
            summary_future = pool.submit(self._get, f"/datasets/{dataset_id}/summary/")
            try:
                detail = detail_future.result().json()
                summary = summary_future.result().json()
            except (requests.RequestException, ValueError) as exc:
                logger.error("Error loading dataset %s: %s", dataset_id, exc)
                raise LoadFailure(dataset_id) from exc

        try:
            return LoadedDataset.from_payloads(detail, summary)
        except (TypeError, ValueError) as exc:
            logger.error("Dataset %s has malformed records: %s", dataset_id, exc)
            raise LoadFailure(dataset_id) from exc

    def download_report(self, dataset_id: RecordId) -> bytes:
        try:
            return self._get(f"/datasets/{dataset_id}/report/").content
        except requests.RequestException as exc:
            logger.error("Error downloading report for %s: %s", dataset_id, exc)
            raise ReportFailure("Failed to download report") from exc

    def list_datasets(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Recent uploads, newest first as the backend returns them."""
        try:
            datasets = self._get("/datasets/").json()
        except (requests.RequestException, ValueError) as exc:
            logger.error("Error loading datasets: %s", exc)
            raise LoadFailure(None, "Failed to load upload history") from exc
        return datasets[:limit] if limit is not None else datasets
