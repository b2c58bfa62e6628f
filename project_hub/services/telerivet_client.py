"""Async client for Telerivet data-table rows (list, create, update, delete)."""

import asyncio
from typing import Any, Dict, List, Optional

import httpx
from config import (
    HTTP_MAX_RETRIES,
    HTTP_TIMEOUT_SECONDS,
    HTTP_USER_AGENT,
    TELERIVET_API_BASE,
    TELERIVET_API_KEY,
    TELERIVET_PROJECT_ID,
)
from services.errors import ConfigurationError, TelerivetError
from utils.logger import get_logger

logger = get_logger(__name__)


class TelerivetTable:
    """
    Handle on one remote table. Credentials default to config; a custom
    transport can be injected (tests use httpx.MockTransport).
    """

    def __init__(
        self,
        table_id: str,
        api_key: Optional[str] = None,
        project_id: Optional[str] = None,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        max_retries: int = HTTP_MAX_RETRIES,
        retry_backoff: float = 1.0,
    ):
        self.table_id = table_id
        self.api_key = TELERIVET_API_KEY if api_key is None else api_key
        self.project_id = TELERIVET_PROJECT_ID if project_id is None else project_id
        self.base_url = (base_url or TELERIVET_API_BASE).rstrip("/")
        self.transport = transport
        self.max_retries = max(1, max_retries)
        self.retry_backoff = retry_backoff

    @property
    def rows_url(self) -> str:
        return f"{self.base_url}/projects/{self.project_id}/tables/{self.table_id}/rows"

    def _require_config(self) -> None:
        missing = [
            name for name, value in (
                ("TELERIVET_API_KEY", self.api_key),
                ("TELERIVET_PROJECT_ID", self.project_id),
                ("table id", self.table_id),
            )
            if not value
        ]
        if missing:
            logger.error("Telerivet configuration missing: %s", ", ".join(missing))
            raise ConfigurationError(f"Missing API configuration: {', '.join(missing)}")

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            auth=(self.api_key, ""),
            timeout=HTTP_TIMEOUT_SECONDS,
            transport=self.transport,
            headers={"User-Agent": HTTP_USER_AGENT, "Accept": "application/json"},
        )

    async def list_rows(self, var_filters: Optional[Dict[str, str]] = None) -> List[Dict[str, Any]]:
        """
        Fetch all rows, optionally filtered by exact var values (vars[name]=value).
        Retries on transport errors (timeouts, dropped connections) and 5xx; 4xx fails immediately.
        """
        self._require_config()
        params = {f"vars[{k}]": v for k, v in (var_filters or {}).items()}

        last_error: Optional[Exception] = None
        for attempt in range(self.max_retries):
            try:
                async with self._client() as client:
                    response = await client.get(self.rows_url, params=params or None)
                    response.raise_for_status()
                    payload = response.json()
                    if not isinstance(payload, dict):
                        raise ValueError(f"expected a JSON object, got {type(payload).__name__}")
                    rows = payload.get("data") or []
                    if not isinstance(rows, list):
                        raise ValueError(f"expected a list of rows, got {type(rows).__name__}")
                    logger.info("Telerivet table %s returned %s rows", self.table_id, len(rows))
                    return rows
            except httpx.HTTPStatusError as e:
                last_error = e
                logger.warning("HTTP error %s listing rows of %s: %s", e.response.status_code, self.table_id, str(e))
                if 400 <= e.response.status_code < 500:
                    break  # Don't retry client errors
            except httpx.TransportError as e:
                last_error = e
                logger.warning("Request failed for table %s (attempt %s): %s", self.table_id, attempt + 1, str(e))
            except ValueError as e:
                last_error = e
                logger.error("Invalid JSON from Telerivet table %s: %s", self.table_id, e)
                break
            if attempt + 1 < self.max_retries:
                await asyncio.sleep(self.retry_backoff * (attempt + 1))  # Backoff

        logger.error("Failed to list rows of %s after %s attempts: %s", self.table_id, self.max_retries, last_error)
        raise _as_telerivet_error("Failed to fetch projects", last_error)

    async def create_row(self, vars: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a row; returns the created row as reported by Telerivet."""
        return await self._write("POST", self.rows_url, {"vars": vars}, action="create")

    async def update_row(self, row_id: str, vars: Dict[str, Any]) -> Dict[str, Any]:
        """Overwrite the given vars of an existing row."""
        return await self._write("POST", f"{self.rows_url}/{row_id}", {"vars": vars}, action="update")

    async def delete_row(self, row_id: str) -> Dict[str, Any]:
        return await self._write("DELETE", f"{self.rows_url}/{row_id}", None, action="delete")

    async def _write(self, method: str, url: str, body: Optional[Dict[str, Any]], action: str) -> Dict[str, Any]:
        """Single-attempt write; writes are not retried."""
        self._require_config()
        logger.info("Telerivet %s request to %s", action, url)
        try:
            async with self._client() as client:
                response = await client.request(method, url, json=body)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("Telerivet API error on %s: %s %s", action, e.response.status_code, e.response.text)
            raise _as_telerivet_error(f"Failed to {action} project", e) from e
        except httpx.HTTPError as e:
            logger.exception("Telerivet %s request failed", action)
            raise _as_telerivet_error(f"Failed to {action} project", e) from e

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return {"raw": response.text}


def _as_telerivet_error(message: str, error: Optional[Exception]) -> TelerivetError:
    """Wrap an httpx failure, keeping the status code and parsed error body."""
    if isinstance(error, httpx.HTTPStatusError):
        try:
            details = error.response.json()
        except ValueError:
            details = error.response.text
        return TelerivetError(message, status_code=error.response.status_code, details=details)
    return TelerivetError(message, details=str(error) if error else None)
