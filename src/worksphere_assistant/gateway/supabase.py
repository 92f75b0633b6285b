"""
Supabase gateway: PostgREST reads over httpx.

One httpx.Client per request, opened and closed by ``SupabaseGateway.connect``.
"""
import logging
from contextlib import contextmanager
from typing import Dict, Iterator, List

import httpx

from ..config import AssistantConfig
from ..exceptions import GatewayError
from .base import DataGateway, Row
from .query import TableQuery

logger = logging.getLogger(__name__)


class SupabaseGateway(DataGateway):
    """PostgREST client for the Supabase REST endpoint."""

    REST_PATH = "/rest/v1"

    def __init__(self, client: httpx.Client):
        self._client = client

    @classmethod
    @contextmanager
    def connect(cls, config: AssistantConfig) -> Iterator["SupabaseGateway"]:
        """Open a request-scoped gateway; the HTTP client is closed on exit."""
        client = httpx.Client(
            base_url=f"{config.supabase_url}{cls.REST_PATH}",
            headers=cls.build_headers(config.supabase_service_key),
            timeout=httpx.Timeout(config.request_timeout),
        )
        try:
            yield cls(client)
        finally:
            client.close()

    @staticmethod
    def build_headers(service_key: str) -> Dict[str, str]:
        return {
            "apikey": service_key,
            "Authorization": f"Bearer {service_key}",
            "Accept": "application/json",
        }

    def fetch(self, query: TableQuery) -> List[Row]:
        response = self._send("GET", query, query.to_params())
        try:
            rows = response.json()
        except ValueError as e:
            raise GatewayError(f"Invalid JSON from '{query.table}' query") from e

        if not isinstance(rows, list):
            raise GatewayError(f"Unexpected payload from '{query.table}' query")
        return rows

    def count(self, query: TableQuery) -> int:
        params = [(key, value) for key, value in query.to_params(include_columns=False)
                  if key not in ("order", "limit")]
        response = self._send(
            "HEAD", query, params, headers={"Prefer": "count=exact"}
        )
        return self._parse_content_range(query.table, response.headers.get("Content-Range"))

    def _send(self, method: str, query: TableQuery, params, headers=None) -> httpx.Response:
        try:
            response = self._client.request(
                method, f"/{query.table}", params=params, headers=headers
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"{method} {query.table} failed with HTTP {e.response.status_code}"
            )
            raise GatewayError(
                f"'{query.table}' query failed with HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"{method} {query.table} transport error: {e}")
            raise GatewayError(f"'{query.table}' query could not be sent") from e
        return response

    @staticmethod
    def _parse_content_range(table: str, header: str) -> int:
        # "0-9/42" or "*/0"
        if not header or "/" not in header:
            raise GatewayError(f"Missing Content-Range on '{table}' count")
        total = header.rsplit("/", 1)[1]
        try:
            return int(total)
        except ValueError as e:
            raise GatewayError(f"Unknown total in Content-Range on '{table}' count") from e
