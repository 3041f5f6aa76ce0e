"""Async HTTP client for the Green Cycle REST API."""

from logging import getLogger
from types import TracebackType
from typing import Any
from typing import Optional

import httpx
from starlette.status import HTTP_400_BAD_REQUEST
from starlette.status import HTTP_404_NOT_FOUND

from greencycle_client.config import ClientConfig
from greencycle_client.exceptions import ApiConnectionError
from greencycle_client.exceptions import ApiError
from greencycle_client.exceptions import NotFoundError
from greencycle_client.exceptions import ResponseValidationError
from greencycle_client.models import CollectionDetail
from greencycle_client.models import CollectionPoint
from greencycle_client.models import Material
from greencycle_client.models import PartyRecord
from greencycle_client.models import PhoneRecord
from greencycle_client.models import parse_list
from greencycle_client.models import parse_model

logger = getLogger(__name__)


class ApiClient:
    """Thin wrapper around ``httpx.AsyncClient`` that validates payloads.

    Args:
        config: Client configuration
        http_client: Pre-built client (e.g. with a test transport); its
            base URL should point at the API root
    """

    def __init__(
        self, config: ClientConfig, *, http_client: httpx.AsyncClient | None = None
    ) -> None:
        self.config = config
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            base_url=config.base_url.rstrip("/"),
            timeout=config.timeout,
            headers={"User-Agent": config.user_agent},
        )

    async def get_json(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        """Send a GET request and return the decoded JSON body.

        Raises:
            NotFoundError: On a 404 answer
            ApiError: On any other error status
            ApiConnectionError: If the request could not be completed
            ResponseValidationError: If the body is not JSON
        """
        try:
            response = await self._client.get(path, params=params)
        except httpx.HTTPError as e:
            logger.warning("Request to %s failed: %s", path, e)
            msg = f"Could not reach API at {path}: {e}"
            raise ApiConnectionError(msg, url=path) from e

        url = str(response.url)
        if response.status_code == HTTP_404_NOT_FOUND:
            msg = f"Resource not found: {url}"
            raise NotFoundError(msg, status_code=response.status_code, url=url)
        if response.status_code >= HTTP_400_BAD_REQUEST:
            logger.warning("API answered %d for %s", response.status_code, url)
            msg = f"API error {response.status_code} for {url}"
            raise ApiError(msg, status_code=response.status_code, url=url)

        try:
            return response.json()
        except ValueError as e:
            msg = f"Response from {url} is not valid JSON"
            raise ResponseValidationError(msg, url=url) from e

    async def fetch_collection(self, collection_id: int) -> CollectionDetail:
        path = f"/coletas/{collection_id}/"
        return parse_model(CollectionDetail, await self.get_json(path), path)

    async def fetch_phone(self, user_id: int) -> PhoneRecord:
        path = f"/telefones/{user_id}/"
        return parse_model(PhoneRecord, await self.get_json(path), path)

    async def fetch_client(self, client_id: int) -> PartyRecord:
        path = f"/clientes/{client_id}/"
        return parse_model(PartyRecord, await self.get_json(path), path)

    async def fetch_partner(self, partner_id: int) -> PartyRecord:
        path = f"/parceiros/{partner_id}/"
        return parse_model(PartyRecord, await self.get_json(path), path)

    async def fetch_collection_points(self) -> list[CollectionPoint]:
        path = "/pontos-coleta/"
        return parse_list(CollectionPoint, await self.get_json(path), path)

    async def fetch_materials(self) -> list[Material]:
        path = "/materiais/"
        return parse_list(Material, await self.get_json(path), path)

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()
