from typing import Any, Dict, List, Optional, Type, TypeVar
import logging

import httpx
from pydantic import BaseModel, ValidationError

from ..core.config import settings

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ApiError(Exception):
    """A clinic backend call failed or answered with a non-2xx status."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        detail: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        # Message supplied by the backend itself, if any
        self.detail = detail


class ApiClient:
    """Thin async wrapper around the clinic REST backend."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout or settings.API_TIMEOUT,
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def get(
        self,
        path: str,
        token: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        return await self._request("GET", path, token=token, params=params, headers=headers)

    async def post(
        self,
        path: str,
        json: Any = None,
        token: Optional[str] = None,
    ) -> Any:
        return await self._request("POST", path, token=token, json=json)

    async def delete(self, path: str, token: Optional[str] = None) -> Any:
        return await self._request("DELETE", path, token=token)

    async def _request(
        self,
        method: str,
        path: str,
        token: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        **kwargs,
    ) -> Any:
        request_headers = {"Accept": "application/json"}
        if token:
            request_headers["Authorization"] = f"Bearer {token}"
        if headers:
            request_headers.update(headers)

        logger.debug(f"{method} {self.base_url}{path}")

        try:
            response = await self._client.request(
                method, path, headers=request_headers, **kwargs
            )
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {str(e)}")
            raise ApiError("Unable to reach the clinic service") from e

        return self._handle_response(method, path, response)

    def _handle_response(self, method: str, path: str, response: httpx.Response) -> Any:
        body = self._parse_body(response)

        if response.is_success:
            return body

        detail = None
        if isinstance(body, dict):
            detail = body.get("message") or body.get("error")
        message = detail or f"HTTP error! status: {response.status_code}"

        logger.warning(
            f"{method} {path} - Status: {response.status_code} - {message}"
        )
        raise ApiError(message, status_code=response.status_code, detail=detail)

    @staticmethod
    def _parse_body(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None


def extract_list(body: Any, key: str) -> List[Any]:
    """Accept both a bare JSON list and an object wrapping it under ``key``."""
    if isinstance(body, list):
        return body
    if isinstance(body, dict):
        items = body.get(key)
        if isinstance(items, list):
            return items
    return []


def result_message(body: Any, default: str) -> str:
    if isinstance(body, dict):
        return body.get("message") or default
    return default


def parse_records(model: Type[ModelT], body: Any, key: str) -> List[ModelT]:
    """Validate each listed record, skipping the ones the backend sent malformed."""
    records = []
    for item in extract_list(body, key):
        try:
            records.append(model.model_validate(item))
        except ValidationError as e:
            logger.warning(f"Skipping malformed {model.__name__} record: {e.error_count()} error(s)")
    return records


def parse_record(model: Type[ModelT], item: Any) -> ModelT:
    """Validate a single record; a malformed one is reported as an ApiError."""
    try:
        return model.model_validate(item)
    except ValidationError as e:
        logger.warning(f"Malformed {model.__name__} record: {e.error_count()} error(s)")
        raise ApiError("Unexpected response from the clinic service") from e
