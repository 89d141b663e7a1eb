# Author: Green Mountain Systems AI Inc.
# Donated to IAB Tech Lab

"""Async HTTP client for the Beeswax buzz REST API."""

import asyncio
import json
import logging
import re
import tempfile
from collections.abc import Mapping
from typing import IO, Any, Optional, Union
from urllib.parse import urljoin, urlparse

import httpx
from pydantic import ValidationError

from ..models.beeswax import BeeswaxResponse, CreativeAssetUpload, Credentials
from .resources import RESOURCES, ResourceHelper

logger = logging.getLogger(__name__)

DEFAULT_API_ROOT = "https://stingersbx.api.beeswax.com"

# Rows requested per page by _query_all
PAGE_SIZE = 50

CREATIVE_ASSET_ENDPOINT = "/rest/creative_asset"

# Downloaded creatives larger than this are spooled to disk
SPOOL_MAX_SIZE = 10 * 1024 * 1024

# Sent to asset sources instead of the API default
SOURCE_HEADERS = {"Accept": "*/*"}


class BeeswaxError(Exception):
    """Base class for Beeswax client errors."""

    pass


class BeeswaxConfigError(BeeswaxError):
    """Raised when the client is constructed without usable credentials."""

    pass


class BeeswaxResponseError(BeeswaxError):
    """Raised when Beeswax answers with ``success: false``."""

    def __init__(self, body: Any):
        super().__init__(repr(body))
        self.body = body


class BeeswaxStatusError(BeeswaxError):
    """Raised for a non-2xx response.

    Only the status code and the decoded body are kept; the response object
    itself is dropped.
    """

    def __init__(self, status_code: int, error: Any):
        super().__init__(f"{status_code} - {error!r}")
        self.status_code = status_code
        self.error = error

    @classmethod
    def from_response(cls, response: httpx.Response) -> "BeeswaxStatusError":
        try:
            error = response.json()
        except ValueError:
            error = response.text
        return cls(response.status_code, error)


class BeeswaxUploadError(BeeswaxError):
    """Raised when a creative asset cannot be prepared for upload."""

    pass


def is_not_found_error(error: BaseException, action: str) -> bool:
    """Check whether an error is Beeswax reporting a missing object.

    Beeswax has no dedicated status for this; the only signal is a message
    like ``Could not load object 1234 to update`` in the error payload.

    Args:
        error: Error raised by a mutation request
        action: Verb in the message, ``update`` or ``delete``

    Returns:
        True if the error payload carries a matching message
    """
    pattern = re.compile(rf"Could not load object.*to {re.escape(action)}")
    try:
        messages = error.error["payload"][0]["message"]
    except (AttributeError, KeyError, IndexError, TypeError):
        return False
    if not isinstance(messages, list):
        return False
    return any(isinstance(msg, str) and pattern.search(msg) for msg in messages)


def _is_non_empty_object(body: Any) -> bool:
    return isinstance(body, dict) and len(body) > 0


class BeeswaxClient:
    """Async client for the Beeswax buzz API.

    Sessions are cookie based: the client logs in lazily the first time a
    request comes back 401 and keeps the session cookie for its lifetime.

    Each entity type is exposed as a :class:`ResourceHelper` attribute, e.g.
    ``await client.campaigns.find(42)``.
    """

    # Bound from RESOURCES in __init__
    advertisers: ResourceHelper
    campaigns: ResourceHelper
    creatives: ResourceHelper
    line_items: ResourceHelper
    creative_line_items: ResourceHelper
    targeting_templates: ResourceHelper

    def __init__(
        self,
        creds: Union[Credentials, Mapping[str, Any], None],
        api_root: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
    ):
        """Initialize the client.

        Args:
            creds: Credentials, or a mapping with ``email`` and ``password``
            api_root: Base URL of the Beeswax API
            transport: Optional httpx transport, mainly for tests
            timeout: Request timeout in seconds; None disables it
        """
        if isinstance(creds, Credentials):
            self._creds = creds
        else:
            try:
                self._creds = Credentials.model_validate(creds or {})
            except ValidationError:
                raise BeeswaxConfigError(
                    "Must provide creds object with email + password"
                ) from None

        self.api_root = api_root or DEFAULT_API_ROOT
        self._client = httpx.AsyncClient(
            transport=transport,
            timeout=timeout,
            headers={"Accept": "application/json"},
        )
        self._auth_task: Optional[asyncio.Task] = None

        for name, descriptor in RESOURCES.items():
            setattr(self, name, ResourceHelper(self, descriptor))

    def _url(self, path: str) -> str:
        return urljoin(self.api_root, path)

    # -------------------------------------------------------------------------
    # Session
    # -------------------------------------------------------------------------

    async def authenticate(self) -> None:
        """Log in and store the session cookie.

        Concurrent callers share one in-flight login request and all see its
        outcome.

        Raises:
            BeeswaxResponseError: If Beeswax rejects the credentials
            BeeswaxStatusError: If the login request fails
        """
        if self._auth_task is None:
            self._auth_task = asyncio.ensure_future(self._send_authenticate())
        await asyncio.shield(self._auth_task)

    async def _send_authenticate(self) -> None:
        logger.info(f"Authenticating to {self.api_root}")
        try:
            response = await self._client.post(
                self._url("/rest/authenticate"),
                json={
                    "email": self._creds.email,
                    "password": self._creds.password,
                    # Longer lasting session
                    "keep_logged_in": True,
                },
            )
            body = self._decode(response)
            if isinstance(body, dict) and body.get("success") is False:
                raise BeeswaxResponseError(body)
        finally:
            self._auth_task = None

    # -------------------------------------------------------------------------
    # Requests
    # -------------------------------------------------------------------------

    async def request(
        self, method: str, url: str, body: Optional[Any] = None
    ) -> dict[str, Any]:
        """Send a JSON request, re-authenticating once on a 401.

        Args:
            method: HTTP verb (get, post, put, delete)
            url: Path relative to the API root, or an absolute URL
            body: JSON body, also sent on GET and DELETE

        Returns:
            Decoded response body

        Raises:
            BeeswaxResponseError: If the body has ``success: false`` or is not JSON
            BeeswaxStatusError: For any non-2xx response
        """
        url = self._url(url)
        response = await self._send(method, url, body)

        if response.status_code == 401:
            logger.warning(f"{method.upper()} {url} returned 401, re-authenticating")
            await self.authenticate()
            response = await self._send(method, url, body)

        result = self._decode(response)
        if isinstance(result, dict) and result.get("success") is False:
            raise BeeswaxResponseError(result)
        return result

    async def _send(self, method: str, url: str, body: Optional[Any]) -> httpx.Response:
        logger.debug(f"{method.upper()} {url}")
        return await self._client.request(method.upper(), url, json=body)

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.is_success:
            raise BeeswaxStatusError.from_response(response)
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            raise BeeswaxResponseError(response.text) from None

    # -------------------------------------------------------------------------
    # Generic CRUD, bound per resource by ResourceHelper
    # -------------------------------------------------------------------------

    async def _find(self, endpoint: str, id_field: str, id: Any) -> BeeswaxResponse:
        body = await self.request("get", endpoint, {id_field: id})
        payload = body.get("payload") or []
        return BeeswaxResponse.ok(payload[0] if payload else None)

    async def _query(
        self, endpoint: str, filter: Optional[dict[str, Any]] = None
    ) -> BeeswaxResponse:
        body = await self.request("get", endpoint, dict(filter or {}))
        return BeeswaxResponse.ok(body.get("payload"))

    async def _query_all(
        self, endpoint: str, id_field: str, filter: Optional[dict[str, Any]] = None
    ) -> BeeswaxResponse:
        """Fetch every page of a query.

        Caller-supplied ``rows``, ``offset`` and ``sort_by`` are overridden;
        pages are sorted by the id field so they do not shift between requests.
        """
        items: list[Any] = []
        offset = 0

        while True:
            page_filter = {
                **(filter or {}),
                "offset": offset,
                "rows": PAGE_SIZE,
                "sort_by": id_field,
            }
            body = await self.request("get", endpoint, page_filter)
            page = body.get("payload") or []
            items.extend(page)

            if len(page) < PAGE_SIZE:
                break
            offset += PAGE_SIZE

        logger.debug(f"Fetched {len(items)} items from {endpoint}")
        return BeeswaxResponse.ok(items)

    async def _create(self, endpoint: str, id_field: str, body: Any) -> BeeswaxResponse:
        # Beeswax answers an empty body with a misleading 401
        if not _is_non_empty_object(body):
            return BeeswaxResponse.failure("Body must be non-empty object")

        created = await self.request("post", f"{endpoint}/strict", body)
        return await self._find(endpoint, id_field, created["payload"]["id"])

    async def _edit(
        self,
        endpoint: str,
        id_field: str,
        id: Any,
        body: Any,
        fail_on_not_found: bool = False,
    ) -> BeeswaxResponse:
        if not _is_non_empty_object(body):
            return BeeswaxResponse.failure("Body must be non-empty object")

        try:
            await self.request("put", f"{endpoint}/strict", {**body, id_field: id})
        except BeeswaxStatusError as e:
            if is_not_found_error(e, "update") and not fail_on_not_found:
                logger.warning(f"Cannot update {endpoint} {id}: not found")
                return BeeswaxResponse.failure("Not found")
            raise

        return await self._find(endpoint, id_field, id)

    async def _delete(
        self,
        endpoint: str,
        id_field: str,
        id: Any,
        fail_on_not_found: bool = False,
    ) -> BeeswaxResponse:
        try:
            body = await self.request("delete", f"{endpoint}/strict", {id_field: id})
        except BeeswaxStatusError as e:
            if is_not_found_error(e, "delete") and not fail_on_not_found:
                logger.warning(f"Cannot delete {endpoint} {id}: not found")
                return BeeswaxResponse.failure("Not found")
            raise

        payload = body.get("payload") or []
        return BeeswaxResponse.ok(payload[0] if payload else None)

    # -------------------------------------------------------------------------
    # Creative assets
    # -------------------------------------------------------------------------

    async def upload_creative_asset(
        self, params: Union[CreativeAssetUpload, Mapping[str, Any]]
    ) -> dict[str, Any]:
        """Upload a creative asset and return the finished creative_asset record.

        Steps: size the content, create the asset record, upload the content
        as multipart form data, then fetch the finished record. A record
        created before a later step fails is left in place.

        Args:
            params: Upload parameters; ``source_url`` or
                ``creative_content_bytes`` is required

        Returns:
            The creative_asset entity

        Raises:
            BeeswaxUploadError: If there is no content or its size is unknown
        """
        if not isinstance(params, CreativeAssetUpload):
            params = CreativeAssetUpload.model_validate(params)

        if not params.source_url and params.creative_content_bytes is None:
            raise BeeswaxUploadError(
                "upload_creative_asset params requires a source_url or a "
                "creative_content_bytes property."
            )

        asset_def = params.asset_definition()
        if "creative_asset_name" not in asset_def:
            if not params.source_url:
                raise BeeswaxUploadError(
                    "creative_asset_name is required when uploading "
                    "creative_content_bytes."
                )
            asset_def["creative_asset_name"] = urlparse(params.source_url).path.split(
                "/"
            )[-1]

        if params.source_url:
            asset_def["size_in_bytes"] = await self._get_content_length(
                params.source_url
            )
        else:
            asset_def["size_in_bytes"] = len(params.creative_content_bytes)

        created = await self.request("post", CREATIVE_ASSET_ENDPOINT, asset_def)
        asset_id = created["payload"]["id"]
        name = asset_def["creative_asset_name"]
        logger.info(f"Created creative asset {asset_id} ({name})")

        if params.source_url:
            with tempfile.SpooledTemporaryFile(max_size=SPOOL_MAX_SIZE) as content:
                await self._download(params.source_url, content)
                uploaded = await self._post_asset_content(asset_id, name, content)
        else:
            uploaded = await self._post_asset_content(
                asset_id, name, params.creative_content_bytes
            )

        body = await self.request(
            "get", f"{CREATIVE_ASSET_ENDPOINT}/{uploaded['payload']['id']}"
        )
        return body["payload"][0]

    async def _get_content_length(self, source_url: str) -> int:
        response = await self._client.head(
            source_url, headers=SOURCE_HEADERS, follow_redirects=True
        )
        if response.status_code != 200:
            raise BeeswaxStatusError.from_response(response)

        try:
            return int(response.headers["content-length"])
        except (KeyError, ValueError):
            raise BeeswaxUploadError(
                f"Unable to detect content-length of sourceUrl: {source_url}"
            ) from None

    async def _download(self, source_url: str, out: IO[bytes]) -> None:
        """Stream the asset source into ``out`` and rewind it."""
        async with self._client.stream(
            "GET", source_url, headers=SOURCE_HEADERS, follow_redirects=True
        ) as response:
            if response.status_code != 200:
                await response.aread()
                raise BeeswaxStatusError.from_response(response)
            async for chunk in response.aiter_bytes():
                out.write(chunk)
        out.seek(0)

    async def _post_asset_content(
        self, asset_id: Any, filename: str, content: Union[bytes, IO[bytes]]
    ) -> dict[str, Any]:
        response = await self._client.post(
            self._url(f"{CREATIVE_ASSET_ENDPOINT}/upload/{asset_id}"),
            files={"creative_content": (filename, content)},
        )
        if response.status_code != 200:
            raise BeeswaxStatusError.from_response(response)

        # Upload endpoint answers with JSON served as text/plain
        try:
            result = json.loads(response.text)
        except ValueError:
            raise BeeswaxResponseError(response.text) from None
        if isinstance(result, dict) and result.get("success") is False:
            raise BeeswaxResponseError(result)
        return result

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "BeeswaxClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit."""
        await self.close()
