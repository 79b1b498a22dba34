"""Pixiv provider implementing IArtworkProvider via Pixiv's AJAX API.

Pixiv has no public API for artworks.  The web front-end loads illust data
from two undocumented JSON endpoints, which this provider calls directly:

    GET /ajax/illust/{id}        title, author, upload date, page count
    GET /ajax/illust/{id}/pages  one entry per image with its CDN URLs

Both answer with the envelope ``{"error": bool, "message": str, "body": ...}``;
``body`` is ``[]`` when ``error`` is true.  Pixiv rejects requests without a
browser-like User-Agent and a pixiv Referer -- those headers are set on the
injected ``httpx.AsyncClient`` (see ``src.main._build_http_client``).

Error classification:
    transport error / timeout         -> UpstreamUnavailableError
    HTTP 400 / 404, or ``error: true`` -> NotFoundError
    any other non-2xx status           -> UpstreamUnavailableError
    non-JSON or unexpected shape       -> UpstreamProtocolError

No retries and no caching happen here.
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from src.interfaces.artwork_provider import IArtworkProvider
from src.models.artwork import ArtworkMetadata
from src.utils.errors import NotFoundError, UpstreamProtocolError, UpstreamUnavailableError
from src.utils.logging import get_logger

_DEFAULT_BASE_URL = "https://www.pixiv.net"
_NOT_FOUND_STATUSES = frozenset({400, 404})
_PROVIDER_NAME = "pixiv"


# ---------------------------------------------------------------------------
# Response shapes -- only the fields Pixum reads are declared.
# ---------------------------------------------------------------------------

class _ImageUrls(BaseModel):
    model_config = ConfigDict(extra="ignore")

    original: str


class _PageEntry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    urls: _ImageUrls


class _IllustBody(BaseModel):
    model_config = ConfigDict(extra="ignore")

    # Pixiv sends IDs as strings ("100"); pydantic coerces them to int.
    illust_id: int = Field(alias="illustId")
    illust_title: str = Field(alias="illustTitle")
    user_id: int | None = Field(default=None, alias="userId")
    user_name: str = Field(alias="userName")
    page_count: int = Field(alias="pageCount")
    upload_date: str | None = Field(default=None, alias="uploadDate")


class PixivArtworkProvider(IArtworkProvider):
    """Artwork provider backed by Pixiv's AJAX endpoints.

    The ``httpx.AsyncClient`` is injected so it can be shared across
    requests (connection pooling) and replaced in tests.
    """

    def __init__(self, http_client: httpx.AsyncClient, base_url: str = _DEFAULT_BASE_URL) -> None:
        self._http = http_client
        self._base_url = base_url.rstrip("/")
        self._logger = get_logger(__name__)

    def get_provider_name(self) -> str:
        return _PROVIDER_NAME

    # -- HTTP --------------------------------------------------------------

    async def _fetch_body(self, path: str, content_id: int) -> Any:
        """GET ``/ajax/illust/{path}`` and return the envelope's ``body``."""
        url = f"{self._base_url}/ajax/illust/{path}"
        try:
            response = await self._http.get(url)
        except httpx.TimeoutException as exc:
            self._logger.warning("upstream_timeout", url=url, error=str(exc))
            raise UpstreamUnavailableError(
                message="Timed out waiting for Pixiv.", provider_name=_PROVIDER_NAME
            ) from exc
        except httpx.HTTPError as exc:
            self._logger.warning("upstream_request_failed", url=url, error=str(exc))
            raise UpstreamUnavailableError(provider_name=_PROVIDER_NAME) from exc

        if response.status_code in _NOT_FOUND_STATUSES:
            self._logger.info("upstream_not_found", content_id=content_id, status=response.status_code)
            raise NotFoundError(provider_name=_PROVIDER_NAME)
        if not response.is_success:
            self._logger.warning("upstream_http_error", url=url, status=response.status_code)
            raise UpstreamUnavailableError(
                message=f"Pixiv answered with HTTP {response.status_code}.",
                provider_name=_PROVIDER_NAME,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamProtocolError(
                message="Pixiv returned a non-JSON body.", provider_name=_PROVIDER_NAME
            ) from exc

        if not isinstance(payload, dict) or "body" not in payload:
            raise UpstreamProtocolError(
                message="Pixiv response is missing the body envelope.",
                provider_name=_PROVIDER_NAME,
            )
        if payload.get("error") is True:
            self._logger.info(
                "upstream_not_found",
                content_id=content_id,
                upstream_message=payload.get("message", ""),
            )
            raise NotFoundError(provider_name=_PROVIDER_NAME)
        return payload["body"]

    # -- Parsing -------------------------------------------------------------

    @staticmethod
    def _parse_pages(body: Any) -> list[str]:
        if not isinstance(body, list) or not body:
            raise UpstreamProtocolError(
                message="Pixiv returned no pages for the work.", provider_name=_PROVIDER_NAME
            )
        try:
            return [_PageEntry.model_validate(entry).urls.original for entry in body]
        except ValidationError as exc:
            raise UpstreamProtocolError(
                message=f"Unexpected page entry shape: {exc.error_count()} validation errors.",
                provider_name=_PROVIDER_NAME,
            ) from exc

    @staticmethod
    def _parse_illust(body: Any) -> _IllustBody:
        try:
            return _IllustBody.model_validate(body)
        except ValidationError as exc:
            raise UpstreamProtocolError(
                message=f"Unexpected illust shape: {exc.error_count()} validation errors.",
                provider_name=_PROVIDER_NAME,
            ) from exc

    # -- IArtworkProvider implementation ---------------------------------------

    async def fetch_artwork(self, content_id: int) -> ArtworkMetadata:
        illust = self._parse_illust(await self._fetch_body(str(content_id), content_id))
        pages = self._parse_pages(await self._fetch_body(f"{content_id}/pages", content_id))

        if illust.page_count != len(pages):
            # The pages endpoint is what redirects are served from, so it wins.
            self._logger.warning(
                "upstream_page_count_mismatch",
                content_id=content_id,
                page_count=illust.page_count,
                pages=len(pages),
            )

        artwork = ArtworkMetadata(
            content_id=content_id,
            title=illust.illust_title,
            author=illust.user_name,
            author_id=illust.user_id,
            page_count=len(pages),
            pages=pages,
            last_modified=illust.upload_date,
        )
        self._logger.info("upstream_artwork_fetched", content_id=content_id, pages=len(pages))
        return artwork

    async def fetch_page_url(self, content_id: int, page: int) -> str:
        pages = self._parse_pages(await self._fetch_body(f"{content_id}/pages", content_id))
        if page >= len(pages):
            noun = "image" if len(pages) == 1 else "images"
            verb = "is" if len(pages) == 1 else "are"
            raise NotFoundError(
                message=(
                    f"The index of the requested image is too high; "
                    f"there {verb} {len(pages)} {noun} in this collection."
                ),
                provider_name=_PROVIDER_NAME,
            )
        return pages[page]
