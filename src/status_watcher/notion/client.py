# src/status_watcher/notion/client.py

from __future__ import annotations

import logging
from collections.abc import Awaitable
from typing import Any, TypeVar

import httpx
from notion_client import AsyncClient
from notion_client.errors import HTTPResponseError, RequestTimeoutError

from ..core.ports import RecordSource
from ..errors import ConfigurationError, TransientAPIError
from ..tasks.task_models import PropertyValue, RecordPage, property_value_from_response

logger = logging.getLogger(__name__)

T = TypeVar("T")


def build_notion_client(settings) -> AsyncClient:
    """
    Create the Notion AsyncClient from settings.

    No network I/O happens here; a bad key only shows up on the first request.
    """
    api_key = getattr(settings, "notion_api_key", None)
    if not api_key or not str(api_key).strip():
        raise ConfigurationError("Notion API key is not set. Set WATCHER_NOTION_API_KEY (or NOTION_KEY) in your .env.")

    timeout_s = float(getattr(settings, "notion_timeout_seconds", 60.0))
    return AsyncClient(auth=str(api_key).strip(), timeout_ms=int(timeout_s * 1000))


async def _call(what: str, awaitable: Awaitable[T]) -> T:
    """Await one Notion call, re-raising transport/API failures as TransientAPIError."""
    try:
        return await awaitable
    except RequestTimeoutError as exc:
        raise TransientAPIError(f"{what}: request timed out") from exc
    except HTTPResponseError as exc:
        status = getattr(exc, "status", None)
        code = getattr(exc, "code", None)
        raise TransientAPIError(f"{what}: HTTP {status} {code or ''}".rstrip(), status=status, code=code) from exc
    except httpx.HTTPError as exc:
        raise TransientAPIError(f"{what}: {exc.__class__.__name__}: {exc}") from exc


def _rich_text(content: str) -> list[dict[str, Any]]:
    return [{"type": "text", "text": {"content": content}}]


class NotionGateway(RecordSource):
    """
    Thin adapter from the Notion SDK to the RecordSource port.

    Also exposes one-shot record creation calls (database, page, block, comment).
    They pass straight through to the API.
    """

    def __init__(self, client: AsyncClient) -> None:
        self._client = client

    async def aclose(self) -> None:
        await self._client.aclose()

    # ---- RecordSource ----

    async def query_collection(self, collection_id: str, cursor: str | None = None) -> RecordPage:
        kwargs: dict[str, Any] = {"database_id": collection_id}
        if cursor:
            kwargs["start_cursor"] = cursor

        data = await _call("databases.query", self._client.databases.query(**kwargs))
        results = data.get("results") or []
        return RecordPage(
            records=[r for r in results if isinstance(r, dict)],
            next_cursor=data.get("next_cursor") or None,
        )

    async def retrieve_property(
            self,
            record_id: str,
            property_id: str,
            cursor: str | None = None,
    ) -> PropertyValue:
        kwargs: dict[str, Any] = {"page_id": record_id, "property_id": property_id}
        if cursor:
            kwargs["start_cursor"] = cursor

        data = await _call("pages.properties.retrieve", self._client.pages.properties.retrieve(**kwargs))
        return property_value_from_response(data)

    # ---- Record creation ----

    async def create_database(self, parent_page_id: str, title: str) -> dict[str, Any]:
        logger.info("Creating database %r under page %s", title, parent_page_id)
        return await _call(
            "databases.create",
            self._client.databases.create(
                parent={"type": "page_id", "page_id": parent_page_id},
                title=_rich_text(title),
                properties={"Name": {"title": {}}},
            ),
        )

    async def create_page(self, database_id: str, name: str, header: str) -> dict[str, Any]:
        logger.info("Creating page %r in database %s", name, database_id)
        return await _call(
            "pages.create",
            self._client.pages.create(
                parent={"type": "database_id", "database_id": database_id},
                properties={"Name": {"title": [{"text": {"content": name}}]}},
                children=[
                    {
                        "object": "block",
                        "heading_2": {"rich_text": [{"text": {"content": header}}]},
                    }
                ],
            ),
        )

    async def append_paragraph(self, block_id: str, content: str) -> dict[str, Any]:
        # A page id is a valid block id.
        return await _call(
            "blocks.children.append",
            self._client.blocks.children.append(
                block_id=block_id,
                children=[{"paragraph": {"rich_text": [{"text": {"content": content}}]}}],
            ),
        )

    async def create_comment(self, page_id: str, text: str) -> dict[str, Any]:
        return await _call(
            "comments.create",
            self._client.comments.create(
                parent={"page_id": page_id},
                rich_text=[{"text": {"content": text}}],
            ),
        )
