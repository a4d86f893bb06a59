from __future__ import annotations

import os
from typing import Any, TYPE_CHECKING

from market_watch.domain.models import BriefingSource

if TYPE_CHECKING:
    from openai import OpenAI

WEB_SEARCH_TOOL = {"type": "web_search_preview"}


def _as_dict(item: Any) -> dict[str, Any]:
    if item is None:
        return {}
    if isinstance(item, dict):
        return item
    if hasattr(item, "model_dump"):
        try:
            dumped = item.model_dump()
            if isinstance(dumped, dict):
                return dumped
        except Exception:
            pass
    if hasattr(item, "__dict__"):
        return dict(item.__dict__)
    return {}


def build_openai_client() -> "OpenAI":
    api_key = os.getenv("OPENAI_API_KEY", "").strip()
    if not api_key:
        raise RuntimeError("OPENAI_API_KEY is not configured.")
    from openai import OpenAI

    return OpenAI(api_key=api_key)


def json_schema_format(name: str, schema: dict[str, Any]) -> dict[str, Any]:
    """Wrap a JSON schema as a strict Responses API `text.format`."""
    return {
        "type": "json_schema",
        "name": name,
        "strict": True,
        "schema": schema,
    }


def create_structured_response(
    client: Any,
    *,
    model: str,
    instructions: str,
    prompt: str,
    schema_name: str,
    schema: dict[str, Any],
    web_enabled: bool,
) -> Any:
    request: dict[str, Any] = {
        "model": model,
        "instructions": instructions,
        "input": prompt,
        "text": {"format": json_schema_format(schema_name, schema)},
    }
    if web_enabled:
        request["tools"] = [dict(WEB_SEARCH_TOOL)]
    return client.responses.create(**request)


def extract_response_text(response: Any) -> str:
    text = str(getattr(response, "output_text", "") or "").strip()
    if text:
        return text

    snippets: list[str] = []
    for item in getattr(response, "output", []) or []:
        payload = _as_dict(item)
        if payload.get("type") != "message":
            continue
        for content in payload.get("content") or []:
            content_payload = _as_dict(content)
            if content_payload.get("type") not in {"output_text", "text"}:
                continue
            value = str(content_payload.get("text", "") or "").strip()
            if value:
                snippets.append(value)
    return "\n\n".join(snippets).strip()


def extract_response_sources(response: Any) -> list[BriefingSource]:
    """Citation annotations carrying both a title and a URL, in response order."""
    rows: list[BriefingSource] = []

    for item in getattr(response, "output", []) or []:
        payload = _as_dict(item)
        if payload.get("type") != "message":
            continue

        for content in payload.get("content") or []:
            content_payload = _as_dict(content)
            for annotation in content_payload.get("annotations") or []:
                annotation_payload = _as_dict(annotation)
                ann_type = str(annotation_payload.get("type", "")).lower()
                if "citation" not in ann_type and "source" not in ann_type:
                    continue

                url = str(annotation_payload.get("url", "") or "").strip()
                title = str(annotation_payload.get("title", "") or "").strip()
                if not url or not title:
                    continue
                rows.append(BriefingSource(title=title, uri=url))
    return rows
