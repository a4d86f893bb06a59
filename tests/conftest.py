from __future__ import annotations

import json
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any

import pytest

FIXED_NOW = datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)


class FakeResponses:
    def __init__(self, response: Any = None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def create(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


def fake_response(text: str, annotations: list[dict[str, str]] | None = None) -> SimpleNamespace:
    return SimpleNamespace(
        output_text=text,
        output=[
            {
                "type": "message",
                "content": [
                    {
                        "type": "output_text",
                        "text": text,
                        "annotations": annotations or [],
                    }
                ],
            }
        ],
    )


def fake_client(response: Any = None, error: Exception | None = None) -> SimpleNamespace:
    return SimpleNamespace(responses=FakeResponses(response=response, error=error))


@pytest.fixture
def make_response():
    return fake_response


@pytest.fixture
def make_client():
    return fake_client


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def briefing_json() -> str:
    return json.dumps(
        {
            "summary": "Risk assets firmed overnight.\nGold held near highs.",
            "keyTakeaways": ["NVDA led semis", "BTC reclaimed 60k", "Gold steady"],
            "sentimentScore": 64,
        }
    )


@pytest.fixture
def events_json() -> str:
    return json.dumps(
        {
            "events": [
                {
                    "date": "2024-05-01",
                    "time": "14:00 EDT",
                    "event": "FOMC rate decision",
                    "impact": "HIGH",
                    "forecast": "5.50%",
                    "previous": "5.50%",
                    "relatedAsset": "XAU",
                },
                {
                    "date": "2024-05-03",
                    "time": "08:30 EDT",
                    "event": "Nonfarm payrolls",
                    "impact": "HIGH",
                    "forecast": "240K",
                    "previous": None,
                    "relatedAsset": None,
                },
            ]
        }
    )
