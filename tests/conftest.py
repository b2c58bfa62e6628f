"""
Pytest configuration and fixtures for Project Hub tests.
"""

import json
from typing import Callable, List

import httpx
import pytest

from schemas.project import Project
from services.telerivet_client import TelerivetTable


@pytest.fixture
def sample_projects() -> List[Project]:
    """The five-project marketplace used across filter tests."""
    return [
        Project(
            title="Marketing Campaign Hub",
            description="Plan and track multi-channel SMS campaigns.",
            serial_no="1",
            category="Marketing",
            industry=["FMCG", "Health"],
            time_updated="2024-03-15T23:59:59Z",
            row_id="RW1",
        ),
        Project(
            title="Customer Success Portal",
            description="Two-way support messaging for beneficiaries.",
            serial_no="2",
            category="Support",
            industry=["NGO", "Education"],
            time_updated=1700000000,
            row_id="RW2",
        ),
        Project(
            title="Product Launch Workspace",
            description="Coordinate launch announcements across regions.",
            serial_no="3",
            category="Product",
            industry=["Technology"],
            time_updated=1700000000000,
            row_id="RW3",
        ),
        Project(
            title="Sales Enablement Hub",
            description="Field sales reminders and campaign follow-ups.",
            serial_no="4",
            category="Sales",
            industry=["FMCG", "Retail"],
            time_updated="March 1, 2024",
            row_id="RW4",
        ),
        Project(
            title="Event Management Center",
            description="Registration, reminders and check-in by SMS.",
            serial_no="5",
            category="Events",
            industry=["NGO", "Hospitality"],
            time_updated=None,
            row_id="RW5",
        ),
    ]


@pytest.fixture
def full_row() -> dict:
    """A Telerivet row with every var the mapper understands."""
    return {
        "id": "RW1",
        "time_updated": 1700000000,
        "vars": {
            "title": "Marketing Campaign Hub",
            "description": "Plan and track multi-channel SMS campaigns.",
            "s_n": "12",
            "category": "Marketing",
            "industry": "FMCG, Health ,",
            "applicable_route": "SMS, WhatsApp",
            "card_image": "https://img.example/1.png",
            "canva_url": "https://canva.example/deck",
            "live_url": "https://live.example",
            "live_description": "Try it",
        },
    }


@pytest.fixture
def recorded_requests() -> List[httpx.Request]:
    return []


@pytest.fixture
def make_table(recorded_requests) -> Callable[..., TelerivetTable]:
    """
    Build a TelerivetTable whose HTTP calls go to `handler(request) -> httpx.Response`.
    Every request is appended to `recorded_requests`.
    """

    def _make(handler, **kwargs) -> TelerivetTable:
        def _recording_handler(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            return handler(request)

        options = dict(
            api_key="secret-key",
            project_id="PJ1",
            base_url="https://api.test/v1",
            max_retries=3,
            retry_backoff=0,
        )
        options.update(kwargs)
        table_id = options.pop("table_id", "TB1")
        return TelerivetTable(table_id, transport=httpx.MockTransport(_recording_handler), **options)

    return _make


def rows_response(rows: list) -> httpx.Response:
    return httpx.Response(200, json={"data": rows})


def request_json(request: httpx.Request) -> dict:
    return json.loads(request.content.decode("utf-8"))
