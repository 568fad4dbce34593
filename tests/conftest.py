"""
Pytest configuration and fixtures for finance dashboard tests.

This module provides:
- A fake backend mounted on a requests.Session (canned responses, recorded requests)
- An API client fixture wired to the fake backend
- A recording notifier and a fake chart surface
- Factory helpers for asset and debt payloads
"""

import json
import uuid
from dataclasses import dataclass
from http.client import responses as HTTP_REASONS
from typing import Any, Callable, Optional
from urllib.parse import urlsplit

import pytest
import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

from finance_dashboard.api.client import FinanceAPI
from finance_dashboard.config.settings import Settings, reset_settings, set_settings
from finance_dashboard.controllers.charts import ChartData
from finance_dashboard.controllers.notifications import NotificationLevel


BASE_URL = "http://testserver/api/v1"
API_PREFIX = urlsplit(BASE_URL).path


# =============================================================================
# SETTINGS
# =============================================================================


@pytest.fixture(autouse=True)
def _reset_settings():
    """Every test starts from default settings."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def settings() -> Settings:
    """Default settings, ignoring any local .env file."""
    test_settings = Settings(_env_file=None)
    set_settings(test_settings)
    return test_settings


# =============================================================================
# FAKE BACKEND
# =============================================================================


@dataclass
class RecordedRequest:
    """A request as seen by the fake backend."""

    method: str
    path: str
    headers: CaseInsensitiveDict
    body: Any
    timeout: Any

    def json(self) -> Any:
        raw = self.body.decode("utf-8") if isinstance(self.body, bytes) else self.body
        return json.loads(raw)


@dataclass
class CannedResponse:
    status: int = 200
    body: Optional[bytes] = b""
    reason: Optional[str] = None
    content_type: str = "application/json"


class FakeBackendAdapter(BaseAdapter):
    """
    Transport adapter standing in for the finance service.

    Routes are keyed by (method, endpoint) where the endpoint is the path
    below the API prefix, e.g. ("GET", "/assets"). Unknown routes answer
    404 with a service-style error body.
    """

    def __init__(self):
        super().__init__()
        self.routes: dict[tuple[str, str], list[CannedResponse]] = {}
        self.requests: list[RecordedRequest] = []
        self.failure: Optional[Exception] = None

    def add(
        self,
        method: str,
        endpoint: str,
        json_body: Any = None,
        status: int = 200,
        body: Optional[bytes] = None,
        reason: Optional[str] = None,
        content_type: str = "application/json",
    ) -> None:
        """
        Queue a response for a route.

        Several responses queued on one route are served in order; the
        last one keeps being served once the others are used up.
        """
        if body is None:
            body = b"" if json_body is None else json.dumps(json_body).encode("utf-8")
        canned = CannedResponse(status=status, body=body, reason=reason, content_type=content_type)
        self.routes.setdefault((method.upper(), endpoint), []).append(canned)

    def fail_with(self, error: Exception) -> None:
        """Make every following request raise a transport error."""
        self.failure = error

    def calls(self, method: Optional[str] = None, endpoint: Optional[str] = None) -> list[RecordedRequest]:
        return [
            r for r in self.requests
            if (method is None or r.method == method) and (endpoint is None or r.path == endpoint)
        ]

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        path = urlsplit(request.url).path
        endpoint = path[len(API_PREFIX):] if path.startswith(API_PREFIX) else path
        self.requests.append(
            RecordedRequest(
                method=request.method,
                path=endpoint,
                headers=CaseInsensitiveDict(request.headers),
                body=request.body,
                timeout=timeout,
            )
        )

        if self.failure is not None:
            raise self.failure

        queued = self.routes.get((request.method, endpoint))
        if queued:
            canned = queued.pop(0) if len(queued) > 1 else queued[0]
        else:
            canned = CannedResponse(
                status=404,
                body=json.dumps({"error": f"no route for {request.method} {endpoint}"}).encode(),
            )

        response = requests.Response()
        response.status_code = canned.status
        response.reason = canned.reason if canned.reason is not None else HTTP_REASONS.get(canned.status, "")
        response._content = canned.body or b""
        response.headers = CaseInsensitiveDict({"Content-Type": canned.content_type})
        response.encoding = "utf-8"
        response.url = request.url
        response.request = request
        return response

    def close(self) -> None:
        pass


@pytest.fixture
def backend() -> FakeBackendAdapter:
    return FakeBackendAdapter()


@pytest.fixture
def api(backend: FakeBackendAdapter) -> FinanceAPI:
    """API client whose every request lands in the fake backend."""
    session = requests.Session()
    session.mount("http://", backend)
    client = FinanceAPI(BASE_URL, timeout=5, session=session)
    yield client
    client.close()


# =============================================================================
# NOTIFIER AND CHARTS
# =============================================================================


class RecordingNotifier:
    """Collects notifications instead of showing them."""

    def __init__(self):
        self.notifications: list[tuple[str, NotificationLevel]] = []

    def notify(self, message: str, level: NotificationLevel = NotificationLevel.SUCCESS) -> None:
        self.notifications.append((message, level))

    def messages(self, level: Optional[NotificationLevel] = None) -> list[str]:
        return [m for m, lvl in self.notifications if level is None or lvl is level]

    @property
    def last(self) -> Optional[tuple[str, NotificationLevel]]:
        return self.notifications[-1] if self.notifications else None


class FakeChart:
    def __init__(self, surface: "FakeChartSurface", slot: str, number: int, data: Optional[ChartData]):
        self.surface = surface
        self.slot = slot
        self.number = number
        self.data = data
        self.destroyed = False

    def destroy(self) -> None:
        self.destroyed = True
        self.surface.events.append(("destroy", self.slot, self.number))


class FakeChartSurface:
    """
    Records chart lifecycle events as (action, slot, chart number).

    action is "create", "placeholder" or "destroy".
    """

    def __init__(self):
        self.events: list[tuple[str, str, int]] = []
        self.charts: list[FakeChart] = []
        self.placeholder_messages: list[str] = []

    def _new(self, action: str, slot: str, data: Optional[ChartData]) -> FakeChart:
        chart = FakeChart(self, slot, len(self.charts) + 1, data)
        self.charts.append(chart)
        self.events.append((action, slot, chart.number))
        return chart

    def create_chart(self, slot: str, data: ChartData) -> FakeChart:
        return self._new("create", slot, data)

    def create_placeholder(self, slot: str, message: str) -> FakeChart:
        self.placeholder_messages.append(message)
        return self._new("placeholder", slot, None)

    def live(self) -> list[FakeChart]:
        return [c for c in self.charts if not c.destroyed]


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def chart_surface() -> FakeChartSurface:
    return FakeChartSurface()


# =============================================================================
# PAYLOAD FACTORIES
# =============================================================================


@pytest.fixture
def asset_factory() -> Callable[..., dict]:
    """Factory for asset records as the service returns them."""

    def _create_asset(**overrides) -> dict:
        record = {
            "id": str(uuid.uuid4()),
            "name": "Apple Inc.",
            "type": "stock",
            "buy_price": 100.0,
            "current_value": 150.0,
            "quantity": 2.0,
            "currency": "USD",
            "purchase_date": "2024-03-05T00:00:00Z",
            "source": "manual",
            "created_at": "2024-03-05T10:00:00Z",
            "updated_at": "2024-03-05T10:00:00Z",
        }
        record.update(overrides)
        return record

    return _create_asset


@pytest.fixture
def debt_factory() -> Callable[..., dict]:
    """Factory for debt records as the service returns them."""

    def _create_debt(**overrides) -> dict:
        record = {
            "id": str(uuid.uuid4()),
            "name": "Visa",
            "type": "credit_card",
            "principal": 5000.0,
            "current_value": 3200.0,
            "interest_rate": 19.9,
            "currency": "USD",
            "start_date": "2023-01-15T00:00:00Z",
            "created_at": "2023-01-15T10:00:00Z",
            "updated_at": "2023-01-15T10:00:00Z",
        }
        record.update(overrides)
        return record

    return _create_debt
