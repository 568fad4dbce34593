"""HTTP client for the finance tracking REST service."""

import json
import logging
from typing import Any, Mapping, Optional, Type, TypeVar, Union
from urllib.parse import quote

import requests
from pydantic import BaseModel, ValidationError as SchemaError

from finance_dashboard.api.schemas import (
    Asset,
    AssetCreate,
    AssetHistory,
    AssetUpdate,
    Debt,
    DebtCreate,
    DebtUpdate,
    HealthStatus,
    ImportResult,
    NetWorth,
    Summary,
)
from finance_dashboard.config.settings import Settings, get_settings
from finance_dashboard.core.exceptions import ApiError, ValidationError
from finance_dashboard.domain.enums import ExportFormat, TransferTarget

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)
Body = Union[BaseModel, bytes, str, None]

JSON_CONTENT_TYPE = "application/json"


def _segment(identifier: str) -> str:
    """Encode an identifier as a single URL path segment."""
    return quote(str(identifier), safe="")


class FinanceAPI:
    """
    Thin client over the finance REST service.

    Every failure (unreachable service, non-success status, malformed
    body) is raised as ApiError with a message ready for display.
    """

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Service root, e.g. http://localhost:8080/api/v1
            timeout: Per-request timeout in seconds (None waits forever)
            session: Optional pre-configured requests session
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "FinanceAPI":
        """Build a client from application settings."""
        settings = settings or get_settings()
        return cls(settings.api_base_url, timeout=settings.api_timeout_seconds)

    def close(self) -> None:
        self._session.close()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def url_for(self, endpoint: str) -> str:
        return f"{self.base_url}{endpoint}"

    def send(
        self,
        method: str,
        endpoint: str,
        body: Body = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> requests.Response:
        """
        Issue a request and return the successful response.

        Raises ApiError on network failure or non-success status.
        """
        url = self.url_for(endpoint)
        request_headers = {"Content-Type": JSON_CONTENT_TYPE}
        request_headers.update(headers or {})

        if isinstance(body, BaseModel):
            data: Union[bytes, str, None] = body.model_dump_json(exclude_none=True)
        else:
            data = body

        logger.debug("%s %s", method, url)
        try:
            response = self._session.request(
                method,
                url,
                data=data,
                headers=request_headers,
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            raise ApiError(f"Request timed out after {self.timeout}s: {method} {endpoint}") from e
        except requests.RequestException as e:
            raise ApiError(f"Unable to reach the server at {self.base_url}") from e

        if not response.ok:
            raise ApiError(self._error_message(response), status=response.status_code)

        return response

    def request(
        self,
        method: str,
        endpoint: str,
        body: Body = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        """
        Issue a request and decode the JSON body.

        An empty body yields an empty dict rather than a parse error.
        """
        response = self.send(method, endpoint, body=body, headers=headers)

        text = response.text
        if not text:
            return {}
        try:
            return json.loads(text)
        except ValueError as e:
            raise ApiError(
                f"Malformed response from server: {method} {endpoint}",
                status=response.status_code,
            ) from e

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        """Prefer the service's {"error": ...} message over the status line."""
        try:
            payload = json.loads(response.text or "")
        except ValueError:
            payload = None

        if isinstance(payload, dict):
            message = payload.get("error")
            if isinstance(message, str) and message:
                return message

        return f"HTTP {response.status_code}: {response.reason or ''}".rstrip()

    # ------------------------------------------------------------------
    # Response decoding
    # ------------------------------------------------------------------

    @staticmethod
    def _parse(model: Type[ModelT], payload: Any) -> ModelT:
        try:
            return model.model_validate(payload)
        except SchemaError as e:
            raise ApiError(f"Unexpected {model.__name__} data from server") from e

    @classmethod
    def _parse_optional(cls, model: Type[ModelT], payload: Any) -> Optional[ModelT]:
        if not payload:
            return None
        return cls._parse(model, payload)

    @classmethod
    def _parse_list(cls, model: Type[ModelT], payload: Any) -> list[ModelT]:
        # The service encodes an empty collection as null
        if not payload:
            return []
        if not isinstance(payload, list):
            raise ApiError(f"Unexpected {model.__name__} list from server")
        return [cls._parse(model, item) for item in payload]

    # ------------------------------------------------------------------
    # Assets
    # ------------------------------------------------------------------

    def list_assets(self) -> list[Asset]:
        return self._parse_list(Asset, self.request("GET", "/assets"))

    def get_asset(self, asset_id: str) -> Asset:
        return self._parse(Asset, self.request("GET", f"/assets/{_segment(asset_id)}"))

    def create_asset(self, payload: AssetCreate) -> Optional[Asset]:
        return self._parse_optional(Asset, self.request("POST", "/assets", body=payload))

    def update_asset(self, asset_id: str, payload: AssetUpdate) -> Optional[Asset]:
        data = self.request("PUT", f"/assets/{_segment(asset_id)}", body=payload)
        return self._parse_optional(Asset, data)

    def delete_asset(self, asset_id: str) -> None:
        self.request("DELETE", f"/assets/{_segment(asset_id)}")

    def get_asset_history(self, asset_id: str) -> list[AssetHistory]:
        data = self.request("GET", f"/assets/{_segment(asset_id)}/history")
        return self._parse_list(AssetHistory, data)

    # ------------------------------------------------------------------
    # Debts
    # ------------------------------------------------------------------

    def list_debts(self) -> list[Debt]:
        return self._parse_list(Debt, self.request("GET", "/debts"))

    def get_debt(self, debt_id: str) -> Debt:
        return self._parse(Debt, self.request("GET", f"/debts/{_segment(debt_id)}"))

    def create_debt(self, payload: DebtCreate) -> Optional[Debt]:
        return self._parse_optional(Debt, self.request("POST", "/debts", body=payload))

    def update_debt(self, debt_id: str, payload: DebtUpdate) -> Optional[Debt]:
        data = self.request("PUT", f"/debts/{_segment(debt_id)}", body=payload)
        return self._parse_optional(Debt, data)

    def delete_debt(self, debt_id: str) -> None:
        self.request("DELETE", f"/debts/{_segment(debt_id)}")

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    def get_net_worth(self) -> NetWorth:
        return self._parse(NetWorth, self.request("GET", "/networth"))

    def get_summary(self) -> Summary:
        return self._parse(Summary, self.request("GET", "/summary"))

    def health_check(self) -> HealthStatus:
        return self._parse(HealthStatus, self.request("GET", "/health"))

    # ------------------------------------------------------------------
    # Import / export
    # ------------------------------------------------------------------

    @staticmethod
    def _export_path(target: TransferTarget, fmt: ExportFormat) -> str:
        target = TransferTarget(target)
        fmt = ExportFormat(fmt)
        if target is TransferTarget.ALL and fmt is not ExportFormat.JSON:
            raise ValidationError("A combined export is only available as JSON")
        return f"/export/{target.value}/{fmt.value}"

    def export_url(self, target: TransferTarget, fmt: ExportFormat) -> str:
        """Download URL of a server-generated export file."""
        return self.url_for(self._export_path(target, fmt))

    def download_export(self, target: TransferTarget, fmt: ExportFormat) -> bytes:
        """Fetch a server-generated export file as raw bytes."""
        response = self.send("GET", self._export_path(target, fmt))
        return response.content

    def import_records(
        self,
        target: TransferTarget,
        fmt: ExportFormat,
        body: bytes,
    ) -> ImportResult:
        """Upload a raw JSON/CSV file body for bulk import."""
        target = TransferTarget(target)
        fmt = ExportFormat(fmt)
        if target is TransferTarget.ALL:
            raise ValidationError("Imports must target assets or debts")

        data = self.request(
            "POST",
            f"/import/{target.value}/{fmt.value}",
            body=body,
            headers={"Content-Type": fmt.content_type},
        )
        return self._parse(ImportResult, data)
