"""Create/edit form state for assets and debts."""

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from finance_dashboard.api.client import FinanceAPI
from finance_dashboard.api.schemas import (
    Asset,
    AssetCreate,
    AssetUpdate,
    Debt,
    DebtCreate,
    DebtUpdate,
)
from finance_dashboard.config.settings import get_settings
from finance_dashboard.controllers.base import MutationResult
from finance_dashboard.controllers.notifications import (
    NotificationLevel,
    Notifier,
    handle_error,
)
from finance_dashboard.core.exceptions import AppError, ValidationError
from finance_dashboard.core.formatting import (
    INPUT_DATE_FORMAT,
    format_date_for_input,
    format_number,
    is_valid_currency,
    normalize_currency,
    today_for_input,
)
from finance_dashboard.domain.enums import AssetSource, AssetType, DebtType

logger = logging.getLogger(__name__)


class ModalState(str, Enum):
    """Whether the form is closed, or open for create or edit."""

    CLOSED = "closed"
    CREATE = "create"
    EDIT = "edit"


@dataclass
class FormField:
    """A single string-valued form input and its presentation flags."""

    name: str
    label: str
    default: str = ""
    required: bool = True
    mutable: bool = True
    choices: tuple[str, ...] = ()
    value: str = ""
    visible: bool = True
    enabled: bool = True

    @property
    def text(self) -> str:
        return self.value.strip()

    def reset(self) -> None:
        self.value = self.default
        self.visible = True
        self.enabled = True


def parse_number(form_field: FormField) -> Optional[float]:
    """Parse a numeric input; blank input means 'not provided'."""
    text = form_field.text
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        raise ValidationError(f"{form_field.label} must be a number")
    if not math.isfinite(number):
        raise ValidationError(f"{form_field.label} must be a number")
    return number


def parse_required_number(form_field: FormField) -> float:
    number = parse_number(form_field)
    if number is None:
        raise ValidationError(f"{form_field.label} is required")
    return number


def parse_input_date(form_field: FormField) -> str:
    """Validate a YYYY-MM-DD input and return it unchanged."""
    text = form_field.text
    try:
        datetime.strptime(text, INPUT_DATE_FORMAT)
    except ValueError:
        raise ValidationError(f"{form_field.label} must be a date (YYYY-MM-DD)")
    return text


def parse_currency(form_field: FormField) -> str:
    code = normalize_currency(form_field.value)
    if not is_valid_currency(code):
        raise ValidationError(f"Unsupported currency code: {code}")
    return code


def current_value_required(asset_type: str, source: str) -> bool:
    """
    Whether an asset's current value must be entered by hand.

    Stocks priced by the market data API get their value from the
    service, so the field is hidden and optional for them.
    """
    return not (asset_type == AssetType.STOCK.value and source == AssetSource.MARKET_API.value)


class EntityFormController:
    """
    Modal form for one entity kind.

    At most one form session per kind: CLOSED -> CREATE | EDIT(id) -> CLOSED.
    The editing id always comes from a record fetched from the service.
    """

    entity_label = "Record"
    date_field = ""

    def __init__(self, api: FinanceAPI, notifier: Notifier):
        self.api = api
        self.notifier = notifier
        self.state = ModalState.CLOSED
        self.editing_id: Optional[str] = None
        self.fields: dict[str, FormField] = {f.name: f for f in self._build_fields()}

    # -- subclass hooks -------------------------------------------------

    def _build_fields(self) -> list[FormField]:
        raise NotImplementedError

    def _fetch(self, record_id: str) -> Any:
        raise NotImplementedError

    def _prefill(self, record: Any) -> None:
        raise NotImplementedError

    def _create(self) -> Optional[str]:
        raise NotImplementedError

    def _update(self, record_id: str) -> None:
        raise NotImplementedError

    def _apply_rules(self) -> None:
        """Recompute field visibility/required flags."""

    # -- state ----------------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self.state is not ModalState.CLOSED

    @property
    def title(self) -> str:
        if self.state is ModalState.EDIT:
            return f"Edit {self.entity_label}"
        return f"Add New {self.entity_label}"

    def values(self) -> dict[str, str]:
        return {name: f.value for name, f in self.fields.items()}

    def set_field(self, name: str, value: Optional[str]) -> None:
        self.fields[name].value = "" if value is None else str(value)
        self._apply_rules()

    def _claim(self) -> bool:
        if self.is_open:
            logger.warning("%s form is already open", self.entity_label)
            return False
        return True

    def open_create(self, today: Optional[str] = None) -> bool:
        """Open an empty form with the date defaulted to today."""
        if not self._claim():
            return False
        for form_field in self.fields.values():
            form_field.reset()
        if self.date_field:
            self.fields[self.date_field].value = today or today_for_input()
        self.editing_id = None
        self.state = ModalState.CREATE
        self._apply_rules()
        return True

    def open_edit(self, record_id: str) -> bool:
        """Fetch a record and open the form pre-filled with it."""
        if not self._claim():
            return False
        try:
            record = self._fetch(record_id)
        except AppError as e:
            handle_error(e, self.notifier)
            return False

        for form_field in self.fields.values():
            form_field.reset()
            form_field.enabled = form_field.mutable
        self._prefill(record)
        self.editing_id = record.id
        self.state = ModalState.EDIT
        self._apply_rules()
        return True

    def close(self) -> None:
        self.state = ModalState.CLOSED
        self.editing_id = None

    def _check_required(self) -> None:
        for form_field in self.fields.values():
            if not (form_field.visible and form_field.enabled and form_field.required):
                continue
            if not form_field.text:
                raise ValidationError(f"{form_field.label} is required")

    def submit(self) -> MutationResult:
        """
        Validate and send the form.

        On success the form closes; the caller refreshes the matching list.
        On failure the form stays open so the user can correct it.
        """
        if not self.is_open:
            return MutationResult(ok=False, action="failed", message="Form is not open")

        try:
            self._check_required()
            if self.state is ModalState.EDIT:
                record_id = self.editing_id
                self._update(record_id)
                action = "updated"
            else:
                record_id = self._create()
                action = "created"
        except AppError as e:
            message = handle_error(e, self.notifier)
            return MutationResult(ok=False, action="failed", message=message)

        message = f"{self.entity_label} {action} successfully!"
        self.notifier.notify(message, NotificationLevel.SUCCESS)
        self.close()
        return MutationResult(ok=True, action=action, record_id=record_id, message=message)


class AssetFormController(EntityFormController):
    """Form for creating and editing assets."""

    entity_label = "Asset"
    date_field = "purchase_date"

    def _build_fields(self) -> list[FormField]:
        return [
            FormField("name", "Name"),
            FormField(
                "type",
                "Type",
                default=AssetType.STOCK.value,
                mutable=False,
                choices=tuple(t.value for t in AssetType),
            ),
            FormField("buy_price", "Buy Price", mutable=False),
            FormField("current_value", "Current Value"),
            FormField("quantity", "Quantity"),
            FormField("currency", "Currency", default=get_settings().default_currency, mutable=False),
            FormField("purchase_date", "Purchase Date", mutable=False),
            FormField(
                "source",
                "Source",
                default=AssetSource.MANUAL.value,
                choices=tuple(s.value for s in AssetSource),
            ),
        ]

    def _apply_rules(self) -> None:
        current_value = self.fields["current_value"]
        shown = current_value_required(self.fields["type"].value, self.fields["source"].value)
        current_value.visible = shown
        current_value.required = shown

    def _fetch(self, record_id: str) -> Asset:
        return self.api.get_asset(record_id)

    def _prefill(self, asset: Asset) -> None:
        self.fields["name"].value = asset.name
        self.fields["type"].value = asset.type
        self.fields["buy_price"].value = format_number(asset.buy_price)
        self.fields["current_value"].value = (
            format_number(asset.current_value) if asset.current_value is not None else ""
        )
        self.fields["quantity"].value = format_number(asset.quantity)
        self.fields["currency"].value = asset.currency or "USD"
        self.fields["purchase_date"].value = format_date_for_input(asset.purchase_date)
        self.fields["source"].value = asset.source or AssetSource.MANUAL.value

    def _current_value(self) -> Optional[float]:
        form_field = self.fields["current_value"]
        if not form_field.visible:
            return None
        return parse_number(form_field)

    def build_create_payload(self) -> AssetCreate:
        try:
            asset_type = AssetType(self.fields["type"].value)
            source = AssetSource(self.fields["source"].value)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        return AssetCreate(
            name=self.fields["name"].text,
            type=asset_type,
            buy_price=parse_required_number(self.fields["buy_price"]),
            current_value=self._current_value(),
            quantity=parse_required_number(self.fields["quantity"]),
            currency=parse_currency(self.fields["currency"]),
            purchase_date=parse_input_date(self.fields["purchase_date"]),
            source=source,
        )

    def build_update_payload(self) -> AssetUpdate:
        try:
            source = AssetSource(self.fields["source"].value)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        return AssetUpdate(
            name=self.fields["name"].text,
            current_value=self._current_value(),
            quantity=parse_number(self.fields["quantity"]),
            source=source,
        )

    def _create(self) -> Optional[str]:
        created = self.api.create_asset(self.build_create_payload())
        return created.id if created else None

    def _update(self, record_id: str) -> None:
        self.api.update_asset(record_id, self.build_update_payload())


class DebtFormController(EntityFormController):
    """Form for creating and editing debts."""

    entity_label = "Debt"
    date_field = "start_date"

    def _build_fields(self) -> list[FormField]:
        return [
            FormField("name", "Name"),
            FormField(
                "type",
                "Type",
                default=DebtType.CREDIT_CARD.value,
                mutable=False,
                choices=tuple(t.value for t in DebtType),
            ),
            FormField("principal", "Principal", mutable=False),
            FormField("current_value", "Current Value", required=False),
            FormField("interest_rate", "Interest Rate (%)", required=False),
            FormField("currency", "Currency", default=get_settings().default_currency, mutable=False),
            FormField("start_date", "Start Date", mutable=False),
        ]

    def _fetch(self, record_id: str) -> Debt:
        return self.api.get_debt(record_id)

    def _prefill(self, debt: Debt) -> None:
        self.fields["name"].value = debt.name
        self.fields["type"].value = debt.type
        self.fields["principal"].value = format_number(debt.principal)
        self.fields["current_value"].value = format_number(debt.current_value)
        self.fields["interest_rate"].value = format_number(debt.interest_rate)
        self.fields["currency"].value = debt.currency or "USD"
        self.fields["start_date"].value = format_date_for_input(debt.start_date)

    def build_create_payload(self) -> DebtCreate:
        try:
            debt_type = DebtType(self.fields["type"].value)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        return DebtCreate(
            name=self.fields["name"].text,
            type=debt_type,
            principal=parse_required_number(self.fields["principal"]),
            current_value=parse_number(self.fields["current_value"]),
            currency=parse_currency(self.fields["currency"]),
            interest_rate=parse_number(self.fields["interest_rate"]),
            start_date=parse_input_date(self.fields["start_date"]),
        )

    def build_update_payload(self) -> DebtUpdate:
        return DebtUpdate(
            name=self.fields["name"].text,
            current_value=parse_number(self.fields["current_value"]),
            interest_rate=parse_number(self.fields["interest_rate"]),
        )

    def _create(self) -> Optional[str]:
        created = self.api.create_debt(self.build_create_payload())
        return created.id if created else None

    def _update(self, record_id: str) -> None:
        self.api.update_debt(record_id, self.build_update_payload())
