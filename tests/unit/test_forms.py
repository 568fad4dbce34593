"""
Unit tests for asset and debt form controllers.

Tests cover:
- Modal state transitions (create, edit, close, one form at a time)
- Current-value visibility rule for market-priced stocks
- Payload construction and client-side validation
- Submit success and failure handling
"""

import pytest

from finance_dashboard.controllers.forms import (
    AssetFormController,
    DebtFormController,
    ModalState,
    current_value_required,
)
from finance_dashboard.controllers.notifications import NotificationLevel
from finance_dashboard.core.exceptions import ValidationError


@pytest.fixture
def asset_form(api, notifier) -> AssetFormController:
    return AssetFormController(api, notifier)


@pytest.fixture
def debt_form(api, notifier) -> DebtFormController:
    return DebtFormController(api, notifier)


def fill(form, **values) -> None:
    for name, value in values.items():
        form.set_field(name, value)


# =============================================================================
# VISIBILITY RULE
# =============================================================================


class TestCurrentValueRule:
    """Tests for the current-value visibility rule."""

    @pytest.mark.parametrize(
        "asset_type,source,expected",
        [
            ("stock", "market_api", False),
            ("stock", "manual", True),
            ("property", "market_api", True),
            ("cash", "manual", True),
        ],
    )
    def test_rule(self, asset_type, source, expected):
        assert current_value_required(asset_type, source) is expected

    def test_field_hidden_and_optional_for_market_stock(self, asset_form):
        """
        GIVEN an open asset form
        WHEN type is stock and source is market_api
        THEN current value is hidden and not required
        """
        asset_form.open_create(today="2024-03-05")

        fill(asset_form, type="stock", source="market_api")

        field = asset_form.fields["current_value"]
        assert not field.visible
        assert not field.required

    def test_field_reappears_when_source_changes(self, asset_form):
        asset_form.open_create(today="2024-03-05")
        fill(asset_form, type="stock", source="market_api")

        asset_form.set_field("source", "manual")

        field = asset_form.fields["current_value"]
        assert field.visible
        assert field.required


# =============================================================================
# MODAL STATE
# =============================================================================


class TestModalState:
    """Tests for open/close transitions."""

    def test_open_create_defaults(self, asset_form):
        """
        GIVEN a closed asset form
        WHEN I open it for create
        THEN fields hold their defaults and the date is today
        """
        assert asset_form.open_create(today="2024-03-05")

        assert asset_form.state is ModalState.CREATE
        assert asset_form.editing_id is None
        assert asset_form.title == "Add New Asset"
        values = asset_form.values()
        assert values["type"] == "stock"
        assert values["source"] == "manual"
        assert values["currency"] == "USD"
        assert values["purchase_date"] == "2024-03-05"
        assert values["name"] == ""

    def test_second_open_is_rejected(self, asset_form):
        asset_form.open_create()

        assert not asset_form.open_create()
        assert asset_form.state is ModalState.CREATE

    def test_reopen_after_close_resets_fields(self, asset_form):
        asset_form.open_create(today="2024-03-05")
        fill(asset_form, name="Old")
        asset_form.close()

        asset_form.open_create(today="2024-03-05")

        assert asset_form.values()["name"] == ""

    def test_open_edit_prefills_from_fetched_record(self, asset_form, backend, asset_factory):
        """
        GIVEN an asset on the service
        WHEN I open the form to edit it
        THEN fields are pre-filled and immutable fields are disabled
        """
        backend.add("GET", "/assets/a1", asset_factory(id="a1", name="Apple", quantity=2.5))

        assert asset_form.open_edit("a1")

        assert asset_form.state is ModalState.EDIT
        assert asset_form.editing_id == "a1"
        assert asset_form.title == "Edit Asset"
        values = asset_form.values()
        assert values["name"] == "Apple"
        assert values["quantity"] == "2.5"
        assert values["buy_price"] == "100"
        assert values["purchase_date"] == "2024-03-05"
        assert not asset_form.fields["type"].enabled
        assert not asset_form.fields["buy_price"].enabled
        assert asset_form.fields["name"].enabled

    def test_open_edit_failure_stays_closed(self, asset_form, backend, notifier):
        backend.add("GET", "/assets/gone", {"error": "not found"}, status=404)

        assert not asset_form.open_edit("gone")

        assert asset_form.state is ModalState.CLOSED
        assert notifier.last == ("not found", NotificationLevel.ERROR)

    def test_close_clears_editing_id(self, asset_form, backend, asset_factory):
        backend.add("GET", "/assets/a1", asset_factory(id="a1"))
        asset_form.open_edit("a1")

        asset_form.close()

        assert asset_form.state is ModalState.CLOSED
        assert asset_form.editing_id is None


# =============================================================================
# ASSET SUBMIT
# =============================================================================


class TestAssetSubmit:
    """Tests for asset create/update submission."""

    def test_create_payload_is_numeric(self, asset_form, backend, asset_factory, notifier):
        """
        GIVEN a filled create form
        WHEN I submit it
        THEN the POST body carries exactly the create fields with numbers
        AND the form closes with a success notification
        """
        backend.add("POST", "/assets", asset_factory(id="new"), status=201)
        asset_form.open_create(today="2024-03-05")
        fill(asset_form, name=" Apple ", buy_price="100", current_value="150.5", quantity="2")

        result = asset_form.submit()

        assert result.ok
        assert result.action == "created"
        assert result.record_id == "new"
        assert backend.calls("POST", "/assets")[0].json() == {
            "name": "Apple",
            "type": "stock",
            "buy_price": 100.0,
            "current_value": 150.5,
            "quantity": 2.0,
            "currency": "USD",
            "purchase_date": "2024-03-05",
            "source": "manual",
        }
        assert asset_form.state is ModalState.CLOSED
        assert notifier.last == ("Asset created successfully!", NotificationLevel.SUCCESS)

    def test_hidden_current_value_is_not_sent(self, asset_form, backend, asset_factory):
        backend.add("POST", "/assets", asset_factory(id="new"), status=201)
        asset_form.open_create(today="2024-03-05")
        fill(
            asset_form,
            name="AAPL",
            buy_price="100",
            current_value="999",
            quantity="1",
            source="market_api",
        )

        assert asset_form.submit().ok

        body = backend.calls("POST", "/assets")[0].json()
        assert "current_value" not in body
        assert body["source"] == "market_api"

    def test_missing_required_field_sends_nothing(self, asset_form, backend, notifier):
        asset_form.open_create(today="2024-03-05")
        fill(asset_form, name="", buy_price="100", current_value="1", quantity="1")

        result = asset_form.submit()

        assert not result.ok
        assert backend.requests == []
        assert asset_form.is_open
        assert notifier.last == ("Name is required", NotificationLevel.ERROR)

    def test_non_numeric_input_is_rejected(self, asset_form, backend, notifier):
        asset_form.open_create(today="2024-03-05")
        fill(asset_form, name="A", buy_price="abc", current_value="1", quantity="1")

        result = asset_form.submit()

        assert not result.ok
        assert backend.requests == []
        assert notifier.last == ("Buy Price must be a number", NotificationLevel.ERROR)

    def test_invalid_currency_is_rejected(self, asset_form, backend):
        asset_form.open_create(today="2024-03-05")
        fill(asset_form, name="A", buy_price="1", current_value="1", quantity="1", currency="ZZZ")

        assert not asset_form.submit().ok
        assert backend.requests == []

    def test_update_sends_only_mutable_fields(self, asset_form, backend, asset_factory, notifier):
        """
        GIVEN an asset open for edit
        WHEN I change name and quantity and submit
        THEN the PUT carries name, current value, quantity and source only
        """
        backend.add("GET", "/assets/a1", asset_factory(id="a1"))
        backend.add("PUT", "/assets/a1", asset_factory(id="a1", name="Apple Inc"))
        asset_form.open_edit("a1")
        fill(asset_form, name="Apple Inc", quantity="3")

        result = asset_form.submit()

        assert result.ok
        assert result.action == "updated"
        assert backend.calls("PUT", "/assets/a1")[0].json() == {
            "name": "Apple Inc",
            "current_value": 150.0,
            "quantity": 3.0,
            "source": "manual",
        }
        assert notifier.last == ("Asset updated successfully!", NotificationLevel.SUCCESS)

    def test_service_error_keeps_form_open(self, asset_form, backend, notifier):
        backend.add("POST", "/assets", {"error": "duplicate asset"}, status=409)
        asset_form.open_create(today="2024-03-05")
        fill(asset_form, name="A", buy_price="1", current_value="1", quantity="1")

        result = asset_form.submit()

        assert not result.ok
        assert asset_form.state is ModalState.CREATE
        assert notifier.last == ("duplicate asset", NotificationLevel.ERROR)

    def test_submit_when_closed(self, asset_form, backend):
        result = asset_form.submit()

        assert not result.ok
        assert backend.requests == []


# =============================================================================
# DEBT SUBMIT
# =============================================================================


class TestDebtSubmit:
    """Tests for debt create/update submission."""

    def test_create_omits_blank_optionals(self, debt_form, backend, debt_factory):
        """
        GIVEN a debt form with no current value or interest rate
        WHEN I submit it
        THEN those fields are left out of the payload
        """
        backend.add("POST", "/debts", debt_factory(id="d1"), status=201)
        debt_form.open_create(today="2024-01-01")
        fill(debt_form, name="Car loan", type="loan", principal="12000")

        assert debt_form.submit().ok

        assert backend.calls("POST", "/debts")[0].json() == {
            "name": "Car loan",
            "type": "loan",
            "principal": 12000.0,
            "currency": "USD",
            "start_date": "2024-01-01",
        }

    def test_create_with_all_fields(self, debt_form, backend, debt_factory):
        backend.add("POST", "/debts", debt_factory(id="d1"), status=201)
        debt_form.open_create(today="2024-01-01")
        fill(
            debt_form,
            name="Home",
            type="mortgage",
            principal="300000",
            current_value="250000",
            interest_rate="3.25",
            currency="eur",
        )

        assert debt_form.submit().ok

        body = backend.calls("POST", "/debts")[0].json()
        assert body["current_value"] == 250000.0
        assert body["interest_rate"] == 3.25
        assert body["currency"] == "EUR"

    def test_bad_start_date(self, debt_form, backend, notifier):
        debt_form.open_create(today="2024-01-01")
        fill(debt_form, name="X", principal="1", start_date="01/02/2024")

        assert not debt_form.submit().ok
        assert backend.requests == []
        assert "Start Date" in notifier.last[0]

    def test_update_payload(self, debt_form, backend, debt_factory):
        backend.add("GET", "/debts/d1", debt_factory(id="d1"))
        backend.add("PUT", "/debts/d1", status=204)
        debt_form.open_edit("d1")
        fill(debt_form, interest_rate="")

        assert debt_form.submit().ok

        assert backend.calls("PUT", "/debts/d1")[0].json() == {
            "name": "Visa",
            "current_value": 3200.0,
        }

    def test_edit_prefill(self, debt_form, backend, debt_factory):
        backend.add("GET", "/debts/d1", debt_factory(id="d1"))

        debt_form.open_edit("d1")

        values = debt_form.values()
        assert values["principal"] == "5000"
        assert values["interest_rate"] == "19.9"
        assert values["start_date"] == "2023-01-15"
        assert not debt_form.fields["principal"].enabled


class TestFieldValidation:
    """Tests for direct payload building."""

    def test_infinite_number_rejected(self, asset_form):
        asset_form.open_create(today="2024-03-05")
        fill(asset_form, name="A", buy_price="inf", current_value="1", quantity="1")

        with pytest.raises(ValidationError):
            asset_form.build_create_payload()
