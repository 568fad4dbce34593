"""Management page: full listings, create/edit/delete, import/export."""

from pathlib import Path
from typing import Callable, Optional, Union

from finance_dashboard.api.client import FinanceAPI
from finance_dashboard.api.schemas import Asset, Debt
from finance_dashboard.controllers.base import MutationResult, PageController
from finance_dashboard.controllers.forms import (
    AssetFormController,
    DebtFormController,
)
from finance_dashboard.controllers.notifications import (
    NotificationLevel,
    Notifier,
    handle_error,
)
from finance_dashboard.controllers.tables import (
    ASSET_DETAIL_COLUMNS,
    DEBT_DETAIL_COLUMNS,
    HISTORY_COLUMNS,
    TableView,
    asset_detail_row,
    build_table,
    debt_detail_row,
    history_rows,
)
from finance_dashboard.controllers.transfer import TransferController
from finance_dashboard.core.exceptions import AppError
from finance_dashboard.core.formatting import DEFAULT_CURRENCY
from finance_dashboard.domain.enums import ExportFormat, TransferTarget

Confirm = Callable[[str], bool]
PathLike = Union[str, Path]


class ManageController(PageController):
    """
    Controller for the management page.

    Mutations never touch the displayed lists directly: after a
    successful create/update/delete/import the matching list is
    re-fetched from the service, then a "totals" section is emitted so
    page-wide figures such as net worth can be reloaded.
    """

    def __init__(self, api: FinanceAPI, notifier: Notifier, confirm: Confirm):
        super().__init__()
        self.api = api
        self.notifier = notifier
        self.confirm = confirm

        self.asset_form = AssetFormController(api, notifier)
        self.debt_form = DebtFormController(api, notifier)
        self.transfer = TransferController(api, notifier)

        self.assets_table = TableView(columns=ASSET_DETAIL_COLUMNS)
        self.debts_table = TableView(columns=DEBT_DETAIL_COLUMNS)
        self.history_table = TableView(columns=HISTORY_COLUMNS)
        self.assets_by_id: dict[str, Asset] = {}
        self.debts_by_id: dict[str, Debt] = {}

        self.handlers = {
            "load": self.load,
            "refresh": self.load,
            "asset:add": self.open_asset_create,
            "asset:edit": self.open_asset_edit,
            "asset:field": self.asset_form.set_field,
            "asset:submit": self.submit_asset,
            "asset:cancel": self.close_asset_form,
            "asset:delete": self.delete_asset,
            "asset:history": self.load_asset_history,
            "asset:import": self.import_assets,
            "asset:export": self.export_assets,
            "debt:add": self.open_debt_create,
            "debt:edit": self.open_debt_edit,
            "debt:field": self.debt_form.set_field,
            "debt:submit": self.submit_debt,
            "debt:cancel": self.close_debt_form,
            "debt:delete": self.delete_debt,
            "debt:import": self.import_debts,
            "debt:export": self.export_debts,
            "all:export": self.export_all,
        }

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------

    def load(self) -> None:
        self.refresh_assets()
        self.refresh_debts()

    def refresh_assets(self) -> TableView:
        try:
            assets = self.api.list_assets()
            self.assets_by_id = {asset.id: asset for asset in assets}
            self.assets_table = build_table(
                ASSET_DETAIL_COLUMNS,
                assets,
                asset_detail_row,
                empty_message='No assets found. Click "Add New Asset" to get started!',
            )
        except AppError as e:
            handle_error(e, self.notifier)
            self.assets_table = TableView.error(ASSET_DETAIL_COLUMNS, "Failed to load assets")
        self._emit("assets")
        return self.assets_table

    def refresh_debts(self) -> TableView:
        try:
            debts = self.api.list_debts()
            self.debts_by_id = {debt.id: debt for debt in debts}
            self.debts_table = build_table(
                DEBT_DETAIL_COLUMNS,
                debts,
                debt_detail_row,
                empty_message="No debts found.",
            )
        except AppError as e:
            handle_error(e, self.notifier)
            self.debts_table = TableView.error(DEBT_DETAIL_COLUMNS, "Failed to load debts")
        self._emit("debts")
        return self.debts_table

    def load_asset_history(self, asset_id: str, currency: Optional[str] = None) -> TableView:
        if currency is None:
            known = self.assets_by_id.get(asset_id)
            currency = known.currency if known else DEFAULT_CURRENCY
        try:
            points = self.api.get_asset_history(asset_id)
            if points:
                self.history_table = TableView(
                    columns=HISTORY_COLUMNS, rows=history_rows(points, currency)
                )
            else:
                self.history_table = TableView(
                    columns=HISTORY_COLUMNS, message="No history recorded for this asset."
                )
        except AppError as e:
            handle_error(e, self.notifier)
            self.history_table = TableView.error(HISTORY_COLUMNS, "Failed to load history")
        self._emit("history")
        return self.history_table

    # ------------------------------------------------------------------
    # Forms
    # ------------------------------------------------------------------

    def _opened(self, section: str, opened: bool) -> bool:
        if opened:
            self._emit(section)
        return opened

    def open_asset_create(self) -> bool:
        return self._opened("asset_form", self.asset_form.open_create())

    def open_asset_edit(self, asset_id: str) -> bool:
        return self._opened("asset_form", self.asset_form.open_edit(asset_id))

    def open_debt_create(self) -> bool:
        return self._opened("debt_form", self.debt_form.open_create())

    def open_debt_edit(self, debt_id: str) -> bool:
        return self._opened("debt_form", self.debt_form.open_edit(debt_id))

    def close_asset_form(self) -> None:
        self.asset_form.close()
        self._emit("asset_form")

    def close_debt_form(self) -> None:
        self.debt_form.close()
        self._emit("debt_form")

    def _changed(self, refresh: Callable[[], TableView]) -> None:
        refresh()
        self._emit("totals")

    def submit_asset(self) -> MutationResult:
        result = self.asset_form.submit()
        if result.ok:
            self._emit("asset_form")
            self._changed(self.refresh_assets)
        return result

    def submit_debt(self) -> MutationResult:
        result = self.debt_form.submit()
        if result.ok:
            self._emit("debt_form")
            self._changed(self.refresh_debts)
        return result

    # ------------------------------------------------------------------
    # Deletes
    # ------------------------------------------------------------------

    def _delete(
        self,
        label: str,
        record_id: str,
        name: str,
        delete: Callable[[str], None],
        refresh: Callable[[], TableView],
    ) -> MutationResult:
        if not self.confirm(f'Are you sure you want to delete "{name}"?'):
            return MutationResult(ok=False, action="cancelled", record_id=record_id)

        try:
            delete(record_id)
        except AppError as e:
            message = handle_error(e, self.notifier)
            return MutationResult(ok=False, action="failed", record_id=record_id, message=message)

        message = f"{label} deleted successfully!"
        self.notifier.notify(message, NotificationLevel.SUCCESS)
        self._changed(refresh)
        return MutationResult(ok=True, action="deleted", record_id=record_id, message=message)

    def delete_asset(self, asset_id: str, name: str) -> MutationResult:
        return self._delete("Asset", asset_id, name, self.api.delete_asset, self.refresh_assets)

    def delete_debt(self, debt_id: str, name: str) -> MutationResult:
        return self._delete("Debt", debt_id, name, self.api.delete_debt, self.refresh_debts)

    # ------------------------------------------------------------------
    # Import / export
    # ------------------------------------------------------------------

    def import_assets(self, path: PathLike) -> MutationResult:
        result = self.transfer.import_file(TransferTarget.ASSETS, path)
        if result.ok:
            self._changed(self.refresh_assets)
        return result

    def import_debts(self, path: PathLike) -> MutationResult:
        result = self.transfer.import_file(TransferTarget.DEBTS, path)
        if result.ok:
            self._changed(self.refresh_debts)
        return result

    def export_assets(self, fmt: ExportFormat, destination: PathLike) -> MutationResult:
        return self.transfer.export_to(TransferTarget.ASSETS, fmt, destination)

    def export_debts(self, fmt: ExportFormat, destination: PathLike) -> MutationResult:
        return self.transfer.export_to(TransferTarget.DEBTS, fmt, destination)

    def export_all(self, destination: PathLike) -> MutationResult:
        return self.transfer.export_to(TransferTarget.ALL, ExportFormat.JSON, destination)

    def teardown(self) -> None:
        self.asset_form.close()
        self.debt_form.close()
        super().teardown()
