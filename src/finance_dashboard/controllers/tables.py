"""Table render models for asset, debt and history listings."""

from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, Sequence, TypeVar

from finance_dashboard.api.schemas import Asset, AssetHistory, Debt
from finance_dashboard.core.formatting import (
    badge_slug,
    format_currency,
    format_date,
    format_number,
    format_percent,
    format_type_label,
)

RecordT = TypeVar("RecordT")

ASSET_SUMMARY_COLUMNS = ("Name", "Type", "Quantity", "Current Value", "Total Value", "Profit/Loss")
ASSET_DETAIL_COLUMNS = (
    "Name",
    "Type",
    "Buy Price",
    "Current Value",
    "Quantity",
    "Total Value",
    "Profit/Loss",
    "Purchase Date",
)
DEBT_SUMMARY_COLUMNS = ("Name", "Type", "Principal", "Current Value", "Interest Rate")
DEBT_DETAIL_COLUMNS = (
    "Name",
    "Type",
    "Principal",
    "Current Value",
    "Interest Rate",
    "Start Date",
)
HISTORY_COLUMNS = ("Date", "Value")

MISSING = "--"


@dataclass
class TableRow:
    """One rendered row; key is the record id (or a position for history)."""

    key: str
    values: tuple[str, ...]
    tags: tuple[str, ...] = ()


@dataclass
class TableView:
    """A table ready to draw, or the message to show in its place."""

    columns: tuple[str, ...]
    rows: list[TableRow] = field(default_factory=list)
    message: Optional[str] = None
    failed: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.rows

    @classmethod
    def error(cls, columns: tuple[str, ...], message: str) -> "TableView":
        return cls(columns=columns, message=message, failed=True)


def _sign_tag(amount: Optional[float]) -> str:
    if amount is None:
        return "neutral"
    return "positive" if amount >= 0 else "negative"


def _money(amount: Optional[float], currency: str) -> str:
    if amount is None:
        return MISSING
    return format_currency(amount, currency)


def asset_summary_row(asset: Asset) -> TableRow:
    """Row for the dashboard's recent-assets table."""
    profit_loss = asset.profit_loss
    return TableRow(
        key=asset.id,
        values=(
            asset.name,
            format_type_label(asset.type),
            format_number(asset.quantity),
            _money(asset.current_value, asset.currency),
            _money(asset.total_value, asset.currency),
            _money(profit_loss, asset.currency),
        ),
        tags=(badge_slug(asset.type), _sign_tag(profit_loss)),
    )


def asset_detail_row(asset: Asset) -> TableRow:
    """Row for the management page's asset table."""
    profit_loss = asset.profit_loss
    return TableRow(
        key=asset.id,
        values=(
            asset.name,
            format_type_label(asset.type),
            format_currency(asset.buy_price, asset.currency),
            _money(asset.current_value, asset.currency),
            format_number(asset.quantity),
            _money(asset.total_value, asset.currency),
            _money(profit_loss, asset.currency),
            format_date(asset.purchase_date),
        ),
        tags=(badge_slug(asset.type), _sign_tag(profit_loss)),
    )


def debt_summary_row(debt: Debt) -> TableRow:
    """Row for the dashboard's recent-debts table."""
    return TableRow(
        key=debt.id,
        values=(
            debt.name,
            format_type_label(debt.type),
            format_currency(debt.principal, debt.currency),
            format_currency(debt.current_value, debt.currency),
            format_percent(debt.interest_rate),
        ),
        tags=(badge_slug(debt.type),),
    )


def debt_detail_row(debt: Debt) -> TableRow:
    """Row for the management page's debt table."""
    return TableRow(
        key=debt.id,
        values=(
            debt.name,
            format_type_label(debt.type),
            format_currency(debt.principal, debt.currency),
            format_currency(debt.current_value, debt.currency),
            format_percent(debt.interest_rate),
            format_date(debt.start_date),
        ),
        tags=(badge_slug(debt.type),),
    )


def history_rows(points: Sequence[AssetHistory], currency: str = "USD") -> list[TableRow]:
    return [
        TableRow(
            key=point.id or str(index),
            values=(format_date(point.date), format_currency(point.value, currency)),
        )
        for index, point in enumerate(points)
    ]


def build_table(
    columns: tuple[str, ...],
    records: Iterable[RecordT],
    row_builder: Callable[[RecordT], TableRow],
    empty_message: str,
    limit: Optional[int] = None,
) -> TableView:
    """
    Render records into a table.

    The limit is a display policy only: callers always pass the full
    fetched list.
    """
    records = list(records)
    if not records:
        return TableView(columns=columns, message=empty_message)
    if limit is not None:
        records = records[:limit]
    return TableView(columns=columns, rows=[row_builder(record) for record in records])
