"""Chart datasets and chart handle lifecycle."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Protocol, Sequence

from finance_dashboard.api.schemas import Asset
from finance_dashboard.core.formatting import format_currency, format_type_label

logger = logging.getLogger(__name__)

PALETTE = (
    "#4f46e5",
    "#10b981",
    "#f59e0b",
    "#ef4444",
    "#8b5cf6",
    "#ec4899",
    "#14b8a6",
    "#f97316",
    "#06b6d4",
)
INVESTED_COLOR = "#64748b"
CURRENT_COLOR = "#4f46e5"
GAIN_COLOR = "#10b981"
LOSS_COLOR = "#ef4444"


class ChartKind(str, Enum):
    DOUGHNUT = "doughnut"
    BAR = "bar"


@dataclass
class ChartData:
    """Dataset for one chart, already aggregated and labelled."""

    kind: ChartKind
    title: str
    labels: list[str]
    values: list[float]
    colors: list[str] = field(default_factory=list)

    @property
    def total(self) -> float:
        return sum(self.values)

    def value_labels(self) -> list[str]:
        """Legend/tooltip text: value, plus share of the total for doughnuts."""
        total = self.total
        texts = []
        for label, value in zip(self.labels, self.values):
            text = f"{label}: {format_currency(value)}"
            if self.kind is ChartKind.DOUGHNUT and total:
                text += f" ({value / total * 100:.1f}%)"
            texts.append(text)
        return texts


def asset_distribution(assets: Sequence[Asset]) -> ChartData:
    """Total current value per asset type, in first-seen type order."""
    by_type: dict[str, float] = {}
    for asset in assets:
        by_type[asset.type] = by_type.get(asset.type, 0.0) + (asset.total_value or 0.0)

    labels = [format_type_label(type_code) for type_code in by_type]
    return ChartData(
        kind=ChartKind.DOUGHNUT,
        title="Asset Distribution",
        labels=labels,
        values=list(by_type.values()),
        colors=list(PALETTE[: len(labels)]),
    )


def investment_comparison(assets: Sequence[Asset]) -> ChartData:
    """Invested vs. current value vs. profit/loss across all assets."""
    total_current = sum(asset.total_value or 0.0 for asset in assets)
    total_invested = sum(asset.invested for asset in assets)
    profit_loss = total_current - total_invested

    return ChartData(
        kind=ChartKind.BAR,
        title="Invested vs. Current Value",
        labels=["Invested", "Current Value", "Profit/Loss"],
        values=[total_invested, total_current, profit_loss],
        colors=[INVESTED_COLOR, CURRENT_COLOR, GAIN_COLOR if profit_loss >= 0 else LOSS_COLOR],
    )


class ChartHandle(Protocol):
    """A live chart drawn on screen."""

    def destroy(self) -> None:
        ...


class ChartSurface(Protocol):
    """Draws charts; implemented with matplotlib by the desktop UI."""

    def create_chart(self, slot: str, data: ChartData) -> ChartHandle:
        ...

    def create_placeholder(self, slot: str, message: str) -> ChartHandle:
        ...


class ChartSlot:
    """
    Holds at most one live chart.

    The previous chart is destroyed before its replacement is created so
    that two charts never share a drawing area.
    """

    def __init__(self, name: str):
        self.name = name
        self.handle: Optional[ChartHandle] = None

    def replace(self, factory: Callable[[], ChartHandle]) -> ChartHandle:
        self.clear()
        self.handle = factory()
        return self.handle

    def clear(self) -> None:
        if self.handle is not None:
            logger.debug("Destroying chart %s", self.name)
            self.handle.destroy()
            self.handle = None
