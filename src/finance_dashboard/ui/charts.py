"""Matplotlib chart surface embedded in Tk frames."""

import tkinter as tk
from tkinter import ttk

# Import matplotlib with Tk backend
import matplotlib
matplotlib.use('TkAgg')
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
from matplotlib.figure import Figure
from matplotlib.ticker import FuncFormatter

from finance_dashboard.controllers.charts import ChartData, ChartKind


class MatplotlibChart:
    """A figure drawn into a Tk frame; destroy() removes it completely."""

    def __init__(self, figure: Figure, canvas: FigureCanvasTkAgg):
        self.figure = figure
        self.canvas = canvas

    def destroy(self) -> None:
        self.canvas.get_tk_widget().destroy()
        self.figure.clear()


class MatplotlibChartSurface:
    """
    Creates charts inside named frames.

    Args:
        frames: slot name -> frame the chart for that slot is packed into
    """

    def __init__(self, frames: dict[str, ttk.Frame]):
        self.frames = frames

    def _new_figure(self, slot: str):
        figure = Figure(figsize=(5, 3.5), dpi=100)
        canvas = FigureCanvasTkAgg(figure, self.frames[slot])
        canvas.get_tk_widget().pack(fill=tk.BOTH, expand=True)
        return figure, canvas

    def create_chart(self, slot: str, data: ChartData) -> MatplotlibChart:
        figure, canvas = self._new_figure(slot)
        ax = figure.add_subplot(111)

        if data.kind is ChartKind.DOUGHNUT and data.total <= 0:
            ax.text(0.5, 0.5, "No value recorded", ha='center', va='center', fontsize=12)
            ax.set_axis_off()
        elif data.kind is ChartKind.DOUGHNUT:
            # Wedge sizes must be non-negative
            wedges, _ = ax.pie(
                [max(value, 0.0) for value in data.values],
                colors=data.colors,
                startangle=90,
                wedgeprops={"width": 0.4, "edgecolor": "white", "linewidth": 2},
            )
            ax.legend(
                wedges,
                data.value_labels(),
                loc="upper center",
                bbox_to_anchor=(0.5, 0.0),
                fontsize=8,
                frameon=False,
            )
            ax.set_aspect('equal')
        else:
            ax.bar(data.labels, data.values, color=data.colors)
            ax.axhline(0, color="#94a3b8", linewidth=0.8)
            ax.yaxis.set_major_formatter(FuncFormatter(lambda value, _: f"${value:,.0f}"))
            ax.spines["top"].set_visible(False)
            ax.spines["right"].set_visible(False)

        ax.set_title(data.title, fontsize=10, pad=10)
        figure.tight_layout()
        canvas.draw()
        return MatplotlibChart(figure, canvas)

    def create_placeholder(self, slot: str, message: str) -> MatplotlibChart:
        figure, canvas = self._new_figure(slot)
        ax = figure.add_subplot(111)
        ax.text(0.5, 0.5, message, ha='center', va='center', fontsize=14)
        ax.set_axis_off()
        canvas.draw()
        return MatplotlibChart(figure, canvas)
