"""Desktop UI package using Tkinter + ttk + matplotlib."""

from finance_dashboard.ui.main_window import MainWindow
from finance_dashboard.ui.app import DesktopApp

__all__ = ["MainWindow", "DesktopApp"]
