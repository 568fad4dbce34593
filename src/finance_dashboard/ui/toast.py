"""Auto-dismissing toast notifications."""

import tkinter as tk
from tkinter import ttk
from typing import Optional

from finance_dashboard.controllers.notifications import NotificationLevel

LEVEL_STYLES = {
    NotificationLevel.SUCCESS: "ToastSuccess.TLabel",
    NotificationLevel.WARNING: "ToastWarning.TLabel",
    NotificationLevel.ERROR: "ToastError.TLabel",
    NotificationLevel.INFO: "ToastInfo.TLabel",
}


class Toast:
    """
    Message strip shown at the bottom of the window.

    A new message replaces the current one and restarts the timer.
    """

    def __init__(self, root: tk.Misc, duration_ms: int = 3000):
        self.root = root
        self.duration_ms = duration_ms
        self._after_id: Optional[str] = None

        style = ttk.Style(root)
        style.configure("ToastSuccess.TLabel", background="#10b981", foreground="white")
        style.configure("ToastWarning.TLabel", background="#f59e0b", foreground="black")
        style.configure("ToastError.TLabel", background="#ef4444", foreground="white")
        style.configure("ToastInfo.TLabel", background="#4f46e5", foreground="white")

        self.label = ttk.Label(root, text="", padding=(12, 6), anchor=tk.CENTER)

    def notify(self, message: str, level: NotificationLevel = NotificationLevel.SUCCESS) -> None:
        self.label.config(text=message, style=LEVEL_STYLES.get(level, "ToastInfo.TLabel"))
        self.label.place(relx=0.5, rely=1.0, anchor=tk.S, y=-12)
        self.label.lift()

        if self._after_id is not None:
            self.root.after_cancel(self._after_id)
        self._after_id = self.root.after(self.duration_ms, self.hide)

    def hide(self) -> None:
        self._after_id = None
        self.label.place_forget()
