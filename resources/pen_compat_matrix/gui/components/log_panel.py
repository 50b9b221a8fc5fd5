"""
Log display panel for Pen Compatibility Matrix.

Shows application log records, including dataset warnings, color-coded by
level with a level filter. Records may arrive from the loader thread.
"""

from datetime import datetime
from typing import List
import customtkinter as ctk

from pen_compat_matrix.utils.logger import ColorCodes, LogLevel


class LogEntry:
    """Represents a single log entry."""

    def __init__(self, timestamp: datetime, level: int, message: str):
        self.timestamp = timestamp
        self.level = level
        self.message = message

    def get_formatted_message(self) -> str:
        return f"[{self.timestamp.strftime('%H:%M:%S')}] {self.message}"


class LogPanel(ctk.CTkFrame):
    """
    Log display panel component.

    Provides a read-only text area with per-level colors, a level filter,
    a clear button and an entry counter.
    """

    FILTERS = {
        "All": LogLevel.DEBUG.value,
        "Info+": LogLevel.INFO.value,
        "Warning+": LogLevel.WARNING.value,
        "Error Only": LogLevel.ERROR.value,
    }

    def __init__(self, parent, max_log_entries: int = 1000, **kwargs):
        """
        Initialize log panel.

        Args:
            parent: Parent widget
            max_log_entries: Oldest entries are dropped past this count
            **kwargs: Additional CTkFrame arguments
        """
        super().__init__(parent, **kwargs)

        self.log_entries: List[LogEntry] = []
        self.max_log_entries = max_log_entries
        self.current_filter_level = LogLevel.DEBUG.value

        self.level_colors = {
            LogLevel.DEBUG.value: "#CCCCCC",
            LogLevel.INFO.value: "#4A9EFF",
            LogLevel.HIGHLIGHT.value: "#DA70D6",
            LogLevel.WARNING.value: "#FFD700",
            LogLevel.ERROR.value: "#FF4444",
        }

        self._setup_ui()

    def _setup_ui(self) -> None:
        """Setup the log panel user interface."""
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        header_frame = ctk.CTkFrame(self, fg_color="transparent")
        header_frame.grid(row=0, column=0, sticky="ew", padx=10, pady=(10, 5))
        header_frame.grid_columnconfigure(1, weight=1)

        title_label = ctk.CTkLabel(
            header_frame,
            text="Application Logs",
            font=ctk.CTkFont(size=16, weight="bold")
        )
        title_label.grid(row=0, column=0, sticky="w")

        self.level_filter = ctk.CTkOptionMenu(
            header_frame,
            values=list(self.FILTERS),
            width=100,
            command=self._on_filter_changed
        )
        self.level_filter.grid(row=0, column=2, padx=2)
        self.level_filter.set("All")

        clear_button = ctk.CTkButton(header_frame, text="Clear", width=60, height=25,
                                     command=self._clear_logs)
        clear_button.grid(row=0, column=3, padx=2)

        self.log_text = ctk.CTkTextbox(
            self,
            wrap="word",
            font=ctk.CTkFont(family="Consolas", size=11),
            state="disabled"
        )
        self.log_text.grid(row=1, column=0, sticky="nsew", padx=10, pady=(0, 5))

        self.log_count_label = ctk.CTkLabel(
            self,
            text="0 log entries",
            font=ctk.CTkFont(size=10),
            text_color="gray"
        )
        self.log_count_label.grid(row=2, column=0, sticky="w", padx=10, pady=(0, 5))

    def add_log_entry(self, message: str, level: int) -> None:
        """
        Add a log entry to the display.

        Safe to call from any thread; the widget update is scheduled on the
        Tk event loop.

        Args:
            message: Log message text
            level: Log level (from logging module)
        """
        entry = LogEntry(datetime.now(), level, ColorCodes.strip_colors(message))
        self.after(0, self._add_log_entry_internal, entry)

    def _add_log_entry_internal(self, entry: LogEntry) -> None:
        self.log_entries.append(entry)

        if len(self.log_entries) > self.max_log_entries:
            self.log_entries = self.log_entries[-self.max_log_entries:]
            self._refresh_display()
            return

        if entry.level >= self.current_filter_level:
            self._append_to_display(entry)
            self.log_text.see("end")
        self._update_log_count()

    def _level_color(self, level: int) -> str:
        if level in self.level_colors:
            return self.level_colors[level]
        if level >= LogLevel.ERROR.value:
            return self.level_colors[LogLevel.ERROR.value]
        if level >= LogLevel.WARNING.value:
            return self.level_colors[LogLevel.WARNING.value]
        return self.level_colors[LogLevel.INFO.value]

    def _append_to_display(self, entry: LogEntry) -> None:
        """Append a single entry with its level color."""
        self.log_text.configure(state="normal")

        formatted_message = entry.get_formatted_message()
        self.log_text.insert("end", formatted_message + "\n")

        tag_name = f"level_{entry.level}"
        if tag_name not in self.log_text._textbox.tag_names():
            self.log_text._textbox.tag_configure(tag_name, foreground=self._level_color(entry.level))
        self.log_text._textbox.tag_add(
            tag_name, f"end-{len(formatted_message) + 2}c linestart", "end-1c"
        )

        self.log_text.configure(state="disabled")

    def _refresh_display(self) -> None:
        """Redraw all entries passing the current filter."""
        self.log_text.configure(state="normal")
        self.log_text.delete("1.0", "end")
        self.log_text.configure(state="disabled")

        for entry in self.log_entries:
            if entry.level >= self.current_filter_level:
                self._append_to_display(entry)

        self.log_text.see("end")
        self._update_log_count()

    def _update_log_count(self) -> None:
        visible_count = sum(1 for e in self.log_entries if e.level >= self.current_filter_level)
        total_count = len(self.log_entries)

        if visible_count == total_count:
            self.log_count_label.configure(text=f"{total_count} log entries")
        else:
            self.log_count_label.configure(text=f"{visible_count} of {total_count} log entries")

    def _on_filter_changed(self, value: str) -> None:
        self.current_filter_level = self.FILTERS.get(value, LogLevel.DEBUG.value)
        self._refresh_display()

    def _clear_logs(self) -> None:
        self.log_entries = []
        self._refresh_display()
