"""
Matrix controls panel for Pen Compatibility Matrix.

This module provides the search box, the view mode selector and the display
switches. Every change is reported through a single callback so the main
window can re-render the matrix.
"""

import tkinter as tk
from typing import Callable, Optional
import customtkinter as ctk

from pen_compat_matrix.config.settings import DisplayConfig
from pen_compat_matrix.models.display import FormatOptions, ViewMode


class ControlsPanel(ctk.CTkFrame):
    """
    Matrix controls component.

    Provides:
    - Search entry (quoted phrases, * and ? wildcards)
    - View mode selector (grouped, ungrouped, by pen, by tablet)
    - Show names / one per line / organize by family switches
    """

    def __init__(self, parent, display_config: Optional[DisplayConfig] = None,
                 change_callback: Optional[Callable[[], None]] = None, **kwargs):
        """
        Initialize controls panel.

        Args:
            parent: Parent widget
            display_config: Initial state of the controls
            change_callback: Called whenever any control changes
            **kwargs: Additional CTkFrame arguments
        """
        super().__init__(parent, **kwargs)

        self.change_callback = change_callback
        display_config = display_config or DisplayConfig()

        self.search_var = tk.StringVar()
        self.view_mode_var = tk.StringVar(value=display_config.get_view_mode().display_name)
        self.show_names_var = tk.BooleanVar(value=display_config.show_names)
        self.one_per_line_var = tk.BooleanVar(value=display_config.one_per_line)
        self.by_family_var = tk.BooleanVar(value=display_config.organize_by_family)

        self._setup_ui()

    def _setup_ui(self) -> None:
        """Setup the controls user interface."""
        self.grid_columnconfigure(1, weight=1)

        search_label = ctk.CTkLabel(self, text="Search:")
        search_label.grid(row=0, column=0, padx=(10, 5), pady=(10, 5), sticky="w")

        self.search_entry = ctk.CTkEntry(
            self,
            textvariable=self.search_var,
            placeholder_text='e.g. "intuos pro" kp-504*'
        )
        self.search_entry.grid(row=0, column=1, padx=5, pady=(10, 5), sticky="ew")
        self.search_entry.bind("<KeyRelease>", lambda event: self._notify())

        clear_button = ctk.CTkButton(self, text="✕", width=30, command=self._clear_search)
        clear_button.grid(row=0, column=2, padx=(5, 10), pady=(10, 5))

        self.view_selector = ctk.CTkSegmentedButton(
            self,
            values=[mode.display_name for mode in ViewMode],
            variable=self.view_mode_var,
            command=lambda value: self._notify()
        )
        self.view_selector.grid(row=1, column=0, columnspan=3, padx=10, pady=5, sticky="w")

        switches_frame = ctk.CTkFrame(self, fg_color="transparent")
        switches_frame.grid(row=2, column=0, columnspan=3, padx=10, pady=(5, 10), sticky="w")

        for column, (text, variable) in enumerate((
            ("Show names", self.show_names_var),
            ("One per line", self.one_per_line_var),
            ("Organize by family", self.by_family_var),
        )):
            checkbox = ctk.CTkCheckBox(switches_frame, text=text, variable=variable,
                                       command=self._notify)
            checkbox.grid(row=0, column=column, padx=(0, 15))

    def _clear_search(self) -> None:
        self.search_var.set("")
        self._notify()

    def _notify(self) -> None:
        if self.change_callback:
            self.change_callback()

    def get_query(self) -> str:
        return self.search_var.get()

    def get_view_mode(self) -> ViewMode:
        selected = self.view_mode_var.get()
        for mode in ViewMode:
            if mode.display_name == selected:
                return mode
        return ViewMode.GROUPED

    def get_format_options(self) -> FormatOptions:
        return FormatOptions(
            show_names=self.show_names_var.get(),
            one_per_line=self.one_per_line_var.get(),
            organize_by_family=self.by_family_var.get(),
        )

    def store_into(self, display_config: DisplayConfig) -> None:
        """Write the current control state back into the configuration."""
        options = self.get_format_options()
        display_config.view_mode = self.get_view_mode().value
        display_config.show_names = options.show_names
        display_config.one_per_line = options.one_per_line
        display_config.organize_by_family = options.organize_by_family
