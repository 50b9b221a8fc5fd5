"""
Main application window for Pen Compatibility Matrix.

This module provides the desktop viewer: a source bar to load one or more
dataset documents, the matrix with its controls, a diagnostics report and the
application log, plus a status bar with the visible-vs-total statistics.
"""

import shlex
from typing import List, Optional
import customtkinter as ctk

from pen_compat_matrix.config.settings import AppConfig, get_config, init_config, save_config
from pen_compat_matrix.models.dataset import Dataset
from pen_compat_matrix.services.matrix_service import MatrixView, render_matrix, to_plain_text
from pen_compat_matrix.services.report_service import build_report, format_report
from pen_compat_matrix.services.source_service import SourceService, get_source_service
from pen_compat_matrix.utils.logger import get_logger, setup_logging
from pen_compat_matrix.utils.validators import get_validator

from .components.controls_panel import ControlsPanel
from .components.log_panel import LogPanel
from .components.matrix_panel import MatrixPanel


ERROR_COLOR = "#FF4444"
SEARCH_DEBOUNCE_MS = 150


class MainWindow:
    """
    Main application window for Pen Compatibility Matrix.

    Loading happens on a worker thread; results are handed back to the Tk
    event loop with after(). A failed load keeps the previously displayed
    dataset and reports the error in the status bar.
    """

    def __init__(self, config: Optional[AppConfig] = None,
                 source_service: Optional[SourceService] = None,
                 sources: Optional[List[str]] = None):
        """Initialize the main application window."""
        try:
            self.config = config or get_config()
        except RuntimeError:
            self.config = init_config()

        try:
            self.logger = get_logger()
        except RuntimeError:
            self.logger = setup_logging(
                colored=self.config.ui.colored_output,
                log_file=self.config.get_log_file_path(),
                level=self.config.log_level
            )

        self.source_service = source_service or get_source_service()
        self.validator = get_validator()
        self.initial_sources = list(sources) if sources else list(self.config.sources.sources)

        # Application state
        self.dataset: Optional[Dataset] = None
        self.current_view: Optional[MatrixView] = None
        self.is_loading = False
        self._render_job = None
        self._gui_log_handler = None

        self.root = ctk.CTk()
        self.root.title(f"{self.config.app_name} v{self.config.version}")
        self.root.geometry(self.config.ui.window_geometry)
        self.root.minsize(800, 550)

        self._setup_theme()
        self._setup_layout()
        self._setup_source_bar()
        self._create_main_content()
        self._setup_status_bar()
        self._setup_logging_integration()

        self.root.protocol("WM_DELETE_WINDOW", self._on_closing)
        self.logger.info("Main window initialized")

        self.root.after(100, self._start_load, self.initial_sources)

    def _setup_theme(self) -> None:
        """Setup CustomTkinter theme and appearance."""
        ctk.set_appearance_mode(self.config.ui.appearance_mode)
        ctk.set_default_color_theme(self.config.ui.color_theme)
        self.current_theme = self.config.ui.appearance_mode

    def _setup_layout(self) -> None:
        """Setup the main window grid."""
        self.root.grid_columnconfigure(0, weight=1)
        self.root.grid_rowconfigure(1, weight=1)

        self.source_frame = ctk.CTkFrame(self.root)
        self.source_frame.grid(row=0, column=0, sticky="ew", padx=10, pady=(10, 5))

        self.tabview = ctk.CTkTabview(self.root)
        self.tabview.grid(row=1, column=0, sticky="nsew", padx=10, pady=5)

        self.status_bar_frame = ctk.CTkFrame(self.root, height=32)
        self.status_bar_frame.grid(row=2, column=0, sticky="ew", padx=10, pady=(5, 10))

    def _setup_source_bar(self) -> None:
        """Setup the dataset source entry and load buttons."""
        self.source_frame.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(self.source_frame, text="Dataset:").grid(
            row=0, column=0, padx=(10, 5), pady=8, sticky="w"
        )

        self.source_entry = ctk.CTkEntry(
            self.source_frame,
            placeholder_text="File paths or URLs, separated by spaces"
        )
        self.source_entry.grid(row=0, column=1, padx=5, pady=8, sticky="ew")
        self.source_entry.insert(0, " ".join(shlex.quote(s) for s in self.initial_sources))
        self.source_entry.bind("<Return>", lambda event: self._load_from_entry())

        self.load_button = ctk.CTkButton(self.source_frame, text="Load", width=80,
                                         command=self._load_from_entry)
        self.load_button.grid(row=0, column=2, padx=5, pady=8)

        self.reload_button = ctk.CTkButton(self.source_frame, text="🔄 Reload", width=90,
                                           command=self._reload)
        self.reload_button.grid(row=0, column=3, padx=(5, 10), pady=8)

    def _create_main_content(self) -> None:
        """Create the matrix, diagnostics and log tabs."""
        matrix_tab = self.tabview.add("Matrix")
        diagnostics_tab = self.tabview.add("Diagnostics")
        logs_tab = self.tabview.add("Logs")

        matrix_tab.grid_columnconfigure(0, weight=1)
        matrix_tab.grid_rowconfigure(1, weight=1)

        self.controls_panel = ControlsPanel(
            matrix_tab,
            display_config=self.config.display,
            change_callback=self._schedule_render
        )
        self.controls_panel.grid(row=0, column=0, sticky="ew", pady=(0, 5))

        self.matrix_panel = MatrixPanel(matrix_tab)
        self.matrix_panel.grid(row=1, column=0, sticky="nsew")

        diagnostics_tab.grid_columnconfigure(0, weight=1)
        diagnostics_tab.grid_rowconfigure(0, weight=1)
        self.diagnostics_text = ctk.CTkTextbox(
            diagnostics_tab,
            wrap="word",
            font=ctk.CTkFont(family="Consolas", size=11),
            state="disabled"
        )
        self.diagnostics_text.grid(row=0, column=0, sticky="nsew", padx=5, pady=5)

        logs_tab.grid_columnconfigure(0, weight=1)
        logs_tab.grid_rowconfigure(0, weight=1)
        self.log_panel = LogPanel(logs_tab)
        self.log_panel.grid(row=0, column=0, sticky="nsew")

        self.tabview.set("Matrix")

    def _setup_status_bar(self) -> None:
        """Setup application status bar."""
        self.status_bar_frame.grid_columnconfigure(1, weight=1)

        self.stats_label = ctk.CTkLabel(self.status_bar_frame, text="",
                                        font=ctk.CTkFont(size=12))
        self.stats_label.grid(row=0, column=0, padx=10, pady=5, sticky="w")

        self.status_label = ctk.CTkLabel(self.status_bar_frame, text="Ready",
                                         font=ctk.CTkFont(size=12), anchor="e")
        self.status_label.grid(row=0, column=1, padx=10, pady=5, sticky="ew")
        self._status_color = self.status_label.cget("text_color")

        self.copy_button = ctk.CTkButton(self.status_bar_frame, text="📋 Copy", width=80,
                                         command=self._copy_to_clipboard)
        self.copy_button.grid(row=0, column=2, padx=5, pady=5)

        self.theme_button = ctk.CTkButton(self.status_bar_frame, text="🌓", width=32,
                                          command=self._toggle_theme)
        self.theme_button.grid(row=0, column=3, padx=(5, 10), pady=5)

    def _setup_logging_integration(self) -> None:
        """Mirror application log records into the log panel."""
        self._gui_log_handler = self.logger.add_gui_handler(self.log_panel.add_log_entry)

    def _update_status(self, message: str, error: bool = False) -> None:
        self.status_label.configure(text=message, text_color=ERROR_COLOR if error else self._status_color)

    def _set_loading(self, loading: bool) -> None:
        self.is_loading = loading
        state = "disabled" if loading else "normal"
        self.load_button.configure(state=state)
        self.reload_button.configure(state=state)

    # Loading

    def _load_from_entry(self) -> None:
        """Load the sources typed into the source entry."""
        try:
            sources = shlex.split(self.source_entry.get())
        except ValueError as e:
            self._update_status(f"Invalid source list: {e}", error=True)
            return
        self._start_load(sources)

    def _reload(self) -> None:
        if self.source_service.last_sources:
            self._start_load(self.source_service.last_sources)
        else:
            self._load_from_entry()

    def _start_load(self, sources: List[str]) -> None:
        """Validate sources and load them on a worker thread."""
        if self.is_loading:
            return

        result = self.validator.validate_sources(sources)
        if not result:
            self._load_failed(ValueError(result.message))
            return

        self._set_loading(True)
        self._update_status(f"Loading {len(sources)} source(s)...")
        self.source_service.load_async(
            sources,
            on_success=lambda dataset: self.root.after(0, self._load_complete, dataset),
            on_error=lambda error: self.root.after(0, self._load_failed, error)
        )

    def _load_complete(self, dataset: Dataset) -> None:
        """Swap in a freshly loaded dataset (runs on the Tk thread)."""
        self._set_loading(False)
        self.dataset = dataset
        self.config.sources.sources = list(dataset.sources)

        warnings = len(dataset.diagnostics)
        status = f"Loaded {dataset}"
        if warnings:
            status += f" with {warnings} warnings"
        self._update_status(status)
        self.logger.highlight(status)

        self._show_diagnostics()
        self._render()

    def _load_failed(self, error: Exception) -> None:
        """Report a failed load; the displayed dataset stays as it was."""
        self._set_loading(False)
        self.logger.error(f"Load failed: {error}")
        if self.dataset is None:
            self.matrix_panel.show_message(f"Could not load dataset:\n{error}", color=ERROR_COLOR)
            self._update_status("Load failed", error=True)
        else:
            self._update_status(f"Load failed, showing previous data: {error}", error=True)

    # Rendering

    def _schedule_render(self) -> None:
        """Coalesce rapid control changes (typing) into one render."""
        if self._render_job is not None:
            self.root.after_cancel(self._render_job)
        self._render_job = self.root.after(SEARCH_DEBOUNCE_MS, self._render)

    def _render(self) -> None:
        """Render the matrix from a snapshot of the controls."""
        self._render_job = None
        if self.dataset is None:
            return

        self.current_view = render_matrix(
            self.dataset,
            view_mode=self.controls_panel.get_view_mode(),
            query=self.controls_panel.get_query(),
            options=self.controls_panel.get_format_options()
        )
        self.matrix_panel.show_view(self.current_view)
        self.stats_label.configure(text=self.current_view.stats.summary())

    def _show_diagnostics(self) -> None:
        report_text = format_report(build_report(self.dataset))
        self.diagnostics_text.configure(state="normal")
        self.diagnostics_text.delete("1.0", "end")
        self.diagnostics_text.insert("end", report_text)
        self.diagnostics_text.configure(state="disabled")

    # Actions

    def _copy_to_clipboard(self) -> None:
        """Copy the visible rows as tab-separated text."""
        if self.current_view is None or self.current_view.is_empty:
            self._update_status("Nothing to copy")
            return
        self.root.clipboard_clear()
        self.root.clipboard_append(to_plain_text(self.current_view))
        self._update_status(f"Copied {len(self.current_view.rows)} rows to clipboard")

    def _toggle_theme(self) -> None:
        self.current_theme = "light" if self.current_theme == "dark" else "dark"
        ctk.set_appearance_mode(self.current_theme)
        self.config.ui.appearance_mode = self.current_theme

    def _on_closing(self) -> None:
        """Persist the control state and close the window."""
        self.controls_panel.store_into(self.config.display)
        try:
            save_config()
        except (RuntimeError, OSError) as e:
            self.logger.warning(f"Could not save configuration: {e}")

        if self._gui_log_handler is not None:
            self.logger.remove_gui_handler(self._gui_log_handler)
        self.root.destroy()

    def run(self) -> None:
        """Start the GUI application main loop."""
        self.logger.info("Starting GUI application")
        self.root.mainloop()
