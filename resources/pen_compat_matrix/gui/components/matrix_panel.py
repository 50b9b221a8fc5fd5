"""
Matrix display panel for Pen Compatibility Matrix.

Shows the formatted rows of a render pass as a two column table (tablets,
pens) inside a scrollable frame.
"""

from typing import List, Optional
import customtkinter as ctk

from pen_compat_matrix.services.matrix_service import MatrixView


class MatrixPanel(ctk.CTkFrame):
    """Two column table of compatibility rows."""

    def __init__(self, parent, max_rows: int = 1000, **kwargs):
        """
        Initialize matrix panel.

        Args:
            parent: Parent widget
            max_rows: Rows rendered at most; the rest is summarized
            **kwargs: Additional CTkFrame arguments
        """
        super().__init__(parent, **kwargs)
        self.max_rows = max_rows
        self._row_widgets: List[ctk.CTkLabel] = []

        self._setup_ui()

    def _setup_ui(self) -> None:
        """Setup the table header and scrollable body."""
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        header = ctk.CTkFrame(self)
        header.grid(row=0, column=0, sticky="ew", padx=5, pady=(5, 0))
        header.grid_columnconfigure((0, 1), weight=1, uniform="matrix")

        for column, title in enumerate(("Tablets", "Pens")):
            ctk.CTkLabel(
                header, text=title, anchor="w",
                font=ctk.CTkFont(size=14, weight="bold")
            ).grid(row=0, column=column, padx=10, pady=5, sticky="w")

        self.body = ctk.CTkScrollableFrame(self)
        self.body.grid(row=1, column=0, sticky="nsew", padx=5, pady=5)
        self.body.grid_columnconfigure((0, 1), weight=1, uniform="matrix")

        self.message_label = ctk.CTkLabel(self.body, text="No dataset loaded", text_color="gray")
        self.message_label.grid(row=0, column=0, columnspan=2, pady=20)

    def _clear(self) -> None:
        for widget in self._row_widgets:
            widget.destroy()
        self._row_widgets = []
        self.message_label.grid_remove()

    def _add_cell(self, text: str, row: int, column: int) -> None:
        label = ctk.CTkLabel(self.body, text=text, anchor="nw", justify="left",
                             wraplength=460)
        label.grid(row=row, column=column, padx=10, pady=3, sticky="nw")
        self._row_widgets.append(label)

    def show_message(self, message: str, color: Optional[str] = None) -> None:
        """Replace the table with a single message."""
        self._clear()
        self.message_label.configure(text=message, text_color=color or "gray")
        self.message_label.grid()

    def show_view(self, view: MatrixView) -> None:
        """Render the formatted rows of a matrix view."""
        if view.is_empty:
            self.show_message("No rows match the current filter.")
            return

        self._clear()
        for index, formatted in enumerate(view.formatted[:self.max_rows]):
            self._add_cell(formatted.tablets_text or "-", index + 1, 0)
            self._add_cell(formatted.pens_text or "-", index + 1, 1)

        hidden = len(view.formatted) - self.max_rows
        if hidden > 0:
            self.message_label.configure(
                text=f"{hidden} more rows not shown, refine the search", text_color="gray"
            )
            self.message_label.grid(row=self.max_rows + 1, column=0, columnspan=2, pady=10)
