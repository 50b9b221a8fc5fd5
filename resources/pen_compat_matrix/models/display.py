"""
Display models for Pen Compatibility Matrix.

This module contains the view modes, the rows handed to renderers, the
formatting options chosen in the UI, and the statistics shown next to the
matrix.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class ViewMode(Enum):
    """How compatibility facts are projected into display rows."""
    GROUPED = "grouped"
    UNGROUPED = "ungrouped"
    BY_PEN = "by-pen"
    BY_TABLET = "by-tablet"

    @property
    def display_name(self) -> str:
        return self.value.replace('-', ' ').title()

    @classmethod
    def from_name(cls, name: Optional[str]) -> 'ViewMode':
        """
        Parse a view mode name, accepting "by_pen" / "BY-PEN" variants.

        Raises:
            ValueError: If the name is not a known view mode
        """
        if not name:
            return cls.GROUPED
        normalized = name.strip().lower().replace('_', '-')
        for mode in cls:
            if mode.value == normalized:
                return mode
        raise ValueError(f"Unknown view mode: {name!r}")


@dataclass(frozen=True)
class DisplayRow:
    """One rendered line of the matrix: ordered tablets and pens."""
    tablets: Tuple[str, ...] = ()
    pens: Tuple[str, ...] = ()

    @property
    def items(self) -> Tuple[str, ...]:
        return self.tablets + self.pens


@dataclass(frozen=True)
class FormatOptions:
    """Rendering switches exposed by the UI."""
    show_names: bool = True
    one_per_line: bool = False
    organize_by_family: bool = False

    @property
    def structured_separator(self) -> str:
        return "\n" if self.one_per_line else ""

    @property
    def plain_separator(self) -> str:
        # Copied text stays one line per row so it pastes as a table
        return ", "


@dataclass(frozen=True)
class FamilyGroup:
    """A labelled bucket of rendered device labels."""
    family_id: str
    label: str
    items: Tuple[str, ...] = ()


@dataclass(frozen=True)
class FormattedCell:
    """Rendered tablets or pens of one row, possibly split by family."""
    groups: Tuple[FamilyGroup, ...] = ()
    grouped: bool = False

    @property
    def items(self) -> Tuple[str, ...]:
        return tuple(item for group in self.groups for item in group.items)

    def join(self, separator: str) -> str:
        """Join items with a separator; family groups get a "Label: " prefix."""
        if not self.grouped:
            return separator.join(self.items)
        group_separator = "\n" if "\n" in separator else "; "
        return group_separator.join(
            f"{group.label}: {separator.join(group.items)}" for group in self.groups
        )


@dataclass(frozen=True)
class FormattedRow:
    """Display-ready tablets and pens cells of one DisplayRow."""
    row: DisplayRow
    tablets: FormattedCell
    pens: FormattedCell
    options: FormatOptions = field(default_factory=FormatOptions)

    @property
    def tablets_text(self) -> str:
        return self.tablets.join(self.options.structured_separator)

    @property
    def pens_text(self) -> str:
        return self.pens.join(self.options.structured_separator)

    def to_plain_text(self) -> str:
        """Tab-separated tablets and pens for copying to a spreadsheet."""
        separator = self.options.plain_separator
        return f"{self.tablets.join(separator)}\t{self.pens.join(separator)}"


@dataclass(frozen=True)
class MatrixStats:
    """Visible-vs-total counters recomputed on every filter pass."""
    visible_rows: int = 0
    total_rows: int = 0
    visible_tablets: int = 0
    total_tablets: int = 0
    visible_pens: int = 0
    total_pens: int = 0

    def summary(self) -> str:
        return (f"{self.visible_rows} of {self.total_rows} rows | "
                f"{self.visible_tablets}/{self.total_tablets} tablets | "
                f"{self.visible_pens}/{self.total_pens} pens")
