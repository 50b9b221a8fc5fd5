"""
Dataset diagnostics for Pen Compatibility Matrix.

Diagnostics are informational. They are collected while a dataset is parsed,
expanded and merged, and never change the data returned alongside them.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Optional, Set

from .device import DeviceKind


class WarningKind(Enum):
    """Categories of non-fatal dataset problems."""
    MISSING_DEFINITION = "missing-definition"
    UNKNOWN_FAMILY = "unknown-family"
    UNUSED_DEFINITION = "unused-definition"
    DUPLICATE_DEFINITION = "duplicate-definition"
    MALFORMED_DEFINITION = "malformed-definition"
    OVERRIDDEN_DEFINITION = "overridden-definition"

    @property
    def log_level(self) -> int:
        # Unused definitions are routine in a hand-maintained file
        if self is WarningKind.UNUSED_DEFINITION:
            return logging.DEBUG
        return logging.WARNING


@dataclass(frozen=True)
class ValidationWarning:
    """A single diagnostic about the dataset."""
    kind: WarningKind
    device_kind: DeviceKind
    subject_id: str
    message: str
    row_index: Optional[int] = None
    source: Optional[str] = None

    def __str__(self) -> str:
        location = f" (row {self.row_index})" if self.row_index is not None else ""
        return f"{self.kind.value}: {self.message}{location}"


@dataclass
class Diagnostics:
    """
    Collected diagnostics for one dataset.

    Besides the flat warning list, missing definitions are indexed for
    traceability: missing pens map to the tablet ids of the rows that used
    them, missing tablets map to the row positions that used them.
    """
    warnings: List[ValidationWarning] = field(default_factory=list)
    missing_tablets: Dict[str, Set[int]] = field(default_factory=dict)
    missing_pens: Dict[str, Set[str]] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.warnings)

    def __iter__(self):
        return iter(self.warnings)

    def add(self, warning: ValidationWarning,
            logger: Optional[logging.Logger] = None) -> None:
        """Record a warning and optionally log it."""
        self.warnings.append(warning)
        if logger is not None:
            logger.log(warning.kind.log_level, str(warning))

    def of_kind(self, kind: WarningKind,
                device_kind: Optional[DeviceKind] = None) -> List[ValidationWarning]:
        return [
            w for w in self.warnings
            if w.kind is kind and (device_kind is None or w.device_kind is device_kind)
        ]

    def subjects(self, kind: WarningKind, device_kind: DeviceKind) -> List[str]:
        """Distinct subject ids of a warning category, in first-seen order."""
        seen: Dict[str, None] = {}
        for warning in self.of_kind(kind, device_kind):
            seen.setdefault(warning.subject_id, None)
        return list(seen)

    def record_missing_tablet(self, tablet_id: str, row_index: int) -> None:
        self.missing_tablets.setdefault(tablet_id, set()).add(row_index)

    def record_missing_pen(self, pen_id: str, tablet_ids: Iterable[str]) -> None:
        self.missing_pens.setdefault(pen_id, set()).update(tablet_ids)

    def extend(self, other: "Diagnostics",
               kinds: Optional[FrozenSet[WarningKind]] = None) -> None:
        """Copy warnings (optionally only some kinds) and traces from another collection."""
        for warning in other.warnings:
            if kinds is None or warning.kind in kinds:
                self.warnings.append(warning)
        if kinds is None or WarningKind.MISSING_DEFINITION in kinds:
            for tablet_id, rows in other.missing_tablets.items():
                self.missing_tablets.setdefault(tablet_id, set()).update(rows)
            for pen_id, tablets in other.missing_pens.items():
                self.missing_pens.setdefault(pen_id, set()).update(tablets)

    def summary(self) -> Dict[str, int]:
        """Warning counts keyed by category value."""
        counts: Dict[str, int] = {}
        for warning in self.warnings:
            counts[warning.kind.value] = counts.get(warning.kind.value, 0) + 1
        return counts
