"""
Dataset model for Pen Compatibility Matrix.

This module contains the compatibility facts as parsed from a <compatrow>, the
expanded rows built from them, and the Dataset aggregate that owns rows,
definition tables and diagnostics of one load.
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Set

from .device import DeviceDef, DeviceKind, FamilyDef
from .diagnostics import Diagnostics


@dataclass(frozen=True)
class CompatFact:
    """A <compatrow> as written: direct ids plus family references."""
    tablet_ids: FrozenSet[str] = frozenset()
    pen_ids: FrozenSet[str] = frozenset()
    tablet_family_ids: FrozenSet[str] = frozenset()
    pen_family_ids: FrozenSet[str] = frozenset()
    index: int = 0

    def direct_ids(self, kind: DeviceKind) -> FrozenSet[str]:
        return self.tablet_ids if kind is DeviceKind.TABLET else self.pen_ids

    def family_ids(self, kind: DeviceKind) -> FrozenSet[str]:
        return self.tablet_family_ids if kind is DeviceKind.TABLET else self.pen_family_ids


@dataclass(frozen=True)
class EffectiveRow:
    """A compatibility fact with every family reference resolved to device ids."""
    tablet_ids: FrozenSet[str] = frozenset()
    pen_ids: FrozenSet[str] = frozenset()
    index: int = 0

    def ids(self, kind: DeviceKind) -> FrozenSet[str]:
        return self.tablet_ids if kind is DeviceKind.TABLET else self.pen_ids


@dataclass
class Dataset:
    """
    Everything loaded from one or more dataset documents.

    A Dataset owns its containers; merged datasets are built from fresh
    containers and never share them with their inputs.
    """
    rows: List[EffectiveRow] = field(default_factory=list)
    tablet_defs: Dict[str, DeviceDef] = field(default_factory=dict)
    pen_defs: Dict[str, DeviceDef] = field(default_factory=dict)
    tablet_family_defs: Dict[str, FamilyDef] = field(default_factory=dict)
    pen_family_defs: Dict[str, FamilyDef] = field(default_factory=dict)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)
    sources: List[str] = field(default_factory=list)

    def __str__(self) -> str:
        return (f"Dataset({len(self.rows)} rows, {len(self.tablet_defs)} tablets, "
                f"{len(self.pen_defs)} pens)")

    def defs(self, kind: DeviceKind) -> Dict[str, DeviceDef]:
        return self.tablet_defs if kind is DeviceKind.TABLET else self.pen_defs

    def family_defs(self, kind: DeviceKind) -> Dict[str, FamilyDef]:
        return self.tablet_family_defs if kind is DeviceKind.TABLET else self.pen_family_defs

    def used_ids(self, kind: DeviceKind) -> Set[str]:
        """Distinct device ids of one kind across all rows."""
        used: Set[str] = set()
        for row in self.rows:
            used.update(row.ids(kind))
        return used

    @property
    def is_empty(self) -> bool:
        return not self.rows and not self.tablet_defs and not self.pen_defs
