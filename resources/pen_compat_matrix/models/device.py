"""
Device definition models for Pen Compatibility Matrix.

This module contains the records describing individual tablets and pens and
the families they belong to, plus the (family id, id) ordering shared by every
view of the matrix.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional, Tuple


class DeviceKind(Enum):
    """The two device namespaces of the dataset."""
    TABLET = ("tablet", "Tablet", "tablets")
    PEN = ("pen", "Pen", "pens")

    def __init__(self, tag: str, display_name: str, plural: str):
        self.tag = tag
        self.display_name = display_name
        self.plural = plural

    @property
    def definition_tag(self) -> str:
        """XML element name of a device definition (tabletdef, pendef)."""
        return f"{self.tag}def"

    @property
    def family_tag(self) -> str:
        """XML element name of a family reference inside a compatrow."""
        return f"{self.tag}family"

    @property
    def family_definition_tag(self) -> str:
        """XML element name of a family definition (tabletfamilydef, ...)."""
        return f"{self.tag}familydef"


@dataclass(frozen=True)
class DeviceDef:
    """A named tablet or pen with optional family membership."""
    id: str
    name: str = ""
    family_id: str = ""

    def label(self, show_names: bool = True) -> str:
        """Render as "Name (id)" when a name is known, else the raw id."""
        if show_names and self.name:
            return f"{self.name} ({self.id})"
        return self.id


@dataclass(frozen=True)
class FamilyDef:
    """Human-readable label for a tablet or pen family."""
    id: str
    name: str = ""

    @property
    def label(self) -> str:
        return self.name or self.id


DeviceDefs = Mapping[str, DeviceDef]
FamilyDefs = Mapping[str, FamilyDef]

_NO_FAMILY = ""


def device_sort_key(device_id: str, defs: Optional[DeviceDefs]) -> Tuple[str, str]:
    """
    Sort key of a device id: (family id, id).

    Ids without a definition sort as if their family id were empty.
    """
    definition = defs.get(device_id) if defs else None
    family_id = definition.family_id if definition else _NO_FAMILY
    return (family_id, device_id)


def family_label(family_id: str, family_defs: Optional[FamilyDefs]) -> str:
    """Human name of a family, falling back to the raw family id."""
    if family_defs and family_id in family_defs:
        return family_defs[family_id].label
    return family_id

