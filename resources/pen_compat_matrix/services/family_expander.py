"""
Family expansion for Pen Compatibility Matrix.

Compatibility rows may name whole tablet or pen families instead of listing
every device. This module resolves those references through the familyid
attributes of the device definitions.
"""

import logging
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional

from ..models.dataset import CompatFact, EffectiveRow
from ..models.device import DeviceDef, DeviceKind
from ..models.diagnostics import Diagnostics, ValidationWarning, WarningKind

logger = logging.getLogger(__name__)

FamilyIndex = Dict[str, FrozenSet[str]]


def build_family_index(defs: Mapping[str, DeviceDef]) -> FamilyIndex:
    """Reverse index family id -> member device ids. Devices without a family are skipped."""
    members: Dict[str, set] = {}
    for device in defs.values():
        if device.family_id:
            members.setdefault(device.family_id, set()).add(device.id)
    return {family_id: frozenset(ids) for family_id, ids in members.items()}


def resolve_ids(direct_ids: Iterable[str], family_ids: Iterable[str],
                index: FamilyIndex, kind: DeviceKind,
                diagnostics: Optional[Diagnostics] = None,
                row_index: Optional[int] = None,
                source: Optional[str] = None) -> FrozenSet[str]:
    """
    Union of the direct ids and the members of every referenced family.

    Unknown families contribute nothing and are reported to diagnostics.
    """
    resolved = set(direct_ids)
    for family_id in sorted(family_ids):
        members = index.get(family_id)
        if members is None:
            if diagnostics is not None:
                diagnostics.add(ValidationWarning(
                    WarningKind.UNKNOWN_FAMILY, kind, family_id,
                    f"{kind.display_name} family {family_id} has no members",
                    row_index=row_index, source=source,
                ), logger)
            continue
        resolved.update(members)
    return frozenset(resolved)


def expand_fact(fact: CompatFact, tablet_index: FamilyIndex, pen_index: FamilyIndex,
                diagnostics: Optional[Diagnostics] = None,
                source: Optional[str] = None) -> EffectiveRow:
    """Resolve the family references of a single fact."""
    indexes = {DeviceKind.TABLET: tablet_index, DeviceKind.PEN: pen_index}
    resolved = {
        kind: resolve_ids(fact.direct_ids(kind), fact.family_ids(kind), indexes[kind],
                          kind, diagnostics, row_index=fact.index, source=source)
        for kind in DeviceKind
    }
    return EffectiveRow(
        tablet_ids=resolved[DeviceKind.TABLET],
        pen_ids=resolved[DeviceKind.PEN],
        index=fact.index,
    )


def expand_facts(facts: Iterable[CompatFact], tablet_defs: Mapping[str, DeviceDef],
                 pen_defs: Mapping[str, DeviceDef],
                 diagnostics: Optional[Diagnostics] = None,
                 source: Optional[str] = None) -> List[EffectiveRow]:
    """
    Expand every fact of a document into an effective row.

    Args:
        facts: Facts as parsed from the document
        tablet_defs: Tablet definitions providing tablet family membership
        pen_defs: Pen definitions providing pen family membership
        diagnostics: Optional collection receiving unknown-family warnings
        source: Optional document name for the warnings

    Returns:
        Effective rows in document order
    """
    tablet_index = build_family_index(tablet_defs)
    pen_index = build_family_index(pen_defs)
    return [expand_fact(fact, tablet_index, pen_index, diagnostics, source) for fact in facts]
