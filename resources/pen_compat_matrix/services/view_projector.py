"""
View projection for Pen Compatibility Matrix.

The same effective rows can be shown four ways: as authored (grouped), as a
strict one-tablet-one-pen fact table (ungrouped), or aggregated per pen or per
tablet to answer "what works with X".
"""

import logging
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Set, Union

from ..models.dataset import Dataset, EffectiveRow
from ..models.device import DeviceDef, DeviceKind, device_sort_key
from ..models.display import DisplayRow, ViewMode
from .formatter import sort_device_ids

logger = logging.getLogger(__name__)


def project_grouped(rows: Iterable[EffectiveRow], tablet_defs: Mapping[str, DeviceDef],
                    pen_defs: Mapping[str, DeviceDef]) -> List[DisplayRow]:
    """One display row per effective row, each side sorted."""
    return [
        DisplayRow(
            tablets=sort_device_ids(row.tablet_ids, tablet_defs),
            pens=sort_device_ids(row.pen_ids, pen_defs),
        )
        for row in rows
    ]


def project_ungrouped(rows: Iterable[EffectiveRow], tablet_defs: Mapping[str, DeviceDef],
                      pen_defs: Mapping[str, DeviceDef]) -> List[DisplayRow]:
    """One display row per (tablet, pen) pair of each row's sorted cross product."""
    display_rows = []
    for grouped in project_grouped(rows, tablet_defs, pen_defs):
        for tablet_id in grouped.tablets:
            for pen_id in grouped.pens:
                display_rows.append(DisplayRow(tablets=(tablet_id,), pens=(pen_id,)))
    return display_rows


def _aggregate(rows: Iterable[EffectiveRow], key_kind: DeviceKind) -> Dict[str, Set[str]]:
    """Union the partner ids of every row, keyed by each id of key_kind."""
    partner_kind = DeviceKind.PEN if key_kind is DeviceKind.TABLET else DeviceKind.TABLET
    partners: Dict[str, Set[str]] = {}
    for row in rows:
        row_partners = row.ids(partner_kind)
        for key_id in row.ids(key_kind):
            partners.setdefault(key_id, set()).update(row_partners)
    return partners


def project_by_pen(rows: Iterable[EffectiveRow], tablet_defs: Mapping[str, DeviceDef],
                   pen_defs: Mapping[str, DeviceDef]) -> List[DisplayRow]:
    """One display row per pen listing every tablet it works with."""
    tablets_by_pen = _aggregate(rows, DeviceKind.PEN)
    return [
        DisplayRow(tablets=sort_device_ids(tablets_by_pen[pen_id], tablet_defs), pens=(pen_id,))
        for pen_id in sorted(tablets_by_pen, key=lambda p: device_sort_key(p, pen_defs))
    ]


def project_by_tablet(rows: Iterable[EffectiveRow], tablet_defs: Mapping[str, DeviceDef],
                      pen_defs: Mapping[str, DeviceDef]) -> List[DisplayRow]:
    """One display row per tablet listing every pen it works with."""
    pens_by_tablet = _aggregate(rows, DeviceKind.TABLET)
    return [
        DisplayRow(tablets=(tablet_id,), pens=sort_device_ids(pens_by_tablet[tablet_id], pen_defs))
        for tablet_id in sorted(pens_by_tablet, key=lambda t: device_sort_key(t, tablet_defs))
    ]


Projector = Callable[[Iterable[EffectiveRow], Mapping[str, DeviceDef], Mapping[str, DeviceDef]],
                     List[DisplayRow]]

PROJECTORS: Dict[ViewMode, Projector] = {
    ViewMode.GROUPED: project_grouped,
    ViewMode.UNGROUPED: project_ungrouped,
    ViewMode.BY_PEN: project_by_pen,
    ViewMode.BY_TABLET: project_by_tablet,
}


def project(dataset: Dataset,
            view_mode: Optional[Union[ViewMode, str]] = ViewMode.GROUPED) -> List[DisplayRow]:
    """
    Project the dataset's rows for a view mode.

    Args:
        dataset: Dataset to display
        view_mode: ViewMode or its name; None means grouped

    Returns:
        Display rows in display order

    Raises:
        ValueError: If view_mode is an unknown name
    """
    if not isinstance(view_mode, ViewMode):
        view_mode = ViewMode.from_name(view_mode)
    display_rows = PROJECTORS[view_mode](dataset.rows, dataset.tablet_defs, dataset.pen_defs)
    logger.debug(f"Projected {len(dataset.rows)} rows into {len(display_rows)} "
                 f"{view_mode.value} rows")
    return display_rows
