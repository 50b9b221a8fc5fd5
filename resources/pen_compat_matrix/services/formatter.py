"""
Sorting and formatting for Pen Compatibility Matrix.

Device ids are ordered by (family id, id) everywhere. Rendering turns ids into
"Name (id)" labels, optionally bucketed by family, and computes the statistics
shown beside the matrix.
"""

from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..models.dataset import Dataset
from ..models.device import DeviceDef, DeviceKind, FamilyDef, device_sort_key, family_label
from ..models.display import (
    DisplayRow, FamilyGroup, FormatOptions, FormattedCell, FormattedRow, MatrixStats
)

OTHER_FAMILY_LABEL = "Other"


def compare_device_ids(a: str, b: str, defs: Optional[Mapping[str, DeviceDef]]) -> int:
    """
    Compare two device ids by (family id, id).

    Returns:
        -1, 0 or 1
    """
    key_a = device_sort_key(a, defs)
    key_b = device_sort_key(b, defs)
    if key_a < key_b:
        return -1
    if key_a > key_b:
        return 1
    return 0


def sort_device_ids(ids: Iterable[str],
                    defs: Optional[Mapping[str, DeviceDef]]) -> Tuple[str, ...]:
    return tuple(sorted(ids, key=lambda device_id: device_sort_key(device_id, defs)))


def render_device_id(device_id: str, defs: Optional[Mapping[str, DeviceDef]],
                     show_names: bool = True) -> str:
    """Render "Name (id)" when names are shown and known, else the raw id."""
    definition = defs.get(device_id) if defs else None
    if definition is None:
        return device_id
    return definition.label(show_names)


def group_by_family(ids: Sequence[str], defs: Optional[Mapping[str, DeviceDef]],
                    family_defs: Optional[Mapping[str, FamilyDef]],
                    show_names: bool = True) -> Tuple[FamilyGroup, ...]:
    """
    Partition ids into family buckets sorted by family id.

    Ids without a family id land in the "Other" bucket, which sorts first
    since its family id is empty.
    """
    buckets: Dict[str, List[str]] = {}
    for device_id in sort_device_ids(ids, defs):
        family_id = device_sort_key(device_id, defs)[0]
        buckets.setdefault(family_id, []).append(device_id)

    return tuple(
        FamilyGroup(
            family_id=family_id,
            label=family_label(family_id, family_defs) if family_id else OTHER_FAMILY_LABEL,
            items=tuple(render_device_id(i, defs, show_names) for i in buckets[family_id]),
        )
        for family_id in sorted(buckets)
    )


def format_cell(ids: Sequence[str], defs: Optional[Mapping[str, DeviceDef]],
                family_defs: Optional[Mapping[str, FamilyDef]],
                options: FormatOptions) -> FormattedCell:
    if options.organize_by_family:
        return FormattedCell(
            groups=group_by_family(ids, defs, family_defs, options.show_names),
            grouped=True,
        )
    items = tuple(render_device_id(i, defs, options.show_names) for i in ids)
    return FormattedCell(groups=(FamilyGroup("", "", items),) if items else ())


def format_row(row: DisplayRow, dataset: Dataset,
               options: Optional[FormatOptions] = None) -> FormattedRow:
    """
    Render both cells of a display row.

    Without family grouping the row's own ordering is kept.
    """
    options = options or FormatOptions()
    return FormattedRow(
        row=row,
        tablets=format_cell(row.tablets, dataset.tablet_defs,
                            dataset.tablet_family_defs, options),
        pens=format_cell(row.pens, dataset.pen_defs, dataset.pen_family_defs, options),
        options=options,
    )


def compute_stats(visible_rows: Sequence[DisplayRow], dataset: Dataset,
                  total_rows: Optional[int] = None) -> MatrixStats:
    """
    Visible-vs-total counters.

    Args:
        visible_rows: Rows left after filtering
        dataset: The full dataset, source of the totals
        total_rows: Row count before filtering, defaults to the visible count

    Returns:
        MatrixStats for the status bar
    """
    visible_tablets = {t for row in visible_rows for t in row.tablets}
    visible_pens = {p for row in visible_rows for p in row.pens}
    return MatrixStats(
        visible_rows=len(visible_rows),
        total_rows=len(visible_rows) if total_rows is None else total_rows,
        visible_tablets=len(visible_tablets),
        total_tablets=len(dataset.used_ids(DeviceKind.TABLET)),
        visible_pens=len(visible_pens),
        total_pens=len(dataset.used_ids(DeviceKind.PEN)),
    )
