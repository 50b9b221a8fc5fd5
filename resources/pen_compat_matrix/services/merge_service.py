"""
Dataset merging for Pen Compatibility Matrix.

Several dataset documents can be loaded into one matrix. Definitions are keyed
by id and the last loaded definition wins; rows are concatenated, renumbered
and never deduplicated.
"""

import logging
from dataclasses import replace
from typing import Dict, Iterable, Optional, TypeVar

from ..models.dataset import Dataset
from ..models.device import DeviceKind
from ..models.diagnostics import Diagnostics, ValidationWarning, WarningKind
from .dataset_parser import check_references

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Warnings that belong to a single document and stay valid after merging
_CARRIED_KINDS = frozenset({
    WarningKind.UNKNOWN_FAMILY,
    WarningKind.DUPLICATE_DEFINITION,
    WarningKind.MALFORMED_DEFINITION,
    WarningKind.OVERRIDDEN_DEFINITION,
})


def _merge_table(target: Dict[str, T], incoming: Dict[str, T], kind: DeviceKind,
                 what: str, diagnostics: Optional[Diagnostics],
                 source: Optional[str]) -> None:
    for key, value in incoming.items():
        if diagnostics is not None and key in target and target[key] != value:
            diagnostics.add(ValidationWarning(
                WarningKind.OVERRIDDEN_DEFINITION, kind, key,
                f"{kind.display_name} {what}{key} redefined by {source or 'a later dataset'}",
                source=source,
            ), logger)
        target[key] = value


def merge_datasets(datasets: Iterable[Dataset], report_conflicts: bool = False) -> Dataset:
    """
    Combine datasets into a new one.

    Args:
        datasets: Datasets in load order
        report_conflicts: Record an overridden-definition warning whenever a
            later dataset redefines an id with different content

    Returns:
        A fresh Dataset; the inputs are not modified and share no containers
        with the result
    """
    merged = Dataset()
    conflicts = merged.diagnostics if report_conflicts else None
    count = 0

    for dataset in datasets:
        count += 1
        source = dataset.sources[-1] if dataset.sources else None
        # Row positions are renumbered so diagnostics refer to the merged list
        offset = len(merged.rows)
        merged.rows.extend(replace(row, index=offset + i)
                           for i, row in enumerate(dataset.rows))
        for kind in DeviceKind:
            _merge_table(merged.defs(kind), dataset.defs(kind), kind, "",
                         conflicts, source)
            _merge_table(merged.family_defs(kind), dataset.family_defs(kind), kind,
                         "family ", conflicts, source)
        merged.diagnostics.extend(dataset.diagnostics, kinds=_CARRIED_KINDS)
        merged.sources.extend(dataset.sources)

    # The same document loaded twice reports its warnings once
    merged.diagnostics.warnings = list(dict.fromkeys(merged.diagnostics.warnings))
    check_references(merged)
    logger.debug(f"Merged {count} datasets into {merged}")
    return merged
