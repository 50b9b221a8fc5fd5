"""
Dataset consistency report for Pen Compatibility Matrix.

Summarizes the diagnostics of a dataset the way maintainers of the XML file
need them: how many devices are defined and used, which ids are used without a
definition, which definitions are never used, and which ids repeat.
"""

from dataclasses import dataclass, field
from typing import Dict, List

from ..models.dataset import Dataset
from ..models.device import DeviceKind
from ..models.diagnostics import WarningKind
from ..utils.logger import ColorCodes


@dataclass
class KindReport:
    """Counts and id lists for tablets or pens."""
    kind: DeviceKind
    defined: int = 0
    used: int = 0
    duplicates: List[str] = field(default_factory=list)
    undefined: List[str] = field(default_factory=list)
    unused: List[str] = field(default_factory=list)
    unknown_families: List[str] = field(default_factory=list)


@dataclass
class DatasetReport:
    """Report over all device kinds of a dataset."""
    rows: int
    sources: List[str]
    kinds: Dict[DeviceKind, KindReport]

    @property
    def has_problems(self) -> bool:
        return any(
            r.duplicates or r.undefined or r.unknown_families for r in self.kinds.values()
        )


def build_report(dataset: Dataset) -> DatasetReport:
    """Collect report figures from a dataset and its diagnostics."""
    diagnostics = dataset.diagnostics
    kinds = {}
    for kind in DeviceKind:
        kinds[kind] = KindReport(
            kind=kind,
            defined=len(dataset.defs(kind)),
            used=len(dataset.used_ids(kind)),
            duplicates=diagnostics.subjects(WarningKind.DUPLICATE_DEFINITION, kind),
            undefined=diagnostics.subjects(WarningKind.MISSING_DEFINITION, kind),
            unused=diagnostics.subjects(WarningKind.UNUSED_DEFINITION, kind),
            unknown_families=diagnostics.subjects(WarningKind.UNKNOWN_FAMILY, kind),
        )
    return DatasetReport(rows=len(dataset.rows), sources=list(dataset.sources), kinds=kinds)


def format_report(report: DatasetReport, colored: bool = False) -> str:
    """Render a report as console text."""
    def paint(text: str, color: str) -> str:
        return f"{color}{text}{ColorCodes.NC}" if colored else text

    lines = [f"Rows: {report.rows}"]
    if report.sources:
        lines.append(f"Sources: {', '.join(report.sources)}")

    for kind_report in report.kinds.values():
        plural = kind_report.kind.plural.capitalize()
        lines.append("")
        lines.append(paint(plural, ColorCodes.PURPLE))
        lines.append(f"  Definitions count: {kind_report.defined}")
        lines.append(f"  Usage count: {kind_report.used}")
        sections = (
            ("Duplicate definitions", kind_report.duplicates, ColorCodes.RED),
            (f"{plural} used but not defined", kind_report.undefined, ColorCodes.YELLOW),
            (f"{plural} defined but not used", kind_report.unused, ColorCodes.GRAY),
            ("Unknown families", kind_report.unknown_families, ColorCodes.RED),
        )
        for title, ids, color in sections:
            lines.append(f"  {title} ({len(ids)}):")
            if ids:
                lines.append("    " + paint(", ".join(ids), color))
    return "\n".join(lines)
