"""
Dataset parser for Pen Compatibility Matrix.

This module turns the XML compatibility document into definition tables and
raw compatibility facts, expands family references, and records diagnostics
about missing, unused, duplicate and malformed definitions.
"""

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from ..errors import ParseError
from ..models.dataset import CompatFact, Dataset
from ..models.device import DeviceDef, DeviceKind, FamilyDef
from ..models.diagnostics import Diagnostics, ValidationWarning, WarningKind
from .family_expander import expand_facts

logger = logging.getLogger(__name__)

COMPAT_ROW_TAG = "compatrow"


@dataclass
class ParsedDocument:
    """Definitions and unexpanded facts of a single document."""
    tablet_defs: Dict[str, DeviceDef] = field(default_factory=dict)
    pen_defs: Dict[str, DeviceDef] = field(default_factory=dict)
    tablet_family_defs: Dict[str, FamilyDef] = field(default_factory=dict)
    pen_family_defs: Dict[str, FamilyDef] = field(default_factory=dict)
    facts: List[CompatFact] = field(default_factory=list)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)
    source: Optional[str] = None

    def defs(self, kind: DeviceKind) -> Dict[str, DeviceDef]:
        return self.tablet_defs if kind is DeviceKind.TABLET else self.pen_defs

    def family_defs(self, kind: DeviceKind) -> Dict[str, FamilyDef]:
        return self.tablet_family_defs if kind is DeviceKind.TABLET else self.pen_family_defs


def node_text_content(elem: ET.Element) -> str:
    return "".join(elem.itertext())


def split_tokens(text: Optional[str]) -> List[str]:
    """Split on any run of whitespace, dropping empty tokens."""
    return text.split() if text else []


def parse_xml(xml_text: Union[str, bytes], source: Optional[str] = None) -> ET.Element:
    """
    Parse the document into an element tree.

    Raises:
        ParseError: If the document is not well-formed
    """
    try:
        return ET.fromstring(xml_text)
    except ET.ParseError as e:
        where = f" in {source}" if source else ""
        raise ParseError(f"XML parsing failed{where}: {e}", source=source,
                         position=getattr(e, "position", None)) from e


def parse_document(xml_text: Union[str, bytes], source: Optional[str] = None) -> ParsedDocument:
    """
    Extract definitions and compatibility facts from a dataset document.

    Args:
        xml_text: The XML document
        source: Optional name of the document, used in diagnostics

    Returns:
        ParsedDocument with unexpanded facts

    Raises:
        ParseError: If the document is not well-formed
    """
    root = parse_xml(xml_text, source)
    parsed = ParsedDocument(source=source)

    for kind in DeviceKind:
        _parse_device_defs(root, kind, parsed)
        _parse_family_defs(root, kind, parsed)

    for index, row in enumerate(root.iter(COMPAT_ROW_TAG)):
        parsed.facts.append(_parse_compat_row(row, index))

    logger.debug(
        f"Parsed {len(parsed.facts)} rows, {len(parsed.tablet_defs)} tablet and "
        f"{len(parsed.pen_defs)} pen definitions from {source or 'document'}"
    )
    return parsed


def _warn(parsed: ParsedDocument, kind: WarningKind, device_kind: DeviceKind,
          subject_id: str, message: str) -> None:
    parsed.diagnostics.add(
        ValidationWarning(kind, device_kind, subject_id, message, source=parsed.source),
        logger,
    )


def _parse_device_defs(root: ET.Element, kind: DeviceKind, parsed: ParsedDocument) -> None:
    defs = parsed.defs(kind)
    for elem in root.iter(kind.definition_tag):
        device_id = (elem.get("id") or "").strip()
        if not device_id:
            _warn(parsed, WarningKind.MALFORMED_DEFINITION, kind, "",
                  f"<{kind.definition_tag}> without id skipped")
            continue

        name = elem.get("name")
        if name is None:
            _warn(parsed, WarningKind.MALFORMED_DEFINITION, kind, device_id,
                  f"{kind.display_name} {device_id} has no name")
            name = ""

        if device_id in defs:
            _warn(parsed, WarningKind.DUPLICATE_DEFINITION, kind, device_id,
                  f"{kind.display_name} {device_id} defined more than once")

        defs[device_id] = DeviceDef(
            id=device_id,
            name=name.strip(),
            family_id=(elem.get("familyid") or "").strip(),
        )


def _parse_family_defs(root: ET.Element, kind: DeviceKind, parsed: ParsedDocument) -> None:
    family_defs = parsed.family_defs(kind)
    for elem in root.iter(kind.family_definition_tag):
        family_id = (elem.get("id") or "").strip()
        if not family_id:
            _warn(parsed, WarningKind.MALFORMED_DEFINITION, kind, "",
                  f"<{kind.family_definition_tag}> without id skipped")
            continue
        if family_id in family_defs:
            _warn(parsed, WarningKind.DUPLICATE_DEFINITION, kind, family_id,
                  f"{kind.display_name} family {family_id} defined more than once")
        family_defs[family_id] = FamilyDef(id=family_id, name=(elem.get("name") or "").strip())


def _collect_child_tokens(row: ET.Element, tag: str) -> frozenset:
    tokens = set()
    for child in row.findall(tag):
        tokens.update(split_tokens(node_text_content(child)))
    return frozenset(tokens)


def _parse_compat_row(row: ET.Element, index: int) -> CompatFact:
    return CompatFact(
        tablet_ids=_collect_child_tokens(row, DeviceKind.TABLET.tag),
        pen_ids=_collect_child_tokens(row, DeviceKind.PEN.tag),
        tablet_family_ids=_collect_child_tokens(row, DeviceKind.TABLET.family_tag),
        pen_family_ids=_collect_child_tokens(row, DeviceKind.PEN.family_tag),
        index=index,
    )


def check_references(dataset: Dataset, source: Optional[str] = None) -> None:
    """
    Record missing and unused definitions of a dataset.

    Missing pens are traced to the tablets of the rows that used them and
    missing tablets to the positions of those rows. Existing missing/unused
    entries are replaced, so the check can be re-run after a merge.
    """
    diagnostics = dataset.diagnostics
    stale = {WarningKind.MISSING_DEFINITION, WarningKind.UNUSED_DEFINITION}
    diagnostics.warnings = [w for w in diagnostics.warnings if w.kind not in stale]
    diagnostics.missing_tablets = {}
    diagnostics.missing_pens = {}

    for row in dataset.rows:
        for tablet_id in row.tablet_ids:
            if tablet_id not in dataset.tablet_defs:
                diagnostics.record_missing_tablet(tablet_id, row.index)
        for pen_id in row.pen_ids:
            if pen_id not in dataset.pen_defs:
                diagnostics.record_missing_pen(pen_id, row.tablet_ids)

    for tablet_id in sorted(diagnostics.missing_tablets):
        rows = sorted(diagnostics.missing_tablets[tablet_id])
        diagnostics.add(ValidationWarning(
            WarningKind.MISSING_DEFINITION, DeviceKind.TABLET, tablet_id,
            f"Tablet {tablet_id} is used but not defined",
            row_index=rows[0], source=source,
        ), logger)
    for pen_id in sorted(diagnostics.missing_pens):
        tablets = ", ".join(sorted(diagnostics.missing_pens[pen_id])) or "no tablets"
        diagnostics.add(ValidationWarning(
            WarningKind.MISSING_DEFINITION, DeviceKind.PEN, pen_id,
            f"Pen {pen_id} is used but not defined (listed with {tablets})",
            source=source,
        ), logger)

    for kind in DeviceKind:
        used = dataset.used_ids(kind)
        for device_id in sorted(set(dataset.defs(kind)) - used):
            diagnostics.add(ValidationWarning(
                WarningKind.UNUSED_DEFINITION, kind, device_id,
                f"{kind.display_name} {device_id} is defined but never used",
                source=source,
            ), logger)


def load_dataset(xml_text: Union[str, bytes], source: Optional[str] = None) -> Dataset:
    """
    Parse, expand and validate a dataset document.

    Args:
        xml_text: The XML document
        source: Optional name of the document (URL or path)

    Returns:
        Dataset with effective rows and collected diagnostics

    Raises:
        ParseError: If the document is not well-formed
    """
    parsed = parse_document(xml_text, source)
    rows = expand_facts(parsed.facts, parsed.tablet_defs, parsed.pen_defs,
                        parsed.diagnostics, source=source)
    dataset = Dataset(
        rows=rows,
        tablet_defs=parsed.tablet_defs,
        pen_defs=parsed.pen_defs,
        tablet_family_defs=parsed.tablet_family_defs,
        pen_family_defs=parsed.pen_family_defs,
        diagnostics=parsed.diagnostics,
        sources=[source] if source else [],
    )
    check_references(dataset, source)
    return dataset
