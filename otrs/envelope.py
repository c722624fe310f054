# otrs/envelope.py

import math
from decimal import Decimal
from dataclasses import dataclass, field
from typing import Mapping, Optional, Union

from lxml import etree

from otrs.errors import InvalidArgument


@dataclass
class FillReport:
    """Which leaves got a value and which ones the template did not have."""
    applied: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.missing


def qualify(leaf: str, namespace: Optional[str]) -> str:
    # lxml treats a bare name as "no namespace", which is what TicketUpdate needs
    return f"{{{namespace}}}{leaf}" if namespace else leaf


def find_leaf(document, leaf: str, namespace: Optional[str] = None):
    """First descendant called `leaf`, or None."""
    return next(document.iter(qualify(leaf, namespace)), None)


def fill(document, values: Mapping[str, str],
         namespace: Optional[str] = None) -> FillReport:
    """
    Sets the text of the first matching leaf for every entry in `values`.
    Leaves the template does not contain are skipped and listed in
    FillReport.missing.
    """
    report = FillReport()
    for leaf, value in values.items():
        element = find_leaf(document, leaf, namespace)
        if element is None:
            report.missing.append(leaf)
            continue
        try:
            element.text = value
        except ValueError as exc:
            # lxml refuses NUL bytes and most control characters
            raise InvalidArgument(leaf, "contains characters not allowed in XML") from exc
        report.applied.append(leaf)
    return report


def format_time_unit(value: Union[int, float]) -> str:
    """
    Decimal text for an elapsed-time value, independent of locale:
    2.0 -> "2", 1.5 -> "1.5", 0 -> "0".
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidArgument("time_unit", "must be a number")
    if isinstance(value, int):
        return str(value)
    if not math.isfinite(value):
        raise InvalidArgument("time_unit", "must be a finite number")
    if value.is_integer():
        return str(int(value))
    # repr gives the shortest round-tripping digits; Decimal drops the exponent
    return format(Decimal(repr(value)), "f")


def serialize(document) -> bytes:
    return etree.tostring(document, xml_declaration=True, encoding="utf-8")
