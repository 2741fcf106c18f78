"""Map SIC codes to industry section labels."""

import re
from typing import Iterable, Optional, Union

from lib.sic.sections import SIC_SECTIONS, SICSection

INDUSTRY_SEPARATOR = " | "

_SPLIT_RE = re.compile(r"[,;/\s]+")
_LEADING_DIGITS_RE = re.compile(r"^\d+")


def division_of(code) -> Optional[int]:
    """Two-digit division of a SIC code, or None if it doesn't start with a digit."""
    if code is None:
        return None
    match = _LEADING_DIGITS_RE.match(str(code).strip()[:2])
    return int(match.group()) if match else None


def lookup_section(code, sections: tuple[SICSection, ...] = SIC_SECTIONS) -> str:
    """Section label for one SIC code, e.g. "62020" -> "J — Information & Communication".

    Unmapped or malformed codes give "".
    """
    division = division_of(code)
    if division is None:
        return ""
    for section in sections:
        if section.contains(division):
            return section.label
    return ""


def split_codes(value: Union[str, Iterable, None]) -> list:
    if not value:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [c for c in _SPLIT_RE.split(str(value)) if c]


def derive_industry(value: Union[str, Iterable, None], sections: tuple[SICSection, ...] = SIC_SECTIONS) -> str:
    """Industry label(s) for a SIC field value.

    Accepts a delimited string ("62020, 62090") or a list of codes. Distinct
    labels are joined with " | " in first-seen order.
    """
    labels = (lookup_section(code, sections) for code in split_codes(value))
    return INDUSTRY_SEPARATOR.join(dict.fromkeys(label for label in labels if label))
