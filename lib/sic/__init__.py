"""SIC code to industry classification (UK SIC 2007, section level)."""

from lib.sic.sections import SICSection, SIC_SECTIONS
from lib.sic.classifier import derive_industry, lookup_section, division_of, split_codes

__all__ = [
    "SICSection",
    "SIC_SECTIONS",
    "derive_industry",
    "lookup_section",
    "division_of",
    "split_codes",
]
