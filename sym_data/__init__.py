"""
Sym Data - Weapon statistics extracted from a saved Symthic stat page.
"""

from .exceptions import (
    ExtractionRuleOrderError,
    SymDataException,
    SymDataInputException,
    WeaponNameNotFoundException,
)
from .extraction_rules import WEAPON_RULES, CustomRule, ExtractionRule, SimpleRule
from .serializer import persist, to_compact_json, to_pretty_json
from .sym_data import SymData, create_sym_data, extract_sym_data, load_document, parse_document
from .text_normalizer import prune

__all__ = [
    "SymData",
    "WEAPON_RULES",
    "ExtractionRule",
    "SimpleRule",
    "CustomRule",
    "prune",
    "parse_document",
    "load_document",
    "extract_sym_data",
    "create_sym_data",
    "to_compact_json",
    "to_pretty_json",
    "persist",
    "SymDataException",
    "SymDataInputException",
    "WeaponNameNotFoundException",
    "ExtractionRuleOrderError",
]
