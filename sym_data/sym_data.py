"""
Walks the weapon stat page and builds the weapon name -> stats mapping.

The page groups weapons into sortable tables, one per weapon class (assault,
medic, support, scout, sidearm, misc). Each child element of such a table is
one weapon block.
"""

import logging
from pathlib import Path
from typing import Dict, Sequence, Tuple, Union

from bs4 import BeautifulSoup, Tag

from .element_locator import WeaponLocator, element_children
from .exceptions import SymDataInputException, WeaponNameNotFoundException
from .extraction_rules import WEAPON_RULES, ExtractionRule, WeaponRecord, apply_rules

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

HTML_PARSER = "lxml"
WEAPON_CLASS_KEY = "sortableTable"
WEAPON_NAME_KEY = "lblWeaponNameValue"

SymData = Dict[str, WeaponRecord]


def parse_document(html_content: str) -> BeautifulSoup:
    return BeautifulSoup(html_content, HTML_PARSER)


def load_document(html_file: Union[str, Path]) -> BeautifulSoup:
    """
    Read and parse the saved stat page.

    Raises:
        SymDataInputException: If the file is missing or cannot be read
    """
    html_file = Path(html_file)
    logger.info(f"Loading HTML from {html_file}")
    try:
        with open(html_file, "r", encoding="utf-8") as f:
            html_content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Error reading {html_file}: {e}")
        raise SymDataInputException(f"Error reading {html_file}: {e}")
    return parse_document(html_content)


def extract_weapon(weapon: Tag, rules: Sequence[ExtractionRule] = WEAPON_RULES) -> Tuple[str, WeaponRecord]:
    """
    Extract the name and stats of one weapon block.

    Raises:
        WeaponNameNotFoundException: If the block has no weapon name element
    """
    locator = WeaponLocator(weapon)
    name = locator.text_of(WEAPON_NAME_KEY, keep_spaces=True, as_number=False)
    if name is None:
        raise WeaponNameNotFoundException(f"No .{WEAPON_NAME_KEY} element in weapon block")

    record: WeaponRecord = {}
    apply_rules(record, locator, rules)
    return name, record


def extract_sym_data(soup: Union[BeautifulSoup, Tag], rules: Sequence[ExtractionRule] = WEAPON_RULES) -> SymData:
    """
    Extract every weapon of every weapon class, in document order.

    A weapon block without a name is logged and skipped. When two blocks share
    a name the later one replaces the earlier one.
    """
    sym_data: SymData = {}
    weapon_classes = soup.find_all(class_=WEAPON_CLASS_KEY)
    logger.info(f"Found {len(weapon_classes)} weapon classes")

    for class_index, weapon_class in enumerate(weapon_classes):
        weapons = element_children(weapon_class)
        logger.info(f"Weapon class {class_index}: {len(weapons)} weapons")

        for weapon_index, weapon in enumerate(weapons):
            try:
                name, record = extract_weapon(weapon, rules)
            except WeaponNameNotFoundException as e:
                logger.error(f"Skipping weapon {weapon_index} of weapon class {class_index}: {e}")
                continue

            if name in sym_data:
                logger.warning(f"Duplicate weapon name {name!r}, replacing earlier entry")
            sym_data[name] = record

    logger.info(f"Extracted {len(sym_data)} weapons")
    return sym_data


def create_sym_data(html_file: Union[str, Path]) -> SymData:
    """Load the stat page and extract all weapons from it."""
    return extract_sym_data(load_document(html_file))
