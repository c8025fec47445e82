"""
Rules mapping a weapon block to a flat record of stats.

Each rule writes at most one field. Most fields are the pruned text of the
first element with a given class; the rest need a custom extractor, either to
read a fixed cell out of one of the spread tables or to derive a value from a
field written by an earlier rule.

Rules run in the order of WEAPON_RULES. A rule that reads another field lists
it in depends_on, and the table is checked at import time so that every
dependency is written by an earlier rule.
"""

import logging
import math
from abc import ABC, abstractmethod
from decimal import ROUND_HALF_UP, Decimal
from functools import partial
from typing import Callable, Dict, Iterable, Optional, Sequence, Tuple

from .element_locator import WeaponLocator, element_child, text_content
from .exceptions import ExtractionRuleOrderError
from .text_normalizer import Value, is_missing, prune

logger = logging.getLogger(__name__)

WeaponRecord = Dict[str, Value]

# extractor(record, locator, field, class_key)
Extractor = Callable[[WeaponRecord, WeaponLocator, str, str], None]

SPREAD_TABLE_KEY = "spreadTable"
SPREAD_INC_DEC_TABLE_KEY = "spreadIncDecTable"
PELLETS_MARKER = "pellets"


class ExtractionRule(ABC):
    def __init__(self, field: str, class_key: str, depends_on: Sequence[str] = ()) -> None:
        self.field = field
        self.class_key = class_key
        self.depends_on = tuple(depends_on)

    @abstractmethod
    def apply(self, record: WeaponRecord, locator: WeaponLocator) -> None:
        """Write this rule's field into record, or leave it out if there is no value"""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.field!r}, {self.class_key!r})"


class SimpleRule(ExtractionRule):
    """Field is the numeric text of the first element with the class."""

    def apply(self, record: WeaponRecord, locator: WeaponLocator) -> None:
        value = locator.text_of(self.class_key)
        if value is None:
            return
        record[self.field] = value


class CustomRule(ExtractionRule):
    """Field is written by an extractor function."""

    def __init__(
        self, field: str, class_key: str, extractor: Extractor, depends_on: Sequence[str] = ()
    ) -> None:
        super().__init__(field, class_key, depends_on)
        self.extractor = extractor

    def apply(self, record: WeaponRecord, locator: WeaponLocator) -> None:
        self.extractor(record, locator, self.field, self.class_key)


def _store(record: WeaponRecord, field: str, value: Optional[Value]) -> None:
    if value is not None:
        record[field] = value


def extract_pellets(record: WeaponRecord, locator: WeaponLocator, field: str, class_key: str) -> None:
    """Pellet count from the first chart label mentioning pellets."""
    for label in locator.find_all(class_key):
        text = label.get_text()
        if PELLETS_MARKER in text:
            _store(record, field, prune(text, as_number=False))
            return


def extract_recoil_left(record: WeaponRecord, locator: WeaponLocator, field: str, class_key: str) -> None:
    value = locator.text_of(class_key)
    if value is not None:
        record[field] = abs(value)


def extract_recoil_right(record: WeaponRecord, locator: WeaponLocator, field: str, class_key: str) -> None:
    # Right recoil is rendered in the element following the left one
    value = locator.text_of_next_sibling(class_key)
    if value is not None:
        record[field] = abs(value)


def extract_first_shot_recoil(record: WeaponRecord, locator: WeaponLocator, field: str, class_key: str) -> None:
    """The multiplier is the second child of the first-shot element; the first is its label."""
    multiplier = element_child(locator.find_first(class_key), 1)
    _store(record, field, prune(text_content(multiplier)))


def effective_column(row: int, col: int, irregular_columns: bool) -> int:
    """
    Column index to read for (row, col).

    In the spread table, rows 1, 4, 7, ... carry an extra leading cell for the
    firing mode, so every other row is shifted one cell to the left.
    """
    if irregular_columns and row % 3 != 1:
        return col - 1
    return col


def read_table_value(
    locator: WeaponLocator, class_key: str, row: int, col: int, irregular_columns: bool = True
) -> Optional[Value]:
    cell = locator.table_cell(class_key, row, effective_column(row, col, irregular_columns))
    return prune(text_content(cell))


def extract_spread(
    record: WeaponRecord,
    locator: WeaponLocator,
    field: str,
    class_key: str,
    row: int,
    col: int,
    irregular_columns: bool = True,
) -> None:
    _store(record, field, read_table_value(locator, class_key, row, col, irregular_columns))


def round_half_away_from_zero(value: float) -> int:
    return int(Decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def first_spread_multiplier(first_shots: Optional[Value], spread_increase: Optional[Value]) -> Optional[int]:
    """
    Ratio of the first-shot spread to the per-shot spread increase.

    A zero increase gives 0. A missing or non-numeric operand gives None.
    """
    if not is_missing(spread_increase) and spread_increase == 0:
        return 0
    if is_missing(first_shots) or is_missing(spread_increase):
        return None
    if isinstance(first_shots, str) or isinstance(spread_increase, str):
        return None
    quotient = first_shots / spread_increase
    if not math.isfinite(quotient):
        return None
    return round_half_away_from_zero(quotient)


def extract_first_spread_multiplier(
    record: WeaponRecord,
    locator: WeaponLocator,
    field: str,
    class_key: str,
    row: int,
    col: int,
    divisor_field: str,
) -> None:
    first_shots = read_table_value(locator, class_key, row, col, irregular_columns=False)
    multiplier = first_spread_multiplier(first_shots, record.get(divisor_field))
    if multiplier is None:
        logger.debug(f"No {field}: first shots {first_shots}, {divisor_field} {record.get(divisor_field)}")
        return
    record[field] = multiplier


def spread_rule(field: str, class_key: str, row: int, col: int, irregular_columns: bool = True) -> CustomRule:
    return CustomRule(
        field, class_key, partial(extract_spread, row=row, col=col, irregular_columns=irregular_columns)
    )


def first_spread_multiplier_rule(field: str, class_key: str, row: int, col: int, divisor_field: str) -> CustomRule:
    return CustomRule(
        field,
        class_key,
        partial(extract_first_spread_multiplier, row=row, col=col, divisor_field=divisor_field),
        depends_on=(divisor_field,),
    )


def validate_rule_order(rules: Iterable[ExtractionRule]) -> Tuple[ExtractionRule, ...]:
    """Check that every dependency is written by an earlier rule."""
    rules = tuple(rules)
    produced = set()
    for rule in rules:
        missing = [name for name in rule.depends_on if name not in produced]
        if missing:
            raise ExtractionRuleOrderError(f"{rule!r} depends on {missing} which no earlier rule writes")
        produced.add(rule.field)
    return rules


WEAPON_RULES: Tuple[ExtractionRule, ...] = validate_rule_order(
    [
        SimpleRule("ammoCapacity", "lblMag"),
        SimpleRule("rateOfFire", "lblRPMValue"),
        CustomRule("pellets", "chartMinMaxLabel", extract_pellets),
        SimpleRule("initialVelocity", "lblSpeedValue"),
        SimpleRule("dragCoefficient", "lblDragCoe"),
        SimpleRule("reloadTime", "lblReloadLeft"),
        SimpleRule("reloadTimeEmpty", "lblReloadEmpty"),
        SimpleRule("deployTime", "lblDeployTime"),
        SimpleRule("verticalRecoil", "recoilInitUpValue"),
        CustomRule("recoilLeft", "recoilHorValue", extract_recoil_left),
        CustomRule("recoilRight", "recoilHorValue", extract_recoil_right),
        CustomRule("recoilFirstShotMultiplier", "recoilFirstShot", extract_first_shot_recoil),
        SimpleRule("recoilDecrease", "recoilDec"),
        SimpleRule("dispersion", "hipSpreadValue"),
        spread_rule("adsStandBaseMin", SPREAD_TABLE_KEY, 1, 1),
        spread_rule("adsStandBaseMax", SPREAD_TABLE_KEY, 1, 2),
        spread_rule("adsCrouchBaseMin", SPREAD_TABLE_KEY, 2, 1),
        spread_rule("adsCrouchBaseMax", SPREAD_TABLE_KEY, 2, 2),
        spread_rule("adsProneBaseMin", SPREAD_TABLE_KEY, 3, 1),
        spread_rule("adsProneBaseMax", SPREAD_TABLE_KEY, 3, 2),
        spread_rule("hipStandBaseMin", SPREAD_TABLE_KEY, 4, 1),
        spread_rule("hipStandBaseMax", SPREAD_TABLE_KEY, 4, 2),
        spread_rule("hipCrouchBaseMin", SPREAD_TABLE_KEY, 5, 1),
        spread_rule("hipCrouchBaseMax", SPREAD_TABLE_KEY, 5, 2),
        spread_rule("hipProneBaseMin", SPREAD_TABLE_KEY, 6, 1),
        spread_rule("hipProneBaseMax", SPREAD_TABLE_KEY, 6, 2),
        spread_rule("adsStandSpreadInc", SPREAD_INC_DEC_TABLE_KEY, 2, 1, irregular_columns=False),
        spread_rule("hipStandSpreadInc", SPREAD_INC_DEC_TABLE_KEY, 2, 2, irregular_columns=False),
        first_spread_multiplier_rule("adsStandFirstSpreadMul", SPREAD_INC_DEC_TABLE_KEY, 1, 1, "adsStandSpreadInc"),
        first_spread_multiplier_rule("hipStandFirstSpreadMul", SPREAD_INC_DEC_TABLE_KEY, 1, 2, "hipStandSpreadInc"),
        spread_rule("adsStandSpreadDec", SPREAD_INC_DEC_TABLE_KEY, 3, 1, irregular_columns=False),
        spread_rule("hipStandSpreadDec", SPREAD_INC_DEC_TABLE_KEY, 3, 2, irregular_columns=False),
    ]
)


def apply_rules(
    record: WeaponRecord, locator: WeaponLocator, rules: Sequence[ExtractionRule] = WEAPON_RULES
) -> WeaponRecord:
    """Run every rule against one weapon block, in order."""
    for rule in rules:
        rule.apply(record, locator)
    return record
