"""
Test walking weapon classes and weapon blocks

Builds small stat pages in the same shape as the saved Symthic page and checks
the records extracted from them.
"""

import logging
from pathlib import Path

import pytest

from sym_data import (
    SymDataInputException,
    WeaponNameNotFoundException,
    create_sym_data,
    extract_sym_data,
    load_document,
    parse_document,
)
from sym_data.sym_data import extract_weapon

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

# Rows 1 and 4 carry the firing mode cell, the others only min and max
SPREAD_TABLE = """
<table class="spreadTable">
  <tr><th>Mode</th><th>Min</th><th>Max</th></tr>
  <tr><td rowspan="3">ADS</td><td>0.11°</td><td>0.12°</td></tr>
  <tr><td>0.21°</td><td>0.22°</td></tr>
  <tr><td>0.31°</td><td>0.32°</td></tr>
  <tr><td rowspan="3">HIP</td><td>1.41°</td><td>1.42°</td></tr>
  <tr><td>1.51°</td><td>1.52°</td></tr>
  <tr><td>1.61°</td><td>1.62°</td></tr>
</table>
"""

SPREAD_INC_DEC_TABLE = """
<table class="spreadIncDecTable">
  <tr><th></th><th>ADS</th><th>HIP</th></tr>
  <tr><td>First shots in spread</td><td>3</td><td>4</td></tr>
  <tr><td>Spread increase</td><td>0.5</td><td>2</td></tr>
  <tr><td>Spread decrease</td><td>12</td><td>14</td></tr>
</table>
"""

TEST_RIFLE = f"""
<div class="weapon">
  <span class="lblWeaponNameValue">Test Rifle</span>
  <span class="lblMag">30</span>
  <span class="lblRPMValue">600</span>
  {SPREAD_TABLE}
  {SPREAD_INC_DEC_TABLE}
</div>
"""


def weapon_block(name: str, **stats: str) -> str:
    spans = "".join(f'<span class="{key}">{value}</span>' for key, value in stats.items())
    return f'<div class="weapon"><span class="lblWeaponNameValue">{name}</span>{spans}</div>'


def weapon_class(*blocks: str) -> str:
    return '<div class="sortableTable">\n' + "\n".join(blocks) + "\n</div>"


def page(*classes: str) -> str:
    return "<html><body>" + "".join(classes) + "</body></html>"


def test_test_rifle_round_trip():
    sym_data = extract_sym_data(parse_document(page(weapon_class(TEST_RIFLE))))
    logger.info(f"Test Rifle: {sym_data}")

    assert list(sym_data.keys()) == ["Test Rifle"]
    rifle = sym_data["Test Rifle"]
    assert rifle["ammoCapacity"] == 30
    assert rifle["rateOfFire"] == 600
    assert rifle["adsStandBaseMin"] == 0.11
    assert rifle["adsStandBaseMax"] == 0.12
    assert rifle["adsCrouchBaseMin"] == 0.21
    assert rifle["adsCrouchBaseMax"] == 0.22
    assert rifle["adsProneBaseMin"] == 0.31
    assert rifle["adsProneBaseMax"] == 0.32
    assert rifle["hipStandBaseMin"] == 1.41
    assert rifle["hipStandBaseMax"] == 1.42
    assert rifle["hipCrouchBaseMin"] == 1.51
    assert rifle["hipCrouchBaseMax"] == 1.52
    assert rifle["hipProneBaseMin"] == 1.61
    assert rifle["hipProneBaseMax"] == 1.62
    assert rifle["adsStandSpreadInc"] == 0.5
    assert rifle["hipStandSpreadInc"] == 2
    assert rifle["adsStandFirstSpreadMul"] == 6
    assert rifle["hipStandFirstSpreadMul"] == 2
    assert rifle["adsStandSpreadDec"] == 12
    assert rifle["hipStandSpreadDec"] == 14


def test_missing_elements_are_omitted():
    sym_data = extract_sym_data(parse_document(page(weapon_class(TEST_RIFLE))))
    rifle = sym_data["Test Rifle"]
    for field in ["pellets", "initialVelocity", "recoilLeft", "recoilRight", "recoilFirstShotMultiplier", "dispersion"]:
        assert field not in rifle
    assert None not in rifle.values()


def test_record_keys_follow_rule_order():
    sym_data = extract_sym_data(parse_document(page(weapon_class(TEST_RIFLE))))
    keys = list(sym_data["Test Rifle"].keys())
    assert keys[:3] == ["ammoCapacity", "rateOfFire", "adsStandBaseMin"]
    assert keys[-2:] == ["adsStandSpreadDec", "hipStandSpreadDec"]


def test_weapons_across_classes_in_document_order():
    html = page(
        weapon_class(weapon_block("M16A4", lblMag="30"), weapon_block("AK-12", lblMag="30", lblRPMValue="700")),
        weapon_class(weapon_block("M320", lblMag="1")),
    )
    sym_data = extract_sym_data(parse_document(html))
    assert list(sym_data.keys()) == ["M16A4", "AK-12", "M320"]
    assert sym_data["AK-12"] == {"ammoCapacity": 30, "rateOfFire": 700}
    assert sym_data["M320"] == {"ammoCapacity": 1}


def test_weapons_may_have_different_fields():
    html = page(weapon_class(weapon_block("A", lblMag="30"), weapon_block("B", lblRPMValue="900")))
    sym_data = extract_sym_data(parse_document(html))
    assert set(sym_data["A"]) == {"ammoCapacity"}
    assert set(sym_data["B"]) == {"rateOfFire"}


def test_weapon_name_keeps_spaces():
    html = page(weapon_class(weapon_block("SCAR-H SV", lblMag="20")))
    assert list(extract_sym_data(parse_document(html)).keys()) == ["SCAR-H SV"]


def test_duplicate_weapon_name_later_block_wins():
    html = page(
        weapon_class(weapon_block("MP7", lblMag="20"), weapon_block("G18", lblMag="17")),
        weapon_class(weapon_block("MP7", lblMag="40")),
    )
    sym_data = extract_sym_data(parse_document(html))
    assert list(sym_data.keys()) == ["MP7", "G18"]
    assert sym_data["MP7"] == {"ammoCapacity": 40}


def test_weapon_without_name_is_skipped():
    html = page(weapon_class('<div class="weapon"><span class="lblMag">30</span></div>', weapon_block("M4", lblMag="30")))
    sym_data = extract_sym_data(parse_document(html))
    assert list(sym_data.keys()) == ["M4"]


def test_extract_weapon_without_name_raises():
    soup = parse_document('<div class="weapon"><span class="lblMag">30</span></div>')
    with pytest.raises(WeaponNameNotFoundException):
        extract_weapon(soup.find(class_="weapon"))


def test_document_without_weapon_classes():
    assert extract_sym_data(parse_document("<html><body><p>Nothing here</p></body></html>")) == {}


def test_load_document_missing_file(tmp_path: Path):
    with pytest.raises(SymDataInputException):
        load_document(tmp_path / "Sym.html")


def test_create_sym_data(tmp_path: Path):
    html_file = tmp_path / "Sym.html"
    html_file.write_text(page(weapon_class(TEST_RIFLE)), encoding="utf-8")
    sym_data = create_sym_data(html_file)
    assert sym_data["Test Rifle"]["ammoCapacity"] == 30
