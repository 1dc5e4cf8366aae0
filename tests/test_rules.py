import pytest

from systems.rules import DEFAULT_RULES, get_rules


def test_variants_pick_their_movement_model():
    assert get_rules("pac_man").data["movement"] == "smooth"
    assert get_rules("pac_man").data["collision"] == "distance"
    classic = get_rules("pac_man_classic").data
    assert classic["movement"] == "tile"
    assert classic["collision"] == "tile"
    assert classic["level_clear_bonus"] == 1000


def test_get_rules_returns_a_copy():
    rules = get_rules("pac_man")
    rules.data["lives"] = 99
    assert DEFAULT_RULES["pac_man"].data["lives"] == 3


def test_overrides_apply():
    rules = get_rules("pac_man", lives=1, ghost_names=())
    assert rules.data["lives"] == 1
    assert rules.data["ghost_names"] == ()


def test_unknown_override_is_rejected():
    with pytest.raises(KeyError):
        get_rules("pac_man", warp_speed=True)


def test_unknown_game_has_no_rules():
    rules = get_rules("mystery", lives=5)
    assert rules.name == "mystery"
    assert rules.data == {"lives": 5}
