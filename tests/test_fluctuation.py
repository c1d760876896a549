from envrisk.fluctuation import assess_fluctuation
from envrisk.materials import get_profile


def test_no_values_is_empty():
    flag = assess_fluctuation(None, None, get_profile("general"))
    assert flag["status"] == "empty"
    assert flag["messages"] == []


def test_sensitive_material_temperature_limits():
    leather = get_profile("leather")
    over = assess_fluctuation(4.0, None, leather)
    assert over["status"] == "warning"
    assert "exceeds recommended ±3°F for leather & parchment" in over["message"]
    near = assess_fluctuation(2.5, None, leather)
    assert "upper acceptable limit" in near["message"]
    ok = assess_fluctuation(2.0, None, leather)
    assert ok["status"] == "success"


def test_critical_material_rh_limits():
    wood = get_profile("wood")
    assert "critical for wood & furniture" in assess_fluctuation(None, 5.0, wood)["message"]
    assert "approaching the safe limit" in assess_fluctuation(None, 3.5, wood)["message"]


def test_very_high_material_rh_limit():
    flag = assess_fluctuation(None, 6.0, get_profile("paper"))
    assert flag["status"] == "warning"
    assert "dimensional stress in paper & manuscripts" in flag["message"]
    assert assess_fluctuation(None, 5.0, get_profile("paper"))["status"] == "success"


def test_general_collection_bizot_protocol():
    general = get_profile("general")
    assert "Bizot Protocol" in assess_fluctuation(None, 12.0, general)["message"]
    assert "is elevated" in assess_fluctuation(None, 8.0, general)["message"]
    assert "±4-5°F" in assess_fluctuation(6.0, None, general)["message"]


def test_warnings_accumulate():
    flag = assess_fluctuation(6.0, 12.0, get_profile("general"))
    assert len(flag["messages"]) == 2


def test_positive_feedback_and_neutral():
    general = get_profile("general")
    good = assess_fluctuation(2.0, 4.0, general)
    assert good["status"] == "success"
    assert len(good["messages"]) == 2
    neutral = assess_fluctuation(4.0, 6.0, general)
    assert neutral["status"] == "ok"
    assert "within acceptable ranges" in neutral["message"]
