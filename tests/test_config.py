import pytest

from envrisk.config import VALIDATION, CalcRequest, validate_number


def test_request_roundtrip_json():
    req = CalcRequest(material="leather", temperature=68.0, dew_point=45.0, rh_fluctuation=3.0)
    loaded = CalcRequest.from_json(req.to_json())
    assert loaded == req


def test_request_save_load(tmp_path):
    path = tmp_path / "req.json"
    CalcRequest(material="wood", relative_humidity=50.0, absolute_humidity=9.0).save_json(path)
    loaded = CalcRequest.load_json(path)
    assert loaded.material == "wood"
    assert loaded.absolute_humidity == 9.0
    assert loaded.temperature is None


def test_request_validation_rejects_bad_material():
    with pytest.raises(ValueError, match="material is invalid"):
        CalcRequest(material="gold", temperature=70, relative_humidity=50).validate()


def test_request_validation_rejects_out_of_range():
    with pytest.raises(ValueError, match="at most 120"):
        CalcRequest(temperature=130, relative_humidity=50).validate()
    with pytest.raises(ValueError, match="at least 0"):
        CalcRequest(temperature=70, relative_humidity=-1).validate()


def test_request_validation_requires_two_values():
    with pytest.raises(ValueError, match="at least 2"):
        CalcRequest(temperature=70, rh_fluctuation=3).validate()


def test_request_coerces_numeric_strings():
    req = CalcRequest(temperature="70", relative_humidity="45.5")
    state = req.to_partial_state()
    assert state.temperature == 70.0
    assert state.relative_humidity == 45.5


def test_validate_number():
    assert validate_number("dew_point", "-12.5") == -12.5
    rng = VALIDATION["absolute_humidity"]
    assert validate_number("absolute_humidity", rng.max) == rng.max
    with pytest.raises(ValueError, match="valid number"):
        validate_number("temperature", "warm")
    with pytest.raises(ValueError, match="valid number"):
        validate_number("temperature", float("nan"))
    with pytest.raises(ValueError, match="Unknown field"):
        validate_number("pressure", 1.0)
