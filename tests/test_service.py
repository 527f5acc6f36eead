import pytest

from trilateration.contracts import LocatorConfig, ResidualTooLarge
from trilateration.errors import (
    InsufficientData, InvalidRequest, MessageUndecodable, UnknownSatellite,
)
from trilateration.registry import SatelliteRegistry
from trilateration.service import (
    config_from_request, top_secret, top_secret_split, get_top_secret_split,
)

SATELLITES = [
    {"name": "kenobi", "distance": 927.75, "message": ["este", "", "", "mensaje", ""]},
    {"name": "skywalker", "distance": 360, "message": ["", "es", "", "", "secreto"]},
    {"name": "sato", "distance": 360, "message": ["este", "", "un", "", ""]},
]


def test_top_secret_decodes_position_and_message():
    reg = SatelliteRegistry()
    out = top_secret(reg, SATELLITES, LocatorConfig()).to_dict()
    assert out["message"] == "este es un mensaje secreto"
    assert out["position"]["x"] == pytest.approx(426.4, abs=0.1)
    assert out["position"]["y"] == pytest.approx(-252.8, abs=0.1)
    # показания сохранены
    assert reg.get("kenobi").distance == 927.75


def test_top_secret_not_enough_satellites():
    with pytest.raises(InsufficientData):
        top_secret(SatelliteRegistry(), SATELLITES[:2], LocatorConfig())


def test_top_secret_too_many_satellites():
    extra = SATELLITES + [{"name": "kenobi", "distance": 1, "message": ["x"]}]
    with pytest.raises(InvalidRequest):
        top_secret(SatelliteRegistry(), extra, LocatorConfig())


def test_top_secret_duplicate_names_not_stored():
    reg = SatelliteRegistry()
    dup = [SATELLITES[0], SATELLITES[0], SATELLITES[1]]
    with pytest.raises(InvalidRequest):
        top_secret(reg, dup, LocatorConfig())
    assert reg.get("kenobi").distance == 0.0


def test_top_secret_unknown_satellite():
    bad = SATELLITES[:2] + [{"name": "vader", "distance": 10, "message": ["x"]}]
    with pytest.raises(UnknownSatellite):
        top_secret(SatelliteRegistry(), bad, LocatorConfig())


def test_top_secret_malformed_entry():
    bad = SATELLITES[:2] + [{"name": "sato", "distance": "far"}]
    with pytest.raises(InvalidRequest):
        top_secret(SatelliteRegistry(), bad, LocatorConfig())


def test_solver_failure_is_insufficient_data():
    with pytest.raises(InsufficientData) as exc:
        top_secret(SatelliteRegistry(), SATELLITES, LocatorConfig(tolerance=0.1))
    assert isinstance(exc.value.failure, ResidualTooLarge)


def test_fallback_to_origin():
    cfg = LocatorConfig(tolerance=0.1, fallback_to_origin=True)
    out = top_secret(SatelliteRegistry(), SATELLITES, cfg).to_dict()
    assert out["position"] == {"x": 0.0, "y": 0.0}
    assert out["message"] == "este es un mensaje secreto"


def test_undecodable_message():
    blank = [dict(s, message=["", ""]) for s in SATELLITES]
    with pytest.raises(MessageUndecodable):
        top_secret(SatelliteRegistry(), blank, LocatorConfig())


def test_split_flow():
    reg = SatelliteRegistry()
    cfg = LocatorConfig()
    for s in SATELLITES[:2]:
        top_secret_split(reg, s["name"], s["distance"], s["message"])
    with pytest.raises(InsufficientData):
        get_top_secret_split(reg, cfg)

    s = SATELLITES[2]
    top_secret_split(reg, s["name"], s["distance"], s["message"])
    out = get_top_secret_split(reg, cfg).to_dict()
    assert out["message"] == "este es un mensaje secreto"
    assert out["position"]["x"] == pytest.approx(426.4, abs=0.1)


def test_split_keeps_fixed_position():
    reg = SatelliteRegistry()
    sat = top_secret_split(reg, "sato", 42.0, ["hola"])
    assert sat.position == reg.get("sato").position
    assert reg.get("sato").message == ["hola"]


def test_split_unknown_satellite():
    with pytest.raises(UnknownSatellite):
        top_secret_split(SatelliteRegistry(), "vader", 1.0, ["x"])


def test_split_negative_distance():
    with pytest.raises(InvalidRequest):
        top_secret_split(SatelliteRegistry(), "sato", -1.0, ["x"])


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("LOCATOR_TOLERANCE", "0.5")
    monkeypatch.setenv("LOCATOR_FALLBACK_TO_ORIGIN", "yes")
    cfg = LocatorConfig.from_env()
    assert cfg.tolerance == 0.5
    assert cfg.fallback_to_origin is True


@pytest.mark.parametrize("distance", ["nan", float("nan"), float("inf"), -1])
def test_top_secret_rejects_bad_distance(distance):
    reg = SatelliteRegistry()
    bad = [dict(SATELLITES[0], distance=distance)] + SATELLITES[1:]
    with pytest.raises(InvalidRequest):
        top_secret(reg, bad, LocatorConfig())
    assert reg.get("kenobi").distance == 0.0


@pytest.mark.parametrize("distance", [float("nan"), float("inf"), "far"])
def test_split_rejects_bad_distance(distance):
    with pytest.raises(InvalidRequest):
        top_secret_split(SatelliteRegistry(), "sato", distance, ["x"])


def test_message_must_be_a_list():
    bad = SATELLITES[:2] + [dict(SATELLITES[2], message="hola")]
    with pytest.raises(InvalidRequest):
        top_secret(SatelliteRegistry(), bad, LocatorConfig())
    with pytest.raises(InvalidRequest):
        top_secret_split(SatelliteRegistry(), "sato", 1.0, "hola")


def test_config_from_request(monkeypatch):
    monkeypatch.delenv("LOCATOR_TOLERANCE", raising=False)
    monkeypatch.delenv("LOCATOR_FALLBACK_TO_ORIGIN", raising=False)
    assert config_from_request(None) == LocatorConfig()
    cfg = config_from_request({"tolerance": "5", "fallback_to_origin": True})
    assert cfg.tolerance == 5.0
    assert cfg.fallback_to_origin is True


@pytest.mark.parametrize("overrides", [
    {"from_env": 1},
    {"speed": 1},
    {"tolerance": "fast"},
    {"tolerance": float("nan")},
    {"tolerance": -1},
    {"fallback_to_origin": "false"},
])
def test_config_from_request_rejects(overrides):
    with pytest.raises(InvalidRequest):
        config_from_request(overrides)
