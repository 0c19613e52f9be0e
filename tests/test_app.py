import pytest
from fastapi.testclient import TestClient

from impact_api import app as app_module
from impact_api import settings
from impact_api.app import app, get_land_mask
from impact_api.impact_model import InvalidParameterError


@pytest.fixture
def client(square_mask):
    app.dependency_overrides[get_land_mask] = lambda: square_mask
    yield TestClient(app)
    app.dependency_overrides.clear()


def _impact_body(**overrides):
    body = {
        "diameter_m": 100.0,
        "velocity_kms": 20.0,
        "angle_deg": 45.0,
        "material_id": "stone",
        "location": {"lat": 5.0, "lon": 5.0, "name": "Test Site", "surface_type": "land"},
    }
    body.update(overrides)
    return body


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_catalog_endpoints(client):
    materials = client.get("/materials").json()
    assert {m["id"] for m in materials} >= {"iron", "stone", "carbon", "ice"}
    strategies = client.get("/strategies").json()
    assert any(s["id"] == "kinetic" and s["min_lead_time_days"] == 365 for s in strategies)
    assert any(p["id"] == "tunguska" for p in client.get("/presets").json())


def test_surface_type_endpoint(client):
    r = client.get("/surfaceType", params={"lat": 5.0, "lon": 5.0})
    assert r.json() == {"surface_type": "land", "land_mask_loaded": True}
    r = client.get("/surfaceType", params={"lat": 50.0, "lon": 50.0})
    assert r.json()["surface_type"] == "ocean"
    assert client.get("/surfaceType", params={"lat": 91.0, "lon": 0.0}).status_code == 422


def test_impact_summary(client):
    r = client.post("/impact/summary", json=_impact_body())
    assert r.status_code == 200
    data = r.json()
    assert data["impact_class"] == "Regional catastrophe"
    assert data["torino_scale"] == 8
    assert data["tnt_equivalent"] == "75.1 megatons TNT"
    assert data["tsunami_height"] is None
    assert data["airburst_altitude"] is None
    assert data["inputs"]["material"]["density"] == 3000.0
    assert data["inputs"]["angle_mode"] == "crater"


def test_surface_type_resolved_from_mask(client):
    body = _impact_body(location={"lat": 20.0, "lon": 20.0, "name": "Open water"})
    data = client.post("/impact/summary", json=body).json()
    assert data["inputs"]["location"]["surface_type"] == "ocean"
    assert data["tsunami_travel_time"] == 30.0
    assert data["affected_population"] == 0


def test_density_override(client):
    base = client.post("/impact/summary", json=_impact_body()).json()
    doubled = client.post("/impact/summary", json=_impact_body(density_kgpm3=6000.0)).json()
    assert doubled["energy_joules"] == pytest.approx(2.0 * base["energy_joules"])


def test_energy_angle_mode(client):
    data = client.post("/impact/summary", json=_impact_body(angle_mode="energy", angle_deg=30.0)).json()
    assert data["energy_megatons"] == pytest.approx(75.086 * 0.25, rel=1e-4)


def test_unknown_material_is_404(client):
    r = client.post("/impact/summary", json=_impact_body(material_id="unobtainium"))
    assert r.status_code == 404


@pytest.mark.parametrize("overrides", [
    {"diameter_m": 0.0},
    {"velocity_kms": -1.0},
    {"angle_deg": 95.0},
    {"density_kgpm3": 0.0},
])
def test_invalid_impact_input_is_422(client, overrides):
    assert client.post("/impact/summary", json=_impact_body(**overrides)).status_code == 422


def test_preset_airburst(client):
    body = {"location": {"lat": 55.15, "lon": 61.4, "name": "Chelyabinsk", "surface_type": "land"}}
    data = client.post("/impact/preset/chelyabinsk", json=body).json()
    assert data["preset"]["name"] == "Chelyabinsk Meteor"
    assert data["airburst_altitude"] == pytest.approx(12000.0)
    assert client.post("/impact/preset/nemesis", json=body).status_code == 404


def test_mission_assess(client):
    r = client.post("/mission/assess", json={"lead_time_days": 365, "asteroid_diameter_m": 500, "strategy_id": "kinetic"})
    assert r.json() == {
        "success_probability": 0.95,
        "feasible": True,
        "lead_time_days": 365.0,
        "asteroid_diameter": 500.0,
        "strategy_id": "kinetic",
        "min_lead_time_days": 365,
    }


def test_mission_infeasible_and_unknown(client):
    r = client.post("/mission/assess", json={"lead_time_days": 30, "asteroid_diameter_m": 500, "strategy_id": "gravity"})
    assert r.json()["feasible"] is False
    r = client.post("/mission/assess", json={"lead_time_days": 30, "asteroid_diameter_m": 500, "strategy_id": "prayer"})
    assert r.status_code == 404


def test_deflection(client):
    r = client.post("/mission/deflection", json={
        "asteroid_mass_kg": 5e9, "impactor_mass_kg": 500.0, "impactor_velocity_mps": 6000.0,
    })
    assert r.json()["delta_v_mps"] == pytest.approx(0.0015)


def test_overflowing_impact_returns_nulls_not_500(client):
    r = client.post("/impact/summary", json=_impact_body(diameter_m=1e110))
    assert r.status_code == 200
    data = r.json()
    assert data["energy_joules"] is None
    assert data["blast_radius"] is None
    assert data["impact_class"] == "Extinction-level event"
    assert data["affected_population"] == 0


def test_infinite_input_is_422(client):
    body = ('{"diameter_m": Infinity, "velocity_kms": 20.0, '
            '"location": {"lat": 5.0, "lon": 5.0, "surface_type": "land"}}')
    r = client.post("/impact/summary", content=body, headers={"content-type": "application/json"})
    assert r.status_code == 422


def test_strict_validation_is_passed_to_calculator(client, monkeypatch):
    seen = []
    real = app_module.compute_impact_effects

    def spy(params, **kwargs):
        seen.append(kwargs["validate"])
        return real(params, **kwargs)

    monkeypatch.setattr(settings, "STRICT_VALIDATION", True)
    monkeypatch.setattr(app_module, "compute_impact_effects", spy)
    assert client.post("/impact/summary", json=_impact_body()).status_code == 200
    assert seen == [True]


def test_invalid_parameter_error_is_422(client, monkeypatch):
    def reject(params, **kwargs):
        raise InvalidParameterError("angle must be within [0, 90] degrees, got 91.")

    monkeypatch.setattr(app_module, "compute_impact_effects", reject)
    r = client.post("/impact/summary", json=_impact_body())
    assert r.status_code == 422
    assert "angle" in r.json()["detail"]


@pytest.mark.parametrize("enabled,expected", [(True, ["load"]), (False, [])])
def test_lifespan_loads_land_mask(monkeypatch, enabled, expected):
    calls = []
    monkeypatch.setattr(settings, "LOAD_LAND_MASK", enabled)
    monkeypatch.setattr(app_module.land_mask, "load", lambda: calls.append("load") or True)
    with TestClient(app) as c:
        assert c.get("/health").status_code == 200
    assert calls == expected
