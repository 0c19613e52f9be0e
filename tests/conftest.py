from dataclasses import replace

import pytest

from impact_api.catalogs import get_material
from impact_api.geo import LandMask
from impact_api.impact_model import AsteroidParameters, ImpactLocation


# 10x10 degree "continent" at lon/lat 0..10, quantized and delta-encoded
SQUARE_TOPOLOGY = {
    "type": "Topology",
    "transform": {"scale": [0.01, 0.01], "translate": [0.0, 0.0]},
    "objects": {
        "land": {
            "type": "GeometryCollection",
            "geometries": [{"type": "Polygon", "arcs": [[0]]}],
        }
    },
    "arcs": [[[0, 0], [1000, 0], [0, 1000], [-1000, 0], [0, -1000]]],
}


def make_params(diameter=100.0, material_id="stone", velocity=20.0, angle=45.0,
                lat=0.0, lng=0.0, surface_type="land", density=None):
    material = get_material(material_id)
    if density is not None:
        material = replace(material, density=density)
    return AsteroidParameters(
        diameter=diameter,
        material=material,
        velocity=velocity,
        angle=angle,
        location=ImpactLocation(latitude=lat, longitude=lng, name="test", surface_type=surface_type),
    )


@pytest.fixture
def square_topology():
    return SQUARE_TOPOLOGY


@pytest.fixture
def square_mask():
    mask = LandMask(url="https://example.invalid/land.json")
    mask.load_topology(SQUARE_TOPOLOGY)
    return mask


@pytest.fixture
def params():
    return make_params
