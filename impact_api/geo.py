from __future__ import annotations
from typing import Any

import httpx
from shapely.geometry import Point, shape
from shapely.ops import unary_union
from shapely.prepared import prep
from shapely.validation import make_valid

from . import settings


# -----------------------------
# TopoJSON -> shapely
# -----------------------------
def _decode_arcs(topology: dict[str, Any]) -> list[list[tuple[float, float]]]:
    """Absolute lon/lat arcs; quantized arcs are delta-encoded and need the transform."""
    tr = topology.get("transform")
    arcs = []
    for arc in topology["arcs"]:
        if tr:
            sx, sy = tr["scale"]
            tx, ty = tr["translate"]
            x = y = 0
            pts = []
            for p in arc:
                x += p[0]
                y += p[1]
                pts.append((x * sx + tx, y * sy + ty))
        else:
            pts = [(float(p[0]), float(p[1])) for p in arc]
        arcs.append(pts)
    return arcs


def _stitch_ring(indices: list[int], arcs: list[list[tuple[float, float]]]) -> list[tuple[float, float]]:
    ring: list[tuple[float, float]] = []
    for i in indices:
        a = arcs[i] if i >= 0 else arcs[~i][::-1]
        # consecutive arcs share their joining point
        ring.extend(a if not ring else a[1:])
    return ring


def _polygon_coords(rings: list[list[int]], arcs) -> list[list[tuple[float, float]]]:
    return [_stitch_ring(r, arcs) for r in rings]


def _geometries(obj: dict[str, Any], arcs) -> list[dict]:
    kind = obj.get("type")
    if kind == "GeometryCollection":
        out = []
        for g in obj.get("geometries", []):
            out.extend(_geometries(g, arcs))
        return out
    if kind == "Polygon":
        return [{"type": "Polygon", "coordinates": _polygon_coords(obj["arcs"], arcs)}]
    if kind == "MultiPolygon":
        return [{"type": "MultiPolygon",
                 "coordinates": [_polygon_coords(poly, arcs) for poly in obj["arcs"]]}]
    # points / lines carry no area
    return []


def decode_topology(topology: dict[str, Any], object_name: str = "land"):
    """Merge every polygon of topology.objects[object_name] into one shapely geometry."""
    arcs = _decode_arcs(topology)
    parts = [make_valid(shape(g)) for g in _geometries(topology["objects"][object_name], arcs)]
    return unary_union(parts)


# -----------------------------
# Land mask
# -----------------------------
class LandMask:
    """
    Land/ocean lookup over a single in-memory land geometry. load() is the
    one-time download; is_land() is synchronous and answers True (land) until
    a dataset has been loaded.
    """

    def __init__(self, url: str = settings.LAND_DATA_URL, timeout_s: float = settings.HTTP_TIMEOUT_S,
                 client: httpx.Client | None = None):
        self.url = url
        self.timeout_s = timeout_s
        self._client = client
        self._land = None
        self._prepared = None

    @property
    def is_loaded(self) -> bool:
        return self._prepared is not None

    def load_topology(self, topology: dict[str, Any], object_name: str = "land") -> None:
        land = decode_topology(topology, object_name)
        self._land = land
        self._prepared = prep(land)

    def _fetch(self) -> dict[str, Any]:
        if self._client is not None:
            r = self._client.get(self.url)
        else:
            with httpx.Client(timeout=self.timeout_s) as client:
                r = client.get(self.url)
        print(f"[land.load] status={r.status_code} bytes={len(r.content)}")
        r.raise_for_status()
        return r.json()

    def load(self) -> bool:
        """Fetch and decode the land dataset. Failures leave the mask unloaded (land fallback)."""
        print(f"[land.load] GET {self.url}")
        try:
            topology = self._fetch()
            self.load_topology(topology)
        except httpx.HTTPError as e:
            print(f"[land.error] download failed: {e}; surface type defaults to land")
            return False
        except (ValueError, KeyError, TypeError, IndexError) as e:
            print(f"[land.error] malformed land dataset: {e!r}; surface type defaults to land")
            return False
        print(f"[land.load] ok bounds={self._land.bounds}")
        return True

    def is_land(self, lat: float, lon: float) -> bool:
        if self._prepared is None:
            return True
        return self._prepared.covers(Point(lon, lat))

    def surface_type(self, lat: float, lon: float) -> str:
        return "land" if self.is_land(lat, lon) else "ocean"
