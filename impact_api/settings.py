import os
from dotenv import load_dotenv

load_dotenv()

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    v = raw.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean, got '{raw}'.")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got '{raw}'.") from None


# Natural Earth 110m land polygons (TopoJSON)
LAND_DATA_URL = os.getenv("LAND_DATA_URL", "https://cdn.jsdelivr.net/npm/world-atlas@2/land-110m.json")
HTTP_TIMEOUT_S = _env_float("HTTP_TIMEOUT_S", 10.0)
LOAD_LAND_MASK = _env_bool("LOAD_LAND_MASK", True)
STRICT_VALIDATION = _env_bool("STRICT_VALIDATION", False)

ANGLE_MODE = os.getenv("ANGLE_MODE", "crater")
if ANGLE_MODE not in ("crater", "energy"):
    raise ValueError(f"ANGLE_MODE must be 'crater' or 'energy', got '{ANGLE_MODE}'.")
