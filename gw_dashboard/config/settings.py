import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env variables
load_dotenv()

# --- Path Resolution ---
# Base = repository root (parent of the gw_dashboard package)
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# Raw station files: <GWL_DATA_DIR>/<District>/GWATERLVL*.json
GWL_DATA_DIR = Path(os.getenv("GWL_DATA_DIR", BASE_DIR / "assets" / "data" / "GWL"))
GWL_FILE_PATTERN = os.getenv("GWL_FILE_PATTERN", "GWATERLVL*.json")

# Used when a reading carries no state, and as the title of an unfiltered selection
DEFAULT_STATE = os.getenv("DEFAULT_STATE", "West Bengal")


def get_float_env(name: str, default: float) -> float:
    """
    Reads a float from the environment, falling back to the default when the
    variable is unset or not a number.
    """
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        print(f"⚠️  WARNING: {name}={raw!r} is not a number. Using {default}.")
        return default


ANOMALY_Z_THRESHOLD = get_float_env("ANOMALY_Z_THRESHOLD", 2.0)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
