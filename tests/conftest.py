import sys
from pathlib import Path

import pytest

# Ensure project root is importable for tests
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


from utils.config import Config
from utils.formatting import SpeedMode, UnitSystem, set_locale


@pytest.fixture()
def cfg(tmp_path) -> Config:
    data_dir = tmp_path
    timeseries_dir = data_dir / "timeseries"
    laps_dir = data_dir / "laps"
    gpx_dir = data_dir / "gpx"
    for path in (timeseries_dir, laps_dir, gpx_dir):
        path.mkdir(parents=True, exist_ok=True)
    return Config(
        data_dir=data_dir,
        timeseries_dir=timeseries_dir,
        laps_dir=laps_dir,
        gpx_dir=gpx_dir,
        mapbox_token=None,
        unit_system=UnitSystem.METRIC,
        speed_mode=SpeedMode.SPEED,
        locale="fr_FR",
    )


@pytest.fixture(autouse=True)
def fr_locale():
    set_locale("fr_FR")
    yield
    set_locale("fr_FR")
