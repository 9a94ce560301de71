import datetime

import pytest

from moontide.types import GeoCoordinate


@pytest.fixture
def seoul():
    return GeoCoordinate(latitude_deg=37.5665, longitude_deg=126.9780)


@pytest.fixture
def sample_instants():
    # Irregular spacing (about 7h13m) so samples do not alias with the
    # lunar day or synodic month.
    start = datetime.datetime(2023, 3, 14, 2, 37, 11, tzinfo=datetime.timezone.utc)
    step = datetime.timedelta(hours=7, minutes=13, seconds=17)
    return [start + i * step for i in range(400)]


@pytest.fixture
def empty_config(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("", encoding="utf-8")
    return path
