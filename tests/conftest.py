import pytest

from repo_json import JSONRepo
from tracker import HabitTracker

TODAY = "2025-01-10"


@pytest.fixture
def repo(tmp_path):
    return JSONRepo(str(tmp_path / "data" / "routines.json"))


@pytest.fixture
def tracker(repo):
    t = HabitTracker(repo, default_day_off_limit=3)
    ok, error = t.init_app_data(TODAY)
    assert ok, error
    return t


@pytest.fixture
def morning(tracker):
    routine, error = tracker.add_routine(
        "Morning",
        [{"title": "Drink water", "time": "07:00"}, {"title": "Stretch", "time": "07:15"}],
    )
    assert error is None
    return routine
