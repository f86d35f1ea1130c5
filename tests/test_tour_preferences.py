import json
import os

from gui.services.tour_preferences import InMemoryPreferencesStore, TourPreferencesStore


def test_flag_absent_by_default(tmp_path):
    store = TourPreferencesStore(str(tmp_path))
    assert store.get("tourCompleted") is None
    assert store.is_tour_completed() is False


def test_mark_completed_persists_across_instances(tmp_path):
    store = TourPreferencesStore(str(tmp_path))
    assert store.mark_tour_completed()
    again = TourPreferencesStore(str(tmp_path))
    assert again.get("tourCompleted") == "true"
    assert again.is_tour_completed()
    with open(store.path(), encoding="utf-8") as f:
        assert json.load(f) == {"tourCompleted": "true"}


def test_other_keys_preserved(tmp_path):
    store = TourPreferencesStore(str(tmp_path))
    store.set("theme", "dark")
    store.mark_tour_completed()
    assert store.get("theme") == "dark"


def test_corrupt_file_backed_up_and_ignored(tmp_path):
    store = TourPreferencesStore(str(tmp_path))
    with open(store.path(), "w", encoding="utf-8") as f:
        f.write("{ not valid json")
    assert store.is_tour_completed() is False
    backups = [p for p in os.listdir(tmp_path) if p.startswith("tour_preferences.json.corrupt")]
    assert backups, "Expected corrupt backup file"
    assert store.mark_tour_completed()
    assert store.is_tour_completed()


def test_unreadable_file_left_in_place(tmp_path, monkeypatch):
    from gui.services import tour_preferences

    store = TourPreferencesStore(str(tmp_path))
    store.set("theme", "dark")
    store.mark_tour_completed()
    real_open = open

    def denied(path, mode="r", *args, **kwargs):
        if "r" in mode and str(path) == store.path():
            raise PermissionError(13, "Permission denied", path)
        return real_open(path, mode, *args, **kwargs)

    monkeypatch.setattr(tour_preferences, "open", denied, raising=False)
    assert store.is_tour_completed() is False
    assert store.set("theme", "light") is False
    monkeypatch.undo()

    assert os.listdir(tmp_path) == ["tour_preferences.json"]
    assert store.get("theme") == "dark"
    assert store.is_tour_completed()


def test_reset_removes_file(tmp_path):
    store = TourPreferencesStore(str(tmp_path))
    store.mark_tour_completed()
    store.reset()
    assert not os.path.exists(store.path())
    store.reset()  # already gone
    assert store.is_tour_completed() is False


def test_controller_end_tour_writes_file(tmp_path, narration):
    from gui.services.tour_controller import TourController

    store = TourPreferencesStore(str(tmp_path / "profile"))
    ctl = TourController(narration, store, role="researcher")
    ctl.start_tour()
    ctl.end_tour()
    assert TourPreferencesStore(str(tmp_path / "profile")).get("tourCompleted") == "true"


def test_in_memory_store():
    store = InMemoryPreferencesStore()
    assert not store.is_tour_completed()
    store.mark_tour_completed()
    assert store.values == {"tourCompleted": "true"}
