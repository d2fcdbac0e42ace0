import json

from sitefx.services.preferences import JsonPreferenceStore, MemoryPreferenceStore


def test_missing_file_reads_as_empty(tmp_path):
    store = JsonPreferenceStore(tmp_path / "prefs.json")
    assert store.get("theme") is None


def test_set_persists_across_instances(tmp_path):
    path = tmp_path / "data" / "prefs.json"
    JsonPreferenceStore(path).set("theme", "light")
    assert JsonPreferenceStore(path).get("theme") == "light"
    assert json.loads(path.read_text()) == {"theme": "light"}


def test_set_keeps_other_keys(tmp_path):
    path = tmp_path / "prefs.json"
    path.write_text(json.dumps({"other": "x"}))
    JsonPreferenceStore(path).set("theme", "dark")
    assert json.loads(path.read_text()) == {"other": "x", "theme": "dark"}


def test_corrupt_file_is_treated_as_absent(tmp_path):
    path = tmp_path / "prefs.json"
    path.write_text("{not json")
    store = JsonPreferenceStore(path)
    assert store.get("theme") is None
    store.set("theme", "dark")
    assert store.get("theme") == "dark"


def test_non_object_json_is_ignored(tmp_path):
    path = tmp_path / "prefs.json"
    path.write_text("[1, 2]")
    assert JsonPreferenceStore(path).get("theme") is None


def test_memory_store_counts_writes():
    store = MemoryPreferenceStore({"theme": "light"})
    store.set("theme", "dark")
    assert store.get("theme") == "dark"
    assert store.writes == 1
