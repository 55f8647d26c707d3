import json

from infra.store import JsonFileStore, MemoryStore


def test_memory_store_round_trip():
    store = MemoryStore({"equity": "1000"})
    assert store.get("equity") == "1000"
    assert store.get("missing") is None
    store.set("equity", "2000")
    assert store.entries == {"equity": "2000"}


def test_file_store_persists_between_instances(tmp_path):
    path = tmp_path / "state.json"
    store = JsonFileStore(str(path))
    assert store.get("risk_mode") is None

    store.set("risk_mode", json.dumps("Aggressive"))
    store.set("equity", json.dumps(75000.0))

    reopened = JsonFileStore(str(path))
    assert reopened.get("risk_mode") == '"Aggressive"'
    assert reopened.get("equity") == "75000.0"
    assert json.loads(path.read_text(encoding="utf-8"))["equity"] == "75000.0"


def test_file_store_ignores_corrupt_file(tmp_path):
    path = tmp_path / "state.json"
    path.write_text("{not json", encoding="utf-8")
    store = JsonFileStore(str(path))
    assert store.get("equity") is None

    store.set("equity", "1")
    assert JsonFileStore(str(path)).get("equity") == "1"


def test_file_store_ignores_non_object_payload(tmp_path):
    path = tmp_path / "state.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    assert JsonFileStore(str(path)).get("equity") is None
