from __future__ import annotations

import json
import threading
from pathlib import Path

import pytest

from pylangpack.exceptions import LanguagePackStateError
from pylangpack.state import JsonFileRegistry, LanguagePackState, MemoryRegistry


def test_memory_registry_returns_default_for_missing_keys() -> None:
    registry = MemoryRegistry()

    assert registry.get("languagePacks", "baseUrl") is None
    assert registry.get("languagePacks", "baseUrl", "fallback") == "fallback"


def test_memory_registry_last_write_wins() -> None:
    registry = MemoryRegistry()
    registry.set("languagePacks", "fr", 1)
    registry.set("languagePacks", "fr", 2)

    assert registry.get("languagePacks", "fr") == 2
    assert registry.snapshot() == {"languagePacks": {"fr": 2}}


def test_json_registry_persists_across_instances(tmp_path: Path) -> None:
    path = tmp_path / "var" / "registry.json"
    JsonFileRegistry(path).set("languagePacks", "baseUrl", "https://mirrors.example.org/ter/")

    reopened = JsonFileRegistry(path)

    assert reopened.get("languagePacks", "baseUrl") == "https://mirrors.example.org/ter/"
    assert json.loads(path.read_text(encoding="utf-8")) == {
        "languagePacks": {"baseUrl": "https://mirrors.example.org/ter/"}
    }
    assert sorted(p.name for p in path.parent.iterdir()) == ["registry.json", "registry.json.lock"]


def test_json_registry_missing_file_is_empty(tmp_path: Path) -> None:
    assert JsonFileRegistry(tmp_path / "nope.json").get("languagePacks", "fr") is None


def test_json_registry_rejects_corrupt_file(tmp_path: Path) -> None:
    path = tmp_path / "registry.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(LanguagePackStateError):
        JsonFileRegistry(path).get("languagePacks", "fr")


def test_language_and_pack_records_are_separate() -> None:
    state = LanguagePackState(MemoryRegistry())
    state.mark_language_updated("fr", 100)
    state.mark_pack_attempt("fr", "backend", 200)

    assert state.language_last_update("fr") == 100
    assert state.pack_last_update("fr", "backend") == 200
    assert state.registry.get("languagePacks", "fr-backend") == 200
    assert state.pack_last_update("de", "backend") is None


def test_base_url_absent_until_set() -> None:
    state = LanguagePackState(MemoryRegistry())
    assert state.base_url() is None

    state.set_base_url("https://typo3.org/fileadmin/ter/")
    assert state.base_url() == "https://typo3.org/fileadmin/ter/"


def test_json_registries_on_same_file_keep_each_others_keys(tmp_path: Path) -> None:
    path = tmp_path / "registry.json"
    writers = {"fr": JsonFileRegistry(path), "de": JsonFileRegistry(path)}
    start = threading.Barrier(len(writers))

    def write_all(iso: str) -> None:
        registry = writers[iso]
        start.wait()
        for i in range(200):
            registry.set("languagePacks", f"{iso}-m{i}", i)

    threads = [threading.Thread(target=write_all, args=(iso,)) for iso in writers]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    stored = json.loads(path.read_text(encoding="utf-8"))["languagePacks"]
    missing = [f"{iso}-m{i}" for iso in writers for i in range(200) if f"{iso}-m{i}" not in stored]
    assert missing == []
    assert JsonFileRegistry(path).get("languagePacks", "de-m199") == 199
