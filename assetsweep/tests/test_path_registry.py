import json

import pytest

from assetsweep.models.paths import (
    InvalidOperatingSystem,
    OperatingSystem,
    PathEntry,
    PathRegistry,
)
from assetsweep.services.path_registry import LocalPathRegistry, LocalStorage


@pytest.fixture
def registry(tmp_path):
    return LocalPathRegistry(LocalStorage(tmp_path / "storage.json"))


# -------- model --------

def test_add_trims_and_rejects_empty():
    reg = PathRegistry()
    assert reg.add("  C:\\Temp  ", "windows")
    assert not reg.add("   ", "windows")
    assert not reg.add("", "linux")
    assert reg.to_dict() == {"windows": ["C:\\Temp"]}


def test_remove_at_uses_original_positions():
    reg = PathRegistry({"linux": ["/a", "/b", "/c", "/d"]})
    removed = reg.remove_at([("linux", 0), ("linux", 2), ("linux", 9), ("mac", 0)])

    assert removed == 2
    assert reg.paths_for("linux") == ["/b", "/d"]


def test_remove_paths_by_value_and_prune():
    reg = PathRegistry({"mac": ["/Users"], "linux": ["/a", "/b"]})
    assert reg.remove_paths([("mac", "/Users"), ("linux", " /b "), ("linux", "/zzz")]) == 2
    assert reg.to_dict() == {"linux": ["/a"]}


def test_iteration_yields_entries_in_order():
    reg = PathRegistry({"mac": ["/Applications"], "linux": ["/opt", "/srv"]})
    assert list(reg) == [
        PathEntry("mac", "/Applications"),
        PathEntry("linux", "/opt"),
        PathEntry("linux", "/srv"),
    ]
    assert len(reg) == 3


@pytest.mark.parametrize("data", [
    {"linux": "/etc"},
    {"linux": ["/etc", 3]},
    {"mac": None},
])
def test_from_dict_rejects_non_list_buckets(data):
    with pytest.raises(ValueError):
        PathRegistry.from_dict(data)


def test_operating_system_parse():
    assert OperatingSystem.parse(" Linux ") is OperatingSystem.LINUX
    with pytest.raises(InvalidOperatingSystem):
        OperatingSystem.parse("beos")


# -------- local variant --------

def test_add_path_is_idempotent(registry):
    assert registry.add_path("/usr/local/bin", "linux")
    assert not registry.add_path(" /usr/local/bin ", "linux")

    assert registry.load_paths().to_dict() == {"linux": ["/usr/local/bin"]}


def test_same_path_under_different_os(registry):
    registry.add_path("/tmp", "linux")
    registry.add_path("/tmp", "mac")
    assert registry.load_paths().to_dict() == {"linux": ["/tmp"], "mac": ["/tmp"]}


def test_delete_selected_removes_only_selection(registry):
    for p in ("C:\\a", "C:\\b", "C:\\c"):
        registry.add_path(p, "windows")
    registry.add_path("/etc", "linux")

    assert registry.delete_selected([("windows", 0), ("windows", 2)]) == 2
    assert registry.load_paths().to_dict() == {"windows": ["C:\\b"], "linux": ["/etc"]}


def test_deleting_last_entry_prunes_bucket(registry):
    registry.add_path("/etc", "linux")
    registry.add_path("/Users", "mac")

    registry.delete_selected([("linux", 0)])
    assert registry.load_paths().to_dict() == {"mac": ["/Users"]}


def test_round_trip_keeps_insertion_order(registry):
    ops = ["/one", "/two", "/three", "/four"]
    for p in ops:
        registry.add_path(p, "linux")
    registry.delete_selected([("linux", 1)])
    registry.add_path("/five", "linux")

    assert registry.load_paths().paths_for("linux") == ["/one", "/three", "/four", "/five"]


def test_storage_document_layout(tmp_path):
    storage = LocalStorage(tmp_path / "storage.json")
    LocalPathRegistry(storage).add_path("/var/log", "linux")

    document = json.loads((tmp_path / "storage.json").read_text())
    assert list(document) == ["paths"]
    assert json.loads(document["paths"]) == {"linux": ["/var/log"]}


def test_unknown_os_rejected(registry):
    with pytest.raises(InvalidOperatingSystem):
        registry.add_path("/x", "plan9")
    assert registry.load_paths().to_dict() == {}
