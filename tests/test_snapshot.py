"""Tests for snapshot load/store."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from dew.snapshot import (
    SNAPSHOT_VERSION,
    CorruptSnapshotError,
    PersistenceError,
    SnapshotManager,
    decode_snapshot,
    encode_snapshot,
)
from dew.todos import TodoStatus, TodoStore
from tests.conftest import make_record


def _write(path: Path, data: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data))


class TestLoad:
    @pytest.mark.asyncio
    async def test_missing_file_loads_empty(self, snapshot_path: Path) -> None:
        store = await SnapshotManager(snapshot_path).load()
        assert await store.list() == []
        assert not snapshot_path.exists()

    def test_missing_file_loads_empty_sync(self, snapshot_path: Path) -> None:
        store = SnapshotManager(snapshot_path).load_sync()
        assert isinstance(store, TodoStore)

    @pytest.mark.asyncio
    async def test_loads_version_one(self, snapshot_path: Path) -> None:
        record = make_record(status=TodoStatus.COMPLETED)
        _write(
            snapshot_path,
            {"version": 1, "payload": {"a": record.to_dict()}},
        )

        store = await SnapshotManager(snapshot_path).load()

        assert await store.list() == [record]

    @pytest.mark.asyncio
    async def test_unknown_version_is_corrupt(self, snapshot_path: Path) -> None:
        _write(snapshot_path, {"version": 2, "payload": {}})

        with pytest.raises(CorruptSnapshotError, match="unknown snapshot version 2"):
            await SnapshotManager(snapshot_path).load()

    @pytest.mark.parametrize(
        "content",
        [
            "",
            "{not json",
            "[]",
            '{"payload": {}}',
            '{"version": 1}',
            '{"version": true, "payload": {}}',
            '{"version": "1", "payload": {}}',
            '{"version": 1, "payload": []}',
            '{"version": 1, "payload": {"a": {"id": "a"}}}',
        ],
    )
    def test_malformed_files_are_corrupt(self, snapshot_path: Path, content: str) -> None:
        snapshot_path.parent.mkdir(parents=True)
        snapshot_path.write_text(content)

        with pytest.raises(CorruptSnapshotError) as exc_info:
            SnapshotManager(snapshot_path).load_sync()
        assert exc_info.value.path == snapshot_path

    def test_deeply_nested_file_is_corrupt(self, snapshot_path: Path) -> None:
        snapshot_path.parent.mkdir(parents=True)
        snapshot_path.write_text("[" * 100_000)

        with pytest.raises(CorruptSnapshotError, match="nested too deeply"):
            SnapshotManager(snapshot_path).load_sync()

    def test_key_must_match_record_id(self, snapshot_path: Path) -> None:
        _write(
            snapshot_path,
            {"version": 1, "payload": {"b": make_record(id="a").to_dict()}},
        )

        with pytest.raises(CorruptSnapshotError, match="stored under key 'b'"):
            SnapshotManager(snapshot_path).load_sync()

    def test_directory_path_is_corrupt(self, tmp_path: Path) -> None:
        with pytest.raises(CorruptSnapshotError):
            SnapshotManager(tmp_path).load_sync()


class TestStore:
    @pytest.mark.asyncio
    async def test_roundtrip(self, snapshot_path: Path) -> None:
        store = TodoStore()
        await store.upsert(make_record(id="a", offset_minutes=1))
        await store.upsert(
            make_record(id="b", title="walk dog", status=TodoStatus.COMPLETED)
        )
        manager = SnapshotManager(snapshot_path)

        await manager.store(store)
        loaded = await manager.load()

        assert await loaded.snapshot() == await store.snapshot()

    @pytest.mark.asyncio
    async def test_roundtrip_empty(self, snapshot_path: Path) -> None:
        manager = SnapshotManager(snapshot_path)

        await manager.store(TodoStore())
        loaded = await manager.load()

        assert await loaded.list() == []
        assert json.loads(snapshot_path.read_text()) == {
            "version": SNAPSHOT_VERSION,
            "payload": {},
        }

    @pytest.mark.asyncio
    async def test_file_format(self, snapshot_path: Path) -> None:
        store = TodoStore({"a": make_record()})

        await SnapshotManager(snapshot_path).store(store)

        text = snapshot_path.read_text()
        assert text.endswith("\n")
        assert json.loads(text) == {
            "version": 1,
            "payload": {
                "a": {
                    "id": "a",
                    "title": "buy milk",
                    "status": "Active",
                    "created": "2024-05-01T12:00:00+00:00",
                }
            },
        }
        # Indented so that successive snapshots diff line by line
        assert '\n  "payload"' in text

    def test_replaces_previous_snapshot(self, snapshot_path: Path) -> None:
        manager = SnapshotManager(snapshot_path)
        manager.store_sync({"a": make_record()})
        manager.store_sync({"b": make_record(id="b")})

        data = json.loads(snapshot_path.read_text())
        assert list(data["payload"]) == ["b"]

    def test_no_temp_files_left_behind(self, snapshot_path: Path) -> None:
        SnapshotManager(snapshot_path).store_sync({"a": make_record()})

        assert [p.name for p in snapshot_path.parent.iterdir()] == ["todos.json"]

    def test_write_failure_raises_persistence_error(self, tmp_path: Path) -> None:
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")
        manager = SnapshotManager(blocker / "todos.json")

        with pytest.raises(PersistenceError) as exc_info:
            manager.store_sync({"a": make_record()})
        assert exc_info.value.path == blocker / "todos.json"

    def test_failed_write_keeps_previous_snapshot(
        self, snapshot_path: Path, monkeypatch
    ) -> None:
        manager = SnapshotManager(snapshot_path)
        manager.store_sync({"a": make_record()})
        before = snapshot_path.read_text()

        def boom(_fd: int) -> None:
            raise OSError("disk full")

        monkeypatch.setattr("dew.snapshot.manager.os.fsync", boom)

        with pytest.raises(PersistenceError, match="disk full"):
            manager.store_sync({"b": make_record(id="b")})

        assert snapshot_path.read_text() == before
        assert [p.name for p in snapshot_path.parent.iterdir()] == ["todos.json"]


class TestEnvelope:
    def test_encode_decode(self, tmp_path: Path) -> None:
        records = {"a": make_record()}
        assert decode_snapshot(encode_snapshot(records), tmp_path) == records

    def test_decode_rejects_future_version(self, tmp_path: Path) -> None:
        with pytest.raises(CorruptSnapshotError):
            decode_snapshot({"version": 99, "payload": {}}, tmp_path)
