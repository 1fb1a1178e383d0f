"""Tests for the todo service facade."""

from __future__ import annotations

import asyncio

import pytest

from dew.todos import (
    GenerationCounter,
    TodoNotFoundError,
    TodoService,
    TodoStatus,
    TodoStore,
)
from tests.conftest import make_record


@pytest.mark.asyncio
async def test_create_lists_record_and_bumps_generation(service: TodoService) -> None:
    await service.create_or_replace_todo(make_record())

    todos = await service.list_todos()
    assert len(todos) == 1
    assert (todos[0].id, todos[0].title, todos[0].status) == (
        "a",
        "buy milk",
        TodoStatus.ACTIVE,
    )
    assert service.get_generation() == 1


@pytest.mark.asyncio
async def test_complete_then_delete_completed(service: TodoService) -> None:
    await service.create_or_replace_todo(make_record())
    before = service.get_generation()

    await service.set_status("a", TodoStatus.COMPLETED)
    removed = await service.delete_completed()

    assert removed == 1
    assert await service.list_todos() == []
    assert service.get_generation() == before + 2


@pytest.mark.asyncio
async def test_missing_id_leaves_generation_unchanged(service: TodoService) -> None:
    await service.create_or_replace_todo(make_record())
    before = service.get_generation()

    with pytest.raises(TodoNotFoundError):
        await service.set_status("missing-id", TodoStatus.COMPLETED)
    with pytest.raises(TodoNotFoundError):
        await service.set_title("missing-id", "nope")

    assert service.get_generation() == before


@pytest.mark.asyncio
async def test_newer_records_listed_first(service: TodoService) -> None:
    await service.create_or_replace_todo(make_record(id="t1", offset_minutes=0))
    await service.create_or_replace_todo(make_record(id="t2", offset_minutes=1))

    assert [t.id for t in await service.list_todos()] == ["t2", "t1"]


@pytest.mark.asyncio
async def test_set_title(service: TodoService) -> None:
    await service.create_or_replace_todo(make_record())

    updated = await service.set_title("a", "buy bread")

    assert updated.title == "buy bread"
    assert service.get_generation() == 2


@pytest.mark.asyncio
async def test_delete_completed_bumps_even_when_nothing_removed(
    service: TodoService,
) -> None:
    assert await service.delete_completed() == 0
    assert service.get_generation() == 1


@pytest.mark.asyncio
async def test_reads_do_not_bump(service: TodoService) -> None:
    await service.create_or_replace_todo(make_record())
    await service.list_todos()
    service.get_generation()
    assert service.get_generation() == 1


@pytest.mark.asyncio
async def test_loaded_store_starts_at_generation_zero() -> None:
    store = TodoStore({"a": make_record()})
    service = TodoService(store)

    assert service.get_generation() == 0
    assert len(await service.list_todos()) == 1


@pytest.mark.asyncio
async def test_concurrent_callers_one_bump_per_mutation() -> None:
    service = TodoService(TodoStore(), GenerationCounter())

    creates = [
        service.create_or_replace_todo(make_record(id=f"t{i}", offset_minutes=i))
        for i in range(40)
    ]
    await asyncio.gather(*creates)

    updates = []
    for i in range(40):
        updates.append(service.set_title(f"t{i}", f"renamed {i}"))
        if i % 4 == 0:
            updates.append(service.set_status(f"t{i}", TodoStatus.COMPLETED))
    await asyncio.gather(*updates)

    assert service.get_generation() == 40 + 40 + 10

    removed = await service.delete_completed()
    todos = await service.list_todos()
    assert removed == 10
    assert len(todos) == 30
    assert all(t.title.startswith("renamed") for t in todos)
    assert service.get_generation() == 91


@pytest.mark.asyncio
async def test_generation_ordered_with_mutations(service: TodoService) -> None:
    seen: list[tuple[int, int]] = []

    async def create(i: int) -> None:
        await service.create_or_replace_todo(make_record(id=f"t{i}"))
        seen.append((service.get_generation(), await service.store.count()))

    await asyncio.gather(*(create(i) for i in range(20)))

    # Whenever a count is observed, the generation is at least that large
    assert all(generation >= count for generation, count in seen)
    assert service.get_generation() == 20
