import pytest

from weekplanner.core.errors import NotFoundError, StoreError, ValidationError

from conftest import MISSING_ID, TASK


@pytest.mark.asyncio
async def test_create_task_defaults_file_to_none(planner):
    task = await planner.create_task(TASK)

    assert task.file is None
    assert task.model_dump(exclude={"id", "file"}) == TASK


@pytest.mark.asyncio
async def test_create_task_missing_field_is_validation_error(planner):
    payload = dict(TASK)
    del payload["name"]

    with pytest.raises(ValidationError) as exc_info:
        await planner.create_task(payload)

    assert "name" in exc_info.value.message
    assert await planner.list_tasks() == []


@pytest.mark.asyncio
async def test_create_task_coerces_types(planner):
    task = await planner.create_task(dict(TASK, finished=True, priority="3", color=5))

    assert task.finished == 1
    assert task.priority == 3
    assert task.color == "5"


@pytest.mark.asyncio
async def test_update_task_merges_only_supplied_fields(planner):
    created = await planner.create_task(dict(TASK, file="plan.pdf"))

    updated = await planner.update_task(created.id, {"name": "x"})

    assert updated.model_dump() == dict(created.model_dump(), name="x")
    assert await planner.get_task(created.id) == updated


@pytest.mark.asyncio
async def test_update_task_with_no_fields_returns_current_record(planner):
    created = await planner.create_task(TASK)

    assert await planner.update_task(created.id, {}) == created


@pytest.mark.asyncio
async def test_update_task_null_file_clears_attachment(planner):
    created = await planner.create_task(dict(TASK, file="plan.pdf"))

    updated = await planner.update_task(created.id, {"file": None})

    assert updated.file is None
    assert updated.name == TASK["name"]


@pytest.mark.asyncio
async def test_update_task_null_required_field_is_rejected(planner):
    created = await planner.create_task(TASK)

    with pytest.raises(ValidationError):
        await planner.update_task(created.id, {"name": None})

    assert (await planner.get_task(created.id)).name == TASK["name"]


@pytest.mark.asyncio
async def test_update_unknown_task_is_not_found(planner):
    with pytest.raises(NotFoundError):
        await planner.update_task(MISSING_ID, {"name": "x"})
    with pytest.raises(NotFoundError):
        await planner.update_task(MISSING_ID, {})


@pytest.mark.asyncio
async def test_bulk_update_requires_identifier(planner):
    await planner.create_task(TASK)

    with pytest.raises(ValidationError):
        await planner.update_tasks({"finished": 1})

    assert all(task.finished == 0 for task in await planner.list_tasks())


@pytest.mark.asyncio
@pytest.mark.parametrize("id_key", ["id", "_id"])
async def test_bulk_update_changes_only_the_named_task(planner, id_key):
    target = await planner.create_task(TASK)
    other = await planner.create_task(dict(TASK, name="B"))

    updated = await planner.update_tasks({id_key: target.id, "finished": 1})

    assert updated.id == target.id
    assert updated.finished == 1
    assert (await planner.get_task(other.id)).finished == 0


@pytest.mark.asyncio
async def test_delete_then_read_is_not_found(planner):
    created = await planner.create_task(TASK)

    deleted = await planner.delete_task(created.id)

    assert deleted == created
    with pytest.raises(NotFoundError):
        await planner.get_task(created.id)
    with pytest.raises(NotFoundError):
        await planner.delete_task(created.id)


@pytest.mark.asyncio
async def test_deleting_a_week_keeps_its_tasks(planner):
    week = await planner.create_week(
        {"year": 2024, "numweek": 10, "color": "", "description": "", "priority": 0, "link": ""}
    )
    task = await planner.create_task(TASK)

    await planner.delete_week(week.id)

    assert await planner.get_task(task.id) == task


@pytest.mark.asyncio
async def test_malformed_stored_task_is_store_error(task_repository, store):
    result = await store.get_collection("tasks").insert_one({"name": "half a task"})

    with pytest.raises(StoreError):
        await task_repository.get_task(str(result.inserted_id))
