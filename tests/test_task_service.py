# tests/test_task_service.py

from __future__ import annotations

import pytest
from sqlalchemy import func, select

from task_tracker.config import settings
from task_tracker.errors import BadRequestError, NotFoundError, UnauthorizedError
from task_tracker.models.task import Priority, Task, TaskStatus
from task_tracker.repositories.user_repository import UserRepository
from task_tracker.schemas.task import TaskRequest
from task_tracker.services import policy
from task_tracker.services.identity import resolve_acting_user
from task_tracker.services.task_service import TaskService


def draft(title: str = "Task", **overrides) -> TaskRequest:
    data = {"title": title, "status": TaskStatus.TODO, "priority": Priority.MEDIUM}
    data.update(overrides)
    return TaskRequest(**data)


async def task_count(db) -> int:
    result = await db.execute(select(func.count(Task.id)))
    return result.scalar_one()


@pytest.fixture()
def service(db) -> TaskService:
    return TaskService(db)


@pytest.fixture()
async def scenario(service, actors):
    """admin creates A (TODO, HIGH, unassigned); user1 creates B assigned to user2."""
    a = await service.create_task(
        actors["admin"], draft("A", status=TaskStatus.TODO, priority=Priority.HIGH)
    )
    b = await service.create_task(actors["user1"], draft("B", assigned_to_id=actors["user2"].id))
    return a, b


# ---------------------------------------------------------------------------
# identity
# ---------------------------------------------------------------------------


async def test_resolve_acting_user_by_email(db, actors) -> None:
    user = await resolve_acting_user(UserRepository(db), "user@example.com")
    assert user.id == actors["user1"].id


async def test_resolve_acting_user_missing_is_not_found(db, actors) -> None:
    with pytest.raises(NotFoundError):
        await resolve_acting_user(UserRepository(db), "ghost@example.com")


# ---------------------------------------------------------------------------
# create
# ---------------------------------------------------------------------------


async def test_create_stamps_acting_user_as_creator(service, actors) -> None:
    # Extra keys such as a creator id are not part of the request model
    request = TaskRequest.model_validate(
        {"title": "Mine", "status": "TODO", "priority": "LOW", "created_by_id": actors["admin"].id}
    )
    created = await service.create_task(actors["user1"], request)

    assert created.created_by.id == actors["user1"].id
    assert created.assigned_to is None
    assert created.status == TaskStatus.TODO
    assert created.priority == Priority.LOW


async def test_create_embeds_assignee_summary(service, actors) -> None:
    created = await service.create_task(actors["user1"], draft(assigned_to_id=actors["user2"].id))

    assert created.assigned_to.id == actors["user2"].id
    assert created.assigned_to.username == "user2"
    assert created.assigned_to.role == "USER"
    assert "hashed_password" not in created.model_dump()["assigned_to"]


async def test_create_with_unknown_assignee_persists_nothing(service, db, actors) -> None:
    with pytest.raises(NotFoundError) as exc_info:
        await service.create_task(actors["user1"], draft(assigned_to_id=9999))

    assert exc_info.value.message == "User not found with id: 9999"
    assert await task_count(db) == 0


# ---------------------------------------------------------------------------
# list
# ---------------------------------------------------------------------------


async def test_list_scenario_user_sees_own_admin_sees_all(service, actors, scenario) -> None:
    a, b = scenario

    mine = await service.list_tasks(actors["user1"])
    assert [t.id for t in mine] == [b.id]

    everything = await service.list_tasks(actors["admin"])
    # createdAt descending: B was created after A
    assert [t.id for t in everything] == [b.id, a.id]


async def test_list_for_user_is_exactly_own_tasks(service, actors) -> None:
    own = set()
    for i in range(4):
        own.add((await service.create_task(actors["user2"], draft(f"own-{i}"))).id)
    for i in range(6):
        await service.create_task(actors["user1"], draft(f"other-{i}"))
        await service.create_task(actors["admin"], draft(f"admin-{i}"))

    listed = await service.list_tasks(actors["user2"], size=50)
    assert {t.id for t in listed} == own


async def test_list_empty_is_not_an_error(service, actors) -> None:
    assert await service.list_tasks(actors["user2"]) == []


async def test_list_paginates(service, actors) -> None:
    ids = [(await service.create_task(actors["user1"], draft(f"t{i}"))).id for i in range(5)]
    newest_first = list(reversed(ids))

    first = await service.list_tasks(actors["user1"], page=0, size=2)
    second = await service.list_tasks(actors["user1"], page=1, size=2)
    last = await service.list_tasks(actors["user1"], page=2, size=2)
    beyond = await service.list_tasks(actors["user1"], page=3, size=2)

    assert [t.id for t in first] == newest_first[0:2]
    assert [t.id for t in second] == newest_first[2:4]
    assert [t.id for t in last] == newest_first[4:]
    assert beyond == []


async def test_list_default_size(service, actors) -> None:
    for i in range(settings.DEFAULT_PAGE_SIZE + 2):
        await service.create_task(actors["user1"], draft(f"t{i}"))

    assert len(await service.list_tasks(actors["user1"])) == settings.DEFAULT_PAGE_SIZE


async def test_list_size_is_capped(service, actors, monkeypatch) -> None:
    monkeypatch.setattr(settings, "MAX_PAGE_SIZE", 3)
    for i in range(5):
        await service.create_task(actors["user1"], draft(f"t{i}"))

    assert len(await service.list_tasks(actors["user1"], size=1000)) == 3


async def test_list_size_zero_returns_nothing(service, actors, scenario) -> None:
    assert await service.list_tasks(actors["admin"], size=0) == []


@pytest.mark.parametrize("page, size", [(-1, 10), (0, -1)])
async def test_list_rejects_negative_paging(service, actors, page, size) -> None:
    with pytest.raises(BadRequestError):
        await service.list_tasks(actors["user1"], page=page, size=size)


async def test_list_rejects_unknown_sort_key(service, actors) -> None:
    with pytest.raises(BadRequestError):
        await service.list_tasks(actors["user1"], sort_by="password")


async def test_list_sorts_descending_by_named_field(service, actors) -> None:
    for title in ("banana", "apple", "cherry"):
        await service.create_task(actors["user1"], draft(title))

    listed = await service.list_tasks(actors["user1"], sort_by="title")
    assert [t.title for t in listed] == ["cherry", "banana", "apple"]


async def test_list_filters_by_status_and_priority(service, actors) -> None:
    await service.create_task(actors["user1"], draft("todo-low", status=TaskStatus.TODO, priority=Priority.LOW))
    await service.create_task(actors["user1"], draft("done-low", status=TaskStatus.DONE, priority=Priority.LOW))
    await service.create_task(actors["user1"], draft("done-high", status=TaskStatus.DONE, priority=Priority.HIGH))

    done = await service.list_tasks(actors["user1"], status=TaskStatus.DONE)
    assert {t.title for t in done} == {"done-low", "done-high"}

    done_low = await service.list_tasks(actors["user1"], status=TaskStatus.DONE, priority=Priority.LOW)
    assert [t.title for t in done_low] == ["done-low"]


async def test_list_my_tasks_returns_all_own_unpaged(service, actors) -> None:
    for i in range(settings.DEFAULT_PAGE_SIZE + 3):
        await service.create_task(actors["admin"], draft(f"admin-{i}"))
    await service.create_task(actors["user1"], draft("not mine"))

    mine = await service.list_my_tasks(actors["admin"])
    assert len(mine) == settings.DEFAULT_PAGE_SIZE + 3
    assert all(t.created_by.id == actors["admin"].id for t in mine)


# ---------------------------------------------------------------------------
# get / update / delete
# ---------------------------------------------------------------------------


async def test_get_unknown_task_is_not_found(service, actors) -> None:
    with pytest.raises(NotFoundError) as exc_info:
        await service.get_task(actors["admin"], 424242)
    assert exc_info.value.message == "Task not found with id: 424242"


async def test_non_owner_cannot_get_or_update(service, actors, scenario) -> None:
    _, b = scenario

    with pytest.raises(UnauthorizedError):
        await service.get_task(actors["user2"], b.id)
    with pytest.raises(UnauthorizedError):
        await service.update_task(actors["user2"], b.id, draft("hijacked"))

    unchanged = await service.get_task(actors["user1"], b.id)
    assert unchanged.title == "B"


async def test_admin_can_get_update_and_delete_any_task(service, db, actors, scenario) -> None:
    _, b = scenario

    fetched = await service.get_task(actors["admin"], b.id)
    assert fetched.id == b.id

    updated = await service.update_task(actors["admin"], b.id, draft("B by admin", status=TaskStatus.IN_PROGRESS))
    assert updated.title == "B by admin"
    assert updated.created_by.id == actors["user1"].id

    await service.delete_task(actors["admin"], b.id)
    with pytest.raises(NotFoundError):
        await service.get_task(actors["admin"], b.id)
    assert await task_count(db) == 1


async def test_update_scenario_clears_assignee(service, actors, scenario) -> None:
    _, b = scenario

    updated = await service.update_task(
        actors["user1"], b.id, draft("B", status=TaskStatus.DONE, assigned_to_id=None)
    )

    assert updated.status == TaskStatus.DONE
    assert updated.assigned_to is None
    assert updated.created_by.id == actors["user1"].id


async def test_update_overwrites_all_fields(service, actors) -> None:
    created = await service.create_task(
        actors["user1"], draft("old", description="old text", priority=Priority.LOW)
    )

    updated = await service.update_task(
        actors["user1"],
        created.id,
        draft("new", priority=Priority.HIGH, status=TaskStatus.IN_PROGRESS, assigned_to_id=actors["admin"].id),
    )

    assert updated.title == "new"
    assert updated.description is None
    assert updated.priority == Priority.HIGH
    assert updated.status == TaskStatus.IN_PROGRESS
    assert updated.assigned_to.id == actors["admin"].id


async def test_status_can_move_backwards(service, actors) -> None:
    created = await service.create_task(actors["user1"], draft(status=TaskStatus.DONE))
    updated = await service.update_task(actors["user1"], created.id, draft(status=TaskStatus.TODO))
    assert updated.status == TaskStatus.TODO


async def test_update_with_unknown_assignee_leaves_task_untouched(service, actors, scenario) -> None:
    _, b = scenario

    with pytest.raises(NotFoundError):
        await service.update_task(actors["user1"], b.id, draft("changed", assigned_to_id=9999))

    current = await service.get_task(actors["user1"], b.id)
    assert current.title == "B"
    assert current.assigned_to.id == actors["user2"].id


async def test_update_unknown_task_is_not_found(service, actors) -> None:
    with pytest.raises(NotFoundError):
        await service.update_task(actors["admin"], 9999, draft())


async def test_non_admin_cannot_delete_even_own_task(service, actors, scenario) -> None:
    _, b = scenario

    with pytest.raises(UnauthorizedError):
        await service.delete_task(actors["user1"], b.id)

    assert (await service.get_task(actors["user1"], b.id)).id == b.id


async def test_delete_scenario_other_user_is_denied(service, db, actors, scenario) -> None:
    _, b = scenario

    with pytest.raises(UnauthorizedError):
        await service.delete_task(actors["user2"], b.id)

    assert await task_count(db) == 2


async def test_delete_unknown_task_is_not_found(service, actors) -> None:
    with pytest.raises(NotFoundError):
        await service.delete_task(actors["admin"], 9999)


async def test_create_is_gated_by_policy(service, db, actors, monkeypatch) -> None:
    monkeypatch.setattr(policy, "can_create", lambda user: False)

    with pytest.raises(UnauthorizedError):
        await service.create_task(actors["user1"], draft())

    assert await task_count(db) == 0
