import asyncio

from sqlalchemy import text as sql_text

from planner_api import repositories
from planner_api.db import dispose_engine, get_sessionmaker
from planner_api.db_init import init_db

ALICE = "alice@example.com"
BOB = "bob@example.com"


def _payload(title, start, end, **extra):
    payload = {
        "event_name": title,
        "Description": None,
        "start_datetime": start,
        "end_datetime": end,
        "importance": "NONE",
        "is_task": False,
    }
    payload.update(extra)
    return payload


def run(scenario):
    async def _wrapped():
        try:
            await init_db()
            await scenario()
        finally:
            await dispose_engine()

    asyncio.run(_wrapped())


def test_items_are_scoped_to_owner(api_env):
    async def scenario():
        mine = await repositories.create_item(
            ALICE, _payload("Standup", "2024-01-10T09:00:00+00:00", "2024-01-10T09:15:00+00:00")
        )
        await repositories.create_item(
            BOB, _payload("Gym", "2024-01-10T18:00:00+00:00", "2024-01-10T19:00:00+00:00")
        )
        assert [item["event_name"] for item in await repositories.list_items(ALICE)] == ["Standup"]
        assert await repositories.get_item(BOB, mine["id"]) == {}
        assert await repositories.delete_item(BOB, mine["id"]) is False
        assert (await repositories.get_item(ALICE, mine["id"]))["event_name"] == "Standup"

    run(scenario)


def test_create_stores_canonical_importance_and_flags(api_env):
    async def scenario():
        created = await repositories.create_item(
            ALICE,
            _payload("Review", "2024-01-10T09:00:00+05:30", "2024-01-10T10:00:00+05:30", importance=2, is_task=True),
        )
        assert created["importance"] == "MEDIUM"
        assert created["is_task"] is True
        assert created["complete"] is False
        assert created["start_utc"] == "2024-01-10T03:30:00+00:00"
        stored = await repositories.get_item(ALICE, created["id"])
        assert stored["Description"] is None
        assert stored["start_datetime"] == "2024-01-10T09:00:00+05:30"

    run(scenario)


def test_integer_importance_in_storage_reads_back_as_int(api_env):
    async def scenario():
        created = await repositories.create_item(
            ALICE, _payload("Legacy", "2024-01-10T09:00:00+00:00", "2024-01-10T10:00:00+00:00")
        )
        async with get_sessionmaker()() as session:
            await session.execute(
                sql_text("UPDATE calendar_items SET importance = '3' WHERE id = :id"), {"id": created["id"]}
            )
            await session.commit()
        assert (await repositories.get_item(ALICE, created["id"]))["importance"] == 3

    run(scenario)


def test_range_filter_uses_overlap_and_utc_order(api_env):
    async def scenario():
        await repositories.create_item(
            ALICE, _payload("Overnight", "2024-01-10T22:00:00+00:00", "2024-01-12T02:00:00+00:00")
        )
        await repositories.create_item(
            ALICE, _payload("Later", "2024-01-13T09:00:00+00:00", "2024-01-13T10:00:00+00:00")
        )
        await repositories.create_item(
            ALICE, _payload("Plain", "2024-01-11T05:00:00+00:00", "2024-01-11T06:00:00+00:00")
        )
        await repositories.create_item(
            ALICE, _payload("Offset", "2024-01-11T09:00:00+05:30", "2024-01-11T10:00:00+05:30")
        )
        found = await repositories.list_items(
            ALICE, "2024-01-11T00:00:00+00:00", "2024-01-12T00:00:00+00:00"
        )
        assert [item["event_name"] for item in found] == ["Overnight", "Offset", "Plain"]

    run(scenario)


def test_archive_complete_update_and_delete(api_env):
    async def scenario():
        created = await repositories.create_item(
            ALICE, _payload("Call", "2024-01-10T09:00:00+00:00", "2024-01-10T10:00:00+00:00", is_task=True)
        )
        item_id = created["id"]

        completed = await repositories.set_complete(ALICE, item_id, True)
        assert completed["complete"] is True

        updated = await repositories.update_item(
            ALICE,
            item_id,
            {
                "event_name": "Call back",
                "start_datetime": "2024-01-10T11:00:00+01:00",
                "importance": "high",
                "user_id": BOB,
            },
        )
        assert updated["event_name"] == "Call back"
        assert updated["start_utc"] == "2024-01-10T10:00:00+00:00"
        assert updated["importance"] == "HIGH"
        assert updated["user_id"] == ALICE

        assert [item["id"] for item in await repositories.list_items(ALICE, is_task=True)] == [item_id]
        assert await repositories.list_items(ALICE, is_task=False) == []

        archived = await repositories.archive_item(ALICE, item_id)
        assert archived["archived"] is True
        assert await repositories.list_items(ALICE) == []
        assert len(await repositories.list_items(ALICE, include_archived=True)) == 1

        assert await repositories.delete_item(ALICE, item_id) is True
        assert await repositories.get_item(ALICE, item_id) == {}

    run(scenario)
