from datetime import date

import pytest

from app.core.errors import ValidationError
from app.models.food_log import FoodLog
from app.services.nutrition import daily_totals, range_totals

FOOD = "/api/v1/food"


async def _log(db, user_id, day, **nutrients):
    db.add(FoodLog(user_id=user_id, log_date=day, food_name="item", **nutrients))
    await db.flush()


async def test_daily_totals_zero_filled(db, user):
    totals = await daily_totals(db, user.id, date(2026, 3, 1))
    assert totals == {"calories": 0, "protein": 0, "carbs": 0, "fat": 0, "fiber": 0}


async def test_daily_totals_sums_entries(db, user):
    await _log(db, user.id, date(2026, 3, 1), calories=300, protein=20, carbs=30, fat=10, fiber=4)
    await _log(db, user.id, date(2026, 3, 1), calories=200, protein=5)
    await _log(db, user.id, date(2026, 3, 2), calories=999)
    totals = await daily_totals(db, user.id, date(2026, 3, 1))
    assert totals == {"calories": 500, "protein": 25, "carbs": 30, "fat": 10, "fiber": 4}


async def test_range_totals_skip_empty_days(db, user):
    await _log(db, user.id, date(2026, 3, 1), calories=100)
    await _log(db, user.id, date(2026, 3, 3), calories=300)
    await _log(db, user.id, date(2026, 3, 3), calories=50)
    await _log(db, user.id, date(2026, 3, 9), calories=700)  # outside range

    rows = await range_totals(db, user.id, date(2026, 3, 1), date(2026, 3, 5))
    assert [r["log_date"] for r in rows] == [date(2026, 3, 1), date(2026, 3, 3)]
    assert [r["calories"] for r in rows] == [100, 350]


async def test_range_totals_empty(db, user):
    assert await range_totals(db, user.id, date(2026, 3, 1), date(2026, 3, 5)) == []


async def test_range_totals_rejects_inverted_range(db, user):
    with pytest.raises(ValidationError):
        await range_totals(db, user.id, date(2026, 3, 5), date(2026, 3, 1))


async def test_food_log_flow(client, auth, clock):
    resp = await client.post(
        f"{FOOD}/log",
        json={"food_name": "Oatmeal", "calories": 350, "protein": 12, "meal_type": "breakfast"},
        headers=auth,
    )
    assert resp.status_code == 200
    entry_id = resp.json()["id"]

    day = (await client.get(f"{FOOD}/logs", headers=auth)).json()
    assert day["date"] == clock.now.date().isoformat()
    assert [e["food_name"] for e in day["logs"]] == ["Oatmeal"]
    assert day["totals"]["calories"] == 350

    assert (await client.delete(f"{FOOD}/log/{entry_id}", headers=auth)).status_code == 200
    assert (await client.delete(f"{FOOD}/log/{entry_id}", headers=auth)).status_code == 404

    day = (await client.get(f"{FOOD}/logs", headers=auth)).json()
    assert day["logs"] == []
    assert day["totals"] == {"calories": 0, "protein": 0, "carbs": 0, "fat": 0, "fiber": 0}


async def test_food_log_requires_name_and_calories(client, auth):
    resp = await client.post(f"{FOOD}/log", json={"food_name": "Apple"}, headers=auth)
    assert resp.status_code == 422


async def test_summary_defaults_and_gaps(client, auth):
    for day, cal in (("2026-02-20", 1800), ("2026-02-25", 2100)):
        await client.post(f"{FOOD}/log", json={"food_name": "x", "calories": cal, "log_date": day}, headers=auth)

    body = (await client.get(f"{FOOD}/summary", headers=auth)).json()
    assert body["to"] == "2026-03-01"
    assert body["from"] == "2026-01-31"
    assert [r["log_date"] for r in body["rows"]] == ["2026-02-20", "2026-02-25"]


async def test_summary_inverted_range_is_400(client, auth):
    resp = await client.get(f"{FOOD}/summary", params={"from": "2026-03-05", "to": "2026-03-01"}, headers=auth)
    assert resp.status_code == 400
