from sqlalchemy import select

from app.models.weight import WeightGoal

BASE = "/api/v1/goals/weight"


async def test_no_goal_yet(client, auth):
    body = (await client.get(BASE, headers=auth)).json()
    assert body == {"goal": None, "logs": []}


async def test_new_goal_replaces_old(client, auth, session_maker, user):
    await client.post(BASE, json={"target_weight": 68, "target_date": "2026-06-01"}, headers=auth)
    resp = await client.post(BASE, json={"target_weight": 65, "target_date": "2026-08-01", "notes": "summer"}, headers=auth)
    assert resp.status_code == 200

    goal = (await client.get(BASE, headers=auth)).json()["goal"]
    assert goal["target_weight"] == 65
    assert goal["start_weight"] == 70
    assert goal["active"] is True

    async with session_maker() as db:
        rows = (
            await db.execute(select(WeightGoal).where(WeightGoal.user_id == user.id))
        ).scalars().all()
    assert len(rows) == 2
    assert [r.target_weight for r in rows if r.active] == [65]


async def test_goal_requires_target(client, auth):
    resp = await client.post(BASE, json={"target_date": "2026-06-01"}, headers=auth)
    assert resp.status_code == 422


async def test_delete_goal(client, auth):
    goal_id = (await client.post(BASE, json={"target_weight": 68, "target_date": "2026-06-01"}, headers=auth)).json()["id"]
    assert (await client.delete(f"{BASE}/{goal_id}", headers=auth)).json() == {"success": True}
    assert (await client.get(BASE, headers=auth)).json()["goal"] is None


async def test_weight_log(client, auth):
    resp = await client.post(f"{BASE}/log", json={"weight": 69.4, "note": "morning"}, headers=auth)
    assert resp.status_code == 200
    logs = (await client.get(BASE, headers=auth)).json()["logs"]
    assert [(log["weight"], log["note"]) for log in logs] == [(69.4, "morning")]
