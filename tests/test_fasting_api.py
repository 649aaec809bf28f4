import uuid

import pytest

BASE = "/api/v1/fasting"


async def test_requires_user_header(client):
    resp = await client.post(f"{BASE}/start")
    assert resp.status_code == 401


async def test_unknown_user_cannot_start_or_log_food(client):
    headers = {"X-User-Id": str(uuid.uuid4())}
    resp = await client.post(f"{BASE}/start", headers=headers)
    assert resp.status_code == 401
    assert resp.json() == {"detail": "User not found."}
    resp = await client.post(
        "/api/v1/food/log", json={"food_name": "Apple", "calories": 95}, headers=headers
    )
    assert resp.status_code == 401


async def test_history_ties_come_back_in_stable_order(client, auth):
    ids = []
    for _ in range(3):
        ids.append((await client.post(f"{BASE}/start", headers=auth)).json()["session"]["id"])
        await client.post(f"{BASE}/cancel", headers=auth)

    sessions = (await client.get(f"{BASE}/history", headers=auth)).json()["sessions"]
    assert [s["id"] for s in sessions] == sorted(ids, key=uuid.UUID, reverse=True)


async def test_start_without_body_uses_defaults(client, auth, clock):
    resp = await client.post(f"{BASE}/start", headers=auth)
    assert resp.status_code == 200
    session = resp.json()["session"]
    assert session["status"] == "active"
    assert session["target_hours"] == 16
    assert session["protocol"] == "16:8"
    assert session["ended_at"] is None
    assert session["actual_hours"] is None


async def test_current_reports_elapsed_and_goal(client, auth, clock):
    assert (await client.get(f"{BASE}/current", headers=auth)).json() == {"session": None}

    await client.post(f"{BASE}/start", json={"target_hours": 16, "protocol": "16:8"}, headers=auth)
    clock.advance(hours=15)
    current = (await client.get(f"{BASE}/current", headers=auth)).json()["session"]
    assert current["elapsed_hours"] == 15.0
    assert current["goal_reached"] is False

    clock.advance(hours=2)
    current = (await client.get(f"{BASE}/current", headers=auth)).json()["session"]
    assert current["elapsed_hours"] == 17.0
    assert current["goal_reached"] is True


async def test_end_round_trip(client, auth):
    await client.post(f"{BASE}/start", json={"target_hours": 16, "protocol": "16:8"}, headers=auth)
    resp = await client.post(f"{BASE}/end", json={"feeling": "good"}, headers=auth)
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["actual_hours"] == pytest.approx(0, abs=0.01)

    history = (await client.get(f"{BASE}/history", headers=auth)).json()
    assert history["sessions"][0]["status"] == "completed"
    assert history["sessions"][0]["feeling"] == "good"
    assert history["stats"]["total"] == 1


async def test_end_without_active_fast_is_404(client, auth):
    resp = await client.post(f"{BASE}/end", json={}, headers=auth)
    assert resp.status_code == 404
    assert resp.json() == {"detail": "No active fast."}


async def test_cancel_twice_is_success(client, auth):
    for _ in range(2):
        resp = await client.post(f"{BASE}/cancel", headers=auth)
        assert resp.status_code == 200
        assert resp.json() == {"success": True}
    history = (await client.get(f"{BASE}/history", headers=auth)).json()
    assert history["sessions"] == []


async def test_restart_cancels_previous(client, auth, clock):
    first = (await client.post(f"{BASE}/start", headers=auth)).json()["session"]
    clock.advance(hours=4)
    second = (await client.post(f"{BASE}/start", json={"target_hours": 20}, headers=auth)).json()["session"]

    current = (await client.get(f"{BASE}/current", headers=auth)).json()["session"]
    assert current["id"] == second["id"]

    history = (await client.get(f"{BASE}/history", headers=auth)).json()
    assert [s["id"] for s in history["sessions"]] == [first["id"]]
    cancelled = history["sessions"][0]
    assert cancelled["status"] == "cancelled"
    assert cancelled["ended_at"] is not None
    assert cancelled["actual_hours"] is None
    assert history["stats"]["total"] == 0


async def test_history_limit_clamped(client, auth):
    for _ in range(3):
        await client.post(f"{BASE}/start", headers=auth)
        await client.post(f"{BASE}/cancel", headers=auth)

    resp = await client.get(f"{BASE}/history", params={"limit": 2}, headers=auth)
    assert len(resp.json()["sessions"]) == 2
    resp = await client.get(f"{BASE}/history", params={"limit": -1}, headers=auth)
    assert len(resp.json()["sessions"]) == 1
    resp = await client.get(f"{BASE}/history", params={"limit": 1000}, headers=auth)
    assert len(resp.json()["sessions"]) == 3
