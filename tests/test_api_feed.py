def _create_plan(client, headers, **overrides):
    body = {
        "title": "Hypertrophy block",
        "description": "Push, pull, legs. " * 15,
        "price": 49.5,
        "duration_days": 42,
        "tags": ["strength"],
        "difficulty": "Intermediate",
    }
    body.update(overrides)
    resp = client.post("/plans", json=body, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["plan"]


def test_feed_requires_auth(client):
    assert client.get("/feed/personalized").status_code == 401


def test_feed_without_follows(client, member, headers_for):
    resp = client.get("/feed/personalized", headers=headers_for(member))

    assert resp.status_code == 200
    body = resp.json()
    assert body["plans"] == []
    assert body["message"] == "Follow some trainers to see their plans in your feed"


def test_follow_subscribe_unlocks_feed(client, member, trainer, headers_for):
    plan = _create_plan(client, headers_for(trainer))
    user_headers = headers_for(member)

    assert client.post(f"/follow/{trainer.id}", headers=user_headers).status_code == 201

    body = client.get("/feed/personalized", headers=user_headers).json()
    assert body["count"] == 1
    assert "message" not in body
    item = body["plans"][0]
    assert item["id"] == plan["id"]
    assert item["is_subscribed"] is False
    assert item["description"] == plan["description"][:150] + "..."
    assert item["trainer"]["name"] == "Tina Trainer"

    resp = client.post("/subscriptions", json={"plan_id": plan["id"]}, headers=user_headers)
    assert resp.status_code == 201

    item = client.get("/feed/personalized", headers=user_headers).json()["plans"][0]
    assert item["is_subscribed"] is True
    assert item["description"] == plan["description"]
