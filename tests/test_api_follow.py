import uuid

from app.models import Role


def test_follow_flow(client, member, trainer, headers_for):
    h = headers_for(member)

    resp = client.post(f"/follow/{trainer.id}", headers=h)
    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "Successfully followed trainer"
    assert body["follow"]["following_id"] == str(trainer.id)
    assert body["follow"]["follower_id"] == str(member.id)

    assert client.get(f"/follow/check/{trainer.id}", headers=h).json() == {"is_following": True}

    dup = client.post(f"/follow/{trainer.id}", headers=h)
    assert dup.status_code == 400
    assert dup.json()["detail"] == "You are already following this trainer"

    resp = client.delete(f"/follow/{trainer.id}", headers=h)
    assert resp.status_code == 200
    assert client.get(f"/follow/check/{trainer.id}", headers=h).json() == {"is_following": False}
    assert client.delete(f"/follow/{trainer.id}", headers=h).status_code == 404


def test_follow_errors(client, member, make_account, headers_for):
    h = headers_for(member)
    other_user = make_account(Role.USER)

    self_follow = client.post(f"/follow/{member.id}", headers=h)
    assert self_follow.status_code == 400
    assert self_follow.json()["detail"] == "You cannot follow yourself"

    not_trainer = client.post(f"/follow/{other_user.id}", headers=h)
    assert not_trainer.status_code == 400
    assert not_trainer.json()["detail"] == "You can only follow trainer accounts"

    assert client.post(f"/follow/{uuid.uuid4()}", headers=h).status_code == 404
    assert client.post(f"/follow/{uuid.uuid4()}").status_code == 401


def test_following_and_followers_lists(client, member, make_account, headers_for):
    t1 = make_account(Role.TRAINER, name="First")
    t2 = make_account(Role.TRAINER, name="Second")
    client.post(f"/follow/{t1.id}", headers=headers_for(member))
    client.post(f"/follow/{t2.id}", headers=headers_for(member))

    trainers = client.get("/follow/following", headers=headers_for(member)).json()["trainers"]
    assert [t["name"] for t in trainers] == ["Second", "First"]
    assert trainers[0]["role"] == "TRAINER"

    # public route, no token needed
    followers = client.get(f"/follow/followers/{t1.id}").json()["followers"]
    assert [f["id"] for f in followers] == [str(member.id)]
    assert set(followers[0]) == {"id", "name", "email", "avatar"}


def test_followers_of_non_trainer_is_404(client, member):
    assert client.get(f"/follow/followers/{member.id}").status_code == 404
    assert client.get(f"/follow/followers/{uuid.uuid4()}").status_code == 404
