"""Friends API tests."""

from sandycal.models import Friendship


def test_add_list_and_remove(client, make_user, auth_headers):
    a, b = make_user("A"), make_user("B")
    a_headers, b_headers = auth_headers(a), auth_headers(b)

    r = client.post("/friends", headers=a_headers, json={"friend_id": b.id})
    assert r.status_code == 200
    assert r.json() == {"success": True, "message": "Friend added successfully"}

    # Both sides see the friendship
    a_friends = client.get("/friends", headers=a_headers).json()
    assert [f["id"] for f in a_friends] == [b.id]
    assert a_friends[0]["name"] == "B"
    assert a_friends[0]["friendship_created_at"]
    assert [f["id"] for f in client.get("/friends", headers=b_headers).json()] == [a.id]
    assert client.get(f"/friends/{a.id}", headers=b_headers).json() == {"friend_id": a.id, "are_friends": True}

    r = client.delete(f"/friends/{a.id}", headers=b_headers)
    assert r.status_code == 200
    assert client.get("/friends", headers=a_headers).json() == []
    assert client.get(f"/friends/{b.id}", headers=a_headers).json()["are_friends"] is False


def test_add_errors(client, make_user, auth_headers):
    a, b = make_user(), make_user()
    headers = auth_headers(a)

    assert client.post("/friends", headers=headers, json={"friend_id": a.id}).status_code == 400
    assert client.post("/friends", headers=headers, json={"friend_id": b.id + 100}).status_code == 404
    assert client.post("/friends", headers=headers, json={"friend_id": b.id}).status_code == 200

    r = client.post("/friends", headers=headers, json={"friend_id": b.id})
    assert r.status_code == 409
    assert "already" in r.json()["detail"].lower()

    r = client.post("/friends", headers=auth_headers(b), json={"friend_id": a.id})
    assert r.status_code == 409


def test_remove_errors_and_noop(client, make_user, auth_headers):
    a, b = make_user(), make_user()
    headers = auth_headers(a)
    assert client.delete(f"/friends/{a.id}", headers=headers).status_code == 400
    r = client.delete(f"/friends/{b.id}", headers=headers)
    assert r.status_code == 200
    assert r.json()["success"] is True


def test_search(client, make_user, auth_headers):
    me = make_user(phone="+15550600001")
    friend = make_user(phone="+15550600002")
    other = make_user("Other", phone="+15550600003")
    headers = auth_headers(me)
    client.post("/friends", headers=headers, json={"friend_id": friend.id})

    r = client.get("/friends/search", headers=headers, params={"phone": "0600"})
    assert r.status_code == 200
    assert [u["id"] for u in r.json()] == [other.id]
    assert r.json()[0]["phone"] == "+15550600003"
    assert r.json()[0]["name"] == "Other"

    assert client.get("/friends/search", headers=headers, params={"phone": "999999"}).json() == []
    assert client.get("/friends/search", headers=headers).status_code == 422


def test_storage_failure_on_reads_is_503(client, db, make_user, auth_headers):
    a, b = make_user(), make_user()
    headers = auth_headers(a)
    Friendship.__table__.drop(bind=db.get_bind())

    assert client.get("/friends", headers=headers).status_code == 503
    assert client.get(f"/friends/{b.id}", headers=headers).status_code == 503
    assert client.get("/friends/search", headers=headers, params={"phone": "555"}).status_code == 503
