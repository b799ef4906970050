from .conftest import JSONAPI, admin_auth, attendee_auth, random_slack_id


def test_get_user_includes_team_and_teammates(client, store):
    user = store.user()
    teammate = store.user()
    team = store.team(members=[user, teammate])

    response = client.get(f"/users/{user['userid']}")

    assert response.status_code == 200
    assert response.headers["content-type"] == JSONAPI
    body = response.json()
    assert body["links"] == {"self": f"/users/{user['userid']}"}
    assert body["data"]["id"] == user["userid"]
    assert body["data"]["attributes"] == {"name": user["name"]}
    assert body["data"]["relationships"]["team"] == {
        "links": {"self": f"/users/{user['userid']}/team"},
        "data": {"type": "teams", "id": team["teamid"]},
    }
    assert [(r["type"], r["id"]) for r in body["included"]] == [
        ("teams", team["teamid"]),
        ("users", teammate["userid"]),
    ]
    included_team = body["included"][0]
    assert included_team["attributes"] == {"name": team["name"], "motto": None}
    assert included_team["relationships"]["members"]["data"] == [
        {"type": "users", "id": user["userid"]},
        {"type": "users", "id": teammate["userid"]},
    ]


def test_get_user_without_team(client, store):
    user = store.user()

    body = client.get(f"/users/{user['userid']}").json()

    assert body["data"]["relationships"]["team"]["data"] is None
    assert body["included"] == []


def test_get_missing_user_is_404(client):
    assert client.get("/users/UNOBODY00").status_code == 404


def test_list_users_shares_included_team(client, store):
    alice = store.user(userid="UAAAAAAAA")
    bob = store.user(userid="UBBBBBBBB")
    team = store.team(members=[alice, bob])

    body = client.get("/users").json()

    assert [u["id"] for u in body["data"]] == ["UAAAAAAAA", "UBBBBBBBB"]
    # Both users are primary data, so only the team is included, once.
    assert [(r["type"], r["id"]) for r in body["included"]] == [("teams", team["teamid"])]


def test_filter_users_by_name(client, store):
    store.user(name="Grace Hopper")
    store.user(name="Alan Turing")

    body = client.get("/users", params={"filter[name]": "hop"}).json()

    assert [u["attributes"]["name"] for u in body["data"]] == ["Grace Hopper"]


def test_get_user_team_relationship(client, store):
    user = store.user()
    team = store.team(members=[user])

    response = client.get(f"/users/{user['userid']}/team")

    assert response.status_code == 200
    body = response.json()
    assert body["links"] == {"self": f"/users/{user['userid']}/team"}
    assert body["data"] == {"type": "teams", "id": team["teamid"]}
    assert [r["id"] for r in body["included"]] == [team["teamid"]]


def test_create_user(client, store, events):
    attendee = store.attendee()
    userid = random_slack_id()

    response = client.post(
        "/users",
        json={"data": {"type": "users", "id": userid, "attributes": {"name": "Ada"}}},
        headers=attendee_auth(attendee),
    )

    assert response.status_code == 201
    body = response.json()
    assert body["links"]["self"] == f"/users/{userid}"
    assert body["data"]["id"] == userid
    assert body["data"]["attributes"] == {"name": "Ada"}
    assert store.find("users", "userid", userid)["name"] == "Ada"
    [event] = events()
    assert event["name"] == "users_add"
    assert event["data"] == {"userid": userid, "name": "Ada"}


def test_create_user_requires_id(client, store):
    response = client.post(
        "/users",
        json={"data": {"type": "users", "attributes": {"name": "Ada"}}},
        headers=attendee_auth(store.attendee()),
    )

    assert response.status_code == 400


def test_create_existing_user_is_409(client, store):
    user = store.user()

    response = client.post(
        "/users",
        json={"data": {"type": "users", "id": user["userid"], "attributes": {"name": "Copy"}}},
        headers=attendee_auth(store.attendee()),
    )

    assert response.status_code == 409


def test_rename_user(client, store, events):
    user = store.user()

    response = client.patch(
        f"/users/{user['userid']}",
        json={"data": {"type": "users", "id": user["userid"], "attributes": {"name": "Renamed"}}},
        headers=attendee_auth(store.attendee()),
    )

    assert response.status_code == 204
    assert store.find("users", "userid", user["userid"])["name"] == "Renamed"
    assert [(e["name"], e["data"]) for e in events()] == [
        ("users_update", {"userid": user["userid"], "name": "Renamed"})
    ]


def test_patch_without_attributes_is_noop(client, store, events):
    user = store.user()

    response = client.patch(
        f"/users/{user['userid']}",
        json={"data": {"type": "users", "id": user["userid"]}},
        headers=attendee_auth(store.attendee()),
    )

    assert response.status_code == 204
    assert store.find("users", "userid", user["userid"])["name"] == user["name"]
    assert events() == []


def test_patch_with_other_id_is_400(client, store):
    user = store.user()

    response = client.patch(
        f"/users/{user['userid']}",
        json={"data": {"type": "users", "id": "UOTHER000", "attributes": {"name": "X"}}},
        headers=attendee_auth(store.attendee()),
    )

    assert response.status_code == 400


def test_patch_missing_user_is_404(client, store):
    response = client.patch(
        "/users/UGHOST000",
        json={"data": {"type": "users", "id": "UGHOST000", "attributes": {"name": "X"}}},
        headers=attendee_auth(store.attendee()),
    )

    assert response.status_code == 404


def test_delete_user_leaves_team_readable(client, store, events):
    user = store.user()
    teammate = store.user()
    team = store.team(members=[user, teammate])

    response = client.delete(f"/users/{user['userid']}", headers=admin_auth())

    assert response.status_code == 204
    assert client.get(f"/users/{user['userid']}").status_code == 404
    members = client.get(f"/teams/{team['teamid']}").json()["data"]["relationships"]["members"]["data"]
    assert members == [{"type": "users", "id": teammate["userid"]}]
    assert [e["name"] for e in events()] == ["users_delete"]


def test_recreated_user_is_not_a_member(client, store):
    user = store.user()
    team = store.team(members=[user])
    client.delete(f"/users/{user['userid']}", headers=admin_auth())

    store.user(userid=user["userid"])

    body = client.get(f"/users/{user['userid']}").json()
    assert body["data"]["relationships"]["team"]["data"] is None
    assert store.team_member_ids(team) == []


def test_delete_user_requires_admin(client, store):
    user = store.user()

    response = client.delete(f"/users/{user['userid']}", headers=attendee_auth(store.attendee()))

    assert response.status_code == 403
