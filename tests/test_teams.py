from .conftest import admin_auth, attendee_auth


def team_document(name, motto=None, members=(), entries=(), **data):
    document = {"data": {"type": "teams", "attributes": {"name": name}, **data}}
    if motto is not None:
        document["data"]["attributes"]["motto"] = motto
    relationships = {}
    if members:
        relationships["members"] = {"data": [{"type": "users", "id": u["userid"]} for u in members]}
    if entries:
        relationships["entries"] = {"data": [{"type": "hacks", "id": h["hackid"]} for h in entries]}
    if relationships:
        document["data"]["relationships"] = relationships
    return document


def test_list_teams_includes_each_member_once_in_order(client, store):
    first, second, third = store.user(), store.user(), store.user()
    alpha = store.team(name="Alpha Team", members=[first])
    beta = store.team(name="Beta Team", members=[second, third])

    response = client.get("/teams")

    assert response.status_code == 200
    body = response.json()
    assert body["links"] == {"self": "/teams"}
    assert [t["id"] for t in body["data"]] == [alpha["teamid"], beta["teamid"]]
    assert [(r["type"], r["id"]) for r in body["included"]] == [
        ("users", first["userid"]),
        ("users", second["userid"]),
        ("users", third["userid"]),
    ]
    beta_doc = body["data"][1]
    assert beta_doc["links"] == {"self": "/teams/beta-team"}
    assert beta_doc["relationships"]["members"] == {
        "links": {"self": "/teams/beta-team/members"},
        "data": [{"type": "users", "id": second["userid"]}, {"type": "users", "id": third["userid"]}],
    }
    assert beta_doc["relationships"]["entries"] == {"links": {"self": "/teams/beta-team/entries"}, "data": []}


def test_included_members_link_back_to_their_team(client, store):
    member = store.user()
    team = store.team(members=[member])

    body = client.get(f"/teams/{team['teamid']}").json()

    [included] = body["included"]
    assert included["relationships"]["team"]["data"] == {"type": "teams", "id": team["teamid"]}


def test_team_includes_entries(client, store):
    hack = store.hack()
    team = store.team(entries=[hack])

    body = client.get(f"/teams/{team['teamid']}").json()

    assert body["data"]["relationships"]["entries"]["data"] == [{"type": "hacks", "id": hack["hackid"]}]
    assert [(r["type"], r["id"]) for r in body["included"]] == [("hacks", hack["hackid"])]


def test_filter_teams_by_name(client, store):
    store.team(name="Rocket Science")
    store.team(name="Pocket Money")
    store.team(name="Something Else")

    body = client.get("/teams", params={"filter[name]": "OCKET"}).json()

    assert [t["id"] for t in body["data"]] == ["pocket-money", "rocket-science"]


def test_get_missing_team_is_404(client):
    assert client.get("/teams/nobody").status_code == 404


def test_create_team(client, store, events):
    member = store.user()

    response = client.post(
        "/teams",
        json=team_document("The A Team", motto="Plans come together", members=[member]),
        headers=attendee_auth(store.attendee()),
    )

    assert response.status_code == 201
    body = response.json()
    assert body["links"]["self"] == "/teams/the-a-team"
    assert body["data"]["id"] == "the-a-team"
    assert body["data"]["attributes"] == {"name": "The A Team", "motto": "Plans come together"}
    assert body["data"]["relationships"]["members"]["data"] == [{"type": "users", "id": member["userid"]}]
    team = store.find("teams", "teamid", "the-a-team")
    assert store.team_member_ids(team) == [member["userid"]]

    [event] = events()
    assert event["name"] == "teams_add"
    assert event["data"]["teamid"] == "the-a-team"
    assert event["data"]["members"] == [{"userid": member["userid"], "name": member["name"]}]


def test_create_team_without_motto_has_null_motto(client, store):
    response = client.post("/teams", json=team_document("Quiet Ones"), headers=attendee_auth(store.attendee()))

    assert response.status_code == 201
    assert response.json()["data"]["attributes"]["motto"] is None


def test_create_team_with_taken_member_is_400(client, store):
    member = store.user()
    store.team(members=[member])

    response = client.post(
        "/teams",
        json=team_document("Poachers", members=[member]),
        headers=attendee_auth(store.attendee()),
    )

    assert response.status_code == 400
    assert store.find("teams", "teamid", "poachers") is None


def test_create_team_with_unknown_member_is_400(client, store):
    response = client.post(
        "/teams",
        json={
            "data": {
                "type": "teams",
                "attributes": {"name": "Ghosts"},
                "relationships": {"members": {"data": [{"type": "users", "id": "UGHOST000"}]}},
            }
        },
        headers=attendee_auth(store.attendee()),
    )

    assert response.status_code == 400
    assert store.find("teams", "teamid", "ghosts") is None


def test_create_team_with_entries(client, store):
    hack = store.hack()

    response = client.post(
        "/teams",
        json=team_document("Builders", entries=[hack]),
        headers=attendee_auth(store.attendee()),
    )

    assert response.status_code == 201
    assert store.team_entry_ids(store.find("teams", "teamid", "builders")) == [hack["hackid"]]


def test_create_team_with_client_id_is_400(client, store):
    response = client.post(
        "/teams",
        json=team_document("Chosen", id="chosen"),
        headers=attendee_auth(store.attendee()),
    )

    assert response.status_code == 400


def test_create_existing_team_is_409(client, store):
    store.team(name="Taken")

    response = client.post("/teams", json=team_document("Taken"), headers=attendee_auth(store.attendee()))

    assert response.status_code == 409


def test_update_motto(client, store, events):
    team = store.team(motto="Old motto")

    response = client.patch(
        f"/teams/{team['teamid']}",
        json={"data": {"type": "teams", "id": team["teamid"], "attributes": {"motto": "New motto"}}},
        headers=attendee_auth(store.attendee()),
    )

    assert response.status_code == 204
    assert store.find("teams", "teamid", team["teamid"])["motto"] == "New motto"
    [event] = events()
    assert event["name"] == "teams_update"
    assert event["data"] == {"teamid": team["teamid"], "name": team["name"], "motto": "New motto"}


def test_update_name_is_ignored(client, store, events):
    team = store.team(name="Fixed Name", motto="Same")

    response = client.patch(
        "/teams/fixed-name",
        json={"data": {"type": "teams", "id": "fixed-name", "attributes": {"name": "Other Name"}}},
        headers=attendee_auth(store.attendee()),
    )

    assert response.status_code == 204
    stored = store.find("teams", "teamid", "fixed-name")
    assert (stored["name"], stored["motto"]) == ("Fixed Name", "Same")
    assert events() == []


def test_patch_with_only_id_is_noop(client, store, events):
    team = store.team(motto="Keep me")

    response = client.patch(
        f"/teams/{team['teamid']}",
        json={"data": {"type": "teams", "id": team["teamid"]}},
        headers=attendee_auth(store.attendee()),
    )

    assert response.status_code == 204
    assert store.find("teams", "teamid", team["teamid"])["motto"] == "Keep me"
    assert events() == []


def test_patch_with_wrong_type_is_400(client, store):
    team = store.team()

    response = client.patch(
        f"/teams/{team['teamid']}",
        json={"data": {"type": "users", "id": team["teamid"]}},
        headers=attendee_auth(store.attendee()),
    )

    assert response.status_code == 400


def test_delete_team_frees_members(client, store, events):
    member = store.user()
    team = store.team(members=[member])

    response = client.delete(f"/teams/{team['teamid']}", headers=admin_auth())

    assert response.status_code == 204
    assert store.find("teams", "teamid", team["teamid"]) is None
    body = client.get(f"/users/{member['userid']}").json()
    assert body["data"]["relationships"]["team"]["data"] is None
    assert [e["name"] for e in events()] == ["teams_delete"]

    other = store.team()
    response = client.post(
        f"/teams/{other['teamid']}/members",
        json={"data": [{"type": "users", "id": member["userid"]}]},
        headers=attendee_auth(store.attendee()),
    )
    assert response.status_code == 204


def test_get_team_members_relationship(client, store):
    first, second = store.user(), store.user()
    team = store.team(members=[first, second])

    response = client.get(f"/teams/{team['teamid']}/members")

    assert response.status_code == 200
    body = response.json()
    assert body["links"] == {"self": f"/teams/{team['teamid']}/members"}
    assert body["data"] == [{"type": "users", "id": first["userid"]}, {"type": "users", "id": second["userid"]}]
    assert [r["id"] for r in body["included"]] == [first["userid"], second["userid"]]


def test_get_team_entries_relationship(client, store):
    hack = store.hack()
    team = store.team(entries=[hack])

    body = client.get(f"/teams/{team['teamid']}/entries").json()

    assert body["data"] == [{"type": "hacks", "id": hack["hackid"]}]
    assert body["included"][0]["attributes"] == {"name": hack["name"]}
