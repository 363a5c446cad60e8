def test_list_groups_has_defaults(client):
    groups = client.get("/groups").json()["groups"]

    assert len(groups) == 10
    assert groups[0]["groupId"] == "public"
    assert all(g["createdBy"] == "system" for g in groups)
    assert {"memberCount", "messageCount", "icon", "topic", "purpose"} <= set(groups[0])


def test_create_group(registered):
    resp = registered.post(
        "/groups/create",
        json={"groupId": "team", "name": "Team", "agentId": "a2", "icon": "🚀"},
    )

    assert resp.status_code == 201
    assert resp.json() == {
        "message": "Group created successfully",
        "group": {
            "groupId": "team",
            "name": "Team",
            "description": "",
            "icon": "🚀",
            "createdBy": "a2",
            "memberCount": 1,
        },
    }


def test_create_duplicate_group_is_400(registered):
    resp = registered.post(
        "/groups/create", json={"groupId": "tech", "name": "Tech", "agentId": "a1"}
    )
    assert resp.status_code == 400
    assert "already exists" in resp.json()["detail"]


def test_create_group_unknown_creator_is_404(client):
    resp = client.post("/groups/create", json={"groupId": "team", "name": "Team", "agentId": "x"})
    assert resp.status_code == 404


def test_create_group_missing_fields_is_400(registered):
    resp = registered.post("/groups/create", json={"groupId": "team", "agentId": "a1"})
    assert resp.status_code == 400


def test_get_group(client):
    body = client.get("/groups/tech").json()
    assert body["groupId"] == "tech"
    assert body["memberCount"] == 0


def test_get_unknown_group_is_404(client):
    assert client.get("/groups/nope").status_code == 404


def test_join_group(registered):
    resp = registered.post("/groups/tech/join", json={"agentId": "a1"})
    again = registered.post("/groups/tech/join", json={"agentId": "a1"})

    assert resp.status_code == 200
    assert resp.json()["memberCount"] == 1
    assert again.json()["memberCount"] == 1
    assert resp.json()["message"].startswith("Joined group")


def test_join_errors(registered):
    assert registered.post("/groups/nope/join", json={"agentId": "a1"}).status_code == 404
    assert registered.post("/groups/tech/join", json={"agentId": "ghost"}).status_code == 404
    assert registered.post("/groups/tech/join", json={}).status_code == 400


def test_members(registered):
    registered.post("/groups/tech/join", json={"agentId": "a2"})
    registered.post("/groups/tech/join", json={"agentId": "a1"})

    body = registered.get("/groups/tech/members").json()
    assert body == {
        "groupId": "tech",
        "memberCount": 2,
        "members": [{"agentId": "a2", "name": "Bo"}, {"agentId": "a1", "name": "Ann"}],
    }
    assert registered.get("/groups/nope/members").status_code == 404


def test_post_and_read_messages(registered):
    first = registered.post("/groups/tech/message", json={"agentId": "a1", "content": "hi"})
    assert first.status_code == 201
    data = first.json()["data"]
    assert data["id"] == 1
    assert data["agentName"] == "Ann"

    registered.post(
        "/groups/tech/message", json={"agentId": "a2", "content": "hello", "replyTo": data["id"]}
    )
    registered.post("/groups/tech/message", json={"agentId": "a1", "content": "again"})

    body = registered.get("/groups/tech/messages", params={"limit": 2}).json()
    assert body["groupId"] == "tech"
    assert body["count"] == 2
    assert body["total"] == 3
    assert [m["id"] for m in body["messages"]] == [2, 3]
    assert body["messages"][0]["replyTo"] == 1

    since = registered.get("/groups/tech/messages", params={"since": 2}).json()
    assert [m["content"] for m in since["messages"]] == ["again"]


def test_post_message_errors(registered):
    assert (
        registered.post("/groups/nope/message", json={"agentId": "a1", "content": "x"}).status_code
        == 404
    )
    assert (
        registered.post("/groups/tech/message", json={"agentId": "x", "content": "x"}).status_code
        == 404
    )
    assert registered.post("/groups/tech/message", json={"agentId": "a1"}).status_code == 400

    ok = registered.post("/groups/tech/message", json={"agentId": "a1", "content": "x"})
    assert ok.json()["data"]["id"] == 1


def test_messages_of_unknown_group_is_404(client):
    assert client.get("/groups/nope/messages").status_code == 404


def test_messages_zero_limit_falls_back_to_default(registered):
    for i in range(3):
        registered.post("/groups/tech/message", json={"agentId": "a1", "content": f"m{i}"})

    body = registered.get("/groups/tech/messages", params={"limit": 0}).json()
    assert body["count"] == 3


def test_messages_huge_paging_values(registered):
    registered.post("/groups/tech/message", json={"agentId": "a1", "content": "hi"})

    resp = registered.get("/groups/tech/messages", params={"limit": 2**63})
    assert resp.status_code == 200
    assert resp.json()["count"] == 1

    resp = registered.get("/groups/tech/messages", params={"since": 2**63})
    assert resp.status_code == 200
    assert resp.json()["messages"] == []


def test_post_huge_reply_to_is_400(registered):
    resp = registered.post(
        "/groups/tech/message", json={"agentId": "a1", "content": "x", "replyTo": 2**63}
    )
    assert resp.status_code == 400


def test_messages_bad_limit(client):
    assert client.get("/groups/tech/messages", params={"limit": -1}).status_code == 400
    assert client.get("/groups/tech/messages", params={"limit": "many"}).status_code == 422
