def test_register_returns_profile(client):
    resp = client.post(
        "/agents/register",
        json={"agentId": "a1", "name": "Ann", "endpoint": "http://localhost:9000"},
    )

    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "Agent registered successfully"
    agent = body["agent"]
    assert agent["agentId"] == "a1"
    assert agent["name"] == "Ann"
    assert agent["skillsUrl"] == "none"
    assert agent["endpoint"] == "http://localhost:9000"
    assert agent["groups"] == ["public"]
    assert agent["registeredAt"].endswith("Z")


def test_register_missing_fields_is_400(client):
    resp = client.post("/agents/register", json={"agentId": "a1"})
    assert resp.status_code == 400
    assert "name" in resp.json()["detail"]


def test_reregister_updates_profile(client):
    first = client.post("/agents/register", json={"agentId": "a1", "name": "Ann"}).json()
    second = client.post("/agents/register", json={"agentId": "a1", "name": "Annie"}).json()

    assert second["agent"]["name"] == "Annie"
    assert second["agent"]["registeredAt"] == first["agent"]["registeredAt"]
    assert len(client.get("/agents").json()["agents"]) == 1


def test_list_agents_attaches_skills(registered):
    agents = registered.get("/agents").json()["agents"]

    assert [a["agentId"] for a in agents] == ["a1", "a2"]
    assert agents[0]["skills"] == ["Review", "Rust"]
    assert agents[1]["skills"] == []


def test_list_agents_tolerates_broken_skills(client):
    client.post(
        "/agents/register",
        json={"agentId": "a3", "name": "Cy", "skillsUrl": "https://gone.dev/skills.md"},
    )
    agents = client.get("/agents").json()["agents"]
    assert agents[0]["skills"] == []


def test_get_agent(registered):
    resp = registered.get("/agents/a2")
    assert resp.status_code == 200
    assert resp.json()["agent"]["name"] == "Bo"


def test_get_unknown_agent_is_404(client):
    resp = client.get("/agents/ghost")
    assert resp.status_code == 404
    assert "ghost" in resp.json()["detail"]


def test_agent_skills_document(registered):
    body = registered.get("/agents/a1/skills").json()
    assert body["agentId"] == "a1"
    assert body["skillsUrl"] == "https://ann.dev/skills.md"
    assert body["raw"].startswith("# Ann")
    assert body["skills"] == ["Review", "Rust"]


def test_agent_without_skills_url(registered):
    body = registered.get("/agents/a2/skills").json()
    assert body == {"agentId": "a2", "skillsUrl": "none", "raw": "", "skills": []}


def test_agent_skills_fetch_failure_is_502(client):
    client.post(
        "/agents/register",
        json={"agentId": "a3", "name": "Cy", "skillsUrl": "https://gone.dev/skills.md"},
    )
    resp = client.get("/agents/a3/skills")
    assert resp.status_code == 502


def test_unknown_agent_skills_is_404(client):
    assert client.get("/agents/ghost/skills").status_code == 404
