import httpx
import pytest
from fastapi.testclient import TestClient

from friends.api import create_app
from friends.core import Board
from friends.core.backends import MemoryBackend, SqliteBackend
from friends.lib import config, paths

BACKENDS = ["memory", "sqlite"]

SKILLS = {
    "https://ann.dev/skills.md": "# Ann\n## Skill: Review\n## Skill: Rust\n",
}


def make_board(kind: str, tmp_path) -> Board:
    if kind == "memory":
        return Board(MemoryBackend()).init()
    return Board(SqliteBackend(tmp_path / f"{kind}.db")).init()


def skills_handler(request: httpx.Request) -> httpx.Response:
    body = SKILLS.get(str(request.url))
    if body is None:
        return httpx.Response(404)
    return httpx.Response(200, text=body)


@pytest.fixture
def friends_home(monkeypatch, tmp_path):
    """Isolated data directory per test.

    Points paths.dot_friends() at tmp_path so config.yaml and the SQLite
    file never touch the real ~/.friends, and resets the config cache.
    """
    home = tmp_path / ".friends"
    home.mkdir()
    monkeypatch.setattr(paths, "dot_friends", lambda: home)
    config.clear_cache()

    yield home

    config.clear_cache()


@pytest.fixture(params=BACKENDS)
def board(request, tmp_path):
    """A freshly seeded board; every test using it runs once per backend."""
    b = make_board(request.param, tmp_path)
    yield b
    b.close()


@pytest.fixture
def board_factory(tmp_path):
    """Build one seeded board per backend kind, closing them afterwards."""
    opened = []

    def _make(kind: str) -> Board:
        b = make_board(kind, tmp_path)
        opened.append(b)
        return b

    yield _make
    for b in opened:
        b.close()


@pytest.fixture
def ann_and_bo(board):
    """Registers a1/Ann and a2/Bo."""
    board.register_agent("a1", "Ann")
    board.register_agent("a2", "Bo")
    return board


@pytest.fixture
def client(board):
    """TestClient over `board`, with skills.md served from SKILLS."""
    http = httpx.AsyncClient(transport=httpx.MockTransport(skills_handler))
    app = create_app(board=board, http_client=http, skills_timeout=1.0)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def registered(client):
    client.post(
        "/agents/register",
        json={"agentId": "a1", "name": "Ann", "skillsUrl": "https://ann.dev/skills.md"},
    )
    client.post("/agents/register", json={"agentId": "a2", "name": "Bo"})
    return client
