import pytest
from fastapi.testclient import TestClient

from todo_api.config import Settings
from todo_api.main import create_app


@pytest.fixture
def todo_file(tmp_path):
    """Path of a todo file that does not exist yet."""
    return str(tmp_path / "todo.json")


@pytest.fixture
def client(todo_file):
    return TestClient(create_app(Settings(todo_file=todo_file)))


@pytest.fixture
def seeded_client(client):
    """Client whose todo list already holds "task 1" to "task 3"."""
    for i in range(1, 4):
        response = client.post("/todo", json={"task": f"task {i}"})
        assert response.status_code == 201
    return client
