import pytest

from strongpass.api import app


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


def test_home(client):
    r = client.get("/")
    assert r.status_code == 200
    assert "running" in r.get_json()["message"]


def test_evaluate_default_config(client):
    r = client.post("/evaluate", json={"password": "Tr0ub4dor&3"})
    assert r.status_code == 200
    body = r.get_json()
    assert body["strong"] is True
    assert body["passedTests"] == [0, 1, 2, 3, 4, 5, 6]
    assert "password" not in body


def test_evaluate_with_config_override(client):
    r = client.post("/evaluate", json={"password": "Abcdefgh1234", "config": {"minOptionalTestsToPass": 3}})
    assert r.status_code == 200
    assert r.get_json()["strong"] is True


def test_evaluate_rejects_bad_input(client):
    assert client.post("/evaluate", json={}).status_code == 400
    assert client.post("/evaluate", json={"password": 123}).status_code == 400
    r = client.post("/evaluate", json={"password": "x", "config": {"maxLength": 0}})
    assert r.status_code == 400
    assert "max_length" in r.get_json()["error"]
