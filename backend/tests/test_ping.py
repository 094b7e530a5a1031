from flask.testing import FlaskClient


def test_ping_returns_pong(client: FlaskClient):
    response = client.get("/api/ping")

    assert response.status_code == 200
    assert response.json == {"message": "pong", "service": "savings-calculator-test"}


def test_ping_echoes_request_id(client: FlaskClient):
    response = client.get("/api/ping", headers={"X-Request-ID": "abc123"})

    assert response.headers["X-Request-ID"] == "abc123"
