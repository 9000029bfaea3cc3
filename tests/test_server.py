import pytest
from fastapi.testclient import TestClient

from pyprovider.boot import AppRunner
from pyprovider.toggle import Usage
from pyprovider.web.server import create_fastapi_app


@pytest.fixture
def client(calls):
    runner = AppRunner(Usage, props={"on_toggle": calls.append}, fps=50)
    with TestClient(create_fastapi_app(runner)) as test_client:
        yield test_client


def test_index_serves_the_rendered_tree(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "The button is off" in response.text
    assert "new WebSocket" in response.text


def test_click_endpoint_toggles(client, calls):
    (target,) = client.get("/targets").json()["targets"]
    response = client.post(f"/events/{target}/click")
    assert response.status_code == 200
    assert "The button is on" in response.json()["html"]
    assert "The button is on" in client.get("/html").text
    assert calls == [True]


def test_click_unknown_target_is_404(client):
    response = client.post("/events/4.4.4/click")
    assert response.status_code == 404


def test_websocket_pushes_html_after_click(client, calls):
    (target,) = client.get("/targets").json()["targets"]
    with client.websocket_connect("/ws") as ws:
        first = ws.receive_json()
        assert first["type"] == "html"
        assert "The button is off" in first["html"]

        ws.send_json({"t": "click", "id": target})
        pushed = ws.receive_json()
        assert pushed["type"] == "html"
        assert "The button is on" in pushed["html"]
    assert calls == [True]


def test_websocket_reports_bad_messages(client):
    with client.websocket_connect("/ws") as ws:
        ws.receive_json()
        ws.send_json({"t": "click", "id": "9.9"})
        assert ws.receive_json()["type"] == "error"
        ws.send_json({"t": "dance"})
        assert ws.receive_json()["type"] == "error"
        ws.send_text("not json")
        assert ws.receive_json() == {"type": "error", "error": "invalid json"}
        for payload in ("[1, 2]", '"click"', "7"):
            ws.send_text(payload)
            assert ws.receive_json() == {"type": "error", "error": "expected a json object"}
        # the socket is still usable afterwards
        ws.send_json({"t": "dance"})
        assert ws.receive_json()["type"] == "error"
