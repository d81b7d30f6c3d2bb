import json
import logging

import pytest
from fastapi.testclient import TestClient

import app.actions as actions
import app.config as cfg
from app.logging import JsonLogRecorder
from app.models import ChatOutput, QAOutput
from api.server import app


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["ok"] is True


def test_contact_form_success(client):
    r = client.post(
        "/api/contact",
        data={"name": "Al", "email": "a@b.com", "message": "Hello there!"},
    )
    assert r.status_code == 200
    assert r.json() == {"message": cfg.CONTACT_THANK_YOU, "success": True}


def test_contact_form_validation_errors_are_data(client):
    r = client.post("/api/contact", data={"name": "A", "email": "bad", "message": "short"})
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is False
    assert set(body["errors"]) == {"name", "email", "message"}


def test_ask_returns_flow_answer(client, monkeypatch):
    async def fake_qa(payload):
        return QAOutput(answer=f"echo: {payload.question}")

    monkeypatch.setattr(actions, "linux_cybersecurity_networking_qa", fake_qa)
    r = client.post("/api/ask", json={"question": "What is nmap?"})
    assert r.status_code == 200
    assert r.json() == {"answer": "echo: What is nmap?"}


def test_ask_failure_returns_generic_error(client, monkeypatch):
    async def failing(payload):
        raise RuntimeError("internal detail")

    monkeypatch.setattr(actions, "linux_cybersecurity_networking_qa", failing)
    r = client.post("/api/ask", json={"question": "What is nmap?"})
    assert r.status_code == 200
    assert r.json() == {"error": cfg.ASK_AI_ERROR}


def test_chat_forwards_camelcase_body(client, monkeypatch):
    seen = []

    async def fake_chat(payload):
        seen.append(payload)
        return ChatOutput(response="ok")

    monkeypatch.setattr(actions, "conversational_chat", fake_chat)
    r = client.post(
        "/api/chat",
        json={
            "currentMessage": "and then?",
            "history": [
                {"id": "1", "sender": "user", "text": "hi"},
                {"id": "2", "sender": "ai", "text": "hello"},
            ],
        },
    )
    assert r.status_code == 200
    assert r.json() == {"response": "ok"}
    assert [m.role for m in seen[0].history] == ["user", "model"]


def test_chat_failure_returns_generic_error(client, monkeypatch):
    async def failing(payload):
        raise RuntimeError("stack goes to logs only")

    monkeypatch.setattr(actions, "conversational_chat", failing)
    r = client.post("/api/chat", json={"currentMessage": "hi", "history": []})
    assert r.json() == {"error": cfg.CHAT_ERROR}


def test_bad_chat_body_returns_error_envelope(client):
    r = client.post("/api/chat", json={"history": [{"id": "1", "sender": "robot", "text": "x"}]})
    assert r.status_code == 422
    body = r.json()
    assert body["code"] == "invalid_request"
    assert body["details"]["errors"]


def test_json_log_recorder_levels(caplog):
    caplog.set_level(logging.INFO, logger="app.events")
    rec = JsonLogRecorder()
    rec.record({"event": "a"})
    rec.record({"event": "b", "level": "error"})
    records = [r for r in caplog.records if r.name == "app.events"]
    assert [r.levelno for r in records] == [logging.INFO, logging.ERROR]
    assert json.loads(records[-1].getMessage())["event"] == "b"


def test_unknown_path_returns_error_envelope(client):
    r = client.get("/nope")
    assert r.status_code == 404
    body = r.json()
    assert body["code"] == "404"
    assert body["message"] == "Not Found"
    assert "detail" not in body


def test_wrong_method_returns_error_envelope(client):
    r = client.get("/api/ask")
    assert r.status_code == 405
    assert r.json()["code"] == "405"
