from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from neon_rps.app import create_app
from neon_rps.config import Settings


@pytest.fixture
def client() -> TestClient:
    settings = Settings(
        max_rounds=2,
        thinking_delay_ms=0,
        reveal_delay_ms=0,
        next_round_delay_ms=0,
        match_over_delay_ms=0,
    )
    return TestClient(create_app(settings))


def receive_until(ws, phase: str, limit: int = 50) -> list:
    seen = []
    for _ in range(limit):
        msg = ws.receive_json()
        seen.append(msg)
        if msg.get("type") == "phase" and msg["phase"] == phase:
            return seen
    raise AssertionError(f"never saw phase {phase!r}: {seen}")


def phases(messages) -> list:
    return [m["phase"] for m in messages if m.get("type") == "phase"]


def test_index_page(client) -> None:
    resp = client.get("/")
    assert resp.status_code == 200
    assert "NEON RPS" in resp.text


def test_config(client) -> None:
    body = client.get("/config").json()
    assert body["max_rounds"] == 2
    assert body["keys"]["r"] == "rock"
    assert body["keys"]["3"] == "scissors"
    assert body["timings_ms"]["thinking"] == 0


def test_play_round_over_websocket(client) -> None:
    with client.websocket_connect("/ws/play") as ws:
        hello = ws.receive_json()
        assert hello["type"] == "hello"
        assert hello["state"]["current_round"] == 1
        assert hello["status"].startswith("Neural interface online")

        ws.send_json({"type": "key", "key": "R"})
        seen = receive_until(ws, "round_complete")

    assert phases(seen) == ["committed", "thinking", "resolved", "revealed", "round_complete"]
    committed = next(m for m in seen if m.get("phase") == "committed")
    assert committed["player_choice"] == "rock"
    assert committed["display"]["player_face"] == "🗿"
    revealed = next(m for m in seen if m.get("phase") == "revealed")
    assert revealed["display"]["banner"]["main"] in ("SYSTEM BREACH", "FIREWALL ACTIVE", "NEURAL SYNC")
    assert [m["cue"] for m in seen if m.get("type") == "sound"][0] == "select"


def test_match_over_then_reset(client) -> None:
    with client.websocket_connect("/ws/play") as ws:
        ws.receive_json()
        ws.send_json({"type": "choice", "choice": "paper"})
        receive_until(ws, "round_complete")
        ws.send_json({"type": "choice", "choice": "scissors"})
        seen = receive_until(ws, "match_over")
        over = seen[-1]
        assert over["match_winner"] in ("player", "computer", "draw")
        assert over["summary"]["rounds"] == 2
        assert "title" in over["display"]["modal"]

        # dropped: the match is over
        ws.send_json({"type": "choice", "choice": "rock"})
        ws.send_json({"type": "reset"})
        seen = receive_until(ws, "reset")

    assert "committed" not in phases(seen)
    reset = seen[-1]
    assert reset["scores"] == {"player": 0, "computer": 0}
    assert reset["round"] == 1


def test_malformed_messages_are_rejected(client) -> None:
    with client.websocket_connect("/ws/play") as ws:
        ws.receive_json()
        ws.send_text("not json")
        assert ws.receive_json() == {"type": "rejected", "reason": "invalid_json"}
        ws.send_json({"type": "choice", "choice": "lizard"})
        assert ws.receive_json() == {"type": "rejected", "reason": "invalid_choice"}
        ws.send_json({"type": "dance"})
        assert ws.receive_json() == {"type": "rejected", "reason": "unknown_type"}
        # unmapped keys are ignored, the connection keeps working
        ws.send_json({"type": "key", "key": "q"})
        ws.send_json({"type": "key", "key": "2"})
        seen = receive_until(ws, "committed")
        assert seen[-1]["player_choice"] == "paper"


def test_status_text_travels_in_hello_and_phase_display(client) -> None:
    with client.websocket_connect("/ws/play") as ws:
        hello = ws.receive_json()
        assert set(hello) == {"type", "state", "status"}
        ws.send_json({"type": "choice", "choice": "rock"})
        seen = receive_until(ws, "round_complete")

    assert {m["type"] for m in seen} <= {"phase", "sound"}
    by_phase = {m["phase"]: m for m in seen if m["type"] == "phase"}
    assert by_phase["thinking"]["display"]["status"] == "CPU analyzing optimal strategy..."
    assert by_phase["round_complete"]["display"]["status"] == "Select your next protocol..."
    assert all("status" in m["display"] for m in by_phase.values())


def test_page_keeps_buttons_off_after_match_over(client) -> None:
    page = client.get("/").text
    assert 'msg.phase === "error" && !$("gameOverModal").classList.contains("active")' in page
    assert '["round_complete", "reset", "error"]' not in page
