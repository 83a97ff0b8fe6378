# -----------------------------
# app.py
# -----------------------------
from __future__ import annotations
from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from pathlib import Path
from typing import Any, Dict, Optional
import json
import logging

from .config import Settings, get_settings
from .display import KEY_BINDINGS, STATUS_GREETING, choice_for_key, render
from .game import InvalidChoiceError, parse_choice
from .logging_config import configure_logging
from .presenter import PhaseEvent, Presenter
from .session import GameSession

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"


class WebSocketPresenter(Presenter):
    """Pushes phase events and sound cues down one browser connection."""

    def __init__(self, ws: WebSocket):
        self.ws = ws

    async def publish(self, event: PhaseEvent) -> None:
        await self.ws.send_json({"type": "phase", **event.to_dict(), "display": render(event)})

    async def send_sound(self, payload: Dict[str, Any]) -> None:
        await self.ws.send_json({"type": "sound", **payload})


async def _reject(ws: WebSocket, reason: str) -> None:
    await ws.send_json({"type": "rejected", "reason": reason})


async def handle_message(session: GameSession, ws: WebSocket, raw: str) -> None:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        await _reject(ws, "invalid_json")
        return
    kind = data.get("type") if isinstance(data, dict) else None

    if kind == "reset":
        await session.request_reset()
        return
    if kind == "key":
        choice = choice_for_key(data.get("key"))
        if choice is None:
            return  # unmapped key
    elif kind == "choice":
        try:
            choice = parse_choice(data.get("choice"))
        except InvalidChoiceError:
            await _reject(ws, "invalid_choice")
            return
    else:
        await _reject(ws, "unknown_type")
        return

    session.submit_choice(choice)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(title=settings.app_name)
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    @app.get("/")
    def root():
        with open(STATIC_DIR / "index.html", "r", encoding="utf-8") as f:
            return HTMLResponse(f.read())

    @app.get("/config")
    def config():
        return {
            "max_rounds": settings.max_rounds,
            "keys": {k: v.value for k, v in KEY_BINDINGS.items()},
            "timings_ms": {
                "thinking": settings.thinking_delay_ms,
                "reveal": settings.reveal_delay_ms,
                "next_round": settings.next_round_delay_ms,
                "match_over": settings.match_over_delay_ms,
            },
        }

    @app.websocket("/ws/play")
    async def ws_play(ws: WebSocket):
        await ws.accept()
        presenter = WebSocketPresenter(ws)
        session = GameSession.from_settings(settings, presenter=presenter, sound_sink=presenter.send_sound)
        await ws.send_json({"type": "hello", "state": session.snapshot(), "status": STATUS_GREETING})
        logger.info("player connected")
        try:
            while True:
                await handle_message(session, ws, await ws.receive_text())
        except WebSocketDisconnect:
            logger.info("player disconnected")
        finally:
            await session.close()

    return app

