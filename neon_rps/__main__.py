from __future__ import annotations

import argparse

import uvicorn

from .app import create_app
from .config import get_settings


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()

    parser = argparse.ArgumentParser(prog="neon-rps", description="Serve the NEON RPS game")
    parser.add_argument("--host", default=settings.host)
    parser.add_argument("--port", type=int, default=settings.port)
    parser.add_argument("--log-level", default=settings.log_level)
    parser.add_argument("--rounds", type=int, default=settings.max_rounds, help="Rounds per match")
    args = parser.parse_args(argv)

    if args.rounds < 1:
        raise SystemExit("--rounds must be >= 1")

    settings = settings.model_copy(
        update={"host": args.host, "port": args.port, "log_level": args.log_level, "max_rounds": args.rounds}
    )

    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
