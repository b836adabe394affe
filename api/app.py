"""
HTTP fixture server exposing the maze and player endpoints.

Serves ``maze.json`` and ``players.json`` from a fixture directory with
the same wire shape as the live maze server, so the viewer can be run
and demoed without one. The players file is re-read on every request;
edit it while the viewer is running to see players move.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from infra.logger import get_logger
from paths import FIXTURE_DIR
from viewer.core.wire import MazePayload, PlayerPayload

logger = get_logger(__name__)

MAZE_FILE = "maze.json"
PLAYERS_FILE = "players.json"


def _read_fixture(fixture_dir: Path, name: str) -> Any:
    path = fixture_dir / name
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise HTTPException(404, f"Fixture '{name}' not found") from exc
    except json.JSONDecodeError as exc:
        logger.error("Fixture %s is not valid JSON: %s", path, exc)
        raise HTTPException(500, f"Fixture '{name}' is not valid JSON") from exc


def create_app(fixture_dir: Optional[Path] = None) -> FastAPI:
    """
    Build the fixture API.

    Args:
        fixture_dir: Directory holding maze.json and players.json
            (default: $VIEWER_FIXTURE_DIR or the bundled fixtures/)
    """
    directory = Path(fixture_dir or os.environ.get("VIEWER_FIXTURE_DIR") or FIXTURE_DIR)

    app = FastAPI(title="Reindeer maze fixtures")
    app.state.fixture_dir = directory

    # The viewer may run on another port or origin.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/maze")
    def maze():
        try:
            payload = MazePayload.model_validate(_read_fixture(directory, MAZE_FILE))
        except ValidationError as exc:
            raise HTTPException(500, f"Invalid maze fixture: {exc.error_count()} error(s)") from exc
        return payload.model_dump(by_alias=True)

    @app.get("/players")
    def players() -> List[PlayerPayload]:
        data = _read_fixture(directory, PLAYERS_FILE)
        try:
            return [PlayerPayload.model_validate(entry) for entry in data]
        except (TypeError, ValidationError) as exc:
            raise HTTPException(500, "Invalid players fixture") from exc

    logger.debug("Fixture API serving %s", directory)
    return app


app = create_app()
