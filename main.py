"""Local launcher for the maze viewer and the fixture data server."""

import argparse
import asyncio
import os

import uvicorn

from infra.logger import configure_logging, get_logger
from viewer import BootstrapSequencer, HttpDataSource, ViewerConfig
from viewer.rendering import HeadlessSurface, RenderSurface, TextSurface, WebSurface


def build_surface(config: ViewerConfig) -> RenderSurface:
    """Create the render surface named in the config."""
    if config.surface == "web":
        return WebSurface(port=config.port, live=True, auto_open=config.open_browser)
    if config.surface == "text":
        return TextSurface(clear_screen=True)
    return HeadlessSurface()


def run_viewer(config: ViewerConfig) -> None:
    log = get_logger(__name__)
    source = HttpDataSource(
        config.base_url,
        maze_path=config.maze_path,
        players_path=config.players_path,
        timeout=config.request_timeout,
    )
    surface = build_surface(config)
    log.info("Viewing %s on the %s surface", config.base_url, config.surface)

    boot = BootstrapSequencer(source, source, surface, config)
    try:
        loop = asyncio.run(boot.run())
    except KeyboardInterrupt:
        log.info("Viewer stopped")
        return

    if loop is None and config.surface == "web":
        # Keep the page up so the error message stays visible.
        log.info("Maze unavailable; leaving the error page up (Ctrl+C to exit)")
        try:
            asyncio.run(asyncio.Event().wait())
        except KeyboardInterrupt:
            pass


def run_fixture_server(host: str, port: int, reload: bool, fixture_dir=None) -> None:
    log = get_logger(__name__)
    if fixture_dir:
        # Read by api.app when uvicorn imports it (possibly in a reload worker).
        os.environ["VIEWER_FIXTURE_DIR"] = str(fixture_dir)
    log.info("Serving fixture maze data at http://%s:%d", host, port)
    uvicorn.run(
        "api.app:app",
        host=host,
        port=port,
        reload=reload,
        log_level="info",
    )


def main():
    parser = argparse.ArgumentParser(description="Live viewer for the reindeer maze.")
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON lines")
    sub = parser.add_subparsers(dest="command", required=True)

    view = sub.add_parser("view", help="Render the maze and follow the players")
    view.add_argument("--base-url", default=None, help="Maze server root URL")
    view.add_argument("--surface", choices=["web", "text", "headless"], default=None)
    view.add_argument("--port", type=int, default=None, help="Port for the browser view")
    view.add_argument("--interval", type=float, default=None, help="Seconds between polls")
    view.add_argument("--no-browser", action="store_true", help="Do not auto-open the browser view")

    serve = sub.add_parser("serve-fixture", help="Serve fixtures/maze.json and fixtures/players.json")
    serve.add_argument("--host", default="127.0.0.1", help="Host to bind (default: 127.0.0.1)")
    serve.add_argument("--port", type=int, default=3001, help="Port to bind (default: 3001)")
    serve.add_argument("--reload", action="store_true", help="Enable auto-reload for development")
    serve.add_argument("--fixture-dir", default=None, help="Directory with maze.json and players.json")

    args = parser.parse_args()

    # Configure logging once at startup (console + file).
    configure_logging(level=args.log_level, json=args.json_logs)

    if args.command == "serve-fixture":
        run_fixture_server(args.host, args.port, args.reload, args.fixture_dir)
        return

    config = ViewerConfig.from_env().with_overrides(
        base_url=args.base_url,
        surface=args.surface,
        port=args.port,
        poll_interval=args.interval,
        open_browser=False if args.no_browser else None,
    )
    run_viewer(config)


if __name__ == "__main__":
    main()
