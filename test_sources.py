"""Wire decoding, HTTP data source and config tests."""

import io
import json
import threading
import unittest
import urllib.error
from unittest import mock

from infra.http import fetch_json, join_url
from viewer import FetchError, HttpDataSource, Maze, Player, ViewerConfig
from viewer.core import MazePayload, decode_maze, decode_players

MAZE_JSON = {"width": 3, "height": 2, "presentX": 2, "presentY": 0, "walls": [[1, 0]]}


class TestWire(unittest.TestCase):
    def test_decode_maze(self) -> None:
        maze = decode_maze(MAZE_JSON)
        self.assertEqual(maze, Maze(width=3, height=2, present_x=2, present_y=0, walls=[(1, 0)]))
        self.assertEqual(maze.walls, frozenset({(1, 0)}))

    def test_maze_round_trips_wire_names(self) -> None:
        maze = decode_maze(MAZE_JSON)
        self.assertEqual(maze.to_dict(), MAZE_JSON)
        self.assertEqual(MazePayload.from_maze(maze).model_dump(by_alias=True)["presentX"], 2)

    def test_decode_maze_rejects_bad_payloads(self) -> None:
        bad_payloads = [
            {"width": 3, "height": 2},
            {**MAZE_JSON, "width": 0},
            {**MAZE_JSON, "walls": [[1]]},
            {**MAZE_JSON, "presentX": "left"},
            {**MAZE_JSON, "width": "3"},
            {**MAZE_JSON, "presentX": True},
            {**MAZE_JSON, "walls": [[1.0, 0]]},
            [],
            None,
        ]
        for payload in bad_payloads:
            with self.subTest(payload=payload):
                with self.assertRaises(FetchError):
                    decode_maze(payload)

    def test_decode_maze_keeps_out_of_bounds_walls(self) -> None:
        # Bounds are the grid model's job.
        maze = decode_maze({**MAZE_JSON, "walls": [[5, 5]]})
        self.assertEqual(maze.walls, frozenset({(5, 5)}))

    def test_decode_players_preserves_order(self) -> None:
        players = decode_players([
            {"name": "Rudolph", "x": 0, "y": 0},
            {"name": "Comet", "x": 2, "y": 1},
            {"name": "Rudolph", "x": 0, "y": 0},
        ])
        self.assertEqual(
            players,
            (Player("Rudolph", 0, 0), Player("Comet", 2, 1), Player("Rudolph", 0, 0)),
        )

    def test_decode_players_rejects_bad_payloads(self) -> None:
        bad_payloads = [
            {"name": "A"},
            [{"name": "A", "x": 1}],
            "players",
            [{"name": "A", "x": True, "y": 0}],
            [{"name": "A", "x": 1, "y": "1"}],
            [{"name": "B", "x": 1.0, "y": 0}],
            [{"name": 7, "x": 1, "y": 0}],
        ]
        for payload in bad_payloads:
            with self.subTest(payload=payload):
                with self.assertRaises(FetchError):
                    decode_players(payload)

    def test_decode_empty_players(self) -> None:
        self.assertEqual(decode_players([]), ())


class TestHttpHelper(unittest.TestCase):
    def test_join_url(self) -> None:
        self.assertEqual(join_url("http://host:3001/", "/maze"), "http://host:3001/maze")
        self.assertEqual(join_url("http://host:3001", "players"), "http://host:3001/players")

    def test_fetch_json_decodes_body(self) -> None:
        body = io.BytesIO(json.dumps(MAZE_JSON).encode("utf-8"))
        with mock.patch("urllib.request.urlopen", return_value=body) as urlopen:
            self.assertEqual(fetch_json("http://host/maze", timeout=1.5), MAZE_JSON)
        self.assertEqual(urlopen.call_args.kwargs["timeout"], 1.5)

    def test_fetch_json_wraps_errors(self) -> None:
        with mock.patch("urllib.request.urlopen", side_effect=urllib.error.URLError("refused")):
            with self.assertRaises(RuntimeError):
                fetch_json("http://host/maze")

        with mock.patch("urllib.request.urlopen", return_value=io.BytesIO(b"<html>")):
            with self.assertRaises(RuntimeError):
                fetch_json("http://host/maze")


class TestHttpDataSource(unittest.IsolatedAsyncioTestCase):
    async def test_fetches_from_endpoints(self) -> None:
        responses = {
            "http://maze.local/maze": MAZE_JSON,
            "http://maze.local/players": [{"name": "Rudolph", "x": 0, "y": 0}],
        }
        calls = []

        def fake_fetch(url: str, timeout: float):
            calls.append((url, timeout))
            return responses[url]

        source = HttpDataSource("http://maze.local/", timeout=0.5, fetcher=fake_fetch)

        maze = await source.fetch_maze()
        players = await source.fetch_players()

        self.assertTrue(maze.ok)
        self.assertEqual(maze.value.present, (2, 0))
        self.assertTrue(players.ok)
        self.assertEqual(players.value, (Player("Rudolph", 0, 0),))
        self.assertEqual(calls, [("http://maze.local/maze", 0.5), ("http://maze.local/players", 0.5)])

    async def test_transport_error_becomes_failed_result(self) -> None:
        def failing_fetch(url: str, timeout: float):
            raise RuntimeError(f"Failed to fetch {url}: refused")

        source = HttpDataSource("http://maze.local", fetcher=failing_fetch)
        result = await source.fetch_players()

        self.assertFalse(result.ok)
        self.assertIsInstance(result.error, FetchError)
        self.assertIn("refused", str(result.error))

    async def test_slow_response_times_out_as_failed_result(self) -> None:
        release = threading.Event()

        def trickling_fetch(url: str, timeout: float):
            # Each read stays under the socket timeout but the body never finishes in time.
            release.wait(timeout=5.0)
            return []

        source = HttpDataSource("http://maze.local", timeout=0.05, fetcher=trickling_fetch)
        try:
            result = await source.fetch_players()
        finally:
            release.set()

        self.assertFalse(result.ok)
        self.assertIsInstance(result.error, FetchError)
        self.assertIn("timed out", str(result.error))

    async def test_invalid_payload_becomes_failed_result(self) -> None:
        source = HttpDataSource("http://maze.local", fetcher=lambda url, timeout: {"oops": 1})
        self.assertFalse((await source.fetch_maze()).ok)
        self.assertFalse((await source.fetch_players()).ok)


class TestViewerConfig(unittest.TestCase):
    def test_defaults(self) -> None:
        config = ViewerConfig()
        self.assertEqual(config.poll_interval, 0.2)
        self.assertEqual(config.base_url, "http://localhost:3001")

    def test_from_env(self) -> None:
        config = ViewerConfig.from_env(
            environ={
                "VIEWER_BASE_URL": "http://maze.example:8080",
                "VIEWER_POLL_INTERVAL": "0.5",
                "VIEWER_PORT": "5055",
                "VIEWER_SURFACE": "text",
                "VIEWER_OPEN_BROWSER": "false",
                "VIEWER_BACKOFF_MAX": "",
            },
            load_env_file=False,
        )
        self.assertEqual(config.base_url, "http://maze.example:8080")
        self.assertEqual(config.poll_interval, 0.5)
        self.assertEqual(config.port, 5055)
        self.assertEqual(config.surface, "text")
        self.assertFalse(config.open_browser)
        self.assertEqual(config.backoff_max, 5.0)

    def test_overrides_skip_none(self) -> None:
        config = ViewerConfig().with_overrides(port=6000, surface=None)
        self.assertEqual(config.port, 6000)
        self.assertEqual(config.surface, "web")

    def test_invalid_values(self) -> None:
        with self.assertRaises(ValueError):
            ViewerConfig(poll_interval=0)
        with self.assertRaises(ValueError):
            ViewerConfig(surface="canvas")
        with self.assertRaises(ValueError):
            ViewerConfig(poll_interval=1.0, backoff_max=0.5)


if __name__ == "__main__":
    unittest.main()
