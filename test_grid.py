"""
Grid model tests: layout order, permanent tags and bounds checking.

Run with ``python -m unittest test_grid.py``.
"""

import unittest

from viewer import GridModel, Maze, OutOfBoundsError, Tag
from viewer.rendering import HeadlessSurface


def make_scenario_a() -> Maze:
    """3x2 maze with the present at (2, 0) and one wall at (1, 0)."""
    return Maze(width=3, height=2, present_x=2, present_y=0, walls=[(1, 0)])


class TestGridBuild(unittest.TestCase):
    def setUp(self) -> None:
        self.surface = HeadlessSurface()
        self.grid = GridModel.build(make_scenario_a(), self.surface)

    def test_permanent_tags(self) -> None:
        self.assertEqual(self.grid.tags_at(2, 0), {Tag.PRESENT})
        self.assertEqual(self.grid.tags_at(1, 0), {Tag.WALL})

        untagged = [
            (x, y)
            for y in range(2)
            for x in range(3)
            if not self.grid.tags_at(x, y)
        ]
        self.assertEqual(len(untagged), 4)

        # The surface sees the same tags as the model.
        self.assertEqual(self.surface.tagged(Tag.PRESENT), {(2, 0)})
        self.assertEqual(self.surface.tagged(Tag.WALL), {(1, 0)})

    def test_rows_created_top_down_left_to_right(self) -> None:
        self.assertEqual(
            self.surface.creation_order,
            [(0, 1), (1, 1), (2, 1), (0, 0), (1, 0), (2, 0)],
        )
        self.assertEqual((self.surface.width, self.surface.height), (3, 2))

    def test_handles_indexed_y_then_x(self) -> None:
        self.assertEqual(len(self.grid.cells), 2)
        self.assertEqual(len(self.grid.cells[0]), 3)
        handle = self.grid.cells[1][2]
        self.assertEqual((handle.x, handle.y), (2, 1))
        self.assertIs(self.grid.handle_at(2, 1), handle)

    def test_mark_and_unmark_player(self) -> None:
        self.grid.mark_player(0, 1)
        self.assertIn(Tag.PLAYER, self.grid.tags_at(0, 1))
        self.assertEqual(self.grid.cells_with(Tag.PLAYER), {(0, 1)})

        self.grid.unmark_player(0, 1)
        self.assertEqual(self.grid.tags_at(0, 1), frozenset())
        self.assertEqual(self.surface.tagged(Tag.PLAYER), set())

    def test_player_tag_keeps_permanent_tags(self) -> None:
        self.grid.mark_player(2, 0)
        self.grid.unmark_player(2, 0)
        self.assertEqual(self.grid.tags_at(2, 0), {Tag.PRESENT})

    def test_mark_out_of_bounds(self) -> None:
        for x, y in [(3, 0), (0, 2), (-1, 0), (0, -1)]:
            with self.subTest(pos=(x, y)):
                with self.assertRaises(OutOfBoundsError):
                    self.grid.mark_player(x, y)
        self.assertEqual(self.grid.cells_with(Tag.PLAYER), set())


class TestGridBounds(unittest.TestCase):
    def test_present_outside_grid(self) -> None:
        for px, py in [(3, 0), (0, 2), (-1, 1)]:
            with self.subTest(present=(px, py)):
                surface = HeadlessSurface()
                maze = Maze(width=3, height=2, present_x=px, present_y=py)
                with self.assertRaises(OutOfBoundsError) as ctx:
                    GridModel.build(maze, surface)
                self.assertEqual(ctx.exception.what, "present")

    def test_wall_outside_grid(self) -> None:
        surface = HeadlessSurface()
        maze = Maze(width=3, height=2, present_x=0, present_y=0, walls=[(1, 1), (3, 1)])
        with self.assertRaises(OutOfBoundsError) as ctx:
            GridModel.build(maze, surface)
        self.assertEqual((ctx.exception.x, ctx.exception.y), (3, 1))

    def test_rejected_maze_leaves_surface_untouched(self) -> None:
        surface = HeadlessSurface()
        maze = Maze(width=3, height=2, present_x=0, present_y=0, walls=[(0, 5)])
        with self.assertRaises(OutOfBoundsError):
            GridModel.build(maze, surface)
        self.assertEqual(surface.cells, {})
        self.assertEqual(surface.creation_order, [])

    def test_out_of_bounds_is_a_value_error(self) -> None:
        maze = Maze(width=1, height=1, present_x=1, present_y=0)
        with self.assertRaises(ValueError):
            GridModel.build(maze, HeadlessSurface())

    def test_non_positive_dimensions_rejected(self) -> None:
        with self.assertRaises(ValueError):
            Maze(width=0, height=2, present_x=0, present_y=0)


if __name__ == "__main__":
    unittest.main()
