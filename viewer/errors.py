"""Exception types raised by the maze viewer."""


class ViewerError(Exception):
    """Base class for all viewer errors."""


class FetchError(ViewerError):
    """A data endpoint was unreachable or returned unusable data."""


class OutOfBoundsError(ViewerError, ValueError):
    """A maze or player coordinate lies outside the grid."""

    def __init__(self, x: int, y: int, width: int, height: int, what: str = "cell"):
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.what = what
        super().__init__(
            f"{what} ({x}, {y}) is outside the {width}x{height} grid"
        )
