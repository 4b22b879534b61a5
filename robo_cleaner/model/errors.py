"""Exception types raised by the cleaning model."""


class InvalidArgumentError(ValueError):
    """Raised for arguments outside their legal range (speed, energy, names)."""


class OutOfRangeError(IndexError):
    """Raised when a coordinate lies outside the grid extent."""

    def __init__(self, x: int, y: int, width: int, height: int):
        super().__init__(
            f"({x}, {y}) is outside the {width}x{height} grid"
        )
        self.x = x
        self.y = y
