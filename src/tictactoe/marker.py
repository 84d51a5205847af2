"""The two players' tokens"""

from enum import StrEnum


class Marker(StrEnum):
    """X always moves first."""

    X = "X"
    O = "O"  # noqa: E741

    @property
    def opponent(self) -> "Marker":
        return Marker.O if self == Marker.X else Marker.X
