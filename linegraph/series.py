from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, Protocol, TypeVar


RGBA = tuple[int, int, int, int]

LIGHT_BLUE: RGBA = (136, 196, 255, 255)
ORANGE: RGBA = (255, 159, 67, 255)


class FloatConvertible(Protocol):
    def __float__(self) -> float: ...


X = TypeVar("X", bound=FloatConvertible)
Y = TypeVar("Y", bound=FloatConvertible)


@dataclass(frozen=True)
class Pair(Generic[X, Y]):
    x: X
    y: Y


Point = Pair[float, float]


def point(x: float, y: float) -> Point:
    return Pair(float(x), float(y))


@dataclass(frozen=True)
class Size:
    width: float
    height: float


@dataclass(frozen=True)
class Series(Generic[X, Y]):
    values: tuple[Pair[X, Y], ...]
    label: str = "Plot"
    color: RGBA = LIGHT_BLUE

    def __post_init__(self) -> None:
        # Accept any iterable of pairs but store an immutable snapshot.
        object.__setattr__(self, "values", tuple(self.values))

    def __len__(self) -> int:
        return len(self.values)


class AxisLocation(Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"


@dataclass
class Axis(Generic[X, Y]):
    location: AxisLocation = AxisLocation.PRIMARY
    series: list[Series[X, Y]] = field(default_factory=list)

    def append(self, s: Series[X, Y]) -> None:
        self.series.append(s)
