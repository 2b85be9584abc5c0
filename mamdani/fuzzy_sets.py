"""
Piecewise-linear fuzzy sets.

Each set maps a crisp value to a membership degree in [0, 1] and can invert
its rising (first) or falling (last) edge, which is what the maximum-based
defuzzification relies on. Three shapes are supported:

    Diagonal     a single ramp between 'zero' and 'one'
    Triangular   min_zero < one < max_zero
    Trapezoid    min_zero < min_one < max_one < max_zero

Geometry is validated at construction so malformed sets never reach a query.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Tuple

from mamdani.errors import DegenerateSet, InvalidParameters


def _clamp01(x: float) -> float:
    if x <= 0.0:
        return 0.0
    elif x >= 1.0:
        return 1.0
    else:
        return x


class FuzzySet(ABC):
    """Behaviour shared by every set shape."""

    name: str

    @abstractmethod
    def membership_function(self, value: float) -> float:
        raise NotImplementedError

    @abstractmethod
    def indicator_function(self, value: float) -> bool:
        raise NotImplementedError

    @abstractmethod
    def first_intersection(self, mu: float) -> float:
        raise NotImplementedError

    @abstractmethod
    def last_intersection(self, mu: float) -> float:
        raise NotImplementedError

    @abstractmethod
    def bounds(self) -> Tuple[float, float]:
        raise NotImplementedError


@dataclass(frozen=True)
class Diagonal(FuzzySet):
    """
    Linear ramp reaching 0 at 'zero' and 1 at 'one'.

    Rising when zero < one, falling otherwise. Beyond the breakpoints the
    curve saturates, so only one edge exists and both intersections coincide.
    """

    name: str
    zero: float
    one: float

    def __post_init__(self) -> None:
        if self.zero == self.one:
            raise DegenerateSet(
                f"Diagonal set '{self.name}': parameter 'zero' must differ from 'one' "
                f"(both are {self.zero})"
            )
        object.__setattr__(self, "zero", float(self.zero))
        object.__setattr__(self, "one", float(self.one))

    @property
    def rising(self) -> bool:
        return self.zero < self.one

    def membership_function(self, value: float) -> float:
        if self.rising:
            if value <= self.zero:
                return 0.0
            if value >= self.one:
                return 1.0
        else:
            if value >= self.zero:
                return 0.0
            if value <= self.one:
                return 1.0
        return _clamp01((value - self.zero) / (self.one - self.zero))

    def indicator_function(self, value: float) -> bool:
        if self.rising:
            return value > self.zero
        return value < self.zero

    def first_intersection(self, mu: float) -> float:
        mu = _clamp01(mu)
        return self.zero + mu * (self.one - self.zero)

    def last_intersection(self, mu: float) -> float:
        return self.first_intersection(mu)

    def bounds(self) -> Tuple[float, float]:
        return (min(self.zero, self.one), max(self.zero, self.one))


@dataclass(frozen=True)
class Triangular(FuzzySet):
    """Rises from min_zero to a peak at 'one', falls back to 0 at max_zero."""

    name: str
    min_zero: float
    one: float
    max_zero: float

    def __post_init__(self) -> None:
        if not (self.min_zero < self.one < self.max_zero):
            raise InvalidParameters(
                f"Triangular set '{self.name}': expected min_zero < one < max_zero, "
                f"got [{self.min_zero}, {self.one}, {self.max_zero}]"
            )
        for attr in ("min_zero", "one", "max_zero"):
            object.__setattr__(self, attr, float(getattr(self, attr)))

    def membership_function(self, value: float) -> float:
        if value <= self.min_zero or value >= self.max_zero:
            return 0.0
        if value < self.one:
            return _clamp01((value - self.min_zero) / (self.one - self.min_zero))
        return _clamp01((self.max_zero - value) / (self.max_zero - self.one))

    def indicator_function(self, value: float) -> bool:
        return self.min_zero < value < self.max_zero

    def first_intersection(self, mu: float) -> float:
        mu = _clamp01(mu)
        return self.min_zero + mu * (self.one - self.min_zero)

    def last_intersection(self, mu: float) -> float:
        mu = _clamp01(mu)
        return self.max_zero - mu * (self.max_zero - self.one)

    def bounds(self) -> Tuple[float, float]:
        return (self.min_zero, self.max_zero)


@dataclass(frozen=True)
class Trapezoid(FuzzySet):
    """
    Rises from min_zero to min_one, stays at 1 up to max_one, then falls to
    0 at max_zero.
    """

    name: str
    min_zero: float
    min_one: float
    max_one: float
    max_zero: float

    def __post_init__(self) -> None:
        if not (self.min_zero < self.min_one < self.max_one < self.max_zero):
            raise InvalidParameters(
                f"Trapezoid set '{self.name}': expected "
                f"min_zero < min_one < max_one < max_zero, got "
                f"[{self.min_zero}, {self.min_one}, {self.max_one}, {self.max_zero}]"
            )
        for attr in ("min_zero", "min_one", "max_one", "max_zero"):
            object.__setattr__(self, attr, float(getattr(self, attr)))

    def membership_function(self, value: float) -> float:
        if value <= self.min_zero or value >= self.max_zero:
            return 0.0
        if self.min_one <= value <= self.max_one:
            return 1.0
        if value < self.min_one:
            return _clamp01((value - self.min_zero) / (self.min_one - self.min_zero))
        return _clamp01((self.max_zero - value) / (self.max_zero - self.max_one))

    def indicator_function(self, value: float) -> bool:
        return self.min_zero < value < self.max_zero

    def first_intersection(self, mu: float) -> float:
        mu = _clamp01(mu)
        return self.min_zero + mu * (self.min_one - self.min_zero)

    def last_intersection(self, mu: float) -> float:
        mu = _clamp01(mu)
        return self.max_zero - mu * (self.max_zero - self.max_one)

    def bounds(self) -> Tuple[float, float]:
        return (self.min_zero, self.max_zero)
