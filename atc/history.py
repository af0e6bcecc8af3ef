from __future__ import annotations
from collections import deque
from typing import Deque, Iterator

from .models import Position, NO_POSITION
from . import geodesy


class PositionHistory:
    """
    Bounded trail of past positions, newest first.

    Samples are decimated by distance: during simulation a new position is
    only kept once it is far enough from the last stored one, so the trail
    stays sparse however small the frame step is.
    """

    def __init__(self, max_history: int) -> None:
        if max_history <= 0:
            raise ValueError(f"max_history must be positive, got {max_history}")
        self.max_history = max_history
        self._samples: Deque[Position] = deque(maxlen=max_history)

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[Position]:
        return iter(self._samples)

    def add_sample(self, latitude: float, longitude: float) -> None:
        # deque(maxlen) drops the oldest from the right end
        self._samples.appendleft(Position(latitude, longitude))

    def add_sample_if_farther_than(self, latitude: float, longitude: float,
                                   min_distance_m: float) -> bool:
        last = self.latest_sample()
        if not last.is_empty:
            d = geodesy.distance(last.latitude, last.longitude, latitude, longitude)
            if d <= min_distance_m:
                return False
        self.add_sample(latitude, longitude)
        return True

    def sample_at(self, i: int) -> Position:
        if 0 <= i < len(self._samples):
            return self._samples[i]
        return NO_POSITION

    def latest_sample(self) -> Position:
        return self.sample_at(0)
