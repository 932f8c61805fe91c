from typing import Dict, Hashable, Optional, Sequence, Tuple


class PointScale:
    """Categorical point scale: evenly spaced positions across a pixel range.

    Mirrors the usual point-scale layout with zero padding and centred
    alignment, so a single-value domain lands in the middle of the range and
    a reversed range (bottom to top) maps the first value to the bottom.
    """

    def __init__(self, domain: Sequence[Hashable], range_: Tuple[float, float]) -> None:
        self.domain = list(domain)
        self.range = range_
        r0, r1 = range_
        reverse = r1 < r0
        start, stop = (r1, r0) if reverse else (r0, r1)
        n = len(self.domain)
        self.step = (stop - start) / max(1, n - 1)
        start += (stop - start - self.step * (n - 1)) * 0.5
        positions = [start + self.step * i for i in range(n)]
        if reverse:
            positions.reverse()
        self._positions: Dict[Hashable, float] = dict(zip(self.domain, positions))

    def __call__(self, value: Hashable) -> Optional[float]:
        return self._positions.get(value)

    def positions(self) -> Dict[Hashable, float]:
        return dict(self._positions)
