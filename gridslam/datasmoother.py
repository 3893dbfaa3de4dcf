"""Parzen-window smoothing of one-dimensional weighted samples."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from typing import Iterator, List, TextIO, Tuple

from .stat import sample_gaussian, sample_uniform_double

_MAXDOUBLE = sys.float_info.max


@dataclass
class DataPoint:
    """A sample position x carrying the weight y."""

    x: float = 0.0
    y: float = 0.0


def _grid(start: float, stop: float, step: float) -> Iterator[float]:
    """Positions start, start+step, ... up to and including stop."""
    if not step > 0:
        raise ValueError("step must be positive")
    x = start
    while x <= stop:
        yield x
        x += step


class DataSmoother:
    """A Gaussian kernel density over weighted 1D samples.

    The density is evaluated on a grid reaching three kernel widths
    beyond the outermost samples.
    """

    def __init__(self, parzen_window: float):
        self.init(parzen_window)

    def init(self, parzen_window: float) -> None:
        """Forget all samples and set the kernel width."""
        self._data: List[DataPoint] = []
        self._cumulated: List[float] = []
        self._int = -1.0
        self._parzen_window = parzen_window
        self._from = _MAXDOUBLE
        self._to = -_MAXDOUBLE
        self._last_step = 0.001

    @property
    def data(self) -> Tuple[DataPoint, ...]:
        return tuple(self._data)

    @property
    def parzen_window(self) -> float:
        return self._parzen_window

    @property
    def lower(self) -> float:
        """Start of the evaluation grid."""
        return self._from

    @property
    def upper(self) -> float:
        """End of the evaluation grid."""
        return self._to

    def _require_data(self) -> None:
        if not self._data:
            raise ValueError("no data points")

    def set_min_to_zero(self) -> None:
        """Shift all weights so that the smallest becomes zero."""
        minval = min((d.y for d in self._data), default=_MAXDOUBLE)
        for d in self._data:
            d.y -= minval
        self._cumulated.clear()

    def add(self, x: float, p: float) -> None:
        """Add a sample at x with weight p."""
        self._data.append(DataPoint(x, p))
        self._int = -1.0
        reach = 3.0 * self._parzen_window
        if x - reach < self._from:
            self._from = x - reach
        if x + reach > self._to:
            self._to = x + reach
        self._cumulated.clear()

    def integrate(self, step: float) -> float:
        """Integrate the density over the grid and remember the result."""
        self._last_step = step
        self._int = sum(self.smoothed_data(x) * step for x in _grid(self._from, self._to, step))
        return self._int

    def integral(self, step: float, x_to: float) -> float:
        """Integral of the density from the grid start to x_to."""
        return sum(self.smoothed_data(x) * step for x in _grid(self._from, x_to, step))

    def smoothed_data(self, x: float) -> float:
        """The smoothed density at x."""
        self._require_data()
        p = 0.0
        sum_y = 0.0
        for d in self._data:
            dist = abs(x - d.x)
            p += d.y * math.exp(-0.5 * (dist / self._parzen_window) ** 2)
            sum_y += d.y
        denom = math.sqrt(2.0 * math.pi) * sum_y * self._parzen_window
        if denom == 0:
            return math.nan
        return p * (1.0 / denom)

    def sample_numeric(self, step: float) -> float:
        """Draw a position by inverting the numerically integrated density."""
        self._require_data()
        if self._int < 0 or step != self._last_step:
            self.integrate(step)
        r = sample_uniform_double(0.0, self._int)
        sum2 = 0.0
        for x in _grid(self._from, self._to, step):
            sum2 += self.smoothed_data(x) * step
            if sum2 > r:
                return x - 0.5 * step
        return self._to

    def _compute_cumulated(self) -> None:
        self._require_data()
        total = 0.0
        self._cumulated = []
        for d in self._data:
            total += d.y
            self._cumulated.append(total)

    def sample(self) -> float:
        """Pick a sample by weight and perturb it with kernel noise."""
        self._require_data()
        if not self._cumulated:
            self._compute_cumulated()
        maxval = self._cumulated[-1]
        r = sample_uniform_double(0.0, maxval)
        total = 0.0
        for d, cum in zip(self._data, self._cumulated):
            total += cum
            if total >= r:
                return d.x + sample_gaussian(self._parzen_window)
        raise RuntimeError("sampling failed to select a data point")

    def sample_multiple(self, num: int) -> List[float]:
        """Draw up to num samples in one sweep over sorted uniform draws."""
        self._require_data()
        if not self._cumulated:
            self._compute_cumulated()
        maxval = self._cumulated[-1]
        randoms = sorted(sample_uniform_double(0.0, maxval) for _ in range(num))
        samples: List[float] = []
        total = 0.0
        j = 0
        for d, cum in zip(self._data, self._cumulated):
            if j >= num:
                break
            total += cum
            while j < num and total >= randoms[j]:
                samples.append(d.x + sample_gaussian(self._parzen_window))
                j += 1
        return samples

    def approx_gauss(self, step: float) -> Tuple[float, float]:
        """Mean and standard deviation of the density on the grid."""
        self._require_data()
        values = [(x, self.smoothed_data(x)) for x in _grid(self._from, self._to, step)]
        total = sum(d for _, d in values)
        mean = sum(x * d for x, d in values) / total
        var = sum((x - mean) ** 2 * d for x, d in values) / total
        return mean, math.sqrt(var)

    @staticmethod
    def gauss(x: float, mean: float, sigma: float) -> float:
        """Normal density at x."""
        return 1.0 / (math.sqrt(2.0 * math.pi) * sigma) * math.exp(-0.5 * ((x - mean) / sigma) ** 2)

    def cramer_von_mises_to_gauss(self, step: float, mean: float, sigma: float) -> float:
        """Sum of squared differences of the cumulative distributions."""
        p = 0.0
        sint = 0.0
        gint = 0.0
        for x in _grid(self._from, self._to, step):
            sint += self.smoothed_data(x) * step
            gint += self.gauss(x, mean, sigma) * step
            p += (sint - gint) ** 2
        return p

    def kld_to_gauss(self, step: float, mean: float, sigma: float) -> float:
        """Kullback-Leibler divergence from the density to a normal.

        Raises ValueError when the two carry visibly different mass on the grid.
        """
        p = 0.0
        sd = 0.0
        sg = 0.0
        for x in _grid(self._from, self._to, step):
            d = 1e-10 + self.smoothed_data(x)
            g = 1e-10 + self.gauss(x, mean, sigma)
            sd += d
            sg += g
            p += d * math.log(d / g)
        sd *= step
        sg *= step
        if abs(sd - sg) > 0.1:
            raise ValueError("the densities differ in mass on the grid")
        return p * step

    def dump_data(self, stream: TextIO) -> None:
        """Write the samples as 'x y' lines."""
        for d in self._data:
            stream.write("%f %f\n" % (d.x, d.y))

    def dump_smoothed_data(self, stream: TextIO, step: float) -> None:
        """Write the smoothed density on the grid as 'x density' lines."""
        for x in _grid(self._from, self._to, step):
            stream.write("%f %f\n" % (x, self.smoothed_data(x)))