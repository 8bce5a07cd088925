"""
PingScheduler - simulation of time of pings (TOP) for a transmitter.

Ping types:
- 'sbi': stable burst interval drifting as a Gaussian random walk
- 'rbi': random burst interval, i.i.d. uniform in [rbi_min, rbi_max]
- 'pbi': pseudo-random burst interval, a fixed table of 256 uniform
         intervals used cyclically, with a small drift on each use
"""

import logging
import numpy as np
from abc import ABC, abstractmethod
from typing import Optional, Tuple, Any

from .exceptions import ConfigError
from .results import PingSchedule


class IntervalGenerator(ABC):
    """
    Burst interval generator.

    Each call to next_interval returns the next interval and the state to pass
    to the following call.
    """

    def __init__(self, rng: np.random.Generator):
        self.rng = rng

    @abstractmethod
    def initial_state(self) -> Any:
        """State before the first interval is drawn."""

    @abstractmethod
    def next_interval(self, state: Any) -> Tuple[float, Any]:
        """
        Draws the next burst interval.

        Args:
            state: State returned by the previous call (or initial_state())

        Returns:
            Tuple (interval, new state)
        """


class DriftingGaussian(IntervalGenerator):
    """First interval ~ N(mean, sd); each next one = previous + N(0, sd)."""

    def __init__(self, rng: np.random.Generator, mean: float, sd: float):
        super().__init__(rng)
        self.mean = mean
        self.sd = sd

    def initial_state(self) -> Optional[float]:
        return None

    def next_interval(self, state: Optional[float]) -> Tuple[float, float]:
        if state is None:
            interval = self.rng.normal(self.mean, self.sd)
        else:
            interval = state + self.rng.normal(0, self.sd)
        return interval, interval


class UniformRange(IntervalGenerator):
    """Independent intervals ~ U(min, max)."""

    def __init__(self, rng: np.random.Generator, bi_min: float, bi_max: float):
        super().__init__(rng)
        self.bi_min = bi_min
        self.bi_max = bi_max

    def initial_state(self) -> None:
        return None

    def next_interval(self, state: None) -> Tuple[float, None]:
        return self.rng.uniform(self.bi_min, self.bi_max), None


class CyclicTableWithDrift(IntervalGenerator):
    """
    Table of TABLE_SIZE intervals ~ U(min, max) rounded to 0.1 s, used cyclically.

    Each use adds a drift term ~ N(1e-3, 1e-3) rounded to 5 decimals.
    State is the index of the next table entry.
    """

    TABLE_SIZE = 256
    DRIFT_MEAN = 1e-3
    DRIFT_SD = 1e-3

    def __init__(self, rng: np.random.Generator, bi_min: float, bi_max: float):
        super().__init__(rng)
        self.table = np.round(rng.uniform(bi_min, bi_max, self.TABLE_SIZE), 1)

    def initial_state(self) -> int:
        return 0

    def next_interval(self, state: int) -> Tuple[float, int]:
        drift = round(self.rng.normal(self.DRIFT_MEAN, self.DRIFT_SD), 5)
        return self.table[state] + drift, (state + 1) % self.TABLE_SIZE


class PingScheduler:
    """
    Simulates time of pings covering a track of given duration.

    The first ping is at a random offset in [0, FIRST_PING_MAX). Intervals are
    added until the track duration is passed; the last ping (beyond the track)
    is dropped, so every ping lies in [0, duration).
    """

    FIRST_PING_MAX = 0.5  # s

    def __init__(self, rng: Optional[np.random.Generator] = None):
        """
        Initialize ping scheduler.

        Args:
            rng: Random generator (default: freshly seeded)
        """
        self.rng = rng if rng is not None else np.random.default_rng()
        self.logger = logging.getLogger(__name__)

    @staticmethod
    def validate(ping_type: str, sbi_mean: Optional[float] = None, sbi_sd: Optional[float] = None,
                 rbi_min: Optional[float] = None, rbi_max: Optional[float] = None):
        """
        Checks that the parameters required by the ping type are present.

        Raises:
            ConfigError: if a required parameter is missing
        """
        if ping_type == 'sbi':
            if sbi_mean is None or sbi_sd is None:
                raise ConfigError("When ping_type == 'sbi', both sbi_mean and sbi_sd must be specified")
        elif ping_type in ('rbi', 'pbi'):
            if rbi_min is None or rbi_max is None:
                raise ConfigError(f"When ping_type == '{ping_type}', both rbi_min and rbi_max must be specified")
        else:
            raise ConfigError(f"Unknown ping type '{ping_type}', expected 'sbi', 'rbi' or 'pbi'")

    def create_generator(self, ping_type: str, sbi_mean: Optional[float] = None,
                         sbi_sd: Optional[float] = None, rbi_min: Optional[float] = None,
                         rbi_max: Optional[float] = None) -> IntervalGenerator:
        """Creates the interval generator for the ping type."""
        self.validate(ping_type, sbi_mean, sbi_sd, rbi_min, rbi_max)
        if ping_type == 'sbi':
            return DriftingGaussian(self.rng, sbi_mean, sbi_sd)
        elif ping_type == 'rbi':
            return UniformRange(self.rng, rbi_min, rbi_max)
        return CyclicTableWithDrift(self.rng, rbi_min, rbi_max)

    def schedule(self, duration: float, ping_type: str, sbi_mean: Optional[float] = None,
                 sbi_sd: Optional[float] = None, rbi_min: Optional[float] = None,
                 rbi_max: Optional[float] = None) -> PingSchedule:
        """
        Simulates time of pings.

        Intervals must be positive on average, otherwise the loop may not
        terminate.

        Args:
            duration: Track duration, s
            ping_type: 'sbi', 'rbi' or 'pbi'
            sbi_mean, sbi_sd: Mean and SD of burst interval (ping_type='sbi'), s
            rbi_min, rbi_max: Burst interval bounds (ping_type='rbi'/'pbi'), s

        Returns:
            PingSchedule (with bi_table and bi_index for ping_type='pbi')
        """
        generator = self.create_generator(ping_type, sbi_mean, sbi_sd, rbi_min, rbi_max)

        top = [self.rng.uniform(0, self.FIRST_PING_MAX)]
        state = generator.initial_state()
        while top[-1] < duration:
            interval, state = generator.next_interval(state)
            top.append(top[-1] + interval)
        # Last ping is beyond the track
        top = np.array(top[:-1])

        self.logger.info(f"Simulated {len(top)} pings: ping_type={ping_type}, duration={duration}s")

        if isinstance(generator, CyclicTableWithDrift):
            bi_index = np.arange(len(top)) % generator.TABLE_SIZE
            return PingSchedule(top, ping_type, bi_table=generator.table, bi_index=bi_index)
        return PingSchedule(top, ping_type)
