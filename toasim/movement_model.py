"""
MovementSimulator - simulation of the true (regularly time-spaced) track.

Movement models:
- 'rw':  two-dimensional random walk, independent Gaussian steps on x and y
- 'crw': correlated random walk, Weibull step lengths and wrapped-Cauchy
         turning angles (strongly persistent heading)
"""

import logging
import numpy as np
from typing import Optional, Sequence
from scipy import stats

from .exceptions import ConfigError
from .results import TrueTrack
from .water_model import WaterModel


class MovementSimulator:
    """
    Simulates a known movement track for subsequent estimation.

    Linear movement between consecutive positions is assumed.
    """

    # Concentration of turning angles around 0 (close to 1 = persistent heading)
    TURNING_ANGLE_RHO = 0.99
    # The step sequence is split into DIEL_SEGMENTS equal parts; rest parts
    # (1-based: 1, 4, 6, 8) have step lengths divided by DIEL_REST_FACTOR
    DIEL_SEGMENTS = 8
    DIEL_REST_SEGMENTS = (1, 4, 6, 8)
    DIEL_REST_FACTOR = 50.0
    # Default start position is uniform in [0, DEFAULT_START_MAX]²
    DEFAULT_START_MAX = 5.0

    def __init__(self, rng: Optional[np.random.Generator] = None):
        """
        Initialize movement simulator.

        Args:
            rng: Random generator (default: freshly seeded)
        """
        self.rng = rng if rng is not None else np.random.default_rng()
        self.logger = logging.getLogger(__name__)

    @staticmethod
    def validate(model: str, D: Optional[float] = None, shape: Optional[float] = None,
                 scale: Optional[float] = None, ss: str = 'rw'):
        """
        Checks that the parameters required by the movement model are present.

        Raises:
            ConfigError: if a required parameter is missing
        """
        if model == 'rw':
            if D is None:
                raise ConfigError("When model == 'rw', D needs to be specified")
        elif model == 'crw':
            if shape is None or scale is None:
                raise ConfigError("When model == 'crw', shape and scale need to be specified")
        else:
            raise ConfigError(f"Unknown movement model '{model}', expected 'rw' or 'crw'")
        if ss not in ('rw', 'constant'):
            raise ConfigError(f"Unknown sound speed model '{ss}', expected 'rw' or 'constant'")

    def simulate(self, model: str, n: int, delta_time: float = 1.0,
                 D: Optional[float] = None, shape: Optional[float] = None,
                 scale: Optional[float] = None, add_diel_pattern: bool = True,
                 ss: str = 'rw', start_pos: Optional[Sequence[float]] = None,
                 ss_baseline: Optional[float] = None) -> TrueTrack:
        """
        Simulates the true track.

        Args:
            model: Movement model, 'rw' or 'crw'
            n: Number of positions (>= 2)
            delta_time: Time between positions, s (> 0)
            D: Diffusivity, m²/s (model='rw')
            shape: Weibull shape of step lengths (model='crw')
            scale: Weibull scale of step lengths, m (model='crw')
            add_diel_pattern: Alternate rest and active periods (model='crw' only)
            ss: Sound speed model, 'rw' or 'constant'
            start_pos: Start position (x0, y0), m. Uniform in [0, 5]² if None
            ss_baseline: Sound speed baseline, m/s (default 1450)

        Returns:
            TrueTrack with n positions
        """
        self.validate(model, D, shape, scale, ss)
        if n < 2:
            raise ValueError(f"n must be >= 2, got {n}")
        if delta_time <= 0:
            raise ValueError(f"delta_time must be > 0, got {delta_time}")

        time = np.arange(n) * delta_time

        if start_pos is not None:
            x0, y0 = float(start_pos[0]), float(start_pos[1])
        else:
            x0, y0 = self.rng.uniform(0, self.DEFAULT_START_MAX, 2)

        if model == 'rw':
            x, y = self._random_walk(n, delta_time, D, x0, y0)
        else:
            x, y = self._correlated_random_walk(n, shape, scale, add_diel_pattern, x0, y0)

        sound_speed = WaterModel.simulate_sound_speed(n, self.rng, model=ss, baseline=ss_baseline)

        self.logger.info(f"Simulated true track: model={model}, n={n}, delta_time={delta_time}s, "
                         f"start=({x0:.2f}, {y0:.2f}), ss={ss}")
        return TrueTrack(time=time, x=x, y=y, ss=sound_speed)

    def _random_walk(self, n: int, delta_time: float, D: float, x0: float, y0: float):
        """Independent Gaussian steps with variance 2*D*dt on each axis."""
        sd = np.sqrt(2 * D * delta_time)
        x = np.cumsum(np.concatenate(([x0], self.rng.normal(0, sd, n - 1))))
        y = np.cumsum(np.concatenate(([y0], self.rng.normal(0, sd, n - 1))))
        return x, y

    def _correlated_random_walk(self, n: int, shape: float, scale: float,
                                add_diel_pattern: bool, x0: float, y0: float):
        """Weibull step lengths, wrapped-Cauchy turning angles."""
        steps = self.step_lengths(n, shape, scale, add_diel_pattern)
        theta = self.turning_angles(n - 1)
        # Absolute heading
        phi = np.cumsum(theta)
        x = np.cumsum(np.concatenate(([x0], steps * np.cos(phi))))
        y = np.cumsum(np.concatenate(([y0], steps * np.sin(phi))))
        return x, y

    def step_lengths(self, n: int, shape: float, scale: float,
                     add_diel_pattern: bool = True) -> np.ndarray:
        """
        Draws the n-1 step lengths of a correlated random walk.

        Args:
            n: Number of positions
            shape: Weibull shape
            scale: Weibull scale, m
            add_diel_pattern: Divide steps in rest periods by DIEL_REST_FACTOR

        Returns:
            Step lengths, m
        """
        steps = stats.weibull_min.rvs(shape, scale=scale, size=n - 1, random_state=self.rng)
        if add_diel_pattern:
            steps = steps * self.diel_mask(n)
        return steps

    def turning_angles(self, size: int) -> np.ndarray:
        """
        Draws turning angles from a wrapped Cauchy distribution centred at 0.

        Returns:
            Angles in (-π, π], rad
        """
        theta = stats.wrapcauchy.rvs(self.TURNING_ANGLE_RHO, size=size, random_state=self.rng)
        # scipy draws on [0, 2π)
        return np.where(theta > np.pi, theta - 2 * np.pi, theta)

    @classmethod
    def diel_mask(cls, n: int) -> np.ndarray:
        """
        Multiplicative mask for the n-1 step lengths.

        Segment length is floor(n/8); the last segment runs to the end of the
        step sequence.

        Returns:
            Array of 1.0 (active) and 1/DIEL_REST_FACTOR (rest)
        """
        n_steps = n - 1
        seg_len = n // cls.DIEL_SEGMENTS
        mask = np.ones(n_steps)
        if seg_len == 0:
            return mask

        for segment in cls.DIEL_REST_SEGMENTS:
            start = (segment - 1) * seg_len
            end = n_steps if segment == cls.DIEL_SEGMENTS else segment * seg_len
            mask[start:end] = 1.0 / cls.DIEL_REST_FACTOR
        return mask
