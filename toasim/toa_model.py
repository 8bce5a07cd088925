"""
ToaCorruptor - time of arrival (TOA) matrix for a telemetry track and receiver array.
"""

import logging
import numpy as np
from typing import Optional

from .results import TelemetryTrack, ToaResult
from .receiver_array import ReceiverArray


class ToaCorruptor:
    """
    Simulates detections of each ping at each receiver.
    
    Pipeline (in order):
    1. Ideal TOA: top + distance / sound speed
    2. Gaussian detection noise
    3. Clock quantization to temp_res ticks per second
    4. Integer-tick jitter: ±Poisson(1) ticks
    5. Missing detections with probability p_na
    6. Multipath: extra U(50, 300) m path with probability p_mp
    
    Missing detections are marked by multiplying with a Bernoulli(1 - p_na)
    mask and mapping zeros to NaN, so a TOA of exactly 0 s is also reported
    missing. This is an accepted approximation.
    """
    
    # Clock resolution by ping type, ticks per second
    SBI_TEMP_RES = 19200
    DEFAULT_TEMP_RES = 1000
    # Multipath extra path length, m
    MP_DISTANCE_MIN = 50.0
    MP_DISTANCE_MAX = 300.0
    # Mean number of ticks of clock reading jitter
    JITTER_LAMBDA = 1.0
    
    def __init__(self, rng: Optional[np.random.Generator] = None):
        """
        Initialize TOA model.
        
        Args:
            rng: Random generator (default: freshly seeded)
        """
        self.rng = rng if rng is not None else np.random.default_rng()
        self.logger = logging.getLogger(__name__)
    
    @classmethod
    def resolve_temp_res(cls, ping_type: str, temp_res: Optional[float] = None) -> float:
        """Clock resolution: temp_res if given, else 19200 for 'sbi' and 1000 otherwise."""
        if temp_res is not None:
            return temp_res
        return cls.SBI_TEMP_RES if ping_type == 'sbi' else cls.DEFAULT_TEMP_RES
    
    @staticmethod
    def ideal_toa(telemetry: TelemetryTrack, receivers: ReceiverArray) -> np.ndarray:
        """
        Noise-free TOA.
        
        Returns:
            Array (n_pings, n_receivers), s
        """
        dx = telemetry.x[:, np.newaxis] - receivers.x[np.newaxis, :]
        dy = telemetry.y[:, np.newaxis] - receivers.y[np.newaxis, :]
        distance = np.hypot(dx, dy)
        return telemetry.top[:, np.newaxis] + distance / telemetry.ss[:, np.newaxis]
    
    @staticmethod
    def quantize(toa: np.ndarray, temp_res: float) -> np.ndarray:
        """
        Rounds the fractional second of each TOA to the nearest of temp_res bins.
        
        Bins are k/temp_res, k = 0 .. temp_res-1; the integer second is kept.
        """
        seconds = np.floor(toa)
        bins = np.minimum(np.round((toa - seconds) * temp_res), temp_res - 1)
        return seconds + bins / temp_res
    
    def corrupt(self, telemetry: TelemetryTrack, receivers: ReceiverArray, ping_type: str,
                sigma_toa: float, p_na: float, p_mp: float,
                temp_res: Optional[float] = None, quantize: bool = True) -> ToaResult:
        """
        Simulates the TOA matrix.
        
        Args:
            telemetry: True positions at time of pings
            receivers: Receiver array
            ping_type: Transmitter ping type (selects default clock resolution)
            sigma_toa: Detection uncertainty (SD), s
            p_na: Probability of missing detection, 0-1
            p_mp: Probability of multipath detection, 0-1
            temp_res: Clock resolution, ticks per second (default by ping type)
            quantize: If False, skip clock quantization and tick jitter
        
        Returns:
            ToaResult (toa with NaN for missing detections, mp_mat)
        """
        if sigma_toa < 0:
            raise ValueError(f"sigma_toa must be >= 0, got {sigma_toa}")
        for name, p in (('p_na', p_na), ('p_mp', p_mp)):
            if not 0 <= p <= 1:
                raise ValueError(f"{name} must be within [0, 1], got {p}")
        
        temp_res = self.resolve_temp_res(ping_type, temp_res)
        
        toa = self.ideal_toa(telemetry, receivers)
        shape = toa.shape
        
        toa = toa + self.rng.normal(0, sigma_toa, shape)
        
        if quantize:
            toa = self.quantize(toa, temp_res)
            ticks = self.rng.poisson(self.JITTER_LAMBDA, shape) * self.rng.choice([-1, 1], size=shape)
            toa = toa + ticks / temp_res
        
        detected = self.rng.binomial(1, 1 - p_na, shape)
        toa = toa * detected
        toa[toa == 0] = np.nan
        
        mp_mat = self.rng.binomial(1, p_mp, shape).astype(bool)
        mp_distance = self.rng.uniform(self.MP_DISTANCE_MIN, self.MP_DISTANCE_MAX, shape)
        toa = toa + mp_mat * mp_distance / telemetry.ss[:, np.newaxis]
        # A missing detection carries no multipath
        mp_mat[np.isnan(toa)] = False
        
        result = ToaResult(toa, mp_mat, temp_res=temp_res if quantize else None)
        self.logger.info(f"Simulated TOA matrix: {shape[0]} pings x {shape[1]} receivers, "
                         f"temp_res={temp_res}, missing={result.n_missing}, multipath={result.n_multipath}")
        return result
