"""
WaterModel - sound speed baseline and sound speed trace along the track.
"""

import numpy as np
from typing import Optional


class WaterModel:
    """
    Water model for the sound speed experienced by the transmitter.
    
    The trace is either a Gaussian random walk around the baseline or
    constant at the baseline.
    """
    
    DEFAULT_SOUND_SPEED = 1450.0  # m/s
    SOUND_SPEED_STEP_SD = 7e-2  # m/s per step
    
    @staticmethod
    def calculate_sound_speed(T: float, S: float, P: float) -> float:
        """
        Calculates sound speed in water using Mackenzie (1981) formula.
        
        Args:
            T: Temperature, °C (0-30)
            S: Salinity, PSU (0-35)
            P: Pressure, dBar (1 dBar ≈ 1 m depth)
        
        Returns:
            Sound speed, m/s
        """
        c = 1448.96 + 4.591*T - 5.304e-2*T**2 + 2.374e-4*T**3
        c += 1.340*(S - 35) + 1.630e-2*P + 1.675e-7*P**2
        c += -1.025e-2*T*(S - 35) - 7.139e-13*T*P**3
        
        return c
    
    @staticmethod
    def calculate_pressure(z: float) -> float:
        """
        Calculates pressure at depth.
        
        Args:
            z: Depth, m
        
        Returns:
            Pressure, dBar
        """
        return 1.0 + 0.1 * z
    
    @classmethod
    def baseline(cls, environment=None) -> float:
        """
        Sound speed baseline, m/s.
        
        Args:
            environment: EnvironmentDTO or None (default baseline)
        """
        if environment is None:
            return cls.DEFAULT_SOUND_SPEED
        P = cls.calculate_pressure(environment.z)
        return cls.calculate_sound_speed(environment.T, environment.S, P)
    
    @classmethod
    def simulate_sound_speed(cls, n: int, rng: np.random.Generator, model: str = 'rw',
                             baseline: Optional[float] = None) -> np.ndarray:
        """
        Simulates sound speed at each of n track positions.
        
        Args:
            n: Number of positions
            rng: Random generator
            model: 'rw' (random walk around baseline) or 'constant'
            baseline: Sound speed baseline, m/s (default 1450)
        
        Returns:
            Sound speed, m/s
        """
        if baseline is None:
            baseline = cls.DEFAULT_SOUND_SPEED
        
        if model == 'rw':
            steps = rng.normal(0, cls.SOUND_SPEED_STEP_SD, n)
            return baseline + np.cumsum(steps)
        elif model == 'constant':
            return np.full(n, baseline, dtype=float)
        raise ValueError(f"Unknown sound speed model '{model}', expected 'rw' or 'constant'")
