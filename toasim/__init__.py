"""
TOASIM - synthetic acoustic telemetry data for positioning algorithms.
"""

from .exceptions import ConfigError
from .water_model import WaterModel
from .movement_model import MovementSimulator
from .ping_scheduler import (PingScheduler, IntervalGenerator, DriftingGaussian,
                             UniformRange, CyclicTableWithDrift)
from .interpolator import TrackInterpolator
from .receiver_array import ReceiverArray
from .toa_model import ToaCorruptor
from .simulator import Simulator, SimulationResult, run_simulation

__all__ = [
    'ConfigError',
    'WaterModel',
    'MovementSimulator',
    'PingScheduler',
    'IntervalGenerator',
    'DriftingGaussian',
    'UniformRange',
    'CyclicTableWithDrift',
    'TrackInterpolator',
    'ReceiverArray',
    'ToaCorruptor',
    'Simulator',
    'SimulationResult',
    'run_simulation',
]
