"""
Simulator - main simulation pipeline.

true track -> time of pings -> telemetry track -> TOA matrix
"""

import logging
import numpy as np
from typing import Optional

from .dto import SimulationInputDTO, SimulationOutputDTO, TrackConfigDTO, PingConfigDTO, ReceiverDTO
from .movement_model import MovementSimulator
from .ping_scheduler import PingScheduler
from .interpolator import TrackInterpolator
from .toa_model import ToaCorruptor
from .receiver_array import ReceiverArray
from .water_model import WaterModel
from .results import TrueTrack, PingSchedule, TelemetryTrack, ToaResult


class SimulationResult:
    """All products of a simulation run."""

    def __init__(self, true_track: TrueTrack, schedule: PingSchedule,
                 telemetry: TelemetryTrack, receivers: ReceiverArray,
                 toa: ToaResult, seed: Optional[int] = None):
        self.true_track = true_track
        self.schedule = schedule
        self.telemetry = telemetry
        self.receivers = receivers
        self.toa = toa
        self.seed = seed

    def summary(self) -> dict:
        n_pings, n_receivers = self.toa.shape
        n_obs = n_pings * n_receivers
        return {
            'n_positions': len(self.true_track),
            'duration': self.true_track.duration,
            'n_pings': n_pings,
            'n_receivers': n_receivers,
            'missing_fraction': self.toa.n_missing / n_obs if n_obs else 0.0,
            'multipath_fraction': self.toa.n_multipath / n_obs if n_obs else 0.0,
        }

    def to_dto(self) -> SimulationOutputDTO:
        """Converts to a JSON-serializable output DTO (NaN -> None)."""
        bi_table = None if self.schedule.bi_table is None else self.schedule.bi_table.tolist()
        bi_assignment = self.schedule.bi_assignment
        return SimulationOutputDTO(
            true_track=self.true_track.to_dict(),
            telemetry_track=self.telemetry.to_dict(),
            receivers=[ReceiverDTO(**r) for r in self.receivers.to_records()],
            toa=[[None if np.isnan(v) else float(v) for v in row] for row in self.toa.toa],
            mp_mat=self.toa.mp_mat.tolist(),
            bi_table=bi_table,
            bi_assignment=None if bi_assignment is None else bi_assignment.tolist(),
            temp_res=self.toa.temp_res,
            seed=self.seed,
            summary=self.summary(),
        )


class Simulator:
    """
    Synthetic data simulator for acoustic telemetry positioning.

    Coordinates all stages; every stage draws from the same random generator.
    """

    def __init__(self, rng: Optional[np.random.Generator] = None):
        """
        Initialize simulator.

        Args:
            rng: Random generator (default: freshly seeded)
        """
        self.rng = rng if rng is not None else np.random.default_rng()
        self.logger = logging.getLogger(__name__)

        self.movement = MovementSimulator(self.rng)
        self.scheduler = PingScheduler(self.rng)
        self.interpolator = TrackInterpolator()
        self.toa_model = ToaCorruptor(self.rng)

    @classmethod
    def from_seed(cls, seed: Optional[int]) -> 'Simulator':
        return cls(np.random.default_rng(seed))

    @staticmethod
    def validate(input_dto: SimulationInputDTO):
        """
        Checks model and ping type specific parameters of all stages.

        Raises:
            ConfigError: if a required parameter is missing
        """
        track = input_dto.track
        MovementSimulator.validate(track.model, track.D, track.shape, track.scale, track.ss)
        ping = input_dto.ping
        PingScheduler.validate(ping.ping_type, ping.sbi_mean, ping.sbi_sd, ping.rbi_min, ping.rbi_max)

    def simulate_true_track(self, config: TrackConfigDTO) -> TrueTrack:
        """Simulates the true track from its configuration."""
        return self.movement.simulate(
            model=config.model,
            n=config.n,
            delta_time=config.delta_time,
            D=config.D,
            shape=config.shape,
            scale=config.scale,
            add_diel_pattern=config.add_diel_pattern,
            ss=config.ss,
            start_pos=config.start_pos,
            ss_baseline=WaterModel.baseline(config.environment),
        )

    def simulate_telemetry_track(self, true_track: TrueTrack, config: PingConfigDTO):
        """
        Simulates time of pings and true positions at time of pings.

        Returns:
            Tuple (PingSchedule, TelemetryTrack)
        """
        schedule = self.scheduler.schedule(
            true_track.duration,
            config.ping_type,
            sbi_mean=config.sbi_mean,
            sbi_sd=config.sbi_sd,
            rbi_min=config.rbi_min,
            rbi_max=config.rbi_max,
        )
        telemetry = self.interpolator.interpolate(true_track, schedule.top)
        return schedule, telemetry

    def run(self, input_dto: SimulationInputDTO) -> SimulationResult:
        """
        Performs the complete simulation.

        Args:
            input_dto: Input DTO

        Returns:
            SimulationResult

        Raises:
            ConfigError: if a required parameter is missing (before any simulation work)
        """
        self.logger.info(f"Input parameters: {input_dto.model_dump_json()}")
        self.validate(input_dto)

        true_track = self.simulate_true_track(input_dto.track)
        schedule, telemetry = self.simulate_telemetry_track(true_track, input_dto.ping)

        if input_dto.receivers is not None:
            receivers = ReceiverArray.from_records(input_dto.receivers)
        else:
            receivers = ReceiverArray.around_track(true_track)
            self.logger.info(f"No receivers given, placed {len(receivers)} receivers around the track")

        toa_config = input_dto.toa
        toa = self.toa_model.corrupt(
            telemetry,
            receivers,
            input_dto.ping.ping_type,
            sigma_toa=toa_config.sigma_toa,
            p_na=toa_config.p_na,
            p_mp=toa_config.p_mp,
            temp_res=toa_config.temp_res,
            quantize=toa_config.quantize,
        )

        result = SimulationResult(true_track, schedule, telemetry, receivers, toa, seed=input_dto.seed)
        self.logger.info(f"Simulation results: {result.summary()}")
        return result


def run_simulation(input_dto: SimulationInputDTO) -> SimulationResult:
    """Runs a simulation with a generator seeded from input_dto.seed."""
    return Simulator.from_seed(input_dto.seed).run(input_dto)
