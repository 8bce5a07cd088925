"""
DTO (Data Transfer Objects) for simulation configuration and results.
"""

from typing import Dict, List, Optional, Literal, Any
from pydantic import BaseModel, Field, field_validator


class EnvironmentDTO(BaseModel):
    """Water properties used to derive the sound speed baseline."""
    T: float = Field(..., ge=0, le=30, description="Temperature, °C")
    S: float = Field(..., ge=0, le=35, description="Salinity, PSU")
    z: float = Field(default=1.0, ge=0, le=300, description="Depth, m")


class TrackConfigDTO(BaseModel):
    """True track (movement model) parameters."""
    model: Literal['rw', 'crw'] = Field(default='rw', description="Movement model: 'rw' random walk, 'crw' correlated random walk")
    n: int = Field(..., ge=2, description="Number of positions in the track")
    delta_time: float = Field(default=1.0, gt=0, description="Time between positions, s")
    D: Optional[float] = Field(default=None, gt=0, description="Diffusivity, m²/s (model='rw')")
    shape: Optional[float] = Field(default=None, gt=0, description="Weibull shape of step lengths (model='crw')")
    scale: Optional[float] = Field(default=None, gt=0, description="Weibull scale of step lengths, m (model='crw')")
    add_diel_pattern: bool = Field(default=True, description="Alternate rest and active periods (model='crw')")
    ss: Literal['rw', 'constant'] = Field(default='rw', description="Sound speed model")
    start_pos: Optional[List[float]] = Field(default=None, description="Start position [x0, y0], m")
    environment: Optional[EnvironmentDTO] = Field(default=None, description="Water properties for the sound speed baseline (default baseline 1450 m/s)")

    @field_validator('start_pos')
    @classmethod
    def validate_start_pos(cls, v):
        if v is not None and len(v) != 2:
            raise ValueError("start_pos must contain exactly two values [x0, y0]")
        return v


class PingConfigDTO(BaseModel):
    """Transmitter burst interval parameters."""
    ping_type: Literal['sbi', 'rbi', 'pbi'] = Field(..., description="Ping type: 'sbi' stable, 'rbi' random, 'pbi' pseudo-random burst interval")
    sbi_mean: Optional[float] = Field(default=None, gt=0, description="Mean burst interval, s (ping_type='sbi')")
    sbi_sd: Optional[float] = Field(default=None, ge=0, description="Burst interval drift SD, s (ping_type='sbi')")
    rbi_min: Optional[float] = Field(default=None, gt=0, description="Minimum burst interval, s (ping_type='rbi'/'pbi')")
    rbi_max: Optional[float] = Field(default=None, gt=0, description="Maximum burst interval, s (ping_type='rbi'/'pbi')")

    @field_validator('rbi_max')
    @classmethod
    def validate_rbi_max(cls, v, info):
        rbi_min = info.data.get('rbi_min')
        if v is not None and rbi_min is not None and v < rbi_min:
            raise ValueError("rbi_max must be >= rbi_min")
        return v


class ToaConfigDTO(BaseModel):
    """Detection (TOA) corruption parameters."""
    sigma_toa: float = Field(default=1e-4, ge=0, description="Detection uncertainty (SD), s")
    p_na: float = Field(default=0.0, ge=0, le=1, description="Probability of a missing detection")
    p_mp: float = Field(default=0.0, ge=0, le=1, description="Probability of a multipath detection")
    temp_res: Optional[float] = Field(default=None, gt=0, description="Receiver clock resolution, ticks per second (default by ping type)")
    quantize: bool = Field(default=True, description="Apply clock quantization and bin jitter")


class ReceiverDTO(BaseModel):
    """Receiver (hydrophone) position."""
    x: float = Field(..., description="X coordinate, m")
    y: float = Field(..., description="Y coordinate, m")
    z: float = Field(default=1.0, description="Z coordinate, m")


class SimulationInputDTO(BaseModel):
    """Input DTO for a complete simulation run."""
    track: TrackConfigDTO
    ping: PingConfigDTO
    toa: ToaConfigDTO = Field(default_factory=ToaConfigDTO)
    receivers: Optional[List[ReceiverDTO]] = Field(default=None, description="Receiver array (if None, placed around the true track)")
    seed: Optional[int] = Field(default=None, ge=0, description="Random seed (None: fresh entropy)")

    @field_validator('receivers')
    @classmethod
    def validate_receivers(cls, v):
        if v is not None and len(v) < 2:
            raise ValueError("At least two receivers are required")
        return v


class SimulationOutputDTO(BaseModel):
    """Output DTO with simulation results (lists for JSON serialization, missing values as None)."""
    true_track: Dict[str, List[float]] = Field(..., description="Columns time, x, y, ss of the true track")
    telemetry_track: Dict[str, List[Optional[float]]] = Field(..., description="Columns top, x, y, ss at each ping")
    receivers: List[ReceiverDTO] = Field(default_factory=list)
    toa: List[List[Optional[float]]] = Field(..., description="TOA matrix, rows = pings, columns = receivers, s")
    mp_mat: List[List[bool]] = Field(..., description="Multipath mask, same shape as toa")
    bi_table: Optional[List[float]] = Field(default=None, description="Burst interval table (ping_type='pbi'), s")
    bi_assignment: Optional[List[float]] = Field(default=None, description="Table interval used after each ping (ping_type='pbi'), s")
    temp_res: Optional[float] = Field(default=None, description="Clock resolution used for quantization, ticks per second")
    seed: Optional[int] = None
    summary: Dict[str, Any] = Field(default_factory=dict)


def input_from_presets(transmitter: Dict[str, Any], track: TrackConfigDTO,
                       receivers: Optional[List[Dict[str, float]]] = None,
                       toa: Optional[ToaConfigDTO] = None,
                       seed: Optional[int] = None) -> SimulationInputDTO:
    """
    Builds simulation input from a transmitter preset and receiver layout (DataProvider records).
    
    The preset's temp_res is used unless toa sets its own.
    """
    ping_fields = {k: v for k, v in transmitter.items() if k in PingConfigDTO.model_fields}
    toa = toa if toa is not None else ToaConfigDTO()
    if toa.temp_res is None and transmitter.get('temp_res') is not None:
        toa = toa.model_copy(update={'temp_res': transmitter['temp_res']})
    return SimulationInputDTO(
        track=track,
        ping=PingConfigDTO(**ping_fields),
        toa=toa,
        receivers=None if receivers is None else [ReceiverDTO(**r) for r in receivers],
        seed=seed,
    )
