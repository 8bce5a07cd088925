"""
Result containers for the simulation stages.

All containers hold numpy arrays; missing values are NaN.
"""

import numpy as np
from typing import Dict, List, Optional


def _column(values: np.ndarray) -> List[Optional[float]]:
    """Converts an array to a list, NaN -> None."""
    return [None if np.isnan(v) else float(v) for v in values]


class TrueTrack:
    """Regularly time-spaced true track: time, x, y and sound speed at each step."""
    
    def __init__(self, time: np.ndarray, x: np.ndarray, y: np.ndarray, ss: np.ndarray):
        """
        Initialize true track.
        
        Args:
            time: Time of each position, s (time[0] = 0)
            x: X coordinate, m
            y: Y coordinate, m
            ss: Sound speed at each position, m/s
        """
        self.time = np.asarray(time, dtype=float)
        self.x = np.asarray(x, dtype=float)
        self.y = np.asarray(y, dtype=float)
        self.ss = np.asarray(ss, dtype=float)
        
        lengths = {len(self.time), len(self.x), len(self.y), len(self.ss)}
        if len(lengths) != 1:
            raise ValueError("time, x, y and ss must have the same length")
    
    def __len__(self):
        return len(self.time)
    
    @property
    def duration(self) -> float:
        """Track duration, s."""
        return float(self.time[-1])
    
    def to_dict(self) -> Dict[str, List[float]]:
        return {'time': self.time.tolist(), 'x': self.x.tolist(),
                'y': self.y.tolist(), 'ss': self.ss.tolist()}
    
    def __repr__(self):
        return f"TrueTrack(n={len(self)}, duration={self.duration:.1f}s)"


class PingSchedule:
    """
    Time of pings and, for ping_type='pbi', the burst interval table.
    
    bi_index[k] is the table entry used to advance from ping k to ping k+1,
    so bi_assignment repeats with period len(bi_table).
    """
    
    def __init__(self, top: np.ndarray, ping_type: str,
                 bi_table: Optional[np.ndarray] = None,
                 bi_index: Optional[np.ndarray] = None):
        self.top = np.asarray(top, dtype=float)
        self.ping_type = ping_type
        self.bi_table = None if bi_table is None else np.asarray(bi_table, dtype=float)
        self.bi_index = None if bi_index is None else np.asarray(bi_index, dtype=int)
    
    def __len__(self):
        return len(self.top)
    
    @property
    def bi_assignment(self) -> Optional[np.ndarray]:
        """Table interval actually used after each ping (without drift)."""
        if self.bi_table is None:
            return None
        return self.bi_table[self.bi_index]
    
    def __repr__(self):
        return f"PingSchedule(ping_type={self.ping_type}, n_pings={len(self)})"


class TelemetryTrack:
    """True positions and sound speed at each time of ping."""
    
    def __init__(self, top: np.ndarray, x: np.ndarray, y: np.ndarray, ss: np.ndarray):
        self.top = np.asarray(top, dtype=float)
        self.x = np.asarray(x, dtype=float)
        self.y = np.asarray(y, dtype=float)
        self.ss = np.asarray(ss, dtype=float)
    
    def __len__(self):
        return len(self.top)
    
    def to_dict(self) -> Dict[str, List[Optional[float]]]:
        return {'top': _column(self.top), 'x': _column(self.x),
                'y': _column(self.y), 'ss': _column(self.ss)}
    
    def __repr__(self):
        return f"TelemetryTrack(n_pings={len(self)})"


class ToaResult:
    """TOA matrix (rows = pings, columns = receivers) and multipath mask."""
    
    def __init__(self, toa: np.ndarray, mp_mat: np.ndarray, temp_res: Optional[float] = None):
        self.toa = np.asarray(toa, dtype=float)
        self.mp_mat = np.asarray(mp_mat, dtype=bool)
        self.temp_res = temp_res
        
        if self.toa.shape != self.mp_mat.shape:
            raise ValueError(f"toa {self.toa.shape} and mp_mat {self.mp_mat.shape} shapes differ")
    
    @property
    def shape(self):
        return self.toa.shape
    
    @property
    def n_missing(self) -> int:
        return int(np.isnan(self.toa).sum())
    
    @property
    def n_multipath(self) -> int:
        return int(self.mp_mat.sum())
    
    def __repr__(self):
        return (f"ToaResult(shape={self.shape}, missing={self.n_missing}, "
                f"multipath={self.n_multipath})")
