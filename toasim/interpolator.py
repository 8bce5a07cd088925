"""
TrackInterpolator - true positions and sound speed at time of pings.
"""

import logging
import numpy as np

from .results import TrueTrack, TelemetryTrack


class TrackInterpolator:
    """
    Piecewise-linear interpolation of x, y and sound speed at time of pings.

    Time of pings outside the track's time range get NaN (no extrapolation).
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    @staticmethod
    def interpolate_column(time: np.ndarray, values: np.ndarray, top: np.ndarray) -> np.ndarray:
        """Linear interpolation of one column, NaN outside [time[0], time[-1]]."""
        return np.interp(top, time, values, left=np.nan, right=np.nan)

    def interpolate(self, track: TrueTrack, top: np.ndarray) -> TelemetryTrack:
        """
        Interpolates the true track at time of pings.

        Args:
            track: True track
            top: Time of pings, s

        Returns:
            TelemetryTrack aligned with top
        """
        top = np.asarray(top, dtype=float)
        x = self.interpolate_column(track.time, track.x, top)
        y = self.interpolate_column(track.time, track.y, top)
        ss = self.interpolate_column(track.time, track.ss, top)

        n_outside = int(np.isnan(x).sum())
        if n_outside:
            self.logger.warning(f"{n_outside} of {len(top)} pings are outside the track time range "
                                f"[{track.time[0]}, {track.time[-1]}] s; positions set to NaN")

        return TelemetryTrack(top=top, x=x, y=y, ss=ss)
