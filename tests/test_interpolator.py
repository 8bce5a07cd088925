"""
Tests for TrackInterpolator.
"""

import unittest
import numpy as np
import sys
from pathlib import Path

# Add root directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from toasim.interpolator import TrackInterpolator
from toasim.results import TrueTrack


class TestTrackInterpolator(unittest.TestCase):
    """Tests for interpolation of the true track at time of pings."""
    
    def setUp(self):
        self.interpolator = TrackInterpolator()
        time = np.arange(11) * 2.0
        self.track = TrueTrack(time=time, x=time * 3.0, y=-time, ss=1450 + time / 10)
    
    def test_identity_at_nodes(self):
        telemetry = self.interpolator.interpolate(self.track, self.track.time)
        np.testing.assert_array_equal(telemetry.x, self.track.x)
        np.testing.assert_array_equal(telemetry.y, self.track.y)
        np.testing.assert_array_equal(telemetry.ss, self.track.ss)
        np.testing.assert_array_equal(telemetry.top, self.track.time)
    
    def test_linear_between_nodes(self):
        telemetry = self.interpolator.interpolate(self.track, [1.0, 7.5])
        np.testing.assert_allclose(telemetry.x, [3.0, 22.5])
        np.testing.assert_allclose(telemetry.y, [-1.0, -7.5])
        np.testing.assert_allclose(telemetry.ss, [1450.1, 1450.75])
    
    def test_outside_track_is_missing(self):
        """No extrapolation: pings outside the track time range are NaN."""
        with self.assertLogs('toasim.interpolator', level='WARNING'):
            telemetry = self.interpolator.interpolate(self.track, [-1.0, 5.0, 20.0, 21.0])
        self.assertTrue(np.isnan(telemetry.x[0]))
        self.assertTrue(np.isnan(telemetry.ss[0]))
        self.assertAlmostEqual(telemetry.x[1], 15.0)
        self.assertAlmostEqual(telemetry.x[2], 60.0)
        self.assertTrue(np.isnan(telemetry.y[3]))
        self.assertEqual(len(telemetry), 4)
    
    def test_to_dict_missing_as_none(self):
        telemetry = self.interpolator.interpolate(self.track, [4.0, 30.0])
        columns = telemetry.to_dict()
        self.assertEqual(columns['x'], [12.0, None])
        self.assertEqual(columns['top'], [4.0, 30.0])


if __name__ == '__main__':
    unittest.main()
