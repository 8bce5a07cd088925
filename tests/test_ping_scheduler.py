"""
Tests for PingScheduler and burst interval generators.
"""

import unittest
import numpy as np
import sys
from pathlib import Path

# Add root directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from toasim.ping_scheduler import (PingScheduler, DriftingGaussian, UniformRange,
                                   CyclicTableWithDrift)
from toasim.exceptions import ConfigError


class TestPingScheduler(unittest.TestCase):
    """Tests for time of ping simulation."""
    
    def setUp(self):
        self.scheduler = PingScheduler(np.random.default_rng(99))
    
    def assert_valid_top(self, top, duration):
        self.assertTrue(np.all(np.diff(top) > 0), "time of pings must be strictly increasing")
        self.assertTrue(np.all(top >= 0))
        self.assertTrue(np.all(top < duration))
    
    def test_sbi(self):
        schedule = self.scheduler.schedule(1000, 'sbi', sbi_mean=10, sbi_sd=1e-3)
        self.assert_valid_top(schedule.top, 1000)
        self.assertIn(len(schedule), range(99, 102))
        np.testing.assert_allclose(np.diff(schedule.top), 10, atol=0.05)
        self.assertIsNone(schedule.bi_table)
        self.assertIsNone(schedule.bi_assignment)
    
    def test_rbi_count(self):
        """U(1, 2) intervals over 100 s give 50-100 pings."""
        for _ in range(20):
            schedule = self.scheduler.schedule(100, 'rbi', rbi_min=1, rbi_max=2)
            self.assert_valid_top(schedule.top, 100)
            self.assertGreaterEqual(len(schedule), 50)
            self.assertLessEqual(len(schedule), 100)
            intervals = np.diff(schedule.top)
            self.assertTrue(np.all((intervals >= 1) & (intervals <= 2)))
    
    def test_first_ping_offset(self):
        for _ in range(20):
            schedule = self.scheduler.schedule(50, 'rbi', rbi_min=1, rbi_max=1)
            self.assertLess(schedule.top[0], 0.5)
            np.testing.assert_allclose(np.diff(schedule.top), 1.0)
    
    def test_last_ping_dropped(self):
        """The next ping after the last one would be beyond the track."""
        schedule = self.scheduler.schedule(100, 'rbi', rbi_min=3, rbi_max=3)
        self.assertLess(schedule.top[-1], 100)
        self.assertGreaterEqual(schedule.top[-1] + 3, 100)
    
    def test_pbi_table(self):
        schedule = self.scheduler.schedule(500, 'pbi', rbi_min=10, rbi_max=30)
        self.assert_valid_top(schedule.top, 500)
        self.assertEqual(len(schedule.bi_table), 256)
        self.assertEqual(len(schedule.bi_assignment), len(schedule))
        self.assertTrue(np.all((schedule.bi_table >= 10) & (schedule.bi_table <= 30)))
        # Rounded to 0.1 s
        np.testing.assert_allclose(schedule.bi_table * 10, np.round(schedule.bi_table * 10), atol=1e-9)
    
    def test_pbi_table_cycles(self):
        """With more than 256 pings the assigned intervals repeat with period 256."""
        schedule = self.scheduler.schedule(2000, 'pbi', rbi_min=2, rbi_max=4)
        self.assertGreater(len(schedule), 256)
        self.assertEqual(len(schedule.bi_table), 256)
        assigned = schedule.bi_assignment
        np.testing.assert_array_equal(assigned[256:], assigned[:len(assigned) - 256])
        np.testing.assert_array_equal(schedule.bi_index, np.arange(len(schedule)) % 256)
    
    def test_pbi_intervals_follow_table(self):
        """Interval after ping k is table entry k plus a small drift."""
        schedule = self.scheduler.schedule(1000, 'pbi', rbi_min=2, rbi_max=4)
        drift = np.diff(schedule.top) - schedule.bi_assignment[:-1]
        self.assertTrue(np.all(np.abs(drift) < 0.01))
        self.assertAlmostEqual(np.mean(drift), 1e-3, delta=5e-4)
    
    def test_missing_parameters(self):
        with self.assertRaises(ConfigError):
            self.scheduler.schedule(100, 'sbi', sbi_mean=10)
        with self.assertRaises(ConfigError):
            self.scheduler.schedule(100, 'rbi', rbi_min=1)
        with self.assertRaises(ConfigError):
            self.scheduler.schedule(100, 'pbi', rbi_max=1)
        with self.assertRaises(ConfigError):
            self.scheduler.schedule(100, 'xbi', rbi_min=1, rbi_max=2)
    
    def test_short_duration(self):
        """A track shorter than the first ping offset has no pings."""
        schedule = self.scheduler.schedule(0.0, 'rbi', rbi_min=1, rbi_max=2)
        self.assertEqual(len(schedule), 0)
    
    def test_reproducible(self):
        a = PingScheduler(np.random.default_rng(1)).schedule(300, 'pbi', rbi_min=1, rbi_max=3)
        b = PingScheduler(np.random.default_rng(1)).schedule(300, 'pbi', rbi_min=1, rbi_max=3)
        np.testing.assert_array_equal(a.top, b.top)
        np.testing.assert_array_equal(a.bi_table, b.bi_table)


class TestIntervalGenerators(unittest.TestCase):
    """Tests for the interval generator state machines."""
    
    def setUp(self):
        self.rng = np.random.default_rng(17)
    
    def test_drifting_gaussian_random_walk(self):
        """Each interval is the previous one plus N(0, sd)."""
        generator = DriftingGaussian(self.rng, mean=5.0, sd=0.01)
        state = generator.initial_state()
        intervals = []
        for _ in range(1000):
            interval, state = generator.next_interval(state)
            self.assertEqual(interval, state)
            intervals.append(interval)
        self.assertAlmostEqual(intervals[0], 5.0, delta=0.05)
        self.assertAlmostEqual(np.std(np.diff(intervals)), 0.01, delta=0.002)
    
    def test_uniform_range(self):
        generator = UniformRange(self.rng, 2.0, 3.0)
        state = generator.initial_state()
        for _ in range(200):
            interval, state = generator.next_interval(state)
            self.assertTrue(2.0 <= interval <= 3.0)
    
    def test_cyclic_table_wraps(self):
        generator = CyclicTableWithDrift(self.rng, 1.0, 2.0)
        state = generator.initial_state()
        self.assertEqual(state, 0)
        for _ in range(256):
            _, state = generator.next_interval(state)
        self.assertEqual(state, 0)
        interval, state = generator.next_interval(state)
        self.assertEqual(state, 1)
        self.assertAlmostEqual(interval, generator.table[0], delta=0.01)


if __name__ == '__main__':
    unittest.main()
