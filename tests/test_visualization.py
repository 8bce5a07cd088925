"""
Tests for simulation plots.
"""

import tempfile
import unittest
import sys
from pathlib import Path
import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend for testing
import matplotlib.pyplot as plt

# Add root directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from toasim.dto import SimulationInputDTO, TrackConfigDTO, PingConfigDTO, ToaConfigDTO
from toasim.simulator import run_simulation
from toasim.visualization import plot_simulation, plot_toa


class TestVisualization(unittest.TestCase):
    """Plots are drawn and saved without errors."""
    
    def setUp(self):
        input_dto = SimulationInputDTO(
            track=TrackConfigDTO(model='crw', n=1000, shape=1.0, scale=0.5),
            ping=PingConfigDTO(ping_type='rbi', rbi_min=5, rbi_max=10),
            toa=ToaConfigDTO(p_na=0.2, p_mp=0.05),
            seed=10,
        )
        self.result = run_simulation(input_dto)
    
    def tearDown(self):
        plt.close('all')
    
    def test_plot_simulation(self):
        ax = plot_simulation(self.result)
        labels = [line.get_label() for line in ax.get_lines()]
        self.assertIn('True track', labels)
        self.assertIn('Receivers', labels)
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / 'track.png'
            ax.figure.savefig(path)
            self.assertTrue(path.exists())
    
    def test_plot_toa(self):
        fig, ax = plt.subplots()
        returned = plot_toa(self.result, ax=ax)
        self.assertIs(returned, ax)
        self.assertEqual(ax.get_ylabel(), 'TOA - TOP, s')


if __name__ == '__main__':
    unittest.main()
