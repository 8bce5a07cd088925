#!/usr/bin/env python3
"""
Application entry point: simulates a track, pings and TOA matrix from presets and plots them.
"""

import sys
import logging
from pathlib import Path

# Setup logging
log_dir = Path(__file__).parent / 'logs'
log_dir.mkdir(exist_ok=True)

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.FileHandler(log_dir / 'simulator.log', encoding='utf-8'),
        logging.StreamHandler()
    ]
)

# Add root directory to path
_root = Path(__file__).parent
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))

import matplotlib.pyplot as plt

from data.data_provider import DataProvider
from toasim.dto import TrackConfigDTO, ToaConfigDTO, input_from_presets
from toasim.simulator import run_simulation
from toasim.visualization import plot_simulation, plot_toa


def main():
    """Main entry point."""
    logger = logging.getLogger(__name__)
    provider = DataProvider()
    
    track = TrackConfigDTO(model='crw', n=5000, delta_time=1, shape=1, scale=0.5,
                           add_diel_pattern=True, ss='rw', start_pos=[0, 0])
    toa = ToaConfigDTO(sigma_toa=1e-4, p_na=0.25, p_mp=0.01)
    input_dto = input_from_presets(provider.get_transmitter('vemco_rbi'), track,
                                   receivers=provider.get_receivers('grid_9'), toa=toa, seed=42)
    
    result = run_simulation(input_dto)
    logger.info(f"Summary: {result.summary()}")
    
    fig, (ax_track, ax_toa) = plt.subplots(1, 2, figsize=(16, 7))
    plot_simulation(result, ax=ax_track)
    plot_toa(result, ax=ax_toa)
    fig.tight_layout()
    plt.show()


if __name__ == '__main__':
    main()
