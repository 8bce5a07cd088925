"""
DataProvider - transmitter presets and receiver layouts for the simulator.
"""

import json
from pathlib import Path
from typing import Dict, List, Optional
import logging


class DataProvider:
    """
    Data provider for simulation presets.
    
    Gives access to:
    - Transmitters (ping type, burst interval parameters, clock resolution)
    - Receiver layouts (list of x, y, z)
    """
    
    def __init__(self, data_dir: Optional[str] = None):
        """
        Initialize data provider.
        
        Args:
            data_dir: Path to data directory (default: directory of this module)
        """
        if data_dir is None:
            data_dir = Path(__file__).parent
        else:
            data_dir = Path(data_dir)
        
        self.data_dir = data_dir
        self.logger = logging.getLogger(__name__)
        
        self.metadata = self._load_metadata()
        
        # Cache for loaded data
        self._transmitters = {}
        self._receivers = {}
    
    def _load_metadata(self) -> Dict:
        """Loads metadata."""
        metadata_path = self.data_dir / 'metadata.json'
        if metadata_path.exists():
            try:
                with open(metadata_path, 'r', encoding='utf-8') as f:
                    return json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                self.logger.warning(f"Failed to load metadata: {e}")
        return {'version': '1.0', 'last_updated': ''}
    
    def _load_json(self, file_path: Path):
        """Loads JSON file."""
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            self.logger.error(f"Error loading {file_path}: {e}")
            raise
    
    def get_transmitter(self, transmitter_id: str) -> Dict:
        """
        Gets transmitter preset.
        
        Args:
            transmitter_id: Transmitter ID
        
        Returns:
            Dictionary with ping_type, burst interval parameters and temp_res
        """
        if transmitter_id in self._transmitters:
            return self._transmitters[transmitter_id]
        
        file_path = self.data_dir / 'transmitters' / f'{transmitter_id}.json'
        if not file_path.exists():
            raise ValueError(f"Transmitter {transmitter_id} not found")
        
        data = self._load_json(file_path)
        self._transmitters[transmitter_id] = data
        return data
    
    def get_receivers(self, layout_id: str) -> List[Dict]:
        """
        Gets receiver layout.
        
        Args:
            layout_id: Layout ID
        
        Returns:
            List of dictionaries with x, y, z
        """
        if layout_id in self._receivers:
            return self._receivers[layout_id]
        
        file_path = self.data_dir / 'receivers' / f'{layout_id}.json'
        if not file_path.exists():
            raise ValueError(f"Receiver layout {layout_id} not found")
        
        data = self._load_json(file_path)['receivers']
        self._receivers[layout_id] = data
        return data
    
    def list_transmitters(self) -> List[str]:
        """Returns list of available transmitters."""
        transmitters_dir = self.data_dir / 'transmitters'
        if not transmitters_dir.exists():
            return []
        
        return sorted(f.stem for f in transmitters_dir.glob('*.json'))
    
    def list_receivers(self) -> List[str]:
        """Returns list of available receiver layouts."""
        receivers_dir = self.data_dir / 'receivers'
        if not receivers_dir.exists():
            return []
        
        return sorted(f.stem for f in receivers_dir.glob('*.json'))
    
    def get_metadata(self) -> Dict:
        """Returns metadata."""
        return self.metadata.copy()
