"""
ReceiverArray - fixed receiver (hydrophone) positions.
"""

import numpy as np
from typing import Iterable, List, Optional

from .results import TrueTrack


class ReceiverArray:
    """
    Receiver positions. Only x and y enter the TOA calculation; z is carried along.
    """
    
    # Padding of the track bounding box for automatic placement, m
    AUTO_PADDING = 25.0
    # Outer receivers of the automatic layout, m
    AUTO_OUTER = ((0.0, 0.0), (500.0, 500.0), (500.0, -500.0), (-500.0, -500.0), (-500.0, 500.0))
    AUTO_Z = 1.0
    
    def __init__(self, x: Iterable[float], y: Iterable[float], z: Optional[Iterable[float]] = None):
        """
        Initialize receiver array.
        
        Args:
            x: X coordinates, m
            y: Y coordinates, m
            z: Z coordinates, m (default: 1 m for every receiver)
        """
        self.x = np.asarray(list(x), dtype=float)
        self.y = np.asarray(list(y), dtype=float)
        if z is None:
            self.z = np.full(len(self.x), self.AUTO_Z)
        else:
            self.z = np.asarray(list(z), dtype=float)
        
        if not (len(self.x) == len(self.y) == len(self.z)):
            raise ValueError("x, y and z must have the same length")
        if len(self.x) < 2:
            raise ValueError("At least two receivers are required")
    
    def __len__(self):
        return len(self.x)
    
    @classmethod
    def from_records(cls, records) -> 'ReceiverArray':
        """
        Creates array from records with x, y and optional z.
        
        Args:
            records: Sequence of ReceiverDTO or dicts
        """
        rows = [r if isinstance(r, dict) else r.model_dump() for r in records]
        return cls([r['x'] for r in rows], [r['y'] for r in rows],
                   [r.get('z', cls.AUTO_Z) for r in rows])
    
    @classmethod
    def around_track(cls, track: TrueTrack) -> 'ReceiverArray':
        """
        Places receivers at the corners of the padded track bounding box,
        at the origin and at (±500, ±500).
        """
        x_min = np.min(track.x) - cls.AUTO_PADDING
        x_max = np.max(track.x) + cls.AUTO_PADDING
        y_min = np.min(track.y) - cls.AUTO_PADDING
        y_max = np.max(track.y) + cls.AUTO_PADDING
        
        x = [x_min, x_min, x_max, x_max] + [p[0] for p in cls.AUTO_OUTER]
        y = [y_min, y_max, y_max, y_min] + [p[1] for p in cls.AUTO_OUTER]
        return cls(x, y)
    
    def to_records(self) -> List[dict]:
        return [{'x': float(x), 'y': float(y), 'z': float(z)}
                for x, y, z in zip(self.x, self.y, self.z)]
    
    def __repr__(self):
        return f"ReceiverArray(n={len(self)})"
