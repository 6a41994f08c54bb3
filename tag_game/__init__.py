"""
Tag Game - Main Package
"""

from .settings import GameConfig, load_config
from .simulator import Simulator, SimulationResult, BatchResult
from .engine import (
    Actor, Role, Mode, Direction, Snapshot, TagEngine, PolicyFactory
)

__version__ = "1.0.0"

__all__ = [
    'GameConfig', 'load_config',
    'Simulator', 'SimulationResult', 'BatchResult',
    'Actor', 'Role', 'Mode', 'Direction', 'Snapshot', 'TagEngine',
    'PolicyFactory'
]
