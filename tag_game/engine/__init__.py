"""
Tag Game - Game Engine
"""

from .game_state import (
    Actor, Role, Mode, Direction, RoundState, RoundResult, Snapshot, GameLogger
)
from .agent import ChaseAgent, HumanPolicy, RandomPolicy, GreedyPolicy, PolicyFactory
from .timers import Clock, InputSource, TimerHandle, ManualClock, ManualInput
from .game_engine import TagEngine

__all__ = [
    'Actor', 'Role', 'Mode', 'Direction', 'RoundState', 'RoundResult', 'Snapshot', 'GameLogger',
    'ChaseAgent', 'HumanPolicy', 'RandomPolicy', 'GreedyPolicy', 'PolicyFactory',
    'Clock', 'InputSource', 'TimerHandle', 'ManualClock', 'ManualInput',
    'TagEngine'
]
