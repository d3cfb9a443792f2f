"""Training agent implementations for fast-forward career simulation.

Re-exports the base class and all concrete agent implementations so
consumers can do::

    from paddock.sim.play_agents import TrainingAgent, RandomAgent
"""

from .base import TrainingAgent
from .heuristic_agent import HeuristicAgent
from .random_agent import RandomAgent

__all__ = ["HeuristicAgent", "RandomAgent", "TrainingAgent"]
