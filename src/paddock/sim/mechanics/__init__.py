"""Core training mechanics for the career simulator.

Re-exports the primary functions from each mechanics module for convenience.

Usage::

    from paddock.sim.mechanics import (
        clamp, spend_energy, gain_energy,
        raise_stat, roll_form_improvement,
    )
"""

# -- energy ------------------------------------------------------------------
from .energy import clamp, gain_energy, spend_energy

# -- stats -------------------------------------------------------------------
from .stats import raise_stat, roll_form_improvement

__all__ = [
    # energy
    "clamp",
    "spend_energy",
    "gain_energy",
    # stats
    "raise_stat",
    "roll_form_improvement",
]
