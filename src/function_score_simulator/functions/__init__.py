"""Function score functions package.

This file makes the evaluators available for easier import from other modules.
For example, other modules can now use:
`from function_score_simulator.functions import calculate_decay_score`
"""

from .decay import calculate_decay_score
from .field_value_factor import calculate_field_value_factor
from .schemas import DecayFunction, DecayKind, FieldValueFactorFunction, ModifierKind, UnknownFunction

__all__ = [
    "DecayFunction",
    "DecayKind",
    "FieldValueFactorFunction",
    "ModifierKind",
    "UnknownFunction",
    "calculate_decay_score",
    "calculate_field_value_factor",
]
