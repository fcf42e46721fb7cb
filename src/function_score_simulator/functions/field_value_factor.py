"""Score calculation for the field_value_factor function.

score = weight * modifier(factor * field_value)
"""

import logging
import math
from typing import Any, Optional, Union

from function_score_simulator.functions.schemas import (
    FieldValueFactorFunction,
    ModifierKind,
    parse_function_definition,
)

logger = logging.getLogger(__name__)


def apply_modifier(value: float, modifier: Union[ModifierKind, str, None]) -> float:
    """Applies a field_value_factor modifier.

    Logarithms, square roots and reciprocals outside their domain return 0 instead of
    NaN or infinity. Unrecognised modifiers leave the value unchanged.

    Args:
        value (float): factor * field value.
        modifier: The modifier name or enum member.

    Returns:
        float: The modified value.
    """
    try:
        kind = ModifierKind(modifier) if modifier is not None else ModifierKind.NONE
    except ValueError:
        logger.debug("Unknown modifier %r, leaving value unchanged", modifier)
        return value

    if kind is ModifierKind.LOG:
        return math.log10(value) if value > 0 else 0
    if kind is ModifierKind.LOG1P:
        return math.log10(value + 1) if value > -1 else 0
    if kind is ModifierKind.LOG2P:
        return math.log10(value + 2) if value > -2 else 0
    if kind is ModifierKind.LN:
        return math.log(value) if value > 0 else 0
    if kind is ModifierKind.LN1P:
        return math.log(value + 1) if value > -1 else 0
    if kind is ModifierKind.LN2P:
        return math.log(value + 2) if value > -2 else 0
    if kind is ModifierKind.SQUARE:
        return value * value
    if kind is ModifierKind.SQRT:
        return math.sqrt(value) if value >= 0 else 0
    if kind is ModifierKind.RECIPROCAL:
        return 1 / value if value != 0 else 0
    return value


def calculate_field_value_factor(
    function: Union[FieldValueFactorFunction, dict, Any], field_value: Optional[float]
) -> float:
    """Calculates the score of a field_value_factor function for one field value.

    Args:
        function: The typed definition, or the raw ``{"field_value_factor": {...}}`` mapping.
        field_value: The document's field value. None means the field is missing and the
            ``missing`` parameter is used instead.

    Returns:
        float: The weighted score. Always finite.
    """
    definition = parse_function_definition(function)
    if not isinstance(definition, FieldValueFactorFunction):
        return 0

    params = definition.params
    value = params.missing if field_value is None else field_value

    score = definition.weight * apply_modifier(params.factor * value, params.modifier_kind)
    if not math.isfinite(score):
        return 0
    return score
