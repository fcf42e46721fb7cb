"""Score calculation for the gauss, linear and exp decay functions.

All three curves score 1.0 within ``offset`` of the origin and exactly ``decay`` at
``offset + scale`` from it. Invalid parameters score 0 instead of raising.
"""

import logging
import math
from typing import Any, Callable, Dict, Mapping, Optional, Union

from function_score_simulator.functions.schemas import (
    DecayFunction,
    DecayKind,
    parse_decay_definition,
    parse_function_definition,
)

logger = logging.getLogger(__name__)


def _finite_or_zero(value: float) -> float:
    return value if math.isfinite(value) else 0


def _exp(exponent: float) -> float:
    try:
        return math.exp(exponent)
    except OverflowError:
        return math.inf


def calculate_gauss_decay(distance: float, scale: float, decay: float) -> float:
    """Gaussian decay: exp(-0.5 * (distance / sigma)^2), sigma = scale / sqrt(-2 * ln(decay)).

    Args:
        distance (float): Distance from the origin beyond the offset.
        scale (float): Distance at which the score equals ``decay``.
        decay (float): Score at ``scale``; must be in (0, 1).

    Returns:
        float: Score in [0, 1], or 0 for invalid parameters.
    """
    if scale <= 0 or decay <= 0 or decay >= 1:
        return 0

    sigma = scale / math.sqrt(-2 * math.log(decay))
    ratio = distance / sigma
    return _finite_or_zero(_exp(-0.5 * ratio * ratio))


def calculate_linear_decay(distance: float, scale: float, decay: float) -> float:
    """Linear decay: max(0, (scale - distance) / scale * (1 - decay) + decay).

    Args:
        distance (float): Distance from the origin beyond the offset.
        scale (float): Distance at which the score equals ``decay``.
        decay (float): Score at ``scale``.

    Returns:
        float: Score floored at 0, or 0 for a non-positive scale.
    """
    if scale <= 0:
        return 0

    return _finite_or_zero(max(0, (scale - distance) / scale * (1 - decay) + decay))


def calculate_exp_decay(distance: float, scale: float, decay: float) -> float:
    """Exponential decay: exp(ln(decay) * distance / scale).

    Args:
        distance (float): Distance from the origin beyond the offset.
        scale (float): Distance at which the score equals ``decay``.
        decay (float): Score at ``scale``; must be positive.

    Returns:
        float: Score, or 0 for invalid parameters.
    """
    if scale <= 0 or decay <= 0:
        return 0

    return _finite_or_zero(_exp(math.log(decay) * distance / scale))


DECAY_CURVES: Dict[DecayKind, Callable[[float, float, float], float]] = {
    DecayKind.GAUSS: calculate_gauss_decay,
    DecayKind.LINEAR: calculate_linear_decay,
    DecayKind.EXP: calculate_exp_decay,
}


def _to_decay_function(function: Any, kind: DecayKind) -> Optional[DecayFunction]:
    if isinstance(function, Mapping):
        definition = parse_decay_definition(function, kind)
    else:
        definition = parse_function_definition(function)

    if not isinstance(definition, DecayFunction) or definition.kind is not kind:
        return None
    return definition


def calculate_decay_score(
    function: Union[DecayFunction, Mapping[str, Any]],
    field_value: Optional[float],
    decay_type: Union[DecayKind, str],
) -> float:
    """Calculates the score of a decay function for one field value.

    Only the first field under the decay key is read. ``scale`` and ``offset`` may be
    Elasticsearch durations ("30d"), which are converted to milliseconds so the same
    calculation serves numeric and date fields.

    Args:
        function: The typed definition, or the raw ``{"gauss": {"field": {...}}}`` mapping.
        field_value: The field value (a millisecond timestamp for date fields). None means
            the document has no value for the field, which Elasticsearch scores as 1.
        decay_type: gauss, linear or exp.

    Returns:
        float: The weighted score. Always finite.
    """
    try:
        kind = DecayKind(decay_type)
    except ValueError:
        logger.debug("Unknown decay type %r", decay_type)
        return 0

    definition = _to_decay_function(function, kind)
    if definition is None or definition.params is None:
        return 0

    if field_value is None:
        return definition.weight * 1.0

    params = definition.params
    origin = params.resolve_origin()
    if origin is None:
        logger.debug("Origin %r of %s function is not numeric", params.origin, kind.value)
        return 0

    scale = params.resolve_scale()
    offset = params.resolve_offset()

    distance = abs(field_value - origin)
    if distance <= offset:
        return definition.weight * 1.0

    score = DECAY_CURVES[kind](distance - offset, scale, params.decay)
    return _finite_or_zero(definition.weight * score)
