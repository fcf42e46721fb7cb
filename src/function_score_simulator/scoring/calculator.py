"""Generates the score curves of a set of function_score functions over a field's range."""

import logging
import math
from typing import Any, List, Mapping, Optional, Sequence, Union

from function_score_simulator.config import settings
from function_score_simulator.functions.decay import calculate_decay_score
from function_score_simulator.functions.field_value_factor import calculate_field_value_factor
from function_score_simulator.functions.schemas import (
    DecayFunction,
    FieldValueFactorFunction,
    parse_function_definition,
)
from function_score_simulator.scoring.schemas import DataPoint, SimulationVariable
from function_score_simulator.scoring.score_mode import ScoreMode, combine_scores, resolve_score_mode

logger = logging.getLogger(__name__)


def calculate_function_score(function: Any, field_value: Optional[float]) -> float:
    """Calculates the score of a single function for one field value.

    Args:
        function: A typed function definition or a raw function_score function mapping.
        field_value: The field value.

    Returns:
        float: The function's score, or 0 if the function type is not recognised.
    """
    definition = parse_function_definition(function)

    if isinstance(definition, FieldValueFactorFunction):
        return calculate_field_value_factor(definition, field_value)
    if isinstance(definition, DecayFunction):
        return calculate_decay_score(definition, field_value, definition.kind)

    return 0


def generate_data_points(
    variable: Union[SimulationVariable, Mapping[str, Any]],
    functions: Sequence[Any],
    score_mode: Union[ScoreMode, str] = ScoreMode.SUM,
    point_count: Optional[int] = None,
) -> List[DataPoint]:
    """Samples every function over the variable's range.

    The range is split into ``point_count`` evenly spaced samples, min and max included. With
    two or more functions each point also carries the score_mode combination.
    ``point_count == 1`` divides the range by zero and gives a single point with x = NaN.

    Args:
        variable: The simulated field and its range, typed or as a raw mapping.
        functions: Typed or raw function definitions.
        score_mode: How to combine the scores of several functions.
        point_count: Number of samples; defaults to settings.DEFAULT_POINT_COUNT.

    Returns:
        List[DataPoint]: One DataPoint per sample.
    """
    if point_count is None:
        point_count = settings.DEFAULT_POINT_COUNT
    if not isinstance(variable, SimulationVariable):
        variable = SimulationVariable.model_validate(variable)
    min_value, max_value = variable.resolve_range()
    definitions = [parse_function_definition(function) for function in functions]
    mode = resolve_score_mode(score_mode)

    step = (max_value - min_value) / (point_count - 1) if point_count != 1 else math.inf

    logger.debug(
        "Sampling %d points of %s in [%s, %s] for %d function(s)",
        point_count,
        variable.field_name,
        min_value,
        max_value,
        len(definitions),
    )

    data_points = []
    for i in range(point_count):
        x_value = min_value + step * i
        scores = [calculate_function_score(definition, x_value) for definition in definitions]
        combined = combine_scores(scores, mode) if len(scores) >= 2 else None
        data_points.append(DataPoint(x=x_value, scores=scores, combined=combined))

    return data_points
