"""Combination of several function scores into one, following function_score's score_mode."""

import logging
import math
from enum import Enum
from typing import Sequence, Union

logger = logging.getLogger(__name__)


class ScoreMode(str, Enum):
    """How the scores of several functions are combined."""

    SUM = "sum"
    MULTIPLY = "multiply"
    AVG = "avg"
    FIRST = "first"
    MAX = "max"
    MIN = "min"


def resolve_score_mode(mode: Union[ScoreMode, str, None]) -> ScoreMode:
    """Converts a score mode name to a ScoreMode, falling back to sum.

    Args:
        mode: The score mode or its name.

    Returns:
        ScoreMode: The matching mode, or ScoreMode.SUM if the name is not recognised.
    """
    if mode is None:
        return ScoreMode.SUM
    try:
        return ScoreMode(mode)
    except ValueError:
        logger.warning("Unknown score_mode %r, using sum", mode)
        return ScoreMode.SUM


def combine_scores(scores: Sequence[float], mode: Union[ScoreMode, str, None] = ScoreMode.SUM) -> float:
    """Combines the scores of all functions at one sample point.

    Args:
        scores: One score per function, in definition order.
        mode: The score_mode; unrecognised modes combine as sum.

    Returns:
        float: The combined score, or 0 when there are no scores.
    """
    if not scores:
        return 0

    score_mode = resolve_score_mode(mode)
    if score_mode is ScoreMode.MULTIPLY:
        return math.prod(scores)
    if score_mode is ScoreMode.AVG:
        return sum(scores) / len(scores)
    if score_mode is ScoreMode.FIRST:
        return scores[0]
    if score_mode is ScoreMode.MAX:
        return max(scores)
    if score_mode is ScoreMode.MIN:
        return min(scores)
    return sum(scores)
