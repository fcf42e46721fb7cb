"""Converts data points into one plottable line per function for a chart renderer."""

from decimal import ROUND_HALF_UP, Decimal
from typing import List, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict

from function_score_simulator.scoring.schemas import COMBINED_KEY, FUNCTION_KEY_PREFIX, DataPoint
from function_score_simulator.scoring.score_mode import ScoreMode, resolve_score_mode

LINE_COLORS = [
    "#8884d8",
    "#82ca9d",
    "#ffc658",
    "#ff7c7c",
    "#a28bd4",
    "#f48fb1",
    "#81c784",
    "#64b5f6",
]
COMBINED_COLOR = "#333333"


class ChartSeries(BaseModel):
    """A single line of the score chart."""

    model_config = ConfigDict(frozen=True)

    key: str
    name: str
    color: str
    points: List[Tuple[float, float]]


def build_chart_series(
    data_points: Sequence[DataPoint],
    function_count: int,
    score_mode: Union[ScoreMode, str, None] = None,
) -> List[ChartSeries]:
    """Builds one series per function, plus the combined series when present.

    Args:
        data_points: Output of generate_data_points.
        function_count: Number of functions that were simulated.
        score_mode: Used to label the combined series.

    Returns:
        List[ChartSeries]: Function series in definition order, then the combined series.
    """
    series = []
    for index in range(function_count):
        series.append(
            ChartSeries(
                key=f"{FUNCTION_KEY_PREFIX}{index}",
                name=f"Function {index + 1}",
                color=LINE_COLORS[index % len(LINE_COLORS)],
                points=[(point.x, point.scores[index]) for point in data_points],
            )
        )

    if data_points and all(point.combined is not None for point in data_points):
        mode = resolve_score_mode(score_mode).value
        series.append(
            ChartSeries(
                key=COMBINED_KEY,
                name=f"Combined ({mode})",
                color=COMBINED_COLOR,
                points=[(point.x, point.combined) for point in data_points],
            )
        )

    return series


def format_axis_tick(value: float) -> str:
    """Formats an X axis tick: exponential notation from one million upwards.

    Whole numbers are rounded half away from zero, so 2.5 is shown as "3".

    Args:
        value (float): The tick value.

    Returns:
        str: e.g. "1.00e+06" or "42".
    """
    if abs(value) >= 1_000_000:
        return f"{value:.2e}"
    return str(Decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))
