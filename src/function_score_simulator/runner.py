"""Command line runner: simulates function_score functions and writes the score curves.

Usage:
    function-score-simulator --preset linear
    function-score-simulator --field-name created_at --data-type date \
        --min 2024-01-01 --max 2024-12-31 --preset gauss --format table
    function-score-simulator --functions-file functions.json --score-mode multiply --output curves.json
"""

import argparse
import json
import logging
import math
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from function_score_simulator.chart.series import build_chart_series, format_axis_tick
from function_score_simulator.config import settings
from function_score_simulator.custom_logging.log_context import setup_logging
from function_score_simulator.scoring.schemas import DataType, SimulationVariable
from function_score_simulator.scoring.score_mode import ScoreMode
from function_score_simulator.simulation.presets import DEFAULT_PRESET, PRESETS, get_preset
from function_score_simulator.simulation.simulator import SimulationResult, Simulator

logger = logging.getLogger(__name__)

DEFAULT_RANGES = {
    DataType.NUMERIC: ("0", "100"),
    DataType.DATE: ("2024-01-01", "2024-12-31"),
}


def build_parser() -> argparse.ArgumentParser:
    """Builds the command line parser."""
    parser = argparse.ArgumentParser(description="Simulate Elasticsearch function_score score curves")
    parser.add_argument("--field-name", default="popularity", help="Simulated field (default: popularity)")
    parser.add_argument(
        "--data-type",
        choices=[data_type.value for data_type in DataType],
        default=DataType.NUMERIC.value,
        help="Type of the simulated field (default: numeric)",
    )
    parser.add_argument("--min", dest="min_value", help="Lower bound: a number, or an ISO date for date fields")
    parser.add_argument("--max", dest="max_value", help="Upper bound: a number, or an ISO date for date fields")

    functions = parser.add_mutually_exclusive_group()
    functions.add_argument("--functions", help="The functions array as JSON text")
    functions.add_argument("--functions-file", type=Path, help="Path to a JSON file holding the functions array")
    functions.add_argument(
        "--preset",
        choices=list(PRESETS),
        help=f"Use a ready-made functions array (default: {DEFAULT_PRESET})",
    )

    parser.add_argument(
        "--score-mode",
        choices=[mode.value for mode in ScoreMode],
        default=settings.DEFAULT_SCORE_MODE,
        help=f"How several functions are combined (default: {settings.DEFAULT_SCORE_MODE})",
    )
    parser.add_argument(
        "--points",
        type=int,
        default=settings.DEFAULT_POINT_COUNT,
        help=f"Number of samples (default: {settings.DEFAULT_POINT_COUNT})",
    )
    parser.add_argument("--format", choices=["json", "table"], default="json", help="Output format (default: json)")
    parser.add_argument("--output", type=Path, help="Write to this file instead of stdout")
    return parser


def _json_number(value: Optional[float]) -> Optional[float]:
    if value is None or not math.isfinite(value):
        return None
    return value


def render_json(result: SimulationResult, field_name: str) -> str:
    """Renders the result as JSON; NaN values become null."""
    payload = {
        "field_name": field_name,
        "score_mode": result.score_mode.value,
        "function_count": result.function_count,
        "data_points": [
            {key: _json_number(value) for key, value in point.to_dict().items()} for point in result.data_points
        ],
    }
    return json.dumps(payload, indent=settings.JSON_INDENT)


def render_table(result: SimulationResult) -> str:
    """Renders the result as a plain text table, one row per sample."""
    series = build_chart_series(result.data_points, result.function_count, result.score_mode)
    header = ["x"] + [line.name for line in series]
    rows = [header]
    for index, point in enumerate(result.data_points):
        x_label = format_axis_tick(point.x) if math.isfinite(point.x) else "NaN"
        rows.append([x_label] + [f"{line.points[index][1]:.4f}" for line in series])

    widths = [max(len(row[column]) for row in rows) for column in range(len(header))]
    return "\n".join("  ".join(cell.rjust(width) for cell, width in zip(row, widths)) for row in rows)


def _load_functions_json(args: argparse.Namespace) -> str:
    if args.functions is not None:
        return args.functions
    if args.functions_file is not None:
        return args.functions_file.read_text(encoding="utf-8")
    return get_preset(args.preset or DEFAULT_PRESET)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the simulator runner."""
    setup_logging()
    args = build_parser().parse_args(argv)

    data_type = DataType(args.data_type)
    default_min, default_max = DEFAULT_RANGES[data_type]
    try:
        variable = SimulationVariable(
            field_name=args.field_name,
            data_type=data_type,
            min=args.min_value if args.min_value is not None else default_min,
            max=args.max_value if args.max_value is not None else default_max,
        )
    except ValidationError as e:
        logger.error(f"Invalid simulation variable: {e}")
        return 1

    try:
        functions_json = _load_functions_json(args)
    except OSError as e:
        logger.error(f"Could not read functions file: {e}")
        return 1

    result = Simulator(point_count=args.points).run(variable, functions_json, args.score_mode)
    if not result.ok:
        logger.error(f"Simulation aborted: {result.error}")
        return 1

    output = render_table(result) if args.format == "table" else render_json(result, variable.field_name)
    if args.output:
        args.output.write_text(output + "\n", encoding="utf-8")
        logger.info("Wrote %d data points to %s", len(result.data_points), args.output)
    else:
        sys.stdout.write(output + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
