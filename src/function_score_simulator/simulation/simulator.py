"""Runs a simulation from user input: variable, functions JSON and score mode."""

import logging
from typing import List, Optional, Union

from pydantic import BaseModel, Field

from function_score_simulator.config import settings
from function_score_simulator.custom_logging.log_context import simulation_field_context
from function_score_simulator.scoring.calculator import generate_data_points
from function_score_simulator.scoring.schemas import DataPoint, SimulationVariable
from function_score_simulator.scoring.score_mode import ScoreMode, resolve_score_mode
from function_score_simulator.simulation.functions_loader import FunctionsParseError, parse_functions_json

logger = logging.getLogger(__name__)


class SimulationResult(BaseModel):
    """Outcome of one simulation run.

    ``error`` holds a user-facing message when the functions could not be parsed; the
    data points are empty in that case.
    """

    data_points: List[DataPoint] = Field(default_factory=list)
    function_count: int = 0
    score_mode: ScoreMode = ScoreMode.SUM
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        """True if the functions were parsed."""
        return self.error is None


class Simulator:
    """Turns raw user input into score curves."""

    def __init__(self, point_count: Optional[int] = None):
        """Initializes the simulator.

        Args:
            point_count: Samples per curve; defaults to settings.DEFAULT_POINT_COUNT.
        """
        self.point_count = settings.DEFAULT_POINT_COUNT if point_count is None else point_count

    def run(
        self,
        variable: SimulationVariable,
        functions_json: str,
        score_mode: Union[ScoreMode, str, None] = None,
    ) -> SimulationResult:
        """Parses the functions and generates the data points.

        Args:
            variable: The simulated field and its range.
            functions_json: The function_score ``functions`` array as JSON text.
            score_mode: How to combine several functions; defaults to settings.DEFAULT_SCORE_MODE.

        Returns:
            SimulationResult: The data points, or an error message if the JSON is invalid.
        """
        mode = resolve_score_mode(settings.DEFAULT_SCORE_MODE if score_mode is None else score_mode)
        simulation_field_context.set(variable.field_name)
        logger.info("Starting simulation")

        try:
            functions = parse_functions_json(functions_json)
        except FunctionsParseError as e:
            logger.error(f"Could not parse functions: {e}")
            return SimulationResult(score_mode=mode, error=str(e))
        else:
            if not functions:
                logger.warning("No functions supplied. Nothing to simulate.")
                return SimulationResult(score_mode=mode)

            data_points = generate_data_points(variable, functions, mode, self.point_count)
            logger.info("Generated %d data points for %d function(s)", len(data_points), len(functions))
            return SimulationResult(data_points=data_points, function_count=len(functions), score_mode=mode)
        finally:
            simulation_field_context.set(None)
