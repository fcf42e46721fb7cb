"""Parses the JSON functions array supplied by the user into typed function definitions."""

import json
import logging
from typing import List

from function_score_simulator.functions.schemas import (
    FunctionDefinition,
    UnknownFunction,
    parse_function_definition,
)

logger = logging.getLogger(__name__)


class FunctionsParseError(Exception):
    """Custom exception for a functions array that cannot be parsed."""


def parse_functions_json(
    text: str,
) -> List[FunctionDefinition]:
    """Parses a function_score ``functions`` array written as JSON.

    Args:
        text (str): JSON text, e.g. ``[{"field_value_factor": {"field": "popularity"}}]``.

    Returns:
        List of typed function definitions, in order.

    Raises:
        FunctionsParseError: If the text is not valid JSON, is not an array, or contains
            something other than objects.
    """
    try:
        raw_functions = json.loads(text)
    except json.JSONDecodeError as e:
        raise FunctionsParseError(f"Invalid JSON: {e}") from e

    if not isinstance(raw_functions, list):
        raise FunctionsParseError(f"Expected a JSON array of functions, got {type(raw_functions).__name__}")

    definitions = []
    for index, raw in enumerate(raw_functions):
        if not isinstance(raw, dict):
            raise FunctionsParseError(f"Function {index} must be a JSON object, got {type(raw).__name__}")
        definition = parse_function_definition(raw)
        if isinstance(definition, UnknownFunction):
            logger.warning("Function %d will score 0: %s", index, definition.reason)
        definitions.append(definition)

    logger.debug("Parsed %d function(s)", len(definitions))
    return definitions
