import pytest

from function_score_simulator.functions.schemas import DecayFunction, FieldValueFactorFunction, UnknownFunction
from function_score_simulator.simulation.functions_loader import FunctionsParseError, parse_functions_json


def test_parses_array_in_order():
    definitions = parse_functions_json(
        '[{"field_value_factor": {"field": "p"}}, {"exp": {"p": {"origin": 0, "scale": 1}}}]'
    )

    assert len(definitions) == 2
    assert isinstance(definitions[0], FieldValueFactorFunction)
    assert isinstance(definitions[1], DecayFunction)


def test_empty_array():
    assert parse_functions_json("[]") == []


def test_unknown_functions_are_kept_and_logged(caplog):
    with caplog.at_level("WARNING"):
        definitions = parse_functions_json('[{"random_score": {}}]')

    assert isinstance(definitions[0], UnknownFunction)
    assert "Function 0 will score 0" in caplog.text


@pytest.mark.parametrize(
    "text, message",
    [
        ("[{", "Invalid JSON"),
        ("", "Invalid JSON"),
        ('{"field_value_factor": {"field": "p"}}', "Expected a JSON array"),
        ("[1, 2]", "Function 0 must be a JSON object"),
        ('[{"exp": {}}, "gauss"]', "Function 1 must be a JSON object"),
    ],
)
def test_invalid_input_raises(text, message):
    with pytest.raises(FunctionsParseError, match=message):
        parse_functions_json(text)
