import pytest
from pydantic import TypeAdapter

from function_score_simulator.functions.schemas import (
    DecayFunction,
    DecayKind,
    DecayParams,
    FieldValueFactorFunction,
    FieldValueFactorParams,
    FunctionDefinition,
    ModifierKind,
    UnknownFunction,
    parse_decay_definition,
    parse_function_definition,
)
from function_score_simulator.utils.date_utils import date_to_timestamp


class TestParseFunctionDefinition:
    def test_field_value_factor(self):
        definition = parse_function_definition(
            {"field_value_factor": {"field": "popularity", "factor": 1.2, "modifier": "sqrt"}, "weight": 2}
        )

        assert isinstance(definition, FieldValueFactorFunction)
        assert definition.params.field == "popularity"
        assert definition.params.factor == 1.2
        assert definition.params.modifier_kind is ModifierKind.SQRT
        assert definition.params.missing == 1
        assert definition.weight == 2

    @pytest.mark.parametrize("kind", list(DecayKind))
    def test_decay_kinds(self, kind):
        definition = parse_function_definition({kind.value: {"price": {"origin": 10, "scale": "2d"}}})

        assert isinstance(definition, DecayFunction)
        assert definition.kind is kind
        assert definition.field == "price"
        assert definition.params.origin == 10
        assert definition.params.scale == "2d"
        assert definition.params.offset == 0
        assert definition.params.decay == 0.5
        assert definition.weight == 1

    def test_field_value_factor_takes_priority(self):
        definition = parse_function_definition(
            {"exp": {"price": {"origin": 0, "scale": 1}}, "field_value_factor": {"field": "price"}}
        )
        assert isinstance(definition, FieldValueFactorFunction)

    def test_gauss_before_linear_before_exp(self):
        raw = {
            "exp": {"price": {"origin": 0, "scale": 1}},
            "linear": {"price": {"origin": 0, "scale": 1}},
            "gauss": {"price": {"origin": 0, "scale": 1}},
        }
        assert parse_function_definition(raw).kind is DecayKind.GAUSS
        del raw["gauss"]
        assert parse_function_definition(raw).kind is DecayKind.LINEAR

    @pytest.mark.parametrize("raw", [{}, {"weight": 2}, {"script_score": {}}, [], "gauss", None])
    def test_unknown(self, raw):
        assert isinstance(parse_function_definition(raw), UnknownFunction)

    def test_non_numeric_weight_is_unknown(self):
        definition = parse_function_definition({"field_value_factor": {"field": "p"}, "weight": "heavy"})
        assert isinstance(definition, UnknownFunction)
        assert "weight" in definition.reason

    @pytest.mark.parametrize("weight, expected", [("2", 2), (" 0.5 ", 0.5), (3, 3)])
    def test_numeric_weight_strings_are_coerced(self, weight, expected):
        definition = parse_function_definition({"field_value_factor": {"field": "p"}, "weight": weight})
        assert isinstance(definition, FieldValueFactorFunction)
        assert definition.weight == expected

    @pytest.mark.parametrize("weight", [True, "nan", "inf", [2]])
    def test_unusable_weight_is_unknown(self, weight):
        definition = parse_function_definition({"gauss": {"p": {"origin": 0, "scale": 1}}, "weight": weight})
        assert isinstance(definition, UnknownFunction)

    def test_non_string_field_and_modifier_are_kept_as_text(self):
        definition = parse_function_definition({"field_value_factor": {"field": 7, "modifier": 5}})
        assert isinstance(definition, FieldValueFactorFunction)
        assert definition.params.field == "7"
        assert definition.params.modifier == "5"
        assert definition.params.modifier_kind is None

    def test_null_field_is_accepted(self):
        definition = parse_function_definition({"field_value_factor": {"field": None, "factor": 2}})
        assert definition.params.field is None
        assert definition.params.factor == 2

    def test_dumped_definition_is_parsed_by_function_type(self):
        parsed = parse_function_definition({"exp": {"p": {"origin": 0, "scale": "1d"}}, "weight": 2})
        definition = parse_function_definition(parsed.model_dump())
        assert definition == parsed

    def test_invalid_dumped_definition_is_unknown(self):
        definition = parse_function_definition({"function_type": "decay", "kind": "cubic"})
        assert isinstance(definition, UnknownFunction)

    def test_null_values_fall_back_to_defaults(self):
        definition = parse_function_definition(
            {"field_value_factor": {"field": "p", "factor": None, "modifier": None, "missing": None}, "weight": None}
        )
        assert definition.params.factor == 1
        assert definition.params.modifier_kind is ModifierKind.NONE
        assert definition.params.missing == 1
        assert definition.weight == 1

    def test_null_decay_and_offset_fall_back_to_defaults(self):
        definition = parse_function_definition({"exp": {"p": {"origin": 0, "scale": 1, "decay": None, "offset": None}}})
        assert definition.params.decay == 0.5
        assert definition.params.offset == 0

    @pytest.mark.parametrize("raw_params", [5, {}, {"price": 3}, {"price": {"origin": 1}}])
    def test_decay_without_usable_parameters_keeps_kind(self, raw_params):
        definition = parse_function_definition({"linear": raw_params})
        assert isinstance(definition, DecayFunction)
        assert definition.kind is DecayKind.LINEAR
        assert definition.params is None

    def test_only_first_decay_field_is_kept(self):
        definition = parse_function_definition(
            {"gauss": {"price": {"origin": 1, "scale": 2}, "rating": {"origin": 3, "scale": 4}}}
        )
        assert definition.field == "price"
        assert definition.params.origin == 1

    def test_field_value_factor_with_non_object_parameters_is_unknown(self):
        assert isinstance(parse_function_definition({"field_value_factor": 3}), UnknownFunction)

    def test_typed_definition_is_returned_unchanged(self):
        definition = FieldValueFactorFunction(params=FieldValueFactorParams(field="p"))
        assert parse_function_definition(definition) is definition

    def test_unknown_modifier_is_kept(self):
        definition = parse_function_definition({"field_value_factor": {"field": "p", "modifier": "cube"}})
        assert definition.params.modifier == "cube"
        assert definition.params.modifier_kind is None


def test_parse_decay_definition_ignores_priority():
    raw = {"gauss": {"p": {"origin": 0, "scale": 1}}, "exp": {"p": {"origin": 5, "scale": 1}}}
    definition = parse_decay_definition(raw, "exp")
    assert definition.kind is DecayKind.EXP
    assert definition.params.origin == 5


def test_function_definition_is_discriminated_by_function_type():
    adapter = TypeAdapter(FunctionDefinition)
    definition = adapter.validate_python(
        {"function_type": "decay", "kind": "exp", "field": "p", "params": {"origin": 0, "scale": 1}}
    )
    assert isinstance(definition, DecayFunction)
    assert definition.kind is DecayKind.EXP


class TestDecayParamsResolution:
    def test_numeric_origin(self):
        assert DecayParams(origin=12.5, scale=1).resolve_origin() == 12.5

    def test_numeric_string_origin(self):
        assert DecayParams(origin="12.5", scale=1).resolve_origin() == 12.5

    def test_date_origin_becomes_timestamp(self):
        params = DecayParams(origin="2024-06-01T00:00:00Z", scale="30d")
        assert params.resolve_origin() == date_to_timestamp("2024-06-01T00:00:00Z")

    def test_leading_number_origin(self):
        assert DecayParams(origin="50km", scale=1).resolve_origin() == 50

    def test_unreadable_origin(self):
        assert DecayParams(origin="now", scale=1).resolve_origin() is None

    def test_durations_resolve_to_milliseconds(self):
        params = DecayParams(origin=0, scale="2h", offset="30m")
        assert params.resolve_scale() == 2 * 60 * 60 * 1000
        assert params.resolve_offset() == 30 * 60 * 1000
