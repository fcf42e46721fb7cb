"""Pydantic schemas for function_score function definitions.

Elasticsearch identifies a function by the key it is written under
(``{"gauss": {...}, "weight": 2}``). The raw mapping is parsed once into one of
the tagged models below so the evaluators never have to test key presence.
"""

import logging
import math
from enum import Enum
from typing import Annotated, Any, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from function_score_simulator.utils.date_utils import (
    DateParseError,
    date_to_timestamp,
    parse_duration,
    parse_leading_number,
)

logger = logging.getLogger(__name__)

FIELD_VALUE_FACTOR_KEY = "field_value_factor"
DEFAULT_DECAY = 0.5


class ModifierKind(str, Enum):
    """Modifiers supported by field_value_factor."""

    NONE = "none"
    LOG = "log"
    LOG1P = "log1p"
    LOG2P = "log2p"
    LN = "ln"
    LN1P = "ln1p"
    LN2P = "ln2p"
    SQUARE = "square"
    SQRT = "sqrt"
    RECIPROCAL = "reciprocal"


class DecayKind(str, Enum):
    """Decay curve shapes, in the order they are looked up in a raw definition."""

    GAUSS = "gauss"
    LINEAR = "linear"
    EXP = "exp"


class FieldValueFactorParams(BaseModel):
    """Parameters of a field_value_factor function."""

    model_config = ConfigDict(frozen=True)

    # Informational only; the simulated value is supplied by the caller.
    field: Optional[str] = None
    factor: float = 1
    # Kept as a plain string so an unrecognised modifier can still be evaluated as "none".
    modifier: str = ModifierKind.NONE.value
    missing: float = 1

    @field_validator("field", mode="before")
    @classmethod
    def field_to_string(cls, v: Any) -> Any:
        return None if v is None else str(v)

    @field_validator("factor", "missing", mode="before")
    @classmethod
    def null_means_one(cls, v: Any) -> Any:
        """An explicit null falls back to the Elasticsearch default of 1."""
        return 1 if v is None else v

    @field_validator("modifier", mode="before")
    @classmethod
    def modifier_to_string(cls, v: Any) -> Any:
        """Accepts ModifierKind members and any other value as text; null means "none"."""
        if v is None:
            return ModifierKind.NONE.value
        if isinstance(v, ModifierKind):
            return v.value
        return v if isinstance(v, str) else str(v)

    @property
    def modifier_kind(self) -> Optional[ModifierKind]:
        """The modifier as an enum member, or None if it is not one Elasticsearch knows."""
        try:
            return ModifierKind(self.modifier)
        except ValueError:
            return None


class DecayParams(BaseModel):
    """Origin, scale, offset and decay of one decayed field."""

    model_config = ConfigDict(frozen=True)

    origin: Union[float, str]
    scale: Union[float, str]
    offset: Union[float, str] = 0
    decay: float = DEFAULT_DECAY

    @field_validator("decay", mode="before")
    @classmethod
    def null_decay_means_default(cls, v: Any) -> Any:
        """An explicit null decay falls back to 0.5."""
        return DEFAULT_DECAY if v is None else v

    @field_validator("offset", mode="before")
    @classmethod
    def null_offset_means_zero(cls, v: Any) -> Any:
        """An explicit null offset means no plateau."""
        return 0 if v is None else v

    def resolve_origin(self) -> Optional[float]:
        """Converts the origin to the numeric scale of the swept field.

        Numeric strings are read as floats, ISO-8601 dates as millisecond timestamps and
        anything else by its leading number.

        Returns:
            Optional[float]: The origin, or None if it cannot be read as a number.
        """
        if not isinstance(self.origin, str):
            return self.origin

        try:
            value = float(self.origin)
            if math.isfinite(value):
                return value
        except ValueError:
            pass

        try:
            return float(date_to_timestamp(self.origin))
        except DateParseError:
            pass

        return parse_leading_number(self.origin)

    def resolve_scale(self) -> float:
        """Scale in the field's units (durations are converted to milliseconds)."""
        return parse_duration(self.scale)

    def resolve_offset(self) -> float:
        """Offset in the field's units (durations are converted to milliseconds)."""
        return parse_duration(self.offset)


class FieldValueFactorFunction(BaseModel):
    """A field_value_factor function."""

    model_config = ConfigDict(frozen=True)

    function_type: Literal["field_value_factor"] = "field_value_factor"
    params: FieldValueFactorParams
    weight: float = 1


class DecayFunction(BaseModel):
    """A gauss, linear or exp decay function.

    ``params`` is None when the definition had the decay key but no usable parameter
    object under it; such a function always scores 0.
    """

    model_config = ConfigDict(frozen=True)

    function_type: Literal["decay"] = "decay"
    kind: DecayKind
    field: Optional[str] = None
    params: Optional[DecayParams] = None
    weight: float = 1


class UnknownFunction(BaseModel):
    """A definition without a recognised function key. Always scores 0."""

    model_config = ConfigDict(frozen=True)

    function_type: Literal["unknown"] = "unknown"
    reason: str = "no recognised function key"


FunctionDefinition = Annotated[
    Union[FieldValueFactorFunction, DecayFunction, UnknownFunction],
    Field(discriminator="function_type"),
]

TYPED_DEFINITIONS = (FieldValueFactorFunction, DecayFunction, UnknownFunction)
FUNCTION_TYPE_KEY = "function_type"

function_definition_adapter = TypeAdapter(FunctionDefinition)


def _parse_weight(raw: Mapping[str, Any]) -> float:
    weight = raw.get("weight")
    if weight is None:
        return 1
    if isinstance(weight, bool) or not isinstance(weight, (int, float, str)):
        raise ValueError(f"weight must be a number, got {weight!r}")
    try:
        value = float(weight)
    except ValueError as e:
        raise ValueError(f"weight must be a number, got {weight!r}") from e
    if not math.isfinite(value):
        raise ValueError(f"weight must be finite, got {weight!r}")
    return value


def _parse_field_value_factor(raw_params: Any, weight: float) -> Union[FieldValueFactorFunction, UnknownFunction]:
    if not isinstance(raw_params, Mapping):
        return UnknownFunction(reason="field_value_factor parameters are not an object")
    try:
        params = FieldValueFactorParams.model_validate(dict(raw_params))
    except ValidationError as e:
        logger.warning("Invalid field_value_factor parameters: %s", e)
        return UnknownFunction(reason="invalid field_value_factor parameters")
    return FieldValueFactorFunction(params=params, weight=weight)


def _parse_decay(kind: DecayKind, raw_fields: Any, weight: float) -> DecayFunction:
    if not isinstance(raw_fields, Mapping) or not raw_fields:
        logger.debug("%s has no field parameters", kind.value)
        return DecayFunction(kind=kind, weight=weight)

    field_names = list(raw_fields)
    field_name = field_names[0]
    if len(field_names) > 1:
        logger.debug("%s: only '%s' is simulated, ignoring %s", kind.value, field_name, field_names[1:])

    raw_params = raw_fields[field_name]
    if not isinstance(raw_params, Mapping):
        return DecayFunction(kind=kind, field=str(field_name), weight=weight)

    try:
        params = DecayParams.model_validate(dict(raw_params))
    except ValidationError as e:
        logger.warning("Invalid %s parameters for field '%s': %s", kind.value, field_name, e)
        return DecayFunction(kind=kind, field=str(field_name), weight=weight)

    return DecayFunction(kind=kind, field=str(field_name), params=params, weight=weight)


def parse_decay_definition(
    raw: Mapping[str, Any], kind: Union[DecayKind, str]
) -> Union[DecayFunction, UnknownFunction]:
    """Reads the decay function of a given kind from a raw definition.

    Unlike parse_function_definition this ignores key priority, so
    ``{"gauss": ..., "exp": ...}`` can be read as either curve.

    Args:
        raw: The raw function mapping.
        kind: The decay curve to read.

    Returns:
        The DecayFunction (with ``params`` None if the kind's parameters are missing), or an
        UnknownFunction if the weight is unusable.
    """
    kind = DecayKind(kind)
    try:
        weight = _parse_weight(raw)
    except ValueError as e:
        logger.warning("Ignoring %s function with invalid weight: %s", kind.value, e)
        return UnknownFunction(reason=str(e))
    return _parse_decay(kind, raw.get(kind.value), weight)


def parse_function_definition(raw: Any) -> FunctionDefinition:
    """Parses a raw function_score function into its typed form.

    Keys are checked in the order field_value_factor, gauss, linear, exp; the first one
    present decides the function type. A mapping carrying ``function_type`` is a dumped
    typed definition and is validated against the tagged models instead.

    Args:
        raw: A mapping as found in a function_score ``functions`` array, or an already
            parsed definition (returned unchanged).

    Returns:
        The typed definition. Unusable input becomes an UnknownFunction, never an error.
    """
    if isinstance(raw, TYPED_DEFINITIONS):
        return raw
    if not isinstance(raw, Mapping):
        return UnknownFunction(reason=f"definition is not an object: {type(raw).__name__}")

    if FUNCTION_TYPE_KEY in raw:
        try:
            return function_definition_adapter.validate_python(dict(raw))
        except ValidationError as e:
            logger.warning("Invalid typed function definition: %s", e)
            return UnknownFunction(reason="invalid typed function definition")

    try:
        weight = _parse_weight(raw)
    except ValueError as e:
        logger.warning("Ignoring function with invalid weight: %s", e)
        return UnknownFunction(reason=str(e))

    if FIELD_VALUE_FACTOR_KEY in raw:
        return _parse_field_value_factor(raw[FIELD_VALUE_FACTOR_KEY], weight)

    for kind in DecayKind:
        if kind.value in raw:
            return _parse_decay(kind, raw[kind.value], weight)

    return UnknownFunction()
