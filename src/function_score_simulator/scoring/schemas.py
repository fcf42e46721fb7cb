"""Pydantic schemas for the simulated variable and the generated data points."""

from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from function_score_simulator.utils.date_utils import DateParseError, date_to_timestamp

FUNCTION_KEY_PREFIX = "function"
COMBINED_KEY = "combined"


class DataType(str, Enum):
    """Type of the simulated field."""

    NUMERIC = "numeric"
    DATE = "date"


def _to_number(value: Union[float, str]) -> float:
    if isinstance(value, str):
        return float(value)
    return value


class SimulationVariable(BaseModel):
    """The field swept along the X axis.

    ``min`` and ``max`` are numbers for numeric fields and ISO-8601 strings for date fields.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    field_name: str = Field(alias="fieldName")
    data_type: DataType = Field(default=DataType.NUMERIC, alias="dataType")
    min: Union[float, str]
    max: Union[float, str]

    @model_validator(mode="after")
    def check_range_is_convertible(self) -> "SimulationVariable":
        """Ensures both bounds can be placed on a common numeric scale."""
        try:
            self.resolve_range()
        except DateParseError as e:
            raise ValueError(f"{self.field_name}: date bounds must be ISO-8601 strings ({e})") from e
        except (TypeError, ValueError) as e:
            raise ValueError(f"{self.field_name}: numeric bounds must be numbers ({e})") from e
        return self

    def resolve_range(self) -> Tuple[float, float]:
        """Returns (min, max) as numbers; dates become millisecond timestamps.

        Returns:
            Tuple[float, float]: The sampled range.
        """
        if self.data_type is DataType.DATE:
            return float(date_to_timestamp(str(self.min))), float(date_to_timestamp(str(self.max)))
        return _to_number(self.min), _to_number(self.max)


class DataPoint(BaseModel):
    """One sample of the score curves.

    Supports the flat chart form through item access: ``point["x"]``,
    ``point["function0"]`` and, when several functions were combined, ``point["combined"]``.
    """

    model_config = ConfigDict(frozen=True)

    x: float
    scores: List[float] = Field(default_factory=list)
    combined: Optional[float] = None

    def _flat_items(self) -> Iterator[Tuple[str, float]]:
        yield "x", self.x
        for index, score in enumerate(self.scores):
            yield f"{FUNCTION_KEY_PREFIX}{index}", score
        if self.combined is not None:
            yield COMBINED_KEY, self.combined

    def to_dict(self) -> Dict[str, float]:
        """Convert to the flat ``{x, function0, ..., combined}`` form used by the chart."""
        return dict(self._flat_items())

    def __getitem__(self, key: str) -> float:
        for name, value in self._flat_items():
            if name == key:
                return value
        raise KeyError(key)

    def __contains__(self, key: Any) -> bool:
        return any(name == key for name, _ in self._flat_items())
