"""Ready-made function arrays covering each supported function type."""

from typing import Dict

PRESETS: Dict[str, str] = {
    "field_value_factor": """[
  {
    "field_value_factor": {
      "field": "popularity",
      "factor": 1.2,
      "modifier": "sqrt"
    },
    "weight": 1
  }
]""",
    "gauss": """[
  {
    "gauss": {
      "created_at": {
        "origin": "2024-06-01",
        "scale": "30d",
        "offset": "5d",
        "decay": 0.5
      }
    },
    "weight": 1
  }
]""",
    "linear": """[
  {
    "linear": {
      "popularity": {
        "origin": 50,
        "scale": 20,
        "offset": 0,
        "decay": 0.5
      }
    },
    "weight": 1
  }
]""",
    "exp": """[
  {
    "exp": {
      "popularity": {
        "origin": 100,
        "scale": 10,
        "offset": 0,
        "decay": 0.5
      }
    },
    "weight": 1
  }
]""",
    "multi": """[
  {
    "field_value_factor": {
      "field": "popularity",
      "factor": 1.2,
      "modifier": "log1p"
    },
    "weight": 2
  },
  {
    "gauss": {
      "created_at": {
        "origin": "2024-06-01",
        "scale": "30d",
        "decay": 0.5
      }
    },
    "weight": 1
  }
]""",
}

DEFAULT_PRESET = "field_value_factor"


def get_preset(name: str) -> str:
    """Returns the JSON text of a preset.

    Raises:
        KeyError: If there is no preset with that name.
    """
    try:
        return PRESETS[name]
    except KeyError:
        raise KeyError(f"Unknown preset '{name}'. Available presets: {', '.join(PRESETS)}") from None
