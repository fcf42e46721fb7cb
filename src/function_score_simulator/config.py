"""Configuration settings for the function score simulator."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Order of priority for pydantic-settings:
#
# 1. Arguments to the Initializer (Highest Priority - rarely used):
#    e.g. Settings(DEFAULT_POINT_COUNT=50)
#
# 2. System Environment Variables:
#    Example: export DEFAULT_POINT_COUNT=200 before running the simulator.
#
# 3. .env File Values:
#    If the .env file exists at the project root it is read.
#    Example: DEFAULT_SCORE_MODE=multiply in .env will be used.
#
# 4. Default Values in the Class (Lowest Priority).

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
ENV_FILE_PATH = PROJECT_ROOT / ".env"


class Settings(BaseSettings):  # type: ignore
    """Configuration settings for the simulator."""

    model_config = SettingsConfigDict(
        # Only load .env if it exists (local dev)
        env_file=str(ENV_FILE_PATH) if ENV_FILE_PATH.exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # -- Sampling --
    # Number of samples taken between the variable's min and max.
    DEFAULT_POINT_COUNT: int = 100
    # One of: sum, multiply, avg, first, max, min
    DEFAULT_SCORE_MODE: str = "sum"

    # -- Output --
    JSON_INDENT: int = 2

    LOG_LEVEL: str = "INFO"


settings = Settings()
