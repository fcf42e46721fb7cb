"""Package initialization for function_score_simulator."""

from pathlib import Path

from dotenv import load_dotenv

# Load .env at package initialization
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
ENV_FILE_PATH = PROJECT_ROOT / ".env"

if ENV_FILE_PATH.exists():
    # Don't override existing env vars; values already exported by the shell or the
    # deployment platform take precedence over the local .env file.
    load_dotenv(ENV_FILE_PATH, override=False)
