import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
# Find .env file in project root (parent of scoring/)
project_root = Path(__file__).parent.parent
load_dotenv(project_root / '.env')

OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")

ENRICHMENT_MODEL = os.getenv("SCORING_ENRICHMENT_MODEL", "gpt-4o-mini")

# Enrichment must stay bounded: keep the timeout within 10-30 seconds
_timeout = os.getenv("SCORING_ENRICHMENT_TIMEOUT")
try:
    ENRICHMENT_TIMEOUT = float(_timeout) if _timeout else 15.0
except ValueError:
    ENRICHMENT_TIMEOUT = 15.0
ENRICHMENT_TIMEOUT = min(max(ENRICHMENT_TIMEOUT, 10.0), 30.0)

# Handle SCORING_TABLES_DIR - convert relative path to absolute
_tables_dir = os.getenv("SCORING_TABLES_DIR")
if _tables_dir:
    tables_path = Path(_tables_dir)
    if not tables_path.is_absolute():
        # Convert relative path to absolute from project root
        tables_path = project_root / _tables_dir
    TABLES_DIR = tables_path.resolve()
else:
    # Fallback: tables shipped with the package
    TABLES_DIR = Path(__file__).parent / "tables" / "data"

LOG_LEVEL = os.getenv("SCORING_LOG_LEVEL", "INFO").upper()

ANALYZER_VERSION = "3.0"
