"""
Configuration constants for the BFS routing core.

All tunable parameters are defined here. Values can be overridden through
environment variables or a project-root .env file.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# =============================================================================
# Path Configuration
# =============================================================================

# Project root is parent of src/
PROJECT_ROOT = Path(__file__).parent.parent

# Optional overrides for everything below
ENV_FILE = PROJECT_ROOT / ".env"

load_dotenv(ENV_FILE)

# =============================================================================
# Search Configuration
# =============================================================================

# Pause between traversal events when a caller animates the search.
# 0.5s is slow enough to follow each step by eye.
STEP_DELAY_SECONDS = float(os.environ.get("BFS_STEP_DELAY", "0.5"))

# Upper bound for a client-requested delay on the HTTP event stream
STREAM_MAX_DELAY_SECONDS = 5.0

# =============================================================================
# Demo Graph Configuration
# =============================================================================

DEFAULT_NODE_LABELS = ("A", "B", "C", "D", "E", "F")

DEFAULT_EDGES = (
    ("A", "B"),
    ("A", "C"),
    ("B", "D"),
    ("C", "E"),
    ("D", "F"),
)

# =============================================================================
# HTTP Adapter Configuration
# =============================================================================

API_HOST = os.environ.get("BFS_API_HOST", "127.0.0.1")
API_PORT = int(os.environ.get("PORT", 7860))

# =============================================================================
# Logging Configuration
# =============================================================================

# Log level (DEBUG, INFO, WARNING, ERROR)
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"
