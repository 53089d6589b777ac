"""
NeuroDx — Configuration
=======================
Clinical constants shared by the engine and any presentation layer, plus
runtime settings loaded from the project-level .env file.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# ── Paths ───────────────────────────────────────────────────────────────
PROJECT_ROOT = Path(__file__).resolve().parent.parent          # repo root

# ── Load .env ───────────────────────────────────────────────────────────
load_dotenv(PROJECT_ROOT / ".env")

LOG_LEVEL: str = os.getenv("NEURODX_LOG_LEVEL", "INFO")
LOG_FILE: str = os.getenv("NEURODX_LOG_FILE", "")              # optional, empty = console only

# ── Clinical constants (fixed, not environment-overridable) ─────────────
ANISO_THRESHOLD_MM = 0.5    # anisocoria must reach this to call a light/dark pattern
MAX_DIFFERENTIAL = 8        # ranked list is truncated to this many entries
RELIABILITY_PENALTY = -2    # applied by every VF rule when reliability is "poor"
