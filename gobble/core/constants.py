"""
Project constants definitions
"""

# ============================================================
# Transfer
# ============================================================

CHUNK_SIZE = 40960
UNKNOWN_LENGTH = -1

# ============================================================
# Target Resolution
# ============================================================

DEFAULT_SCHEME = "http"
FALLBACK_FILENAME = "index.html"

# ============================================================
# Progress Display
# ============================================================

PROGRESS_BAR_WIDTH = 25
PROGRESS_BAR_FIELD = 30
UNKNOWN_LENGTH_MARKER = "<=>"

# ============================================================
# Environment
# ============================================================

ENV_PREFIX = "GOBBLE_"
