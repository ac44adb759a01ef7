"""
Runtime configuration.

Everything is read from environment variables once, at import time.
The defaults are meant for local development: a ./data directory next
to wherever the server is started, and a development signing key.
Set STAFFING_JWT_SECRET in any real deployment.
"""

import os

VERSION = "0.1.0"

# Directory holding one <collection>.json file per resource type.
DATA_DIR = os.getenv("DATA_DIR", "data")

# ---------------------------------------------------------------------------
# Bearer tokens
# ---------------------------------------------------------------------------

DEFAULT_JWT_SECRET = "staffing-api-development-signing-key-change-me"

JWT_SECRET = os.getenv("STAFFING_JWT_SECRET", DEFAULT_JWT_SECRET)
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRES_SECONDS = int(os.getenv("JWT_EXPIRES_SECONDS", "3600"))

# ---------------------------------------------------------------------------
# HTTP server
# ---------------------------------------------------------------------------

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Comma-separated list; "*" allows any origin.
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
