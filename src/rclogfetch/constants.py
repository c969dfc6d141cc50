from __future__ import annotations

BASE_URL = "https://api.redislabs.com/v1"

# API resource per log kind
RESOURCES = {
    "system": "logs",
    "session": "session-logs",
}

DEFAULT_PAGE_SIZE = 100
MAX_PAGE_SIZE = 1000

DEFAULT_STATE_FILE = ".rc-log-fetch-state.yaml"
ENV_PREFIX = "RCLOGFETCH"
