"""Configuration constants for the decoder service."""
import logging
import os

logger = logging.getLogger(__name__)

# Server settings
DEFAULT_HOST = "0.0.0.0"
BASE_PORT = 8000

# Logging level name for the service (DEBUG shows per-clause decoder output)
LOG_LEVEL = os.environ.get("KCDB_LOG_LEVEL", "INFO").upper()

# Largest footprint document accepted over HTTP
MAX_DOCUMENT_BYTES = 4 * 1024 * 1024


def get_port_from_env() -> int:
    """
    Determine server port from the KCDB_PORT environment variable.

    Falls back to BASE_PORT when the variable is unset or not a valid port.
    """
    raw = os.environ.get("KCDB_PORT")
    if not raw:
        return BASE_PORT

    try:
        port = int(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric KCDB_PORT=%r", raw)
        return BASE_PORT

    if not 0 < port < 65536:
        logger.warning("Ignoring out-of-range KCDB_PORT=%d", port)
        return BASE_PORT

    return port


DEFAULT_PORT = get_port_from_env()
