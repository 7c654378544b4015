"""Application-wide constants.

This module defines constants used throughout the application
to avoid magic strings and ensure consistency.
"""

# Role assumed for requests whose session carries no role
DEFAULT_ROLE = "guest"

# Request state attribute the session layer sets to the resolved role
ROLE_STATE_ATTR = "role"

# Request state attribute the application sets to its ownership lookup result
OWNERSHIP_STATE_ATTR = "is_owner"

# Accepted LOG_LEVEL values
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

API_V1_PREFIX = "/api/v1"
