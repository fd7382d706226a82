"""Application-wide constants.

This module centralizes magic numbers and configuration constants
that are used across multiple modules. For environment-specific
configuration, see config.py.
"""

# =============================================================================
# Pagination Defaults
# =============================================================================

# Default page size for the video list
DEFAULT_PAGE_SIZE: int = 10

# Maximum page size to prevent abuse
MAX_PAGE_SIZE: int = 100

# =============================================================================
# Content Limits
# =============================================================================

MAX_TITLE_LENGTH: int = 255
MAX_LOCATION_LENGTH: int = 255
MAX_TAGS_PER_VIDEO: int = 20
MAX_TAG_LENGTH: int = 50

# =============================================================================
# Frontend URL Paths
# =============================================================================
# Note: These are paths relative to APP_BASE_URL from config.py

PASSWORD_RESET_PATH: str = "/auth/reset-password"

# =============================================================================
# Rate Limits
# =============================================================================

LOGIN_RATE_LIMIT: str = "5/minute"
FORGOT_PASSWORD_RATE_LIMIT: str = "3/minute"
RESET_PASSWORD_RATE_LIMIT: str = "5/minute"
