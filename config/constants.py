"""
Application Constants

Centralizes magic numbers and fixed values for the agents and the router.
Avoids hardcoded values scattered throughout the codebase.

Usage:
    from config.constants import ONBOARDING_HISTORY_WINDOW, LLM_MAX_RETRIES
"""

# =============================================================================
# Conversation Context
# =============================================================================

# Number of recent history entries shown to the model on each interview turn
ONBOARDING_HISTORY_WINDOW = 6


# =============================================================================
# LLM/API Settings
# =============================================================================

# Maximum retry attempts for transient generation failures
LLM_MAX_RETRIES = 3

# Base delay for exponential backoff (seconds)
LLM_RETRY_BASE_DELAY = 1.0

# Maximum delay between retries (seconds)
LLM_RETRY_MAX_DELAY = 8.0

# Substrings that mark a generation error as worth retrying
LLM_RETRYABLE_MARKERS = (
    'rate limit', 'quota', 'connection', 'temporary',
    '429', '500', '502', '503', 'overloaded', 'unavailable',
)


# =============================================================================
# Response Identifiers
# =============================================================================

# Prefixes for AgentResponse ids; a random suffix is appended per response
RESPONSE_ID_ONBOARDING_INIT = "response-init"
RESPONSE_ID_ONBOARDING = "response-onboard"
RESPONSE_ID_ONBOARDING_COMPLETE = "response-complete"
RESPONSE_ID_ONBOARDING_ERROR = "error-onboard"
RESPONSE_ID_CODEGEN = "response-codegen"
RESPONSE_ID_CODEGEN_ERROR = "error-codegen"
RESPONSE_ID_EDIT = "response-edit"
RESPONSE_ID_EDIT_ERROR = "error-edit"


# =============================================================================
# Baseline Capability Dataset
# =============================================================================

# Prefix of BCD keys in web-features "compat_features" that name CSS properties
CSS_PROPERTY_COMPAT_PREFIX = "css.properties."

# Timeout for fetching the dataset over HTTP (seconds)
WEB_FEATURES_FETCH_TIMEOUT = 20.0
