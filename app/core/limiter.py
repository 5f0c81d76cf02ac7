"""
Rate limiter configuration.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import settings

# Rate limiter: uses client IP as key
limiter = Limiter(key_func=get_remote_address)

# Per-endpoint limits, overridable from the environment
ANALYSIS_LIMIT = settings.ANALYSIS_RATE_LIMIT
CONFIG_LIMIT = settings.CONFIG_RATE_LIMIT
