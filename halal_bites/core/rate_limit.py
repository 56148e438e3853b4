from slowapi import Limiter
from slowapi.util import get_remote_address

from halal_bites.core.config import get_settings

# Redis-backed in production (RATE_LIMIT_STORAGE_URI=redis://...)
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=get_settings().RATE_LIMIT_STORAGE_URI,
)
