# File: app\core\ratelimit.py
# Project: swapify-admin-backend

from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import settings

# keyed per client address; the login endpoint is the only limited route
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)
