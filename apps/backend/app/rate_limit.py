"""
IP-based rate limiting for the crawl endpoints.
"""
import os
from slowapi import Limiter
from slowapi.util import get_remote_address

# Each crawl drives a real browser, so the limits are deliberately low
RATE_LIMIT_CRAWL = os.getenv("RATE_LIMIT_CRAWL", "30/minute" if os.getenv("JOBLENS_ENV") == "dev" else "10/minute")
RATE_LIMIT_MANUAL = os.getenv("RATE_LIMIT_MANUAL", "60/minute")

limiter = Limiter(key_func=get_remote_address)
