"""Failed-login throttling shared by every operator login endpoint."""
import logging
import math
import time

from django.conf import settings
from django.core.cache import cache as default_cache

logger = logging.getLogger(__name__)


def client_ip(request):
    forwarded = request.META.get('HTTP_X_FORWARDED_FOR')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR')


class LoginRateLimiter:
    """
    Counts failed logins per client address inside a sliding window.

    Attempts live in the cache with the window length as their timeout, so
    idle addresses are evicted without any sweeping.
    """
    key_prefix = 'login-attempts'

    def __init__(self, max_attempts=None, lockout_seconds=None, cache=None, clock=time.time):
        self.max_attempts = max_attempts or settings.LOGIN_MAX_ATTEMPTS
        self.lockout_seconds = lockout_seconds or settings.LOGIN_LOCKOUT_SECONDS
        self.cache = cache or default_cache
        self.clock = clock

    def _key(self, ip):
        return f"{self.key_prefix}:{ip}"

    def attempts(self, ip):
        now = self.clock()
        stamps = self.cache.get(self._key(ip)) or []
        return [t for t in stamps if now - t < self.lockout_seconds]

    def retry_after(self, ip):
        """Seconds until the address may try again, or 0 if it is not locked out."""
        stamps = self.attempts(ip)
        if len(stamps) < self.max_attempts:
            return 0
        return max(0, math.ceil(self.lockout_seconds - (self.clock() - stamps[0])))

    def record_failure(self, ip):
        stamps = self.attempts(ip)
        stamps.append(self.clock())
        self.cache.set(self._key(ip), stamps, timeout=self.lockout_seconds)
        if len(stamps) >= self.max_attempts:
            logger.warning("Login locked for %s after %d failed attempts", ip, len(stamps))

    def clear(self, ip):
        self.cache.delete(self._key(ip))
