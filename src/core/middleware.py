"""Core middleware."""
from django.conf import settings
from django.utils.cache import patch_cache_control


class NoStoreReportsMiddleware:
    """Mark dashboard and report responses as uncacheable.

    Path prefixes come from ``NO_STORE_PATH_PREFIXES``.
    """

    def __init__(self, get_response):
        self.get_response = get_response
        self.prefixes = tuple(getattr(settings, "NO_STORE_PATH_PREFIXES", ()))

    def __call__(self, request):
        response = self.get_response(request)
        if self.prefixes and request.path.startswith(self.prefixes):
            patch_cache_control(response, private=True, no_store=True, max_age=0)
        return response
