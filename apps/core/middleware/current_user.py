# apps/core/middleware/current_user.py
from django.utils.deprecation import MiddlewareMixin

from apps.core.utils.tenant import set_current_user, clear_user


class CurrentUserMiddleware(MiddlewareMixin):
    """
    Expose the authenticated user to model stamping for the request duration
    """
    def process_request(self, request):
        clear_user()
        if hasattr(request, 'user') and request.user.is_authenticated:
            set_current_user(request.user)

    def process_response(self, request, response):
        clear_user()
        return response

    def process_exception(self, request, exception):
        clear_user()
