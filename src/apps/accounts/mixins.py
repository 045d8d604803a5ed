"""Session checks for JSON API views."""

import logging

from django.http import JsonResponse

logger = logging.getLogger(__name__)


class SessionRequiredMixin:
    """
    Mixin for class-based views that require a signed-in admin panel user.

    Anonymous requests get a 401 JSON response before any handler runs.
    Set ``required_role`` to restrict the view further; users without that
    role also get a 401. Works for both sync and async views. The safe
    methods listed in ``public_methods`` skip the check.
    """

    required_role: str | None = None
    public_methods: tuple[str, ...] = ()
    unauthorized_message = "Unauthorized"

    def dispatch(self, request, *args, **kwargs):
        if request.method.lower() in self.public_methods:
            return super().dispatch(request, *args, **kwargs)
        if self.view_is_async:
            return self._async_dispatch(request, *args, **kwargs)
        if not self.has_access(request.user):
            return self.handle_unauthorized(request)
        return super().dispatch(request, *args, **kwargs)

    async def _async_dispatch(self, request, *args, **kwargs):
        user = await request.auser()
        if not self.has_access(user):
            return self.handle_unauthorized(request)
        return await super().dispatch(request, *args, **kwargs)

    def has_access(self, user) -> bool:
        if user is None or not user.is_authenticated or not user.is_active:
            return False
        if self.required_role == "admin":
            return user.is_admin_role
        if self.required_role:
            return user.role == self.required_role
        return True

    def handle_unauthorized(self, request) -> JsonResponse:
        logger.info("Rejected %s %s: no session with sufficient role", request.method, request.path)
        return JsonResponse({"error": self.unauthorized_message}, status=401)
