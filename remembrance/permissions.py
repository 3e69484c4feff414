from rest_framework.permissions import BasePermission

from memorials.access import build_access, get_memorial_access
from memorials.exceptions import ContentNotFound, MemorialNotFound


def get_acting_user(request):
    if not request.user or not request.user.is_authenticated:
        return None
    return request.user


class IsMemorialMember(BasePermission):
    """Resolve ``memorial_id`` from the URL and attach the caller's access.

    Memorials the caller cannot see raise ``MemorialNotFound`` rather than
    failing the permission check, so the response is a 404, not a 403.
    """

    def has_permission(self, request, view):
        user = get_acting_user(request)
        if user is None:
            return False
        request.memorial_access = get_memorial_access(view.kwargs['memorial_id'], user)
        return True


def child_access(request, model, pk):
    """Load a memorial-scoped row by id together with the caller's access.

    Rows of memorials the caller cannot see are reported as missing.
    """
    obj = model.objects.select_related('memorial').filter(pk=pk).first()
    if obj is None:
        raise ContentNotFound()
    try:
        access = build_access(obj.memorial, get_acting_user(request))
    except MemorialNotFound:
        raise ContentNotFound()
    return access, obj
