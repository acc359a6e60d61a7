"""
Helpers for resolving the authenticated member of a request.
"""

from asgiref.sync import sync_to_async


def get_authenticated_user(request):
    """
    Return the active, authenticated user behind a request, or None.

    Deactivated members are treated as anonymous even if their session
    is still alive.
    """
    user = getattr(request, 'user', None)
    if not user or not user.is_authenticated or not user.is_active:
        return None
    return user


async def aget_authenticated_user(request):
    """
    Get the authenticated user for a request (async version).

    Use this version when calling from async views/endpoints; touching
    ``request.user`` lazily loads the session and hits the database.

    Example:
        user = await aget_authenticated_user(request)
        if user is None:
            return 401, {"error": "Authentication required"}
    """
    return await sync_to_async(get_authenticated_user)(request)
