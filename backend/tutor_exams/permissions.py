from django.core.cache import cache
from rest_framework.permissions import BasePermission

from .models import TutorProfile

TUTOR_CACHE_TIMEOUT = 60


def tutor_cache_key(user_id):
    return f'tutor_profile_{user_id}'


def current_tutor(request):
    """Return the TutorProfile of the authenticated user, or None."""
    user = request.user
    if not user or not user.is_authenticated:
        return None

    cache_key = tutor_cache_key(user.id)
    profile = cache.get(cache_key)
    if profile is not None:
        return profile

    profile = TutorProfile.objects.filter(user=user).first()
    if profile is None:
        return None

    cache.set(cache_key, profile, timeout=TUTOR_CACHE_TIMEOUT)
    return profile


class IsTutor(BasePermission):
    message = 'Tutor role required'

    def has_permission(self, request, view):
        return current_tutor(request) is not None
