import logging

from django.db import IntegrityError, transaction

from .errors import Forbidden, ProfileExists
from .models import TutorProfile

logger = logging.getLogger(__name__)


def require_approved_tutor(user):
    """Return the user's TutorProfile, or raise Forbidden unless it is approved."""
    profile = TutorProfile.objects.filter(user=user).first()
    if profile is None or not profile.is_approved:
        raise Forbidden('Tutor account not approved')
    return profile


def resolve_max_candidates(profile, requested=None):
    """Caller-supplied ceiling, falling back to the tutor's student quota."""
    if requested is not None:
        return requested
    return profile.student_quota


def request_tutor_access(user):
    """Create a pending TutorProfile for the user; one request per user."""
    existing = TutorProfile.objects.filter(user=user).first()
    if existing is not None:
        raise ProfileExists(status=existing.status)
    try:
        with transaction.atomic():
            profile = TutorProfile.objects.create(
                user=user,
                status=TutorProfile.Status.PENDING,
                student_quota=0,
            )
    except IntegrityError:
        raise ProfileExists(status=TutorProfile.objects.get(user=user).status)

    logger.info('User %s requested tutor access', user.username)
    profile_id = profile.id
    transaction.on_commit(lambda: _queue_access_notification(profile_id))
    return profile


def _queue_access_notification(profile_id):
    from .tasks import send_tutor_access_notification
    try:
        send_tutor_access_notification.delay(profile_id)
    except Exception:
        logger.exception('Could not queue tutor access notification for profile %s', profile_id)
