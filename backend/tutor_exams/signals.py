from django.core.cache import cache
from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import TutorProfile
from .permissions import tutor_cache_key


@receiver(post_save, sender=TutorProfile)
def invalidate_cached_tutor_profile(sender, instance, **kwargs):
    cache.delete(tutor_cache_key(instance.user_id))
