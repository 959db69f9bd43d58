from django.contrib.auth.models import User
from django.db.models.signals import post_save
from django.dispatch import receiver
from .models import Profile
import logging

logger = logging.getLogger(__name__)


@receiver(post_save, sender=User)
def create_profile_for_user(sender, instance, created, **kwargs):
    """Every account gets a Profile; ratings are cached there"""
    if not created:
        return

    Profile.objects.get_or_create(user=instance)
    logger.info(f'[SIGNAL] Profile created for user {instance.id}')
