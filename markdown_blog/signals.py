"""Signal handlers for django-markdown-blog."""
from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import receiver

from .conf import blog_settings
from .models import AuthorProfile


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def create_author_profile(sender, instance, created, **kwargs):
    """Give every new user a profile with the default role."""
    if created:
        AuthorProfile.objects.get_or_create(
            user=instance,
            defaults={"role": blog_settings.DEFAULT_ROLE},
        )
