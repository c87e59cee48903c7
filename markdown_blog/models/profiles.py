"""
Author profiles and roles for django-markdown-blog.

Roles:
- reader: may read and comment
- author: may write posts and upload media
- admin: may also edit any post
"""
from django.conf import settings
from django.db import models

ROLE_READER = "reader"
ROLE_AUTHOR = "author"
ROLE_ADMIN = "admin"

ROLE_CHOICES = [
    (ROLE_READER, "Reader"),
    (ROLE_AUTHOR, "Author"),
    (ROLE_ADMIN, "Admin"),
]


class AuthorProfile(models.Model):
    """Blog role and public details for a user."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="blog_profile",
    )
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default=ROLE_READER)
    bio = models.TextField(blank=True)
    website = models.URLField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["user__username"]

    def __str__(self):
        return f"{self.user} ({self.role})"


def get_role(user):
    """
    Return the blog role for a user.

    Anonymous users have no role. Superusers are always admins. Users
    without a profile are readers.
    """
    if user is None or not user.is_authenticated:
        return None
    if user.is_superuser:
        return ROLE_ADMIN
    try:
        return user.blog_profile.role
    except AuthorProfile.DoesNotExist:
        return ROLE_READER


def can_author(user):
    """Check if user may write posts and upload media."""
    return get_role(user) in (ROLE_AUTHOR, ROLE_ADMIN)
