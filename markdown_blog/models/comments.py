"""
Comment model for django-markdown-blog.
"""
from django.conf import settings
from django.db import models
from django.utils import timezone

from ..conf import blog_settings


def _default_approval():
    return not blog_settings.MODERATE_COMMENTS


class Comment(models.Model):
    """
    Comment on a post.

    Supports threaded replies via the parent field and a moderation
    workflow. Comments are plain text.
    """

    post = models.ForeignKey(
        "markdown_blog.Post",
        on_delete=models.CASCADE,
        related_name="comments",
    )
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="blog_comments",
    )
    parent = models.ForeignKey(
        "self",
        null=True,
        blank=True,
        on_delete=models.CASCADE,
        related_name="replies",
    )
    content = models.TextField()
    is_approved = models.BooleanField(
        default=_default_approval,
        help_text="Whether comment is approved and visible",
    )
    is_deleted = models.BooleanField(default=False)
    deleted_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["post", "is_approved", "created_at"]),
        ]

    def __str__(self):
        return f"Comment by {self.author} on {self.post}"

    @property
    def preview(self):
        """Return truncated content for admin display."""
        if len(self.content) > 100:
            return self.content[:100] + "..."
        return self.content

    @property
    def is_reply(self):
        return self.parent_id is not None

    @property
    def thread_depth(self):
        """Calculate nesting depth of this comment."""
        depth = 0
        current = self.parent
        while current:
            depth += 1
            current = current.parent
        return depth

    def visible_replies(self):
        return self.replies.filter(is_approved=True, is_deleted=False)

    def approve(self):
        self.is_approved = True
        self.save(update_fields=["is_approved", "updated_at"])

    def reject(self):
        self.is_approved = False
        self.save(update_fields=["is_approved", "updated_at"])

    def soft_delete(self):
        """Soft delete the comment, keeping its replies in place."""
        self.is_deleted = True
        self.deleted_at = timezone.now()
        self.save(update_fields=["is_deleted", "deleted_at", "updated_at"])
