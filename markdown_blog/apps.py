"""Django app configuration for markdown_blog."""
from django.apps import AppConfig


class MarkdownBlogConfig(AppConfig):
    """Configuration for the markdown blog app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "markdown_blog"
    verbose_name = "Markdown Blog"

    def ready(self):
        from . import signals  # noqa: F401
