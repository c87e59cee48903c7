"""
Configuration settings for django-markdown-blog.

Override these in your Django settings.py:

    MARKDOWN_BLOG = {
        'SITE_NAME': 'My Blog',
        'SITE_URL': 'https://blog.example.com',
        'MODERATE_COMMENTS': False,
        ...
    }
"""
from django.conf import settings

DEFAULTS = {
    # Posts
    "POSTS_PER_PAGE": 10,
    "SLUG_MAX_LENGTH": 100,
    "EXCERPT_LENGTH": 200,
    "ALLOW_SCHEDULED_POSTS": True,

    # Markdown
    "SANITIZE_MARKDOWN": True,
    "BLOCK_ON_VALIDATION_ISSUES": False,

    # Comments
    "MODERATE_COMMENTS": True,
    "COMMENT_MAX_LENGTH": 5000,

    # Roles
    "DEFAULT_ROLE": "reader",

    # Uploads
    "MEDIA_UPLOAD_PATH": "blog/uploads/%Y/%m/",
    "MEDIA_MAX_SIZE_MB": 5,
    "ALLOWED_UPLOAD_TYPES": ["image/jpeg", "image/png", "image/webp", "image/gif"],

    # SEO
    "SITE_NAME": "Blog Platform",
    "SITE_URL": "",
    "DEFAULT_OG_IMAGE": "/default-og-image.jpg",
    "META_DESCRIPTION_LENGTH": 160,
    "FEED_ITEMS": 20,
    "FEED_DESCRIPTION_LENGTH": 200,
}


class MarkdownBlogSettings:
    """
    Lazy settings object that reads from Django settings.

    Access via: from markdown_blog.conf import blog_settings
    """

    def __getattr__(self, name):
        if name not in DEFAULTS:
            raise AttributeError(f"Invalid markdown_blog setting: {name}")

        user_settings = getattr(settings, "MARKDOWN_BLOG", {})
        return user_settings.get(name, DEFAULTS[name])


blog_settings = MarkdownBlogSettings()


def get_base_url(request=None):
    """
    Return the site's base URL without a trailing slash.

    Uses SITE_URL when configured, otherwise the request's scheme and host.
    """
    if blog_settings.SITE_URL:
        return blog_settings.SITE_URL.rstrip("/")
    if request is not None:
        return request.build_absolute_uri("/").rstrip("/")
    return ""
