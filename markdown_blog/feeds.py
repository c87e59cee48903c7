"""
RSS feed for django-markdown-blog.
"""
from django.contrib.syndication.views import Feed
from django.urls import reverse

from .conf import blog_settings
from .markdown import make_excerpt
from .models import Post


class LatestPostsFeed(Feed):
    """RSS 2.0 feed of the latest published posts."""

    description = "Latest blog posts and articles"
    language = "en-US"

    def title(self):
        return blog_settings.SITE_NAME

    def link(self):
        return reverse("markdown_blog:post_list")

    def items(self):
        return (
            Post.objects.published()
            .select_related("author")
            .order_by("-published_at")[:blog_settings.FEED_ITEMS]
        )

    def item_title(self, item):
        return item.title

    def item_description(self, item):
        # Feeds carry plain text, never rendered HTML
        if item.excerpt:
            return item.excerpt
        return make_excerpt(item.content, blog_settings.FEED_DESCRIPTION_LENGTH)

    def item_pubdate(self, item):
        return item.published_at

    def item_updateddate(self, item):
        return item.updated_at

    def item_author_name(self, item):
        return item.author.get_full_name() or item.author.get_username()

    def item_categories(self, item):
        return [tag.name for tag in item.tags.all()]
