"""
Sitemaps for django-markdown-blog.

Include in your project urls.py via markdown_blog.urls, or directly:

    from django.contrib.sitemaps.views import sitemap
    from markdown_blog.sitemaps import sitemaps

    path("sitemap.xml", sitemap, {"sitemaps": sitemaps}),
"""
from django.contrib.sitemaps import Sitemap
from django.urls import reverse

from .models import Post


class StaticViewSitemap(Sitemap):
    changefreq = "daily"
    priority = 0.8

    def items(self):
        return ["markdown_blog:post_list"]

    def location(self, item):
        return reverse(item)


class PostSitemap(Sitemap):
    """Published posts only."""

    changefreq = "weekly"
    priority = 0.6

    def items(self):
        return Post.objects.published().order_by("-published_at")

    def lastmod(self, obj):
        return obj.updated_at


sitemaps = {
    "static": StaticViewSitemap,
    "posts": PostSitemap,
}
