"""
URL configuration for django-markdown-blog.

Include in your project urls.py:

    path('blog/', include('markdown_blog.urls')),

The sitemap view needs "django.contrib.sitemaps" in INSTALLED_APPS.
"""
from django.contrib.sitemaps.views import sitemap
from django.urls import path

from . import views
from .feeds import LatestPostsFeed
from .sitemaps import sitemaps

app_name = "markdown_blog"

urlpatterns = [
    # Post list and editor
    path("", views.PostListView.as_view(), name="post_list"),
    path("post/new/", views.PostCreateView.as_view(), name="post_create"),
    path("post/<slug:slug>/", views.PostDetailView.as_view(), name="post_detail"),
    path("post/<slug:slug>/edit/", views.PostUpdateView.as_view(), name="post_update"),
    path("post/<slug:slug>/delete/", views.PostDeleteView.as_view(), name="post_delete"),

    # Categories, tags and authors
    path("category/<slug:slug>/", views.CategoryPostListView.as_view(), name="category_detail"),
    path("tag/<slug:slug>/", views.TagPostListView.as_view(), name="tag_detail"),
    path("author/<str:username>/", views.AuthorPostListView.as_view(), name="author_posts"),

    # Interactions
    path("post/<slug:slug>/comment/", views.CommentCreateView.as_view(), name="comment_create"),
    path("markdown/preview/", views.MarkdownPreviewView.as_view(), name="markdown_preview"),
    path("upload/", views.UploadView.as_view(), name="upload"),

    # SEO
    path("feed/", LatestPostsFeed(), name="feed"),
    path("sitemap.xml", sitemap, {"sitemaps": sitemaps}, name="sitemap"),
    path("robots.txt", views.RobotsTxtView.as_view(), name="robots"),
]
