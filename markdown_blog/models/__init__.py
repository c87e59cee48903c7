"""
Models for django-markdown-blog.

All models are importable from markdown_blog.models:

    from markdown_blog.models import Post, Category, Tag, Comment, MediaLibrary
"""
from .profiles import AuthorProfile, can_author, get_role
from .posts import Category, Tag, Post
from .comments import Comment
from .media import MediaLibrary

__all__ = [
    # Posts
    "Category",
    "Tag",
    "Post",
    # Comments
    "Comment",
    # Media
    "MediaLibrary",
    # Roles
    "AuthorProfile",
    "get_role",
    "can_author",
]
