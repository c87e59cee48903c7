"""
Shared fixtures for django-markdown-blog tests.
"""
import pytest
from django.contrib.auth import get_user_model

from markdown_blog.models import Category, Post, Tag

User = get_user_model()

POST_CONTENT = (
    "# Hello\n\n"
    "This is **bold** text with a [link](https://example.com).\n\n"
    "A second paragraph that makes this post long enough to pass validation."
)


def make_user(username, role="reader", **kwargs):
    user = User.objects.create_user(
        username=username,
        email=f"{username}@example.com",
        password="testpass123",
        **kwargs,
    )
    profile = user.blog_profile
    profile.role = role
    profile.save()
    return user


@pytest.fixture
def user(db):
    """A reader."""
    return make_user("reader")


@pytest.fixture
def author(db):
    return make_user("author", role="author", first_name="Ada", last_name="Writer")


@pytest.fixture
def other_author(db):
    return make_user("other_author", role="author")


@pytest.fixture
def admin_user(db):
    return make_user("editor", role="admin")


@pytest.fixture
def category(db):
    return Category.objects.create(name="Test Category", slug="test-category")


@pytest.fixture
def tag(db):
    return Tag.objects.create(name="Django")


@pytest.fixture
def post(db, author, category, tag):
    """A published post."""
    post = Post.objects.create(
        title="Test Post",
        content=POST_CONTENT,
        author=author,
        category=category,
        status=Post.STATUS_PUBLISHED,
    )
    post.tags.add(tag)
    return post


@pytest.fixture
def draft(db, author):
    return Post.objects.create(
        title="Work In Progress",
        content="# Draft\n\nNot ready yet.",
        author=author,
    )
