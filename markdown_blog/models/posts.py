"""
Post, Category, and Tag models for django-markdown-blog.
"""
import logging

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import DEFERRED
from django.urls import reverse
from django.utils import timezone

from ..conf import blog_settings
from ..markdown import estimate_reading_time, generate_slug, make_excerpt
from .profiles import ROLE_ADMIN, can_author, get_role

logger = logging.getLogger(__name__)

# Slugs that would shadow editor URLs
RESERVED_SLUGS = {"new"}


def validate_slug_not_reserved(value):
    if value in RESERVED_SLUGS:
        raise ValidationError(f'The slug "{value}" is reserved.')


def _slug_for(value):
    """Slug for a name or title, cut to SLUG_MAX_LENGTH without a trailing hyphen."""
    return generate_slug(value)[:blog_settings.SLUG_MAX_LENGTH].rstrip("-")


class Category(models.Model):
    """
    Hierarchical category for organizing posts.

    Categories support nesting via parent field for tree structures.
    """

    name = models.CharField(max_length=100)
    slug = models.SlugField(max_length=100, unique=True)
    description = models.TextField(blank=True)
    parent = models.ForeignKey(
        "self",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="children",
    )
    order = models.IntegerField(default=0, help_text="Display order within parent")
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["order", "name"]
        verbose_name_plural = "Categories"

    def __str__(self):
        if self.parent:
            return f"{self.parent} > {self.name}"
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = _slug_for(self.name)
        super().save(*args, **kwargs)

    def get_absolute_url(self):
        return reverse("markdown_blog:category_detail", kwargs={"slug": self.slug})

    @property
    def post_count(self):
        """Return count of published posts in this category."""
        return self.posts.published().count()

    def get_ancestors(self):
        """Return list of ancestor categories from root to parent."""
        ancestors = []
        current = self.parent
        while current:
            ancestors.insert(0, current)
            current = current.parent
        return ancestors


class Tag(models.Model):
    """Flat, non-hierarchical tag."""

    name = models.CharField(max_length=100, unique=True)
    slug = models.SlugField(max_length=100, unique=True)
    description = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = _slug_for(self.name)
        super().save(*args, **kwargs)

    def get_absolute_url(self):
        return reverse("markdown_blog:tag_detail", kwargs={"slug": self.slug})

    @property
    def post_count(self):
        return self.posts.published().count()


class PostQuerySet(models.QuerySet):
    def published(self):
        return self.filter(status=Post.STATUS_PUBLISHED)

    def due_for_publishing(self):
        """Drafts whose scheduled time has passed."""
        return self.filter(
            status=Post.STATUS_DRAFT,
            scheduled_at__isnull=False,
            scheduled_at__lte=timezone.now(),
        )

    def publish_scheduled(self):
        """
        Publish every draft in this queryset whose scheduled time has passed.

        Run periodically, e.g. from cron or a task queue. Does nothing when
        ALLOW_SCHEDULED_POSTS is disabled.

        Returns:
            List of posts that were published.
        """
        if not blog_settings.ALLOW_SCHEDULED_POSTS:
            return []

        published = []
        for post in self.due_for_publishing():
            post.publish()
            logger.info("Published scheduled post %s", post.pk)
            published.append(post)
        return published


class Post(models.Model):
    """
    Blog post written in markdown.

    Slug, excerpt and reading time are derived from the title and content
    on save.
    """

    STATUS_DRAFT = "draft"
    STATUS_PUBLISHED = "published"
    STATUS_ARCHIVED = "archived"
    STATUS_CHOICES = [
        (STATUS_DRAFT, "Draft"),
        (STATUS_PUBLISHED, "Published"),
        (STATUS_ARCHIVED, "Archived"),
    ]

    # Content
    title = models.CharField(max_length=255)
    slug = models.SlugField(
        max_length=255,
        blank=True,
        unique=True,
        validators=[validate_slug_not_reserved],
    )
    content = models.TextField(help_text="Markdown content")
    excerpt = models.TextField(
        blank=True,
        help_text="Optional manual excerpt. Auto-generated if blank.",
    )
    meta_description = models.CharField(
        max_length=300,
        blank=True,
        help_text="SEO description. Falls back to the excerpt.",
    )
    cover_image = models.URLField(blank=True)

    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="blog_posts",
    )

    # Status
    status = models.CharField(
        max_length=20,
        choices=STATUS_CHOICES,
        default=STATUS_DRAFT,
        db_index=True,
    )
    featured = models.BooleanField(default=False)
    allow_comments = models.BooleanField(default=True)

    # Scheduled publishing
    scheduled_at = models.DateTimeField(
        null=True,
        blank=True,
        db_index=True,
        help_text="Schedule post to be published at this time",
    )

    reading_time = models.PositiveIntegerField(
        default=1,
        help_text="Estimated reading time in minutes",
    )

    # Taxonomy
    category = models.ForeignKey(
        Category,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="posts",
    )
    tags = models.ManyToManyField(Tag, related_name="posts", blank=True)

    view_count = models.PositiveIntegerField(default=0)

    # Timestamps
    published_at = models.DateTimeField(null=True, blank=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = PostQuerySet.as_manager()

    class Meta:
        ordering = ["-featured", "-published_at", "-created_at"]
        indexes = [
            models.Index(fields=["status", "-published_at"]),
            models.Index(fields=["author", "-created_at"]),
        ]

    def __str__(self):
        return self.title

    @classmethod
    def from_db(cls, db, field_names, values):
        instance = super().from_db(db, field_names, values)
        instance._loaded = {
            name: value
            for name, value in zip(field_names, values)
            if name in ("title", "slug") and value is not DEFERRED
        }
        return instance

    def refresh_from_db(self, using=None, fields=None, **kwargs):
        super().refresh_from_db(using=using, fields=fields, **kwargs)
        if fields is None:
            self._loaded = {"title": self.title, "slug": self.slug}

    def _title_changed(self):
        """True when the title was edited and the slug was left alone."""
        loaded = getattr(self, "_loaded", {})
        if "title" not in loaded:
            return False
        return self.title != loaded["title"] and self.slug == loaded.get("slug")

    def _unique_slug(self):
        # Duplicates get a numeric suffix
        base_slug = _slug_for(self.title) or "post"
        slug = base_slug
        counter = 1
        while slug in RESERVED_SLUGS or (
            Post.objects.filter(slug=slug).exclude(pk=self.pk).exists()
        ):
            slug = f"{base_slug}-{counter}"
            counter += 1
        return slug

    def save(self, *args, **kwargs):
        if not self.slug or self._title_changed():
            self.slug = self._unique_slug()

        self.reading_time = estimate_reading_time(self.content)

        if not self.excerpt:
            self.excerpt = make_excerpt(self.content, blog_settings.EXCERPT_LENGTH)

        if self.status == self.STATUS_PUBLISHED and not self.published_at:
            self.published_at = timezone.now()

        super().save(*args, **kwargs)
        self._loaded = {"title": self.title, "slug": self.slug}

    def get_absolute_url(self):
        return reverse("markdown_blog:post_detail", kwargs={"slug": self.slug})

    @property
    def is_published(self):
        return self.status == self.STATUS_PUBLISHED

    @property
    def is_scheduled(self):
        """Check if post is a draft scheduled for future publication."""
        if self.status != self.STATUS_DRAFT or not self.scheduled_at:
            return False
        return self.scheduled_at > timezone.now()

    @property
    def time_until_publish(self):
        """Return timedelta until scheduled publish time."""
        if not self.is_scheduled:
            return None
        return self.scheduled_at - timezone.now()

    @property
    def description(self):
        """Return the best available SEO description."""
        if self.meta_description:
            return self.meta_description
        if self.excerpt:
            return self.excerpt
        return make_excerpt(self.content, blog_settings.META_DESCRIPTION_LENGTH)

    def can_edit(self, user):
        """Authors edit their own posts; admins edit any post."""
        if not can_author(user):
            return False
        return user == self.author or get_role(user) == ROLE_ADMIN

    def can_view(self, user):
        """Published posts are public; other statuses need edit rights."""
        if self.is_published:
            return True
        return user is not None and self.can_edit(user)

    def publish(self):
        """Publish the post immediately."""
        self.status = self.STATUS_PUBLISHED
        self.published_at = timezone.now()
        self.save(update_fields=["status", "published_at", "updated_at"])

    def cancel_schedule(self):
        """Keep the post as a draft with no scheduled time."""
        self.scheduled_at = None
        self.save(update_fields=["scheduled_at", "updated_at"])

    def archive(self):
        """Archive the post, hiding it from listings and feeds."""
        self.status = self.STATUS_ARCHIVED
        self.save(update_fields=["status", "updated_at"])

    def increment_view_count(self):
        """Increment view count atomically."""
        Post.objects.filter(pk=self.pk).update(view_count=models.F("view_count") + 1)
