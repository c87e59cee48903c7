"""
Django admin configuration for markdown_blog.
"""
from django.contrib import admin
from django.utils.html import format_html, format_html_join

from .markdown import validate_markdown
from .models import (
    AuthorProfile,
    Category,
    Tag,
    Post,
    Comment,
    MediaLibrary,
)


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ["name", "parent", "slug", "post_count", "is_active", "order"]
    list_filter = ["is_active", "parent"]
    search_fields = ["name", "slug", "description"]
    list_editable = ["order", "is_active"]
    ordering = ["parent__name", "order", "name"]


@admin.register(Tag)
class TagAdmin(admin.ModelAdmin):
    list_display = ["name", "slug", "post_count", "created_at"]
    search_fields = ["name", "slug"]
    readonly_fields = ["created_at"]


@admin.register(Post)
class PostAdmin(admin.ModelAdmin):
    list_display = [
        "title",
        "author",
        "status",
        "featured",
        "category",
        "reading_time",
        "view_count",
        "published_at",
    ]
    list_filter = ["status", "featured", "category", "scheduled_at", "created_at"]
    search_fields = ["title", "content", "author__username"]
    raw_id_fields = ["author", "category"]
    filter_horizontal = ["tags"]
    date_hierarchy = "created_at"
    readonly_fields = [
        "reading_time",
        "view_count",
        "created_at",
        "updated_at",
        "published_at",
        "markdown_issues",
    ]

    fieldsets = (
        (None, {
            "fields": ("title", "slug", "content", "markdown_issues", "author")
        }),
        ("Taxonomy", {
            "fields": ("category", "tags")
        }),
        ("Status", {
            "fields": ("status", "featured", "allow_comments", "scheduled_at", "published_at")
        }),
        ("SEO", {
            "fields": ("excerpt", "meta_description", "cover_image"),
            "classes": ("collapse",),
        }),
        ("Metadata", {
            "fields": ("reading_time", "view_count", "created_at", "updated_at"),
            "classes": ("collapse",),
        }),
    )

    actions = ["publish_posts", "publish_due_posts", "archive_posts", "feature_posts"]

    @admin.display(description="Markdown issues")
    def markdown_issues(self, obj):
        issues = validate_markdown(obj.content) if obj.pk else []
        if not issues:
            return "-"
        return format_html(
            "<ul>{}</ul>",
            format_html_join("", "<li>{}</li>", ((issue,) for issue in issues)),
        )

    @admin.action(description="Publish selected posts")
    def publish_posts(self, request, queryset):
        for post in queryset:
            post.publish()
        self.message_user(request, f"{queryset.count()} posts published.")

    @admin.action(description="Publish selected posts whose scheduled time has passed")
    def publish_due_posts(self, request, queryset):
        published = queryset.publish_scheduled()
        self.message_user(request, f"{len(published)} scheduled posts published.")

    @admin.action(description="Archive selected posts")
    def archive_posts(self, request, queryset):
        for post in queryset:
            post.archive()
        self.message_user(request, f"{queryset.count()} posts archived.")

    @admin.action(description="Feature selected posts")
    def feature_posts(self, request, queryset):
        count = queryset.update(featured=True)
        self.message_user(request, f"{count} posts featured.")


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    list_display = ["preview", "author", "post", "is_approved", "created_at"]
    list_filter = ["is_approved", "is_deleted", "created_at"]
    search_fields = ["content", "author__username", "post__title"]
    raw_id_fields = ["post", "author", "parent"]
    readonly_fields = ["created_at", "updated_at"]
    actions = ["approve_comments", "reject_comments"]

    @admin.action(description="Approve selected comments")
    def approve_comments(self, request, queryset):
        count = queryset.update(is_approved=True)
        self.message_user(request, f"{count} comments approved.")

    @admin.action(description="Reject selected comments")
    def reject_comments(self, request, queryset):
        count = queryset.update(is_approved=False)
        self.message_user(request, f"{count} comments rejected.")


@admin.register(AuthorProfile)
class AuthorProfileAdmin(admin.ModelAdmin):
    list_display = ["user", "role", "created_at"]
    list_filter = ["role"]
    list_editable = ["role"]
    search_fields = ["user__username", "user__email"]
    raw_id_fields = ["user"]


@admin.register(MediaLibrary)
class MediaLibraryAdmin(admin.ModelAdmin):
    list_display = [
        "thumbnail_preview",
        "original_filename",
        "mime_type",
        "human_file_size",
        "dimensions",
        "uploaded_by",
        "created_at",
    ]
    list_filter = ["mime_type", "created_at"]
    search_fields = ["original_filename", "alt_text"]
    readonly_fields = [
        "content_hash",
        "file_size",
        "width",
        "height",
        "mime_type",
        "created_at",
    ]

    @admin.display(description="Preview")
    def thumbnail_preview(self, obj):
        if obj.is_image and obj.file:
            return format_html(
                '<img src="{}" style="max-width: 50px; max-height: 50px;" />',
                obj.file.url,
            )
        return obj.mime_type

    @admin.display(description="Size")
    def dimensions(self, obj):
        if obj.width and obj.height:
            return f"{obj.width}x{obj.height}"
        return "-"
