"""
Forms for django-markdown-blog.
"""
import logging

from django import forms

from .conf import blog_settings
from .markdown import validate_markdown
from .models import Comment, Post

logger = logging.getLogger(__name__)


class PostForm(forms.ModelForm):
    """
    Editor form for posts.

    Markdown validation issues are collected in `validation_issues` and
    shown as warnings. They only prevent saving when
    BLOCK_ON_VALIDATION_ISSUES is enabled.
    """

    class Meta:
        model = Post
        fields = [
            "title",
            "content",
            "excerpt",
            "meta_description",
            "cover_image",
            "category",
            "tags",
            "status",
            "scheduled_at",
            "featured",
            "allow_comments",
        ]
        widgets = {
            "content": forms.Textarea(attrs={"rows": 24, "class": "markdown-editor"}),
            "excerpt": forms.Textarea(attrs={"rows": 3}),
            "scheduled_at": forms.DateTimeInput(attrs={"type": "datetime-local"}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.validation_issues = []

    def clean_title(self):
        title = self.cleaned_data["title"].strip()
        if not title:
            raise forms.ValidationError("Title is required.")
        return title

    def clean_content(self):
        content = self.cleaned_data["content"]
        if not content.strip():
            raise forms.ValidationError("Content is required.")

        self.validation_issues = validate_markdown(content)
        if self.validation_issues and blog_settings.BLOCK_ON_VALIDATION_ISSUES:
            raise forms.ValidationError(self.validation_issues)
        return content


class CommentForm(forms.ModelForm):
    parent_id = forms.IntegerField(required=False, min_value=1, widget=forms.HiddenInput)

    class Meta:
        model = Comment
        fields = ["content"]

    def clean_content(self):
        content = self.cleaned_data["content"].strip()
        if not content:
            raise forms.ValidationError("Comment body required")
        if len(content) > blog_settings.COMMENT_MAX_LENGTH:
            raise forms.ValidationError(
                f"Comment exceeds {blog_settings.COMMENT_MAX_LENGTH} characters"
            )
        return content


class UploadForm(forms.Form):
    """Validates uploaded files against the allowed types and size limit."""

    file = forms.FileField()
    alt_text = forms.CharField(max_length=500, required=False)

    def clean_file(self):
        upload = self.cleaned_data["file"]
        allowed_types = blog_settings.ALLOWED_UPLOAD_TYPES
        content_type = getattr(upload, "content_type", "")

        if content_type not in allowed_types:
            logger.info("Rejected upload %s of type %s", upload.name, content_type)
            raise forms.ValidationError(
                f"File type {content_type} is not allowed. "
                f"Allowed types: {', '.join(allowed_types)}"
            )

        max_size = blog_settings.MEDIA_MAX_SIZE_MB * 1024 * 1024
        if upload.size > max_size:
            logger.info("Rejected upload %s of %d bytes", upload.name, upload.size)
            raise forms.ValidationError(
                f"File size {upload.size / 1024 / 1024:.2f}MB exceeds maximum size "
                f"of {max_size / 1024 / 1024:.2f}MB"
            )

        return upload
