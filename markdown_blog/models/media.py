"""
Uploaded media for django-markdown-blog.

Files are content-addressed: each upload is hashed with SHA256 and stored
once, so the same image uploaded twice returns the same library item.
"""
import hashlib
import logging
import os

from django.conf import settings
from django.db import models
from django.utils import timezone
from PIL import Image

from ..conf import blog_settings

logger = logging.getLogger(__name__)


def get_upload_path(instance, filename):
    """Store files under MEDIA_UPLOAD_PATH, named by content hash."""
    _, extension = os.path.splitext(filename)
    directory = timezone.now().strftime(blog_settings.MEDIA_UPLOAD_PATH)
    return f"{directory}{instance.content_hash[:32]}{extension.lower()}"


class MediaLibrary(models.Model):
    """Uploaded file, deduplicated by content hash."""

    file = models.FileField(upload_to=get_upload_path)
    content_hash = models.CharField(
        max_length=64,
        unique=True,
        help_text="SHA256 hash of file content for deduplication",
    )
    original_filename = models.CharField(max_length=255)
    mime_type = models.CharField(max_length=100, blank=True)
    file_size = models.PositiveIntegerField(default=0, help_text="File size in bytes")
    width = models.PositiveIntegerField(null=True, blank=True)
    height = models.PositiveIntegerField(null=True, blank=True)
    alt_text = models.CharField(max_length=500, blank=True)

    uploaded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="uploaded_blog_media",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "Media"
        verbose_name_plural = "Media Library"

    def __str__(self):
        return self.original_filename

    @property
    def file_url(self):
        return self.file.url if self.file else ""

    @property
    def is_image(self):
        return self.mime_type.startswith("image/")

    @property
    def human_file_size(self):
        """Return file size in human-readable format."""
        size = self.file_size
        for unit in ["B", "KB", "MB", "GB"]:
            if size < 1024:
                return f"{size:.1f} {unit}"
            size /= 1024
        return f"{size:.1f} TB"

    @classmethod
    def get_or_create_from_file(cls, file_obj, uploaded_by=None):
        """
        Get existing media item or create new one based on content hash.

        Args:
            file_obj: Django UploadedFile
            uploaded_by: User who uploaded the file

        Returns:
            (MediaLibrary instance, created boolean)
        """
        hasher = hashlib.sha256()
        for chunk in file_obj.chunks():
            hasher.update(chunk)
        content_hash = hasher.hexdigest()

        existing = cls.objects.filter(content_hash=content_hash).first()
        if existing:
            return existing, False

        file_obj.seek(0)
        item = cls(
            content_hash=content_hash,
            original_filename=os.path.basename(file_obj.name),
            mime_type=getattr(file_obj, "content_type", "") or "",
            file_size=file_obj.size,
            uploaded_by=uploaded_by,
        )
        item.file.save(file_obj.name, file_obj, save=False)

        if item.is_image:
            item._read_dimensions()

        item.save()
        logger.info("Stored upload %s as %s", item.original_filename, item.file.name)
        return item, True

    def _read_dimensions(self):
        """Read image width and height with Pillow."""
        try:
            with self.file.open("rb") as fh, Image.open(fh) as img:
                self.width, self.height = img.size
        except (OSError, ValueError):
            logger.warning("Could not read image dimensions for %s", self.original_filename)
