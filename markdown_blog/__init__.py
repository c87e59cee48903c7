"""
django-markdown-blog - A markdown blog app for Django.

Features:
- Markdown rendering, plain-text excerpts, slugs and reading time
- Structural validation of markdown before saving
- Draft / published / archived posts with categories and tags
- Threaded comments with moderation
- Reader, author and admin roles
- Content-addressed image uploads
- RSS feed, sitemap, robots.txt, meta tags and JSON-LD
"""

__version__ = "0.1.0"
