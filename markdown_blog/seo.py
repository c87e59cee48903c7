"""
SEO helpers for django-markdown-blog: meta tags, JSON-LD and robots.txt.

Descriptions always come from plain text (see Post.description), never
from rendered HTML.
"""
import json

from django.core.serializers.json import DjangoJSONEncoder
from django.urls import reverse
from django.utils.html import format_html, format_html_join
from django.utils.safestring import mark_safe

from .conf import blog_settings

# Characters escaped inside <script> blocks
_JSON_SCRIPT_ESCAPES = {
    ord(">"): "\\u003E",
    ord("<"): "\\u003C",
    ord("&"): "\\u0026",
}


def _author_name(user):
    if user is None:
        return "Unknown Author"
    return user.get_full_name() or user.get_username()


def _absolute(url, base_url):
    if url.startswith(("http://", "https://")):
        return url
    return f"{base_url}{url}"


def build_meta_tags(post, base_url):
    """
    Build meta tag values for a post.

    Args:
        post: Post instance
        base_url: Site URL without trailing slash

    Returns:
        Dict of meta tag values, including Open Graph and Twitter card fields.
    """
    canonical = _absolute(post.get_absolute_url(), base_url)
    image = _absolute(post.cover_image or blog_settings.DEFAULT_OG_IMAGE, base_url)
    description = post.description

    return {
        "title": post.title,
        "description": description,
        "keywords": [tag.name for tag in post.tags.all()],
        "author": _author_name(post.author),
        "canonical": canonical,
        "og_title": post.title,
        "og_description": description,
        "og_image": image,
        "og_type": "article",
        "twitter_card": "summary_large_image",
        "twitter_title": post.title,
        "twitter_description": description,
        "twitter_image": image,
    }


def render_meta_tags(meta):
    """Render meta tag values as escaped HTML."""
    named = [
        ("description", meta["description"]),
        ("keywords", ", ".join(meta["keywords"])),
        ("author", meta["author"]),
        ("twitter:card", meta["twitter_card"]),
        ("twitter:title", meta["twitter_title"]),
        ("twitter:description", meta["twitter_description"]),
        ("twitter:image", meta["twitter_image"]),
    ]
    properties = [
        ("og:title", meta["og_title"]),
        ("og:description", meta["og_description"]),
        ("og:image", meta["og_image"]),
        ("og:type", meta["og_type"]),
        ("og:url", meta["canonical"]),
    ]
    return format_html(
        '<title>{}</title>\n<link rel="canonical" href="{}">\n{}\n{}',
        meta["title"],
        meta["canonical"],
        format_html_join("\n", '<meta name="{}" content="{}">', named),
        format_html_join("\n", '<meta property="{}" content="{}">', properties),
    )


def build_structured_data(post, base_url):
    """Build schema.org BlogPosting data for a post."""
    url = _absolute(post.get_absolute_url(), base_url)
    return {
        "@context": "https://schema.org",
        "@type": "BlogPosting",
        "headline": post.title,
        "description": post.description,
        "author": {
            "@type": "Person",
            "name": _author_name(post.author),
            "url": _absolute(
                reverse(
                    "markdown_blog:author_posts",
                    kwargs={"username": post.author.get_username()},
                ),
                base_url,
            ),
        },
        "publisher": {
            "@type": "Organization",
            "name": blog_settings.SITE_NAME,
            "logo": {"@type": "ImageObject", "url": f"{base_url}/logo.png"},
        },
        "datePublished": post.published_at,
        "dateModified": post.updated_at,
        "image": _absolute(post.cover_image or blog_settings.DEFAULT_OG_IMAGE, base_url),
        "url": url,
    }


def render_structured_data(data):
    """Render structured data as a JSON-LD script element."""
    payload = json.dumps(data, cls=DjangoJSONEncoder).translate(_JSON_SCRIPT_ESCAPES)
    return format_html(
        '<script type="application/ld+json">{}</script>', mark_safe(payload)
    )


def robots_txt(base_url, sitemap_path="/sitemap.xml"):
    """Return robots.txt content pointing crawlers at the sitemap."""
    return (
        "User-agent: *\n"
        "Allow: /\n"
        "\n"
        f"Sitemap: {base_url}{sitemap_path}\n"
        "\n"
        "Disallow: /admin/\n"
    )
