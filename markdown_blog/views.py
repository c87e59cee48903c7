"""
Views for django-markdown-blog.
"""
import logging

from django.contrib import messages
from django.contrib.auth import get_user_model
from django.contrib.auth.mixins import LoginRequiredMixin, UserPassesTestMixin
from django.db.models import Q
from django.http import Http404, HttpResponse, JsonResponse
from django.shortcuts import get_object_or_404, redirect
from django.urls import reverse, reverse_lazy
from django.utils.safestring import mark_safe
from django.views import View
from django.views.generic import (
    ListView,
    DetailView,
    CreateView,
    UpdateView,
    DeleteView,
)

from .conf import blog_settings, get_base_url
from .exceptions import MarkdownProcessingError
from .forms import CommentForm, PostForm, UploadForm
from .markdown import (
    MarkdownOptions,
    estimate_reading_time,
    generate_slug,
    make_excerpt,
    render_to_html,
    validate_markdown,
)
from .models import Category, Comment, MediaLibrary, Post, Tag, can_author
from .seo import (
    build_meta_tags,
    build_structured_data,
    render_meta_tags,
    render_structured_data,
    robots_txt,
)

logger = logging.getLogger(__name__)

CONTENT_UNAVAILABLE_MESSAGE = "This content is currently unavailable. Please try again later."


class AuthorRequiredMixin(LoginRequiredMixin, UserPassesTestMixin):
    """Restrict a view to users with the author or admin role."""

    def test_func(self):
        return can_author(self.request.user)


class PostListView(ListView):
    """List published posts, optionally filtered by `q` and `tag`."""

    model = Post
    template_name = "markdown_blog/post_list.html"
    context_object_name = "posts"
    paginate_by = blog_settings.POSTS_PER_PAGE

    def get_queryset(self):
        qs = (
            Post.objects.published()
            .select_related("author", "category")
            .prefetch_related("tags")
        )

        query = self.request.GET.get("q", "").strip()
        if query:
            qs = qs.filter(
                Q(title__icontains=query)
                | Q(excerpt__icontains=query)
                | Q(content__icontains=query)
            )

        tag = self.request.GET.get("tag", "").strip()
        if tag:
            qs = qs.filter(tags__slug=tag).distinct()

        return qs

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["categories"] = Category.objects.filter(is_active=True)
        context["tags"] = Tag.objects.all()[:20]
        context["query"] = self.request.GET.get("q", "")
        return context


class CategoryPostListView(PostListView):
    template_name = "markdown_blog/post_list.html"

    def get_queryset(self):
        self.category = get_object_or_404(Category, slug=self.kwargs["slug"])
        return super().get_queryset().filter(category=self.category)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["category"] = self.category
        return context


class TagPostListView(PostListView):
    template_name = "markdown_blog/post_list.html"

    def get_queryset(self):
        self.tag = get_object_or_404(Tag, slug=self.kwargs["slug"])
        return super().get_queryset().filter(tags=self.tag)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["tag"] = self.tag
        return context


class AuthorPostListView(PostListView):
    template_name = "markdown_blog/post_list.html"

    def get_queryset(self):
        User = get_user_model()
        self.author = get_object_or_404(
            User, **{User.USERNAME_FIELD: self.kwargs["username"]}
        )
        return super().get_queryset().filter(author=self.author)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["author"] = self.author
        return context


class PostDetailView(DetailView):
    """
    Display a single post rendered from markdown.

    A processing fault shows a generic message instead of the content.
    """

    model = Post
    template_name = "markdown_blog/post_detail.html"
    context_object_name = "post"

    def get_object(self, queryset=None):
        obj = get_object_or_404(
            Post.objects.select_related("author", "category"),
            slug=self.kwargs["slug"],
        )
        if not obj.can_view(self.request.user):
            raise Http404("Post not found")

        obj.increment_view_count()
        return obj

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        post = self.object
        options = MarkdownOptions(sanitize=blog_settings.SANITIZE_MARKDOWN)

        try:
            result = render_to_html(post.content, options)
        except MarkdownProcessingError:
            logger.warning("Could not render post %s", post.pk)
            context["content_html"] = None
            context["content_error"] = CONTENT_UNAVAILABLE_MESSAGE
            context["reading_time"] = post.reading_time
        else:
            context["content_html"] = mark_safe(result.html)
            context["content_error"] = None
            context["reading_time"] = result.reading_time

        base_url = get_base_url(self.request)
        context["meta_tags"] = render_meta_tags(build_meta_tags(post, base_url))
        context["structured_data"] = render_structured_data(
            build_structured_data(post, base_url)
        )
        context["comments"] = post.comments.filter(
            is_approved=True,
            is_deleted=False,
            parent=None,
        ).select_related("author")
        context["comment_form"] = CommentForm()
        context["can_edit"] = post.can_edit(self.request.user)
        return context


class PostCreateView(AuthorRequiredMixin, CreateView):
    """Write a new post."""

    model = Post
    form_class = PostForm
    template_name = "markdown_blog/post_form.html"

    def form_valid(self, form):
        form.instance.author = self.request.user
        for issue in form.validation_issues:
            messages.warning(self.request, issue)
        return super().form_valid(form)


class PostEditorMixin(AuthorRequiredMixin):
    """Only the post's author, or an admin, may change a post."""

    model = Post

    def test_func(self):
        return super().test_func() and self.get_object().can_edit(self.request.user)


class PostUpdateView(PostEditorMixin, UpdateView):
    form_class = PostForm
    template_name = "markdown_blog/post_form.html"

    def form_valid(self, form):
        for issue in form.validation_issues:
            messages.warning(self.request, issue)
        return super().form_valid(form)


class PostDeleteView(PostEditorMixin, DeleteView):
    """Archive a post rather than deleting its row."""

    template_name = "markdown_blog/post_confirm_delete.html"
    success_url = reverse_lazy("markdown_blog:post_list")

    def form_valid(self, form):
        self.object.archive()
        return redirect(self.success_url)


class MarkdownPreviewView(AuthorRequiredMixin, View):
    """Live preview for the editor: rendered HTML plus derived metadata."""

    raise_exception = True

    def post(self, request):
        content = request.POST.get("content", "")
        title = request.POST.get("title", "")

        try:
            result = render_to_html(
                content, MarkdownOptions(sanitize=blog_settings.SANITIZE_MARKDOWN)
            )
        except MarkdownProcessingError as exc:
            return JsonResponse({"error": str(exc)}, status=500)

        return JsonResponse({
            "html": result.html,
            "reading_time": result.reading_time,
            "estimated_reading_time": estimate_reading_time(content),
            "slug": generate_slug(title),
            "excerpt": make_excerpt(content, blog_settings.EXCERPT_LENGTH),
            "issues": validate_markdown(content),
        })


class CommentCreateView(LoginRequiredMixin, View):
    """Add a comment, or a reply, to a published post."""

    def post(self, request, slug):
        post = get_object_or_404(Post, slug=slug)

        if not post.is_published or not post.allow_comments:
            logger.info("Comment on post %s refused: comments closed", post.pk)
            return JsonResponse({"error": "Comments disabled"}, status=403)

        form = CommentForm(request.POST)
        if not form.is_valid():
            field_errors = next(iter(form.errors.values()))
            return JsonResponse({"error": field_errors[0]}, status=400)

        parent = None
        parent_id = form.cleaned_data["parent_id"]
        if parent_id:
            parent = get_object_or_404(Comment, pk=parent_id, post=post)

        comment = form.save(commit=False)
        comment.post = post
        comment.author = request.user
        comment.parent = parent
        comment.is_approved = not blog_settings.MODERATE_COMMENTS
        comment.save()

        if request.headers.get("Accept") == "application/json":
            return JsonResponse({
                "id": comment.pk,
                "content": comment.content,
                "author": comment.author.get_username(),
                "parent_id": comment.parent_id,
                "created_at": comment.created_at.isoformat(),
                "is_approved": comment.is_approved,
            })

        return redirect(post.get_absolute_url())


class UploadView(AuthorRequiredMixin, View):
    """Accept an image upload and return its URL."""

    raise_exception = True

    def post(self, request):
        form = UploadForm(request.POST, request.FILES)
        if not form.is_valid():
            errors = form.errors.get("file") or ["Invalid upload"]
            return JsonResponse({"error": errors[0]}, status=400)

        item, created = MediaLibrary.get_or_create_from_file(
            form.cleaned_data["file"],
            uploaded_by=request.user,
        )
        alt_text = form.cleaned_data["alt_text"]
        if alt_text and not item.alt_text:
            item.alt_text = alt_text
            item.save(update_fields=["alt_text"])

        return JsonResponse(
            {"id": item.pk, "url": item.file_url, "created": created},
            status=201 if created else 200,
        )


class RobotsTxtView(View):
    def get(self, request):
        content = robots_txt(
            get_base_url(request),
            sitemap_path=reverse("markdown_blog:sitemap"),
        )
        return HttpResponse(content, content_type="text/plain")
