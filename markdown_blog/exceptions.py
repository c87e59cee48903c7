"""Exceptions raised by django-markdown-blog."""


class MarkdownProcessingError(Exception):
    """
    Markdown could not be processed.

    Malformed markdown never raises this; it only signals an unexpected
    internal fault. The message is safe to show to end users.
    """

    default_message = "Failed to process markdown content"

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
