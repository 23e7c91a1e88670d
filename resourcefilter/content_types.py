"""Content type detection by resource name."""

import mimetypes

from resourcefilter.core.constants import Limits


class TypeDetector:
    """Best-guess content type of a resource name.

    Uses Python's mimetypes table; names it doesn't know (including folders)
    get ``default_type``.
    """

    def __init__(self, default_type: str = Limits.DEFAULT_CONTENT_TYPE):
        self.default_type = default_type

    def detect(self, name: str) -> str:
        mime_type, _ = mimetypes.guess_type(name, strict=False)
        return mime_type or self.default_type
