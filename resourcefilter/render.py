#!/usr/bin/env python3
"""Plain-text rendering of result pages using Jinja2.

Example:
    >>> renderer = PageRenderer()
    >>> print(renderer.render(page, total=42, offset=0, type_detector=TypeDetector()))
"""

from typing import Any, Dict, List, Optional

import jinja2

from resourcefilter.content_types import TypeDetector
from resourcefilter.resources.base import Resource

DEFAULT_TEMPLATE = """\
{% for row in rows -%}
{{ row.path }}  {{ row.type }}  [{{ row.origins | join(', ') }}]{% if row.overridden %}  (overridden){% endif %}
{% endfor -%}
{% if total is not none -%}
{{ rows | length }} of {{ total }} resources (offset {{ offset }})
{% endif -%}
"""


class RenderError(Exception):
    """Raised when a page template cannot be rendered."""


class PageRenderer:
    """Renders a page of resources with a Jinja2 template.

    Each row exposes ``path``, ``name``, ``type``, ``origins`` (layer origin
    names, top layer first) and ``overridden``.
    """

    def __init__(self, template: Optional[str] = None, **jinja_options):
        """Initialize renderer.

        Args:
            template: Template source (defaults to one line per resource)
            **jinja_options: Additional Jinja2 environment options
        """
        self._env = jinja2.Environment(keep_trailing_newline=True, **jinja_options)
        try:
            self._template = self._env.from_string(template or DEFAULT_TEMPLATE)
        except jinja2.TemplateSyntaxError as e:
            raise RenderError(f"Template syntax error: {e}")

    def rows(self, page: List[Resource], type_detector: TypeDetector) -> List[Dict[str, Any]]:
        return [
            {
                "path": resource.path,
                "name": resource.name,
                "type": type_detector.detect(resource.name),
                "origins": [layer.origin.name for layer in resource.layers()],
                "overridden": resource.is_overridden,
            }
            for resource in page
        ]

    def render(
        self,
        page: List[Resource],
        total: Optional[int] = None,
        offset: int = 0,
        type_detector: Optional[TypeDetector] = None,
    ) -> str:
        """
        Render a page.

        Args:
            page: Resources to list
            total: Total number of matches, shown in a footer when given
            offset: Offset of the page
            type_detector: Content type detection for the type column

        Returns:
            Rendered text

        Raises:
            RenderError: If rendering fails
        """
        rows = self.rows(page, type_detector or TypeDetector())
        try:
            return self._template.render(rows=rows, total=total, offset=offset)
        except jinja2.TemplateError as e:
            raise RenderError(f"Template error: {e}")
