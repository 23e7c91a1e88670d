#!/usr/bin/env python3
"""Top-level visibility of resources.

A resource is listed only if the top-level folder it lives under is visible:
- folders named after a known module are always visible
- folders with at least one layer from an editable origin are visible
- folders made up solely of classpath layers are hidden otherwise

Decisions are memoized per top-level segment in a VisibilityContext. A
context belongs to exactly one query; create a new one for every query.

Example:
    >>> resolver = VisibilityResolver(ModuleSet(["moduleA"]))
    >>> context = VisibilityContext()
    >>> resolver.is_visible(tree.get("/lib/jquery.js"), context)
    False
"""

from typing import Dict, Optional

from resourcefilter.core.constants import PATH_SEPARATOR, ROOT_PATH
from resourcefilter.modules import ModuleSet
from resourcefilter.resources.base import Resource


def top_level_segment(path: str) -> Optional[str]:
    """
    First path component of a resource below a top-level folder.

    Returns:
        "moduleA" for "/moduleA/css/site.css", None for "/moduleA" and "/"
    """
    parts = path.split(PATH_SEPARATOR, 2)
    if len(parts) < 3 or not parts[1]:
        return None
    return parts[1]


class VisibilityContext:
    """Visibility decisions of one query, keyed by top-level segment."""

    def __init__(self):
        self._decisions: Dict[str, bool] = {}
        self.hits = 0
        self.computations = 0

    def get(self, segment: str) -> Optional[bool]:
        decision = self._decisions.get(segment)
        if decision is not None:
            self.hits += 1
        return decision

    def put(self, segment: str, visible: bool) -> None:
        self._decisions[segment] = visible

    def __contains__(self, segment: object) -> bool:
        return segment in self._decisions

    def __len__(self) -> int:
        return len(self._decisions)


class VisibilityResolver:
    """Decides whether a resource's top-level subtree is listed."""

    def __init__(self, modules: ModuleSet, root_path: str = ROOT_PATH):
        """Initialize resolver.

        Args:
            modules: Known module names
            root_path: Path of the tree root
        """
        self.modules = modules
        self.root_path = root_path

    def is_visible(self, resource: Resource, context: VisibilityContext) -> bool:
        """
        Check whether a resource should be considered for listing at all.

        Args:
            resource: Resource to check
            context: Decisions made so far in the current query

        Returns:
            True if the resource's top-level folder is visible
        """
        segment = top_level_segment(resource.path)
        if segment is None:
            context.computations += 1
            return self.is_module_or_editable(resource)

        cached = context.get(segment)
        if cached is not None:
            return cached

        context.computations += 1
        visible = self.is_module_or_editable(self.resolve_top_level(resource))
        context.put(segment, visible)
        return visible

    def resolve_top_level(self, resource: Resource) -> Resource:
        """
        Walk up to the ancestor whose parent is the tree root.

        Args:
            resource: Resource at least two levels below the root

        Returns:
            Top-level resource of the resource's branch
        """
        top = resource.parent
        while top.parent is not None and top.parent.path != self.root_path:
            top = top.parent
        return top

    def is_module_or_editable(self, resource: Resource) -> bool:
        return resource.name in self.modules or not resource.is_classpath_only()
