"""
ResourceFilter Resources - The layered virtual resource tree.

Public API:
-----------

Origins:
    Origin: Base class for backing sources
    FileSystemOrigin: Editable resources on disk
    ClasspathOrigin: Bundled, non-editable resources
    RepositoryOrigin: Editable resources with activation status

Tree:
    Resource: Path-addressed node, optionally layered
    OriginTree: Merged, searchable view over several origins

Usage Example:
--------------

    from resourcefilter.resources import ClasspathOrigin, FileSystemOrigin, OriginTree

    tree = OriginTree([
        FileSystemOrigin("webapp", ["/moduleA/site.css"]),
        ClasspathOrigin("jars", ["/moduleA/site.css", "/lib/jquery.js"]),
    ])
    css = tree.get("/moduleA/site.css")
    css.is_overridden  # True
"""

from resourcefilter.resources.base import (
    ClasspathOrigin,
    FileSystemOrigin,
    Origin,
    RepositoryOrigin,
    Resource,
    origin_class,
)
from resourcefilter.resources.tree import OriginTree, ResourcePredicate

__all__ = [
    "Origin",
    "FileSystemOrigin",
    "ClasspathOrigin",
    "RepositoryOrigin",
    "origin_class",
    "Resource",
    "OriginTree",
    "ResourcePredicate",
]
