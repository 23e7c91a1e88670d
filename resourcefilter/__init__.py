"""ResourceFilter - Filtered, paged listings over a layered resource tree.

Usage Example:
--------------

    from resourcefilter import ClasspathOrigin, FileSystemOrigin, ModuleSet, OriginTree, QueryEngine

    tree = OriginTree([
        FileSystemOrigin("webapp", ["/moduleA/foo.js"]),
        ClasspathOrigin("jars", ["/moduleA/foo.js", "/lib/jquery.js"]),
    ])
    engine = QueryEngine(tree, modules=ModuleSet(["moduleA"]))
    engine.fetch({"name": "foo"}, offset=0, limit=20)
    engine.count({"overridden": True})
"""

from resourcefilter.core.constants import RESOURCEFILTER_VERSION, ActivationStatus, Column
from resourcefilter.modules import ModuleSet
from resourcefilter.query import QueryEngine
from resourcefilter.resources import (
    ClasspathOrigin,
    FileSystemOrigin,
    Origin,
    OriginTree,
    RepositoryOrigin,
    Resource,
)
from resourcefilter.rules import Filter, UnsupportedFilterColumnError
from resourcefilter.status import RepositoryUnavailableError, StatusOption

__version__ = RESOURCEFILTER_VERSION

__all__ = [
    "ActivationStatus",
    "Column",
    "ModuleSet",
    "QueryEngine",
    "Origin",
    "FileSystemOrigin",
    "ClasspathOrigin",
    "RepositoryOrigin",
    "OriginTree",
    "Resource",
    "Filter",
    "UnsupportedFilterColumnError",
    "RepositoryUnavailableError",
    "StatusOption",
]
