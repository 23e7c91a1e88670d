"""
ResourceFilter Resources: Layered Origin Tree.

This module provides the OriginTree, a merged view over several origins.

The tree:
- Merges origins in priority order (first origin is the top layer)
- Builds a layered Resource for every path found in at least one origin
- Searches lazily, depth-first, with siblings in lexicographic order

Example structure for origins ``[webapp, classpath]``:
    /
        moduleA/            layers: webapp, classpath  (overridden)
            site.css        layers: webapp
        lib/                layers: classpath
            jquery.js       layers: classpath
"""

from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence

from resourcefilter.core.constants import ConfigKey, ROOT_PATH
from resourcefilter.core.validators import ValidationError, validate_origin_config
from resourcefilter.resources.base import (
    Origin,
    Resource,
    normalize_path,
    origin_class,
    parent_path,
)

ResourcePredicate = Callable[[Resource], bool]


class OriginTree:
    """
    Layered resource tree over an ordered list of origins.

    Attributes:
        origins: Origins in priority order, highest first
        root: The root resource ("/")
    """

    def __init__(self, origins: Sequence[Origin], root_origin: Optional[Origin] = None):
        """
        Initialize the tree and index every resource.

        Args:
            origins: Origins in priority order, highest first
            root_origin: Origin attributed to the root node
                        (defaults to the first origin)

        Raises:
            ValueError: If no origin is given or an origin is listed twice
        """
        if not origins:
            raise ValueError("OriginTree needs at least one origin")
        if len({id(o) for o in origins}) != len(origins):
            raise ValueError("Origin listed more than once")

        self.origins: List[Origin] = list(origins)
        self._root_origin = root_origin or self.origins[0]
        self._nodes: Dict[str, Resource] = {}
        self._children: Dict[str, List[str]] = {}
        self._build()

    def _build(self) -> None:
        self.root = Resource(path=ROOT_PATH, origin=self._root_origin)
        self._nodes = {ROOT_PATH: self.root}
        self._children = {ROOT_PATH: []}

        all_paths = set()
        for origin in self.origins:
            all_paths.update(origin.list_paths())

        # Sorted so that every parent is created before its children
        for path in sorted(all_paths, key=lambda p: (p.count("/"), p)):
            parent = self._nodes[parent_path(path)]
            layers = tuple(
                Resource(path=path, origin=origin, parent=parent)
                for origin in self.origins
                if origin.has_path(path)
            )
            self._nodes[path] = Resource(
                path=path, origin=layers[0].origin, parent=parent, layer_list=layers
            )
            self._children[path] = []
            self._children[parent.path].append(path)

        for names in self._children.values():
            names.sort()

    @property
    def root_path(self) -> str:
        return self.root.path

    def get(self, path: str) -> Optional[Resource]:
        """
        Look up a resource by path.

        Returns:
            The resource, or None if no origin provides the path
        """
        try:
            return self._nodes.get(normalize_path(path))
        except ValidationError:
            return None

    def children(self, path: str) -> List[Resource]:
        """Direct children of ``path`` in lexicographic order."""
        return [self._nodes[p] for p in self._children.get(normalize_path(path), [])]

    def find(self, root_path: str, predicate: ResourcePredicate) -> Iterator[Resource]:
        """
        Lazily yield every resource under ``root_path`` accepted by ``predicate``.

        Traversal is pre-order depth-first; siblings are visited in
        lexicographic order. The start node itself is never yielded.
        A rejected folder is still descended into.

        Args:
            root_path: Path to start the search from
            predicate: Inclusion test applied to each visited resource

        Returns:
            Iterator of matching resources; stop consuming to cancel
        """
        start = normalize_path(root_path)
        if start not in self._nodes:
            return

        stack = list(reversed(self._children[start]))
        while stack:
            path = stack.pop()
            resource = self._nodes[path]
            if predicate(resource):
                yield resource
            stack.extend(reversed(self._children[path]))

    def __len__(self) -> int:
        """Number of resources below the root."""
        return len(self._nodes) - 1

    @classmethod
    def from_config(cls, origins_config: List[Dict[str, Any]]) -> "OriginTree":
        """
        Build a tree from ``origins`` configuration entries.

        Each entry has a ``kind`` (filesystem, classpath, repository), an
        optional ``name`` and either a ``path`` directory to scan or an
        explicit ``paths`` list.

        Raises:
            ValidationError: If an entry is invalid
            ValueError: If a directory doesn't exist or no origin is configured
        """
        origins = []
        for i, entry in enumerate(origins_config):
            validate_origin_config(entry)
            kind = entry[ConfigKey.ORIGIN_KIND]
            name = entry.get(ConfigKey.ORIGIN_NAME) or f"{kind}-{i}"
            origin_cls = origin_class(kind)
            if ConfigKey.ORIGIN_PATH in entry:
                origins.append(origin_cls.from_directory(name, entry[ConfigKey.ORIGIN_PATH]))
            else:
                origins.append(origin_cls(name, entry[ConfigKey.ORIGIN_PATHS]))
        return cls(origins)

    def __repr__(self) -> str:
        return f"OriginTree(origins={self.origins!r}, resources={len(self)})"
