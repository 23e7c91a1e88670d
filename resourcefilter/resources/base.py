"""
ResourceFilter Resources: Base Classes and Data Structures.

This module provides the building blocks of the virtual resource tree:
- Origin: Base class for the backing sources that produce resources
- FileSystemOrigin, ClasspathOrigin, RepositoryOrigin: The origin kinds
- Resource: A path-addressed node, optionally assembled from several layers

An origin kind is its Python class. Two origin instances of the same class
are the same kind, whatever their names or contents.
"""

import os
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple, Type

from resourcefilter.core.constants import OriginKind, PATH_SEPARATOR, ROOT_PATH
from resourcefilter.core.validators import ValidationError, validate_resource_path


def normalize_path(path: str) -> str:
    """
    Normalize a resource path to ``/a/b`` form.

    Duplicate and trailing separators are removed; the root stays ``/``.

    Raises:
        ValidationError: If the path is not an absolute resource path
    """
    validate_resource_path(path)
    segments = [s for s in path.split(PATH_SEPARATOR) if s]
    return PATH_SEPARATOR + PATH_SEPARATOR.join(segments)


def parent_path(path: str) -> Optional[str]:
    """Return the parent of a normalized path, or None for the root."""
    if path == ROOT_PATH:
        return None
    head = path.rsplit(PATH_SEPARATOR, 1)[0]
    return head or ROOT_PATH


def ancestor_paths(path: str) -> List[str]:
    """Return every ancestor of ``path`` below the root, outermost first, plus ``path``."""
    segments = [s for s in path.split(PATH_SEPARATOR) if s]
    return [PATH_SEPARATOR + PATH_SEPARATOR.join(segments[: i + 1]) for i in range(len(segments))]


class Origin:
    """
    A backing source of resources.

    Subclasses define the origin kind. Instances hold the set of resource
    paths the source provides; intermediate folders implied by a path are
    provided too.

    Attributes:
        name: Display name of this origin (e.g., "config", "webapp")
        classpath_only: True for bundled, non-editable sources
    """

    kind: OriginKind
    classpath_only: bool = False

    def __init__(self, name: str, paths: Iterable[str] = ()):
        """
        Initialize the origin.

        Args:
            name: Display name of this origin
            paths: Resource paths provided by this origin
        """
        self.name = name
        self._paths = set()
        for path in paths:
            self.add_path(path)

    def add_path(self, path: str) -> None:
        """Register a resource path (and its implied folders) with this origin."""
        self._paths.update(ancestor_paths(normalize_path(path)))

    def list_paths(self) -> List[str]:
        """All paths provided by this origin, in sorted order."""
        return sorted(self._paths)

    def has_path(self, path: str) -> bool:
        return path in self._paths

    @property
    def editable(self) -> bool:
        return not self.classpath_only

    @classmethod
    def from_directory(cls, name: str, directory: str) -> "Origin":
        """
        Create an origin from the files and folders under ``directory``.

        Each entry is exposed at its path relative to ``directory``, so
        ``<directory>/moduleA/css/site.css`` becomes ``/moduleA/css/site.css``.

        Raises:
            ValueError: If the directory doesn't exist
        """
        if not os.path.isdir(directory):
            raise ValueError(f"Origin directory does not exist: {directory}")

        origin = cls(name)
        for dirpath, dirnames, filenames in os.walk(directory):
            dirnames.sort()
            for entry in dirnames + sorted(filenames):
                relative = os.path.relpath(os.path.join(dirpath, entry), directory)
                origin.add_path(PATH_SEPARATOR + relative.replace(os.sep, PATH_SEPARATOR))
        return origin

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}')"


class FileSystemOrigin(Origin):
    """Editable resources stored in a directory on disk."""

    kind = OriginKind.FILESYSTEM


class ClasspathOrigin(Origin):
    """Bundled resources shipped inside modules; never editable."""

    kind = OriginKind.CLASSPATH
    classpath_only = True


class RepositoryOrigin(Origin):
    """Editable resources stored in the content repository.

    Resources from this origin have backing records with an activation status.
    """

    kind = OriginKind.REPOSITORY


ORIGIN_CLASSES = {cls.kind: cls for cls in (FileSystemOrigin, ClasspathOrigin, RepositoryOrigin)}


def origin_class(kind: str) -> Type[Origin]:
    """
    Look up an origin class by its configuration name.

    Raises:
        ValidationError: If the kind is unknown
    """
    try:
        return ORIGIN_CLASSES[OriginKind(kind)]
    except ValueError:
        raise ValidationError(
            f"Unknown origin kind: {kind}. Must be one of {sorted(k.value for k in OriginKind)}"
        )


@dataclass(frozen=True, eq=False)
class Resource:
    """
    A node in the virtual resource tree.

    A plain resource is its own single layer. A layered resource carries a
    non-empty tuple of layers, highest priority first; it is "overridden"
    when more than one layer contributes to it.

    Attributes:
        path: Slash-delimited path, unique within the tree (e.g., "/moduleA/css/site.css")
        origin: Origin that produced this resource (the top layer's origin if layered)
        parent: Parent resource, None for the root
        layer_list: Layers of a layered resource, None for a plain resource
    """

    path: str
    origin: Origin
    parent: Optional["Resource"] = field(default=None, repr=False)
    layer_list: Optional[Tuple["Resource", ...]] = field(default=None, repr=False)

    def __post_init__(self):
        if self.layer_list is not None and not self.layer_list:
            raise ValueError(f"Layered resource needs at least one layer: {self.path}")

    @property
    def name(self) -> str:
        """Last path segment; empty for the root."""
        return self.path.rsplit(PATH_SEPARATOR, 1)[-1]

    @property
    def is_layered(self) -> bool:
        return self.layer_list is not None

    def layers(self) -> List["Resource"]:
        """Layers of this resource, ``[self]`` for a plain resource."""
        if self.layer_list is None:
            return [self]
        return list(self.layer_list)

    @property
    def is_overridden(self) -> bool:
        return self.layer_list is not None and len(self.layer_list) > 1

    def is_classpath_only(self) -> bool:
        """True iff every layer comes from a classpath origin."""
        return all(layer.origin.classpath_only for layer in self.layers())

    def __repr__(self) -> str:
        return f"Resource(path='{self.path}', origin={self.origin!r}, layers={len(self.layers())})"
