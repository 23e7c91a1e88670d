#!/usr/bin/env python3
"""Origin matching for layered resources.

A resource matches an origin kind when any of its layers was produced by an
origin of exactly that class. Instances and their configuration are ignored.

Example:
    >>> matches_origin(resource, FileSystemOrigin)
    True
    >>> matches_origin(resource, FileSystemOrigin("another-webapp"))
    True
"""

from typing import Type, Union

from resourcefilter.resources.base import Origin, Resource

OriginKindArg = Union[Origin, Type[Origin]]


def origin_kind(candidate: OriginKindArg) -> Type[Origin]:
    """Reduce an origin instance to its class; classes are returned as-is."""
    if isinstance(candidate, type):
        return candidate
    return type(candidate)


def matches_origin(resource: Resource, candidate: OriginKindArg) -> bool:
    """
    Check whether any layer of ``resource`` comes from the candidate origin kind.

    Args:
        resource: Plain or layered resource
        candidate: Origin class, or an origin instance standing for its class

    Returns:
        True if a layer's origin class is exactly the candidate class
    """
    kind = origin_kind(candidate)
    return any(type(layer.origin) is kind for layer in resource.layers())
