"""
ResourceFilter Core: Input Validators.

This module provides validation functions for configuration documents,
resource paths, pagination arguments and other user inputs.
"""
import re
from typing import Any, Dict, Optional

from resourcefilter.core.constants import ConfigKey, ErrorCode, Limits, OriginKind


class ValidationError(Exception):
    """Base exception for validation errors."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        """Initialize ValidationError.

        Args:
            message: Error message
            error_code: Associated error code
        """
        super().__init__(message)
        self.error_code = error_code


def validate_config(config: Dict[str, Any]) -> bool:
    """Validate ResourceFilter configuration structure.

    Args:
        config: Configuration dictionary (contents of the ``resourcefilter`` key)

    Returns:
        True if valid

    Raises:
        ValidationError: If configuration is invalid
    """
    if not isinstance(config, dict):
        raise ValidationError("Configuration must be a dictionary")

    if ConfigKey.VERSION in config:
        validate_version(config[ConfigKey.VERSION])

    if ConfigKey.ROOT_PATH in config:
        validate_resource_path(config[ConfigKey.ROOT_PATH])

    if ConfigKey.ORIGINS in config:
        origins = config[ConfigKey.ORIGINS]
        if not isinstance(origins, list):
            raise ValidationError("Origins must be a list")

        for i, origin in enumerate(origins):
            try:
                validate_origin_config(origin)
            except ValidationError as e:
                raise ValidationError(f"Invalid origin configuration at index {i}: {e}")

    if ConfigKey.MODULES in config:
        modules = config[ConfigKey.MODULES]
        if not isinstance(modules, list) or not all(isinstance(m, str) for m in modules):
            raise ValidationError("Modules must be a list of strings")

    if ConfigKey.DEFINITIONS in config:
        definitions = config[ConfigKey.DEFINITIONS]
        if not isinstance(definitions, list):
            raise ValidationError("Definitions must be a list")

        for i, definition in enumerate(definitions):
            try:
                validate_definition_config(definition)
            except ValidationError as e:
                raise ValidationError(f"Invalid definition configuration at index {i}: {e}")

    if ConfigKey.RECORDS in config:
        validate_records_config(config[ConfigKey.RECORDS])

    if ConfigKey.QUERY in config:
        query = config[ConfigKey.QUERY]
        if not isinstance(query, dict):
            raise ValidationError("Query configuration must be a dictionary")
        if ConfigKey.QUERY_DEFAULT_LIMIT in query:
            validate_limit(query[ConfigKey.QUERY_DEFAULT_LIMIT])

    return True


def validate_origin_config(origin: Dict[str, Any]) -> bool:
    """Validate a single origin entry.

    An origin needs a known ``kind`` and exactly one of ``path`` (a directory
    to scan) or ``paths`` (an explicit list of resource paths).

    Raises:
        ValidationError: If origin is invalid
    """
    if not isinstance(origin, dict):
        raise ValidationError("Origin must be a dictionary")

    if ConfigKey.ORIGIN_KIND not in origin:
        raise ValidationError("Origin must have 'kind' field")

    kind = origin[ConfigKey.ORIGIN_KIND]
    valid_kinds = {k.value for k in OriginKind}
    if kind not in valid_kinds:
        raise ValidationError(f"Invalid origin kind: {kind}. Must be one of {sorted(valid_kinds)}")

    has_path = ConfigKey.ORIGIN_PATH in origin
    has_paths = ConfigKey.ORIGIN_PATHS in origin
    if has_path == has_paths:
        raise ValidationError("Origin must have exactly one of 'path' or 'paths'")

    if has_path:
        path = origin[ConfigKey.ORIGIN_PATH]
        if not isinstance(path, str) or not path:
            raise ValidationError(f"Origin path must be a non-empty string: {path}")
    else:
        paths = origin[ConfigKey.ORIGIN_PATHS]
        if not isinstance(paths, list):
            raise ValidationError("Origin paths must be a list")
        for path in paths:
            validate_resource_path(path)

    if ConfigKey.ORIGIN_NAME in origin and not isinstance(origin[ConfigKey.ORIGIN_NAME], str):
        raise ValidationError("Origin name must be a string")

    return True


def validate_definition_config(definition: Dict[str, Any]) -> bool:
    """Validate a definition entry (``{name, module}``).

    Raises:
        ValidationError: If definition is invalid
    """
    if not isinstance(definition, dict):
        raise ValidationError("Definition must be a dictionary")

    for key in (ConfigKey.DEFINITION_NAME, ConfigKey.DEFINITION_MODULE):
        if key not in definition:
            raise ValidationError(f"Definition must have '{key}' field")
        if not isinstance(definition[key], str) or not definition[key]:
            raise ValidationError(f"Definition {key} must be a non-empty string")

    return True


def validate_records_config(records: Dict[str, Any]) -> bool:
    """Validate the path to activation status mapping.

    Raises:
        ValidationError: If the mapping is invalid
    """
    if not isinstance(records, dict):
        raise ValidationError("Records must be a mapping of path to status")

    for path, status in records.items():
        validate_resource_path(path)
        if isinstance(status, bool) or not isinstance(status, int):
            raise ValidationError(f"Record status must be an integer: {path}={status}")

    return True


def validate_resource_path(path: str) -> bool:
    """Validate an absolute, slash-delimited resource path.

    Args:
        path: Path to validate

    Returns:
        True if valid

    Raises:
        ValidationError: If path is invalid
    """
    if not path:
        raise ValidationError("Path cannot be empty")

    if not isinstance(path, str):
        raise ValidationError(f"Path must be string, got {type(path)}")

    if len(path) > Limits.MAX_PATH_LENGTH:
        raise ValidationError(f"Path exceeds maximum length ({Limits.MAX_PATH_LENGTH})")

    if not path.startswith("/"):
        raise ValidationError(f"Path must be absolute: {path}")

    if "\0" in path:
        raise ValidationError("Path contains null bytes")

    if any(ord(c) < 32 for c in path):
        raise ValidationError("Path contains control characters")

    segments = [s for s in path.split("/") if s]
    if any(s in (".", "..") for s in segments):
        raise ValidationError("Path traversal not allowed")

    return True


def validate_offset(offset: int) -> bool:
    """Validate a page offset.

    Raises:
        ValidationError: If offset is not a non-negative integer
    """
    if isinstance(offset, bool) or not isinstance(offset, int):
        raise ValidationError(f"Offset must be an integer, got {type(offset).__name__}")
    if offset < 0:
        raise ValidationError(f"Offset must be non-negative: {offset}")
    return True


def validate_limit(limit: Optional[int]) -> bool:
    """Validate a page limit. ``None`` means unbounded.

    Raises:
        ValidationError: If limit is not a non-negative integer or None
    """
    if limit is None:
        return True
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise ValidationError(f"Limit must be an integer, got {type(limit).__name__}")
    if limit < 0:
        raise ValidationError(f"Limit must be non-negative: {limit}")
    return True


def validate_version(version: str) -> bool:
    """Validate version string format.

    Raises:
        ValidationError: If version is invalid
    """
    if not version:
        raise ValidationError("Version cannot be empty")

    if not isinstance(version, str):
        raise ValidationError(f"Version must be string, got {type(version)}")

    # Simple semantic version check (X.Y or X.Y.Z)
    if not re.match(r"^\d+\.\d+(\.\d+)?$", version):
        raise ValidationError(f"Invalid version format: {version}. Expected X.Y or X.Y.Z")

    return True
