"""
ResourceFilter Core: Constants and Type Definitions

This module provides package-wide constants, error codes, filter columns and
configuration keys used by the query engine and its collaborators.
"""
from enum import Enum, IntEnum

# Version information
RESOURCEFILTER_VERSION = "1.0.0"

# Path conventions
ROOT_PATH = "/"
PATH_SEPARATOR = "/"


# Error codes (0-9 range)
class ErrorCode(IntEnum):
    """Standardized error codes for ResourceFilter operations."""

    SUCCESS = 0  # Operation completed successfully
    INVALID_INPUT = 1  # Bad path, filter column or configuration
    NOT_FOUND = 2  # Resource or file doesn't exist
    DEPENDENCY_ERROR = 3  # Backing repository unavailable
    INTERNAL_ERROR = 4  # Bug in ResourceFilter


class Column(Enum):
    """Filterable grid columns.

    The set is closed: a filter may only constrain these columns.
    """

    ORIGIN = "origin"
    TYPE = "type"
    NAME = "name"
    OVERRIDDEN = "overridden"
    STATUS = "status"


class ActivationStatus(IntEnum):
    """Publication state of a resource's backing record."""

    NOT_ACTIVATED = 0
    MODIFIED = 1
    ACTIVATED = 2


class OriginKind(Enum):
    """Names used for origin kinds in configuration and on the command line."""

    FILESYSTEM = "filesystem"
    CLASSPATH = "classpath"
    REPOSITORY = "repository"


# Resource limits and defaults
class Limits:
    """Query limits and default values."""

    MAX_PATH_LENGTH = 4096
    DEFAULT_PAGE_SIZE = 50
    DEFAULT_CONTENT_TYPE = "application/octet-stream"


# Configuration keys
class ConfigKey:
    """Configuration key constants."""

    # Top-level keys
    VERSION = "version"
    ROOT_PATH = "root_path"
    ORIGINS = "origins"
    MODULES = "modules"
    DEFINITIONS = "definitions"
    RECORDS = "records"
    QUERY = "query"
    TYPES = "types"
    LOGGING = "logging"

    # Origin configuration
    ORIGIN_KIND = "kind"
    ORIGIN_NAME = "name"
    ORIGIN_PATH = "path"
    ORIGIN_PATHS = "paths"

    # Definition configuration
    DEFINITION_NAME = "name"
    DEFINITION_MODULE = "module"

    # Query configuration
    QUERY_DEFAULT_LIMIT = "default_limit"

    # Type detection configuration
    TYPES_DEFAULT = "default"


# Default configuration values
DEFAULT_CONFIG = {
    ConfigKey.VERSION: "1.0",
    ConfigKey.ROOT_PATH: ROOT_PATH,
    ConfigKey.ORIGINS: [],
    ConfigKey.MODULES: [],
    ConfigKey.DEFINITIONS: [],
    ConfigKey.RECORDS: {},
    ConfigKey.QUERY: {
        ConfigKey.QUERY_DEFAULT_LIMIT: Limits.DEFAULT_PAGE_SIZE,
    },
    ConfigKey.TYPES: {
        ConfigKey.TYPES_DEFAULT: Limits.DEFAULT_CONTENT_TYPE,
    },
    ConfigKey.LOGGING: {
        "level": "INFO",
        "file": None,
    },
}
