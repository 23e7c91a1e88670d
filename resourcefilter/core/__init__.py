"""ResourceFilter Core - Shared constants and validation.

Import specific names from submodules:
    from resourcefilter.core.constants import Column, ErrorCode
    from resourcefilter.core.validators import ValidationError
"""

from resourcefilter.core import constants, validators

__all__ = [
    "constants",
    "validators",
]
