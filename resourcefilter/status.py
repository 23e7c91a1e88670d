#!/usr/bin/env python3
"""Activation status of resources backed by repository records.

This module provides:
- StatusOption: The option chosen in a status filter
- Record: Handle of a resource's backing record
- RecordRepository: Lookup contract for records and their activation status
- InMemoryRecordRepository: Path-keyed store used by the command line and tests

Only resources with a layer from a RepositoryOrigin have a backing record.
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from resourcefilter.core.constants import ActivationStatus, ErrorCode
from resourcefilter.core.validators import ValidationError, validate_records_config
from resourcefilter.resources.base import RepositoryOrigin, Resource


class RepositoryError(Exception):
    """Raised by a record repository when the backing store cannot be reached."""


class RepositoryUnavailableError(RuntimeError):
    """A status lookup failed; the query cannot produce trustworthy results."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.DEPENDENCY_ERROR):
        super().__init__(message)
        self.error_code = error_code


@dataclass(frozen=True)
class StatusOption:
    """An activation status option as offered by a status filter.

    Attributes:
        value: Numeric status code as text (e.g., "2")
        label: Human readable label (e.g., "Activated")
    """

    value: str
    label: str = ""

    def expected_status(self) -> int:
        """
        Status code this option stands for.

        Raises:
            ValidationError: If the value is not an integer
        """
        try:
            return int(self.value)
        except (TypeError, ValueError):
            raise ValidationError(f"Status option value must be an integer: {self.value!r}")

    @classmethod
    def of(cls, status: ActivationStatus) -> "StatusOption":
        return cls(value=str(int(status)), label=status.name.replace("_", " ").title())

    @classmethod
    def coerce(cls, value: Any) -> "StatusOption":
        """
        Convert a status filter value to a StatusOption.

        Accepts a StatusOption, an integer status code (including
        ActivationStatus members) or the code as text ("2").

        Raises:
            ValidationError: If the value has any other type
        """
        if isinstance(value, StatusOption):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return cls(value=str(int(value)))
        if isinstance(value, str):
            return cls(value=value.strip())
        raise ValidationError(
            f"Status filter value must be a StatusOption, int or str, got {type(value).__name__}"
        )


@dataclass(frozen=True)
class Record:
    """Handle of a backing record in the content repository."""

    path: str
    origin: RepositoryOrigin


class RecordRepository:
    """Base lookup of backing records.

    Subclasses implement ``get_activation_status``; ``find_record`` resolves
    the record behind the first repository layer of a resource.
    """

    def find_record(self, resource: Resource) -> Optional[Record]:
        """
        Resolve the backing record of a resource.

        Returns:
            Record of the first layer from a RepositoryOrigin, or None
        """
        for layer in resource.layers():
            if isinstance(layer.origin, RepositoryOrigin):
                return Record(path=layer.path, origin=layer.origin)
        return None

    def get_activation_status(self, record: Record) -> int:
        """
        Activation status of a record.

        Raises:
            RepositoryError: If the repository cannot be reached
        """
        raise NotImplementedError


class InMemoryRecordRepository(RecordRepository):
    """Record repository holding activation status by path.

    Records without a stored status are reported as not activated.
    """

    def __init__(self, statuses: Optional[Mapping[str, int]] = None):
        self._statuses: Dict[str, int] = dict(statuses or {})

    def set_status(self, path: str, status: int) -> None:
        self._statuses[path] = int(status)

    def get_activation_status(self, record: Record) -> int:
        return self._statuses.get(record.path, ActivationStatus.NOT_ACTIVATED)

    @classmethod
    def from_config(cls, records: Mapping[str, int]) -> "InMemoryRecordRepository":
        """
        Build a repository from the ``records`` configuration mapping.

        Raises:
            ValidationError: If a path or status is invalid
        """
        validate_records_config(dict(records))
        return cls(records)
