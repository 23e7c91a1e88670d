#!/usr/bin/env python3
"""Column filters for resource listings.

This module provides per-column predicates for the resource grid:
- ORIGIN: any layer comes from the same origin kind
- TYPE: detected content type contains the text
- NAME: resource name contains the text
- OVERRIDDEN: resource has more than one layer (when requested)
- STATUS: backing record has the expected activation status

Active entries are combined with AND. Empty-text and None values do not
constrain the result. Columns outside the Column enum are rejected.

Example:
    >>> evaluator = FilterEvaluator(TypeDetector(), records)
    >>> flt = Filter.from_mapping({"name": "foo", "overridden": True})
    >>> evaluator.matches(resource, flt)
    False
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Tuple, Union

from resourcefilter.content_types import TypeDetector
from resourcefilter.core.constants import Column, ErrorCode
from resourcefilter.resources.base import Resource
from resourcefilter.rules.origin import matches_origin
from resourcefilter.status import (
    RecordRepository,
    RepositoryError,
    RepositoryUnavailableError,
    StatusOption,
)

ColumnArg = Union[Column, str]


class UnsupportedFilterColumnError(ValueError):
    """Raised for a filter column outside the supported set."""

    def __init__(self, column: Any, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        super().__init__(f"Unsupported filter property: {column}")
        self.column = column
        self.error_code = error_code


def parse_column(column: ColumnArg) -> Column:
    """
    Convert a column name to a Column.

    Accepts Column members, their values ("name") and their names ("NAME").

    Raises:
        UnsupportedFilterColumnError: If the column is not supported
    """
    if isinstance(column, Column):
        return column
    if isinstance(column, str):
        try:
            return Column(column)
        except ValueError:
            pass
        if column.upper() in Column.__members__:
            return Column[column.upper()]
    raise UnsupportedFilterColumnError(column)


def is_active(value: Any) -> bool:
    """True if a filter value constrains the result (not None, not empty text)."""
    return value is not None and not (isinstance(value, str) and value == "")


@dataclass(frozen=True)
class Filter:
    """Immutable column filter for one query.

    Attributes:
        entries: Column to value mapping, read-only
    """

    entries: Mapping[Column, Any] = field(default_factory=dict)

    def __post_init__(self):
        entries = {}
        for key, value in self.entries.items():
            column = parse_column(key)
            if column is Column.STATUS and is_active(value):
                value = StatusOption.coerce(value)
            entries[column] = value
        object.__setattr__(self, "entries", MappingProxyType(entries))

    @classmethod
    def from_mapping(cls, mapping: Mapping[ColumnArg, Any]) -> "Filter":
        """
        Build a filter from a column to value mapping.

        Keys may be column names; integer and text values for STATUS are
        wrapped in a StatusOption.

        Raises:
            UnsupportedFilterColumnError: If a key is not a supported column
            ValidationError: If a STATUS value has an unsupported type
        """
        return cls(mapping)

    def active_entries(self) -> Iterator[Tuple[Column, Any]]:
        """Entries that constrain the result."""
        for column, value in self.entries.items():
            if is_active(value):
                yield column, value

    def is_empty(self) -> bool:
        return not any(True for _ in self.active_entries())

    def __len__(self) -> int:
        """Number of active entries."""
        return sum(1 for _ in self.active_entries())


class FilterEvaluator:
    """Evaluates column filters against resources.

    Features:
    - Total dispatch over the Column enum
    - Origin matching by kind across all layers
    - Status lookup through a record repository; lookup failures abort the query
    """

    def __init__(
        self,
        type_detector: Optional[TypeDetector] = None,
        records: Optional[RecordRepository] = None,
    ):
        """Initialize evaluator.

        Args:
            type_detector: Content type detection for the TYPE column
            records: Record repository for the STATUS column; without one,
                     no resource has a backing record
        """
        self.type_detector = type_detector or TypeDetector()
        self.records = records
        self._predicates: Dict[Column, Callable[[Resource, Any], bool]] = {
            Column.ORIGIN: self._by_origin,
            Column.TYPE: self._by_type,
            Column.NAME: self._by_name,
            Column.OVERRIDDEN: self._by_overridden,
            Column.STATUS: self._by_status,
        }

    def evaluate(self, resource: Resource, column: ColumnArg, value: Any) -> bool:
        """
        Evaluate a single column filter.

        Args:
            resource: Resource to test
            column: Column or column name
            value: Filter value; None means no constraint

        Returns:
            True if the resource satisfies the filter

        Raises:
            UnsupportedFilterColumnError: If the column is not supported
            RepositoryUnavailableError: If a status lookup fails
        """
        predicate = self._predicates[parse_column(column)]
        if value is None:
            return True
        return predicate(resource, value)

    def matches(self, resource: Resource, flt: Optional[Filter]) -> bool:
        """
        Check a resource against every active entry of a filter.

        Args:
            resource: Resource to test
            flt: Filter, or None for no constraint

        Returns:
            True if all active entries match
        """
        if flt is None:
            return True
        return all(self.evaluate(resource, column, value) for column, value in flt.active_entries())

    def _by_origin(self, resource: Resource, value: Any) -> bool:
        return matches_origin(resource, value)

    def _by_type(self, resource: Resource, value: str) -> bool:
        return value in self.type_detector.detect(resource.name)

    def _by_name(self, resource: Resource, value: str) -> bool:
        return value in resource.name

    def _by_overridden(self, resource: Resource, value: bool) -> bool:
        return not value or resource.is_overridden

    def _by_status(self, resource: Resource, value: Any) -> bool:
        expected = StatusOption.coerce(value).expected_status()
        if self.records is None:
            return False

        record = self.records.find_record(resource)
        if record is None:
            return False

        try:
            status = self.records.get_activation_status(record)
        except RepositoryError as e:
            raise RepositoryUnavailableError(
                f"Cannot read activation status of {record.path}: {e}"
            ) from e

        return status == expected
