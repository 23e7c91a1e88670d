#!/usr/bin/env python3
"""Query engine for filtered, paged resource listings.

This module answers the two questions a resource grid asks:
- fetch: page N of the resources matching a filter
- count: how many resources match a filter in total

Each call builds its own VisibilityContext, so one engine can serve
concurrent queries. ``count`` walks the whole tree on every call and is never
cached against earlier fetches.

Example:
    >>> engine = QueryEngine(tree, modules=ModuleSet(["moduleA"]))
    >>> engine.fetch({"name": "foo"}, offset=0, limit=20)
    [Resource(path='/moduleA/foo.js', ...)]
    >>> engine.count({"name": "foo"})
    1
"""

from itertools import islice
from typing import Any, Iterator, List, Mapping, Optional, Union

from resourcefilter.content_types import TypeDetector
from resourcefilter.core.constants import ConfigKey, ROOT_PATH
from resourcefilter.core.validators import validate_limit, validate_offset
from resourcefilter.infrastructure.config_manager import ConfigManager
from resourcefilter.infrastructure.logger import Logger, get_logger
from resourcefilter.modules import (
    InMemoryDefinitionRegistry,
    InMemoryModuleRegistry,
    ModuleSet,
)
from resourcefilter.resources.base import Resource
from resourcefilter.resources.tree import OriginTree
from resourcefilter.rules.filters import Filter, FilterEvaluator, UnsupportedFilterColumnError
from resourcefilter.rules.visibility import VisibilityContext, VisibilityResolver
from resourcefilter.status import InMemoryRecordRepository, RecordRepository, RepositoryUnavailableError

FilterArg = Union[Filter, Mapping[Any, Any], None]


class QueryEngine:
    """
    Serves filtered pages and counts over an OriginTree.

    Attributes:
        tree: The layered resource tree
        evaluator: Column filter evaluation
        root_path: Path under which resources are listed
    """

    def __init__(
        self,
        tree: OriginTree,
        module_registry=None,
        definition_registry=None,
        records: Optional[RecordRepository] = None,
        type_detector: Optional[TypeDetector] = None,
        modules: Optional[ModuleSet] = None,
        root_path: str = ROOT_PATH,
        logger: Optional[Logger] = None,
    ):
        """
        Initialize the engine.

        Args:
            tree: Resource tree to query
            module_registry: Source of module names (``get_module_names()``)
            definition_registry: Source of definitions (``find_definitions()``)
            records: Record repository for status filters
            type_detector: Content type detection for type filters
            modules: Explicit module set; skips the registries when given
            root_path: Path under which resources are listed
            logger: Logger instance (defaults to the global logger)
        """
        self.tree = tree
        self.root_path = root_path
        self.logger = logger or get_logger("resourcefilter.query")
        self._module_registry = module_registry or InMemoryModuleRegistry()
        self._definition_registry = definition_registry or InMemoryDefinitionRegistry()
        self.evaluator = FilterEvaluator(type_detector, records)

        if modules is None:
            modules = ModuleSet.from_registries(self._module_registry, self._definition_registry)
        self._resolver = VisibilityResolver(modules, root_path=tree.root_path)

    @property
    def modules(self) -> ModuleSet:
        return self._resolver.modules

    def refresh_modules(self) -> ModuleSet:
        """
        Rebuild the module set from the registries.

        Returns:
            The new module set
        """
        modules = ModuleSet.from_registries(self._module_registry, self._definition_registry)
        self._resolver.modules = modules
        self.logger.debug("Refreshed module set", modules=len(modules))
        return modules

    def row_id(self, resource: Resource) -> str:
        """Stable row identity of a resource: its path."""
        return resource.path

    def iter_matches(
        self, flt: FilterArg = None, context: Optional[VisibilityContext] = None
    ) -> Iterator[Resource]:
        """
        Lazily stream visible resources matching ``flt`` in traversal order.

        Args:
            flt: Filter, column mapping, or None for no constraint
            context: Visibility decisions to reuse (a new one if None)

        Returns:
            Iterator of matching resources; stop consuming to cancel

        Raises:
            UnsupportedFilterColumnError: If the filter names an unknown column
        """
        flt = self._coerce_filter(flt)
        if context is None:
            context = VisibilityContext()

        def accept(resource: Resource) -> bool:
            return self._resolver.is_visible(resource, context) and self.evaluator.matches(
                resource, flt
            )

        return self.tree.find(self.root_path, accept)

    def fetch(self, flt: FilterArg = None, offset: int = 0, limit: Optional[int] = None) -> List[Resource]:
        """
        Fetch one page of matching resources.

        Traversal stops as soon as the page is full.

        Args:
            flt: Filter, column mapping, or None for no constraint
            offset: Number of matches to skip
            limit: Maximum number of matches to return (None for all)

        Returns:
            Matching resources in traversal order

        Raises:
            ValidationError: If offset, limit or a status filter value is invalid
            UnsupportedFilterColumnError: If the filter names an unknown column
            RepositoryUnavailableError: If a status lookup fails
        """
        validate_offset(offset)
        validate_limit(limit)

        stop = None if limit is None else offset + limit
        context = VisibilityContext()
        with self.logger.add_context(query="fetch"):
            try:
                page = list(islice(self.iter_matches(flt, context), offset, stop))
            except (UnsupportedFilterColumnError, RepositoryUnavailableError) as e:
                self.logger.error(f"Query aborted: {e}", offset=offset, limit=limit)
                raise

            self.logger.debug(
                "Fetched resources",
                offset=offset,
                limit=limit,
                size=len(page),
                visibility_checks=context.computations,
            )
        return page

    def count(self, flt: FilterArg = None) -> int:
        """
        Count all resources matching a filter.

        Runs the full traversal on every call.

        Args:
            flt: Filter, column mapping, or None for no constraint

        Returns:
            Number of matching resources

        Raises:
            ValidationError: If a status filter value is invalid
            UnsupportedFilterColumnError: If the filter names an unknown column
            RepositoryUnavailableError: If a status lookup fails
        """
        with self.logger.add_context(query="count"):
            try:
                total = sum(1 for _ in self.iter_matches(flt))
            except (UnsupportedFilterColumnError, RepositoryUnavailableError) as e:
                self.logger.error(f"Query aborted: {e}")
                raise

            self.logger.debug("Counted resources", total=total)
        return total

    def _coerce_filter(self, flt: FilterArg) -> Optional[Filter]:
        if flt is None or isinstance(flt, Filter):
            return flt
        return Filter.from_mapping(flt)

    @classmethod
    def from_config(cls, config: ConfigManager, logger: Optional[Logger] = None) -> "QueryEngine":
        """
        Build an engine from the ``resourcefilter`` configuration section.

        Raises:
            ConfigError: If the configuration is invalid
            ValueError: If no origin is configured or a directory is missing
        """
        config.validate()
        section = config.section()

        tree = OriginTree.from_config(section.get(ConfigKey.ORIGINS, []))
        module_registry = InMemoryModuleRegistry(section.get(ConfigKey.MODULES, []))
        definition_registry = InMemoryDefinitionRegistry.from_config(
            section.get(ConfigKey.DEFINITIONS, [])
        )
        records = InMemoryRecordRepository.from_config(section.get(ConfigKey.RECORDS, {}))
        type_detector = TypeDetector(
            config.get("resourcefilter.types.default", TypeDetector().default_type)
        )

        return cls(
            tree,
            module_registry=module_registry,
            definition_registry=definition_registry,
            records=records,
            type_detector=type_detector,
            root_path=section.get(ConfigKey.ROOT_PATH, ROOT_PATH),
            logger=logger,
        )
