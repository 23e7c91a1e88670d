#!/usr/bin/env python3
"""Known logical modules.

Resources under a top-level folder named after a known module are always
listed. The set of known modules is the union of:
- every module registered with the module registry (including modules that
  ship no definitions, only e.g. CSS files)
- the owning module of every definition known to the definition registry
  (which also covers modules that exist only as configuration)

Example:
    >>> modules = ModuleSet.from_registries(
    ...     InMemoryModuleRegistry(["core"]),
    ...     InMemoryDefinitionRegistry([DefinitionProvider(DefinitionMetadata("page", "site"))]),
    ... )
    >>> "site" in modules
    True
"""

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Iterable, Iterator, List

from resourcefilter.core.constants import ConfigKey
from resourcefilter.core.validators import validate_definition_config


@dataclass(frozen=True)
class DefinitionMetadata:
    """Metadata of a registered definition."""

    name: str
    module: str


@dataclass(frozen=True)
class DefinitionProvider:
    """A registered definition, exposing its metadata."""

    metadata: DefinitionMetadata


class InMemoryModuleRegistry:
    """Module registry backed by a list of module names."""

    def __init__(self, names: Iterable[str] = ()):
        self._names = list(names)

    def get_module_names(self) -> List[str]:
        return list(self._names)

    def register(self, name: str) -> None:
        if name not in self._names:
            self._names.append(name)


class InMemoryDefinitionRegistry:
    """Definition registry backed by a list of providers."""

    def __init__(self, providers: Iterable[DefinitionProvider] = ()):
        self._providers = list(providers)

    def find_definitions(self) -> Iterator[DefinitionProvider]:
        return iter(list(self._providers))

    def register(self, provider: DefinitionProvider) -> None:
        self._providers.append(provider)

    @classmethod
    def from_config(cls, definitions: List[Dict[str, Any]]) -> "InMemoryDefinitionRegistry":
        """
        Build a registry from ``definitions`` configuration entries.

        Raises:
            ValidationError: If an entry is missing its name or module
        """
        providers = []
        for entry in definitions:
            validate_definition_config(entry)
            providers.append(
                DefinitionProvider(
                    DefinitionMetadata(
                        name=entry[ConfigKey.DEFINITION_NAME],
                        module=entry[ConfigKey.DEFINITION_MODULE],
                    )
                )
            )
        return cls(providers)


class ModuleSet:
    """Immutable set of known module names."""

    def __init__(self, names: Iterable[str] = ()):
        self._names: FrozenSet[str] = frozenset(names)

    @classmethod
    def from_registries(cls, module_registry, definition_registry) -> "ModuleSet":
        """
        Assemble the set from a module registry and a definition registry.

        Args:
            module_registry: Object with ``get_module_names()``
            definition_registry: Object with ``find_definitions()`` yielding
                                 providers whose ``metadata.module`` names the owner

        Returns:
            ModuleSet containing the union of both sources
        """
        names = set(module_registry.get_module_names())
        names.update(
            provider.metadata.module for provider in definition_registry.find_definitions()
        )
        return cls(names)

    @property
    def names(self) -> FrozenSet[str]:
        return self._names

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._names))

    def __repr__(self) -> str:
        return f"ModuleSet({sorted(self._names)!r})"
