"""Shared pytest fixtures for ResourceFilter tests."""
import tempfile
from pathlib import Path
from typing import Any, Dict, Generator

import pytest
import yaml

from resourcefilter.infrastructure.config_manager import set_global_config
from resourcefilter.infrastructure.logger import set_global_logger
from resourcefilter.modules import ModuleSet
from resourcefilter.query import QueryEngine
from resourcefilter.resources.base import ClasspathOrigin, FileSystemOrigin, RepositoryOrigin
from resourcefilter.resources.tree import OriginTree
from resourcefilter.status import InMemoryRecordRepository


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def repository_origin() -> RepositoryOrigin:
    return RepositoryOrigin("website", ["/moduleA/templates/page.ftl"])


@pytest.fixture
def webapp_origin() -> FileSystemOrigin:
    return FileSystemOrigin(
        "webapp",
        ["/moduleA/foo.js", "/moduleA/css/foobar.css", "/travel/bar.js"],
    )


@pytest.fixture
def classpath_origin() -> ClasspathOrigin:
    return ClasspathOrigin(
        "jars",
        ["/moduleA/foo.js", "/moduleA/bar.js", "/lib/jquery.js", "/lib/foo.js", "/core/core.css"],
    )


@pytest.fixture
def tree(repository_origin, webapp_origin, classpath_origin) -> OriginTree:
    """Layered tree over repository, webapp and classpath origins.

    Layout (layers in brackets, highest priority first):
        /core                 [jars]                  known module
        /core/core.css        [jars]
        /lib                  [jars]                  unknown, classpath only: hidden
        /lib/foo.js           [jars]
        /lib/jquery.js        [jars]
        /moduleA              [website, webapp, jars] known module
        /moduleA/bar.js       [jars]
        /moduleA/css          [webapp]
        /moduleA/css/foobar.css [webapp]
        /moduleA/foo.js       [webapp, jars]
        /moduleA/templates    [website]
        /moduleA/templates/page.ftl [website]
        /travel               [webapp]                unknown, editable: visible
        /travel/bar.js        [webapp]
    """
    return OriginTree([repository_origin, webapp_origin, classpath_origin])


@pytest.fixture
def modules() -> ModuleSet:
    return ModuleSet(["moduleA", "core"])


@pytest.fixture
def records() -> InMemoryRecordRepository:
    return InMemoryRecordRepository({"/moduleA/templates/page.ftl": 2})


@pytest.fixture
def engine(tree, modules, records) -> QueryEngine:
    return QueryEngine(tree, modules=modules, records=records)


@pytest.fixture
def visible_paths():
    """Every visible path of the ``tree`` fixture in traversal order."""
    return [
        "/core",
        "/core/core.css",
        "/moduleA",
        "/moduleA/bar.js",
        "/moduleA/css",
        "/moduleA/css/foobar.css",
        "/moduleA/foo.js",
        "/moduleA/templates",
        "/moduleA/templates/page.ftl",
        "/travel",
        "/travel/bar.js",
    ]


@pytest.fixture
def sample_config() -> Dict[str, Any]:
    """Provide a sample ResourceFilter configuration."""
    return {
        "resourcefilter": {
            "version": "1.0",
            "root_path": "/",
            "origins": [
                {"kind": "repository", "name": "website", "paths": ["/moduleA/templates/page.ftl"]},
                {
                    "kind": "filesystem",
                    "name": "webapp",
                    "paths": ["/moduleA/foo.js", "/travel/bar.js"],
                },
                {
                    "kind": "classpath",
                    "name": "jars",
                    "paths": ["/moduleA/foo.js", "/lib/jquery.js", "/core/core.css"],
                },
            ],
            "modules": ["core"],
            "definitions": [{"name": "page", "module": "moduleA"}],
            "records": {"/moduleA/templates/page.ftl": 2},
            "query": {"default_limit": 5},
            "logging": {"level": "DEBUG", "file": None},
        }
    }


@pytest.fixture
def config_file(temp_dir: Path, sample_config: Dict[str, Any]) -> Path:
    """Create a configuration file."""
    config_path = temp_dir / "resourcefilter.yaml"
    with open(config_path, "w") as f:
        yaml.dump(sample_config, f)
    return config_path


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset global logger and config between tests."""
    yield
    set_global_logger(None)
    set_global_config(None)
