"""Tests for origins, resources and path helpers."""
import pytest

from resourcefilter.core.constants import OriginKind
from resourcefilter.core.validators import ValidationError
from resourcefilter.resources.base import (
    ClasspathOrigin,
    FileSystemOrigin,
    RepositoryOrigin,
    Resource,
    ancestor_paths,
    normalize_path,
    origin_class,
    parent_path,
)


class TestPathHelpers:
    @pytest.mark.parametrize(
        "path,expected",
        [("/", "/"), ("/a", "/a"), ("/a/", "/a"), ("//a//b", "/a/b")],
    )
    def test_normalize_path(self, path, expected):
        assert normalize_path(path) == expected

    def test_normalize_rejects_relative(self):
        with pytest.raises(ValidationError):
            normalize_path("a/b")

    @pytest.mark.parametrize(
        "path,expected", [("/", None), ("/a", "/"), ("/a/b/c", "/a/b")]
    )
    def test_parent_path(self, path, expected):
        assert parent_path(path) == expected

    def test_ancestor_paths(self):
        assert ancestor_paths("/a/b/c.js") == ["/a", "/a/b", "/a/b/c.js"]
        assert ancestor_paths("/") == []


class TestOrigin:
    """Tests for Origin and its kinds."""

    def test_paths_include_folders(self):
        origin = FileSystemOrigin("webapp", ["/moduleA/css/site.css"])
        assert origin.list_paths() == ["/moduleA", "/moduleA/css", "/moduleA/css/site.css"]
        assert origin.has_path("/moduleA/css")
        assert not origin.has_path("/moduleA/js")

    def test_add_path_normalizes(self):
        origin = FileSystemOrigin("webapp")
        origin.add_path("/a//b/")
        assert origin.list_paths() == ["/a", "/a/b"]

    def test_invalid_path_rejected(self):
        with pytest.raises(ValidationError):
            ClasspathOrigin("jars", ["../etc/passwd"])

    def test_kinds_and_editability(self):
        assert FileSystemOrigin("a").kind is OriginKind.FILESYSTEM
        assert FileSystemOrigin("a").editable
        assert RepositoryOrigin("b").editable
        assert ClasspathOrigin("c").classpath_only
        assert not ClasspathOrigin("c").editable

    def test_repr(self):
        assert repr(ClasspathOrigin("jars")) == "ClasspathOrigin(name='jars')"

    def test_from_directory(self, temp_dir):
        (temp_dir / "moduleA" / "css").mkdir(parents=True)
        (temp_dir / "moduleA" / "css" / "site.css").write_text("body {}")
        (temp_dir / "travel").mkdir()

        origin = FileSystemOrigin.from_directory("webapp", str(temp_dir))

        assert isinstance(origin, FileSystemOrigin)
        assert origin.name == "webapp"
        assert origin.list_paths() == [
            "/moduleA",
            "/moduleA/css",
            "/moduleA/css/site.css",
            "/travel",
        ]

    def test_from_missing_directory(self, temp_dir):
        with pytest.raises(ValueError, match="does not exist"):
            ClasspathOrigin.from_directory("jars", str(temp_dir / "missing"))

    @pytest.mark.parametrize(
        "kind,cls",
        [("filesystem", FileSystemOrigin), ("classpath", ClasspathOrigin), ("repository", RepositoryOrigin)],
    )
    def test_origin_class(self, kind, cls):
        assert origin_class(kind) is cls

    def test_unknown_origin_class(self):
        with pytest.raises(ValidationError, match="Unknown origin kind"):
            origin_class("jar")


class TestResource:
    """Tests for plain and layered resources."""

    def test_name(self):
        origin = FileSystemOrigin("webapp")
        assert Resource(path="/moduleA/css/site.css", origin=origin).name == "site.css"
        assert Resource(path="/", origin=origin).name == ""

    def test_plain_resource_is_its_own_layer(self):
        resource = Resource(path="/a", origin=FileSystemOrigin("webapp"))
        assert not resource.is_layered
        assert resource.layers() == [resource]
        assert not resource.is_overridden

    def test_layered_resource(self):
        webapp, jars = FileSystemOrigin("webapp"), ClasspathOrigin("jars")
        layers = (Resource(path="/a", origin=webapp), Resource(path="/a", origin=jars))
        resource = Resource(path="/a", origin=webapp, layer_list=layers)

        assert resource.is_layered
        assert resource.layers() == list(layers)
        assert resource.is_overridden
        assert not resource.is_classpath_only()

    def test_empty_layers_rejected(self):
        with pytest.raises(ValueError):
            Resource(path="/a", origin=FileSystemOrigin("webapp"), layer_list=())

    def test_classpath_only(self):
        jars, more = ClasspathOrigin("jars"), ClasspathOrigin("more")
        layers = (Resource(path="/a", origin=jars), Resource(path="/a", origin=more))
        assert Resource(path="/a", origin=jars, layer_list=layers).is_classpath_only()
        assert Resource(path="/a", origin=jars).is_classpath_only()

    def test_immutable(self):
        resource = Resource(path="/a", origin=FileSystemOrigin("webapp"))
        with pytest.raises(AttributeError):
            resource.path = "/b"

    def test_identity_equality(self):
        origin = FileSystemOrigin("webapp")
        assert Resource(path="/a", origin=origin) != Resource(path="/a", origin=origin)
