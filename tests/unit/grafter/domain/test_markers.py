"""Unit tests for injection markers."""

from typing import Annotated, get_args, get_origin

from grafter.domain.enums import Lifetime
from grafter.domain.markers import (
    Injected,
    InjectedMarker,
    inject,
    is_injectable,
    is_injected_annotation,
    lifetime_of,
    singleton,
    strip_injected_annotation,
)


class Radio:
    pass


class TestInject:
    """Test cases for the inject decorator."""

    def test_inject_marks_function(self):
        """Test that inject flags a plain function."""

        @inject
        def setter(self, radio: Radio):
            pass

        assert is_injectable(setter)

    def test_inject_returns_same_function(self):
        """Test that inject does not wrap the function."""

        def setter(self):
            pass

        assert inject(setter) is setter

    def test_unmarked_function_is_not_injectable(self):
        """Test that functions are not injectable by default."""

        def setter(self):
            pass

        assert not is_injectable(setter)

    def test_inject_below_classmethod(self):
        """Test marking an alternate constructor with inject applied first."""

        class Settings:
            @classmethod
            @inject
            def create(cls):
                return cls()

        assert is_injectable(vars(Settings)["create"])

    def test_inject_above_classmethod(self):
        """Test marking an alternate constructor with classmethod applied first."""

        class Settings:
            @inject
            @classmethod
            def create(cls):
                return cls()

        assert is_injectable(vars(Settings)["create"])
        assert isinstance(Settings.create(), Settings)


class TestSingleton:
    """Test cases for the singleton decorator."""

    def test_singleton_sets_lifetime(self):
        """Test that singleton marks the class singleton-scoped."""

        @singleton
        class Engine:
            pass

        assert lifetime_of(Engine) is Lifetime.SINGLETON

    def test_unmarked_class_is_transient(self):
        """Test that classes default to transient."""

        class Engine:
            pass

        assert lifetime_of(Engine) is Lifetime.TRANSIENT

    def test_singleton_is_not_inherited(self):
        """Test that a subclass of a singleton is transient unless marked itself."""

        @singleton
        class Engine:
            pass

        class TurboEngine(Engine):
            pass

        assert lifetime_of(TurboEngine) is Lifetime.TRANSIENT

    def test_singleton_returns_same_class(self):
        """Test that singleton does not replace the class."""

        class Engine:
            pass

        assert singleton(Engine) is Engine


class TestInjected:
    """Test cases for the Injected field annotation."""

    def test_injected_builds_annotated(self):
        """Test that Injected[T] is Annotated[T, InjectedMarker()]."""
        annotation = Injected[Radio]

        assert get_origin(annotation) is Annotated
        args = get_args(annotation)
        assert args[0] is Radio
        assert isinstance(args[1], InjectedMarker)

    def test_is_injected_annotation(self):
        """Test detection of Injected annotations."""
        assert is_injected_annotation(Injected[Radio])
        assert not is_injected_annotation(Radio)
        assert not is_injected_annotation(Annotated[Radio, "other metadata"])

    def test_strip_injected_annotation(self):
        """Test that stripping returns the wrapped type."""
        assert strip_injected_annotation(Injected[Radio]) is Radio
        assert strip_injected_annotation(Radio) is Radio

    def test_injected_keeps_existing_metadata(self):
        """Test wrapping an already annotated type."""
        annotation = Injected[Annotated[Radio, "primary"]]

        assert is_injected_annotation(annotation)
        assert strip_injected_annotation(annotation) is Radio
