"""Unit tests for testing utilities."""

from abc import ABC, abstractmethod

from grafter.application.injector import Injector
from grafter.domain import inject, singleton
from grafter.infrastructure.testing.utilities import TestInjector, create_mock_injector


class Mailer(ABC):
    @abstractmethod
    def send(self, to: str) -> str:
        pass


class SmtpMailer(Mailer):
    def send(self, to: str) -> str:
        return f"smtp:{to}"


class FakeMailer(Mailer):
    def __init__(self):
        self.sent = []

    def send(self, to: str) -> str:
        self.sent.append(to)
        return f"fake:{to}"


class SignupService:
    @inject
    def __init__(self, mailer: Mailer):
        self.mailer = mailer

    def register(self, email: str) -> str:
        return self.mailer.send(email)


class TestTestInjectorInitialization:
    """Test cases for TestInjector initialization."""

    def test_is_an_injector(self):
        """Test that TestInjector is a full Injector."""
        injector = TestInjector()

        assert isinstance(injector, Injector)
        assert injector._mocks == {}

    def test_not_collected_by_pytest(self):
        """Test that pytest is told to skip the class."""
        assert TestInjector.__test__ is False


class TestMockInstance:
    """Test cases for mock_instance."""

    def test_mock_replaces_dependency_deep_in_graph(self):
        """Test that a mocked type is used wherever it is requested."""
        injector = TestInjector()
        fake = FakeMailer()
        injector.mock_instance(Mailer, fake)

        service = injector.create(SignupService)

        assert service.mailer is fake
        assert service.register("ada@example.com") == "fake:ada@example.com"
        assert fake.sent == ["ada@example.com"]

    def test_mock_wins_over_override(self):
        """Test that mocks are checked before override rules."""
        injector = TestInjector()
        injector.map(Mailer).to(SmtpMailer)
        fake = FakeMailer()
        injector.mock_instance(Mailer, fake)

        assert injector.create(Mailer) is fake

    def test_mock_wins_over_cached_singleton(self):
        """Test that mocking a singleton already built takes effect."""

        @singleton
        class Clock:
            pass

        injector = TestInjector()
        real = injector.create(Clock)
        fake = Clock()
        injector.mock_instance(Clock, fake)

        assert injector.create(Clock) is fake
        assert injector.create(Clock) is not real


class TestMockFactory:
    """Test cases for mock_factory."""

    def test_factory_called_on_each_create(self):
        """Test that the factory provides a new double each time."""
        injector = TestInjector()
        injector.mock_factory(Mailer, FakeMailer)

        first = injector.create(Mailer)
        second = injector.create(Mailer)

        assert isinstance(first, FakeMailer)
        assert first is not second


class TestResetMocks:
    """Test cases for reset_mocks and the context manager."""

    def test_reset_restores_real_types(self):
        """Test that resetting returns to override rules."""
        injector = TestInjector()
        injector.map(Mailer).to(SmtpMailer)
        injector.mock_instance(Mailer, FakeMailer())

        injector.reset_mocks()

        assert isinstance(injector.create(Mailer), SmtpMailer)

    def test_context_manager_resets_on_exit(self):
        """Test that leaving the block removes mocks."""
        injector = TestInjector()
        injector.map(Mailer).to(SmtpMailer)

        with injector as scoped:
            scoped.mock_instance(Mailer, FakeMailer())
            assert isinstance(scoped.create(Mailer), FakeMailer)

        assert isinstance(injector.create(Mailer), SmtpMailer)

    def test_context_manager_does_not_swallow_errors(self):
        """Test that exceptions inside the block propagate."""
        injector = TestInjector()

        try:
            with injector:
                raise KeyError("boom")
        except KeyError:
            pass
        else:
            raise AssertionError("KeyError was swallowed")


class TestCreateMockInjector:
    """Test cases for create_mock_injector."""

    def test_preloaded_instances(self):
        """Test that the helper registers every pair."""
        fake = FakeMailer()

        injector = create_mock_injector((Mailer, fake))

        assert isinstance(injector, TestInjector)
        assert injector.create(SignupService).mailer is fake

    def test_empty(self):
        """Test the helper without pairs."""
        injector = create_mock_injector()

        assert injector._mocks == {}
