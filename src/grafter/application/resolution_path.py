import threading
from contextlib import contextmanager
from typing import Iterator, List, Type

from grafter.domain import CyclicDependencyError, qualified_name


class ResolutionPath:
    """The chain of types the current thread is building, outermost first.

    A build enters its type on the path and leaves it once the instance is
    finished or has failed. Entering a type that is already on the path means
    the graph is cyclic; it is reported when ``detect_cycles`` is on.

    Attributes:
        _detect_cycles: Raise on re-entry instead of recursing.
        _local: Per-thread storage of the path.
    """

    def __init__(self, detect_cycles: bool = True) -> None:
        self._detect_cycles = detect_cycles
        self._local = threading.local()

    def chain(self) -> List[Type]:
        """Return a copy of the current thread's path."""
        return list(self._types())

    def describe(self) -> str:
        """Render the current path as ``A -> B -> C``."""
        return " -> ".join(qualified_name(cls) for cls in self.chain())

    @contextmanager
    def enter(self, cls: Type) -> Iterator[None]:
        """Keep ``cls`` on the path for the duration of the block.

        Raises:
            CyclicDependencyError: If ``cls`` is already on the path and cycle
                detection is enabled. The path is left untouched.

        Example:
            >>> path = ResolutionPath()
            >>> with path.enter(Car):
            ...     with path.enter(Engine):
            ...         path.describe()
            'app.Car -> app.Engine'
        """
        types = self._types()
        if self._detect_cycles and cls in types:
            raise CyclicDependencyError(types[types.index(cls):] + [cls])

        types.append(cls)
        try:
            yield
        finally:
            types.pop()

    def _types(self) -> List[Type]:
        if not hasattr(self._local, "types"):
            self._local.types = []
        return self._local.types
