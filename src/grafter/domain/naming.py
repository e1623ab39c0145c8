from typing import Any


def qualified_name(obj: Any) -> str:
    """Return ``module.qualname`` for a class or callable, falling back to ``repr``."""
    qualname = getattr(obj, "__qualname__", None)
    if qualname is None:
        return repr(obj)
    module = getattr(obj, "__module__", None)
    if module in (None, "builtins"):
        return qualname
    return f"{module}.{qualname}"
