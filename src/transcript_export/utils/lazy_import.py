from collections.abc import Callable
from functools import cache
from importlib import import_module


def lazy_import(module_name: str, name: str) -> Callable[[], object]:
    """Return a loader that imports ``module_name.name`` on first call only.

    ImportError is raised from the loader, not from this function.
    """

    @cache
    def _load() -> object:
        return getattr(import_module(module_name), name)

    return _load
