"""
Class discovery.

Enumerates the classes a configuration scan may consider. Each class is
offered once: the filter sees its fully-qualified name first, and only classes
that pass are handed to the processing callback.
"""

import importlib
import inspect
import pkgutil
from abc import ABC, abstractmethod
from types import ModuleType
from typing import Callable, Iterable, Iterator, List, Set, Tuple

from liveconf.utils.helpers import qualified_name, starts_with_any
from liveconf.utils.logging import get_logger

logger = get_logger("discovery")

ShouldProcess = Callable[[str], bool]
ProcessClass = Callable[[type], None]


class ClassScanner(ABC):
    """Source of candidate classes for a configuration scan."""

    def scan(self, should_process: ShouldProcess, process: ProcessClass) -> None:
        """
        Offer every known class to the callbacks.

        Args:
            should_process: Filter receiving the fully-qualified class name
            process: Callback invoked for each class accepted by the filter
        """
        seen: Set[int] = set()
        for cls in self.iter_classes():
            if id(cls) in seen:
                continue
            seen.add(id(cls))

            if should_process(qualified_name(cls)):
                process(cls)

    @abstractmethod
    def iter_classes(self) -> Iterator[type]:
        """Yield candidate classes (duplicates are filtered by scan)."""


class StaticClassScanner(ClassScanner):
    """Scanner over an explicit list of classes."""

    def __init__(self, classes: Iterable[type]):
        self.classes: List[type] = list(classes)

    def iter_classes(self) -> Iterator[type]:
        return iter(self.classes)


class PackageClassScanner(ClassScanner):
    """Scanner over every class defined in a set of packages."""

    def __init__(self, packages: Iterable[str], ignore_prefixes: Iterable[str] = ()):
        """
        Initialize the scanner.

        Modules whose name starts with an ignored prefix are never imported,
        and neither is anything below them.

        Args:
            packages: Importable package or module names
            ignore_prefixes: Fully-qualified name prefixes to leave unimported
        """
        self.packages: List[str] = list(packages)
        self.ignore_prefixes: Tuple[str, ...] = tuple(ignore_prefixes)

    def iter_classes(self) -> Iterator[type]:
        for module in self._iter_modules():
            yield from _iter_module_classes(module)

    def _iter_modules(self) -> Iterator[ModuleType]:
        for package_name in self.packages:
            if self._is_ignored(package_name):
                continue

            # A missing top-level package is a caller error and propagates
            package = importlib.import_module(package_name)
            yield package
            yield from self._iter_submodules(package)

    def _iter_submodules(self, package: ModuleType) -> Iterator[ModuleType]:
        package_path = getattr(package, "__path__", None)
        if package_path is None:
            return

        for module_info in pkgutil.iter_modules(package_path, prefix=f"{package.__name__}."):
            if self._is_ignored(module_info.name):
                continue

            try:
                module = importlib.import_module(module_info.name)
            except Exception as e:
                logger.warning(f"Skipping module {module_info.name}: {e}")
                continue

            yield module
            if module_info.ispkg:
                yield from self._iter_submodules(module)

    def _is_ignored(self, module_name: str) -> bool:
        if starts_with_any(module_name, self.ignore_prefixes):
            logger.debug(f"Not importing ignored module {module_name}")
            return True
        return False


def _iter_module_classes(module: ModuleType) -> Iterator[type]:
    """Yield classes defined in a module, including nested classes."""
    for value in list(vars(module).values()):
        if inspect.isclass(value) and value.__module__ == module.__name__:
            yield from _iter_class_tree(value)


def _iter_class_tree(cls: type) -> Iterator[type]:
    yield cls
    for value in list(vars(cls).values()):
        if (
            inspect.isclass(value)
            and value.__module__ == cls.__module__
            and value.__qualname__.startswith(f"{cls.__qualname__}.")
        ):
            yield from _iter_class_tree(value)
