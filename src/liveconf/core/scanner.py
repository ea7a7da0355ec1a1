"""
Configuration root scanning.

Finds classes marked with @config and assembles their variable trees under a
single root CustomVariable keyed by exposed name.
"""

from typing import Iterable

from liveconf.core.builder import VariableTreeBuilder
from liveconf.core.discovery import ClassScanner, PackageClassScanner
from liveconf.core.markers import get_config_marker, is_disabled
from liveconf.core.variables import CustomVariable
from liveconf.utils.helpers import qualified_name, starts_with_any
from liveconf.utils.logging import get_logger

logger = get_logger("scanner")


def scan_for_classes(
    package_ignore_prefixes: Iterable[str], scanner: ClassScanner
) -> CustomVariable:
    """
    Scan classes for configuration roots and build the variable tree.

    Classes whose fully-qualified name starts with an ignored prefix are never
    processed. A root marked @disabled is skipped unless its marker sets
    ignore_disabled. When two roots resolve to the same name, the one
    processed last wins.

    Args:
        package_ignore_prefixes: Fully-qualified name prefixes to exclude
        scanner: Source of candidate classes

    Returns:
        CustomVariable with one child per configuration root

    Raises:
        UnsupportedFieldTypeError: If any root exposes a field of unsupported type
    """
    ignore_prefixes = tuple(package_ignore_prefixes)
    config_root = CustomVariable()
    builder = VariableTreeBuilder()

    def should_process(class_name: str) -> bool:
        return not starts_with_any(class_name, ignore_prefixes)

    def process(config_class: type) -> None:
        config = get_config_marker(config_class)
        if config is None:
            return
        if is_disabled(config_class) and not config.ignore_disabled:
            logger.debug(f"Skipping disabled config class: {qualified_name(config_class)}")
            return

        logger.info(f"Config class: {qualified_name(config_class)}")

        name = config.name or config_class.__name__
        if name in config_root:
            logger.warning(
                f"Config name collision: {name} is replaced by {qualified_name(config_class)}"
            )

        config_root.put_variable(name, builder.create_variable_from_class(config_class))

    scanner.scan(should_process, process)

    return config_root


def scan_packages(
    packages: Iterable[str], package_ignore_prefixes: Iterable[str] = ()
) -> CustomVariable:
    """
    Scan every class defined in the given packages.

    Modules under an ignored prefix are not imported at all.

    Args:
        packages: Importable package or module names
        package_ignore_prefixes: Fully-qualified name prefixes to exclude

    Returns:
        CustomVariable with one child per configuration root
    """
    ignore_prefixes = tuple(package_ignore_prefixes)
    return scan_for_classes(
        ignore_prefixes, PackageClassScanner(packages, ignore_prefixes)
    )
