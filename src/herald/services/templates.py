"""
Template loading utilities.

This module reads template sources for Email.using_file_template and
Email.using_embedded_template:
1. Plain files on disk
2. Package data shipped inside an importable package (importlib.resources)

Remote bundles live in services.s3. Every read opens, reads fully and
closes; no handles are kept.
"""

import importlib
import logging
from importlib import resources
from pathlib import Path
from types import ModuleType
from typing import Optional, Union

from ..domain.exceptions import ResourceNotFoundError
from ..domain.protocols import TemplateSource

logger = logging.getLogger(__name__)


def read_template_file(path: Union[str, Path]) -> str:
    """
    Load template from local filesystem.

    Args:
        path: Path to the template file

    Returns:
        str: Template content

    Raises:
        FileNotFoundError: If template file doesn't exist
        OSError: If the file cannot be read
    """
    logger.info(f"Loading template from filesystem: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        content = f.read()

    logger.info(f"Loaded template from filesystem: {len(content)} characters")
    return content


class PackageTemplateSource:
    """
    Templates shipped as package data.

    Example:
        >>> source = PackageTemplateSource("myapp.emails")
        >>> source.read_text("templates/welcome.html")
    """

    def __init__(self, package: Union[str, ModuleType]):
        self.package = package

    @property
    def package_name(self) -> str:
        if isinstance(self.package, ModuleType):
            return self.package.__name__
        return self.package

    def read_text(self, path: str) -> str:
        """
        Read a resource relative to the package root.

        A plain module reads from its parent package, or from the directory
        it lives in when it is a top-level module.

        Raises:
            ResourceNotFoundError: If the package or resource does not exist
        """
        logger.info(f"Loading template from package: {self.package_name}/{path}")

        try:
            package = self.package
            if isinstance(package, str):
                package = importlib.import_module(package)
            resource = _resource_root(package, path).joinpath(path)
            content = resource.read_text(encoding='utf-8')
        except ModuleNotFoundError as e:
            if not _is_requested_module(e.name, self.package_name):
                raise
            logger.error(f"Template package not found: {self.package_name}")
            raise ResourceNotFoundError(path, f"package '{self.package_name}'")
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError):
            logger.error(f"Template not found: {path} in package {self.package_name}")
            raise ResourceNotFoundError(path, f"package '{self.package_name}'")

        logger.info(f"Loaded template from package: {len(content)} characters")
        return content

    def __repr__(self) -> str:
        return f"PackageTemplateSource({self.package_name!r})"


def _is_requested_module(missing: Optional[str], package_name: str) -> bool:
    # A missing import raised from inside the package is not a missing template.
    if not missing:
        return False
    return package_name == missing or package_name.startswith(f"{missing}.")


def _resource_root(module: ModuleType, path: str):
    """Directory-like root that holds a module's bundled resources."""
    if hasattr(module, '__path__'):
        return resources.files(module)

    spec = getattr(module, '__spec__', None)
    parent = spec.parent if spec is not None else module.__package__
    if parent:
        return resources.files(importlib.import_module(parent))

    module_file = getattr(module, '__file__', None)
    if module_file:
        return Path(module_file).parent

    logger.error(f"Module {module.__name__} has no location to load templates from")
    raise ResourceNotFoundError(path, f"module '{module.__name__}'")


def resolve_source(source: Union[str, ModuleType, TemplateSource]) -> TemplateSource:
    """
    Normalize a template source argument.

    Package names and modules are wrapped in PackageTemplateSource; anything
    that already implements TemplateSource is returned as is.
    """
    if isinstance(source, (str, ModuleType)):
        return PackageTemplateSource(source)
    if isinstance(source, TemplateSource):
        return source
    raise TypeError(f"Unsupported template source: {source!r}")
