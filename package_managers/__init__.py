"""Package manager abstraction.

A package manager bootstraps and installs a project's manifest. Concrete
managers are selected by name through the registry.
"""

from package_managers.base import PackageManager, ProcessHandle
from package_managers.npm import NpmPackageManager
from package_managers.pnpm import PnpmPackageManager
from package_managers.registry import (
    PACKAGE_MANAGERS,
    detect_package_manager,
    get_package_manager,
    list_package_managers,
)
from package_managers.yarn import YarnPackageManager

__all__ = [
    "PackageManager",
    "ProcessHandle",
    "NpmPackageManager",
    "YarnPackageManager",
    "PnpmPackageManager",
    "PACKAGE_MANAGERS",
    "detect_package_manager",
    "get_package_manager",
    "list_package_managers",
]
