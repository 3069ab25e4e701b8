"""Package manager lookup and detection."""

from pathlib import Path
from typing import Any, Mapping

from package_managers.base import PackageManager
from package_managers.npm import NpmPackageManager
from package_managers.pnpm import PnpmPackageManager
from package_managers.yarn import YarnPackageManager
from schemas.errors import UnknownPackageManagerError

PACKAGE_MANAGERS: dict[str, type[PackageManager]] = {
    NpmPackageManager.name: NpmPackageManager,
    YarnPackageManager.name: YarnPackageManager,
    PnpmPackageManager.name: PnpmPackageManager,
}


def list_package_managers() -> list[str]:
    """Names of all registered package managers."""
    return list(PACKAGE_MANAGERS.keys())


def get_package_manager(name: str) -> PackageManager:
    """Instantiate a package manager by name.

    Raises:
        UnknownPackageManagerError: If ``name`` is not registered.
    """
    manager_class = PACKAGE_MANAGERS.get(name.strip().lower())
    if manager_class is None:
        available = ", ".join(PACKAGE_MANAGERS)
        raise UnknownPackageManagerError(
            f"Unknown package manager: {name}. Available: {available}"
        )
    return manager_class()


def detect_package_manager(
    manifest_hints: Mapping[str, Any] | None = None,
    project_dir: Path | None = None,
) -> str | None:
    """Guess which package manager a project uses.

    Checks the manifest's ``packageManager`` field first (``yarn@4.1.0``
    style values are reduced to the name), then lock files in
    ``project_dir``.

    Returns:
        A registered package manager name, or None if nothing matched.
    """
    if manifest_hints:
        declared = manifest_hints.get("packageManager")
        if isinstance(declared, str) and declared:
            name = declared.split("@", 1)[0].strip().lower()
            if name in PACKAGE_MANAGERS:
                return name

    if project_dir is not None:
        for name, manager_class in PACKAGE_MANAGERS.items():
            if any((project_dir / lockfile).exists() for lockfile in manager_class.lockfiles):
                return name

    return None
