"""npm package manager."""

from package_managers.base import PackageManager


class NpmPackageManager(PackageManager):
    """npm, the default Node.js package manager.

    ``npm init`` runs interactively so the user can fill in the manifest.
    """

    name = "npm"
    executable = "npm"
    lockfiles = ("package-lock.json", "npm-shrinkwrap.json")

    def init_args(self) -> list[str]:
        return ["init"]

    def install_args(self) -> list[str]:
        return ["install"]
