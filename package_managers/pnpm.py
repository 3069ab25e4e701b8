"""pnpm package manager."""

from package_managers.base import PackageManager


class PnpmPackageManager(PackageManager):
    """pnpm, a disk space-efficient Node.js package manager.

    ``pnpm init`` is not interactive; it writes a default package.json.
    """

    name = "pnpm"
    executable = "pnpm"
    lockfiles = ("pnpm-lock.yaml",)

    def init_args(self) -> list[str]:
        return ["init"]

    def install_args(self) -> list[str]:
        return ["install"]
