"""Yarn package manager."""

from package_managers.base import PackageManager


class YarnPackageManager(PackageManager):
    name = "yarn"
    executable = "yarn"
    lockfiles = ("yarn.lock",)

    def init_args(self) -> list[str]:
        return ["init"]

    def install_args(self) -> list[str]:
        return ["install"]
