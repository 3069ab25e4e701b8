"""CI pipeline definition written into new projects."""

import logging
from pathlib import Path
from string import Template

from package_managers.base import PackageManager
from schemas.errors import FilesystemError

logger = logging.getLogger(__name__)

JENKINSFILE_NAME = "Jenkinsfile"

JENKINSFILE_TEMPLATE = Template(
    """pipeline {
    agent any

    stages {
        stage('Install') {
            steps {
                sh '$install'
            }
        }
        stage('Test') {
            steps {
                sh '$test'
            }
        }
        stage('Build') {
            steps {
                sh '$build'
            }
        }
    }
}
"""
)


def render_jenkinsfile(package_manager: PackageManager) -> str:
    """Declarative pipeline running install, test and build with ``package_manager``."""
    return JENKINSFILE_TEMPLATE.substitute(
        install=" ".join([package_manager.executable, *package_manager.install_args()]),
        test=" ".join(package_manager.run_args("test")),
        build=" ".join(package_manager.run_args("build")),
    )


def create_jenkinsfile(project_root: Path, package_manager: PackageManager) -> bool:
    """Write a Jenkinsfile into ``project_root`` unless the project ships one.

    Returns:
        True if a file was written, False if one already existed.

    Raises:
        FilesystemError: If the file cannot be written.
    """
    path = project_root / JENKINSFILE_NAME
    if path.exists():
        logger.info("Keeping existing %s", path)
        return False

    try:
        path.write_text(render_jenkinsfile(package_manager), encoding="utf-8")
    except OSError as e:
        raise FilesystemError(f"Could not write {path}: {e}") from e

    logger.info("Created %s", path)
    return True
