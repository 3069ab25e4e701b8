"""Local storage module for starterkit.

Writes the files starterkit owns inside a project:
- project metadata kept in the package manifest
- the Jenkinsfile CI pipeline
"""

from local_storage.jenkinsfile import create_jenkinsfile, render_jenkinsfile
from local_storage.metadata_store import MetadataStore

__all__ = ["MetadataStore", "create_jenkinsfile", "render_jenkinsfile"]
