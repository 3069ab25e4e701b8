"""Project source acquisition.

Three backends, selected by product kind:
- blank: an empty local directory
- repository: a git clone with the history removed
- archive: an authenticated download unpacked into the project
"""

from acquisition.archive import ArchiveDownload
from acquisition.base import AcquisitionBackend, BackendRegistry, erase_directory
from acquisition.blank import BlankDirectory
from acquisition.repository import RepositoryClone

__all__ = [
    "AcquisitionBackend",
    "ArchiveDownload",
    "BackendRegistry",
    "BlankDirectory",
    "RepositoryClone",
    "erase_directory",
]
