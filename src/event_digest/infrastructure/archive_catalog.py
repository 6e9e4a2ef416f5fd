import os
from typing import List

from ..config import DigestConfig
from ..domain.interfaces import IArchiveCatalog
from .fs_utils import folder_size_mb, list_archive_files


class LocalArchiveCatalog(IArchiveCatalog):
    def __init__(self, config: DigestConfig):
        self.config = config

    def location(self) -> str:
        return os.path.abspath(self.config.events_directory)

    def list_archives(self) -> List[str]:
        return list_archive_files(self.config.events_directory, self.config.ARCHIVE_GLOB)

    def size_mb(self) -> float:
        return folder_size_mb(self.config.events_directory)
