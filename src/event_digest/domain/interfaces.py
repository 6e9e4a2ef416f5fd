from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Tuple

from .entities import Digest, UsernameSet
from .types import DigestCacheStatus


class IArchiveDigester(ABC):
    @abstractmethod
    def digest(self, archive_path: str, users: UsernameSet) -> Digest:
        pass


class IDigestCache(ABC):
    @abstractmethod
    def claim(self, archive_path: str) -> Tuple[DigestCacheStatus, Optional[Digest]]:
        pass

    @abstractmethod
    def store(self, archive_path: str, digest: Digest) -> None:
        pass

    @abstractmethod
    def count_cached(self, archive_paths: Iterable[str]) -> int:
        pass


class IKnownUsersStore(ABC):
    @abstractmethod
    def load(self) -> UsernameSet:
        pass

    @abstractmethod
    def append(self, usernames: UsernameSet) -> None:
        pass


class ISummaryWriter(ABC):
    @abstractmethod
    def write_summary(self, digests: List[Digest]) -> None:
        pass

    @abstractmethod
    def read_summary(self) -> Optional[List[Digest]]:
        pass


class IArchiveCatalog(ABC):
    @abstractmethod
    def location(self) -> str:
        pass

    @abstractmethod
    def list_archives(self) -> List[str]:
        pass

    @abstractmethod
    def size_mb(self) -> float:
        pass


class ICatalogExporter(ABC):
    @abstractmethod
    def export(self, digests: List[Digest], users: UsernameSet) -> None:
        pass
