from abc import ABC, abstractmethod
from typing import Tuple, Dict, Any

from ..domain.entities import Digest, DigestRunReport, UsernameSet
from ..domain.types import DigestCacheStatus


class IDigestUseCase(ABC):
    @abstractmethod
    def digest_archive(self, archive_path: str, users: UsernameSet) -> Tuple[DigestCacheStatus, Digest]:
        pass

    @abstractmethod
    def run(self) -> DigestRunReport:
        pass

    @abstractmethod
    def get_dataset_info(self) -> Dict[str, Any]:
        pass
