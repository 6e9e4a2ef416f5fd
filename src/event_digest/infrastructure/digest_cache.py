import json
import logging
import os
from typing import Iterable, Optional, Tuple, Union

from ..config import DigestConfig
from ..domain.entities import Digest
from ..domain.errors import CacheArtifactError
from ..domain.interfaces import IDigestCache
from ..domain.types import DigestCacheStatus
from .fs_utils import atomic_write_text


class SidecarDigestCache(IDigestCache):
    """
    Cache dei Digest basata su un artefatto affiancato a ogni archivio
    (`<archivio>.digest.json`).

    La creazione esclusiva dell'artefatto funge da lock cooperativo: chi
    riesce a crearlo ne è proprietario per l'esecuzione corrente. Un
    artefatto esistente ma vuoto o illeggibile è il residuo di un crash
    e viene segnalato come INCOMPLETE.
    """

    def __init__(
        self,
        config: DigestConfig,
        logger: Optional[Union[logging.Logger, logging.LoggerAdapter]] = None,
    ):
        self.config = config
        self.logger = logger or logging.getLogger(self.__class__.__name__)

    def claim(self, archive_path: str) -> Tuple[DigestCacheStatus, Optional[Digest]]:
        digest_path = self.config.digest_path_for(archive_path)
        try:
            with open(digest_path, "x", encoding="utf-8"):
                pass
            return "MISS", None
        except FileExistsError:
            pass
        except OSError as error:
            raise CacheArtifactError(f"Impossibile creare l'artefatto di cache: {error}", path=digest_path) from error

        digest = self._read_digest(digest_path)
        if digest is None:
            self.logger.warning(f"Artefatto di cache incompleto o corrotto: {digest_path}. Verrà ricalcolato.")
            return "INCOMPLETE", None
        return "HIT", digest

    def store(self, archive_path: str, digest: Digest) -> None:
        digest_path = self.config.digest_path_for(archive_path)
        try:
            atomic_write_text(digest_path, json.dumps(digest.to_dict()) + "\n")
        except (OSError, TypeError, ValueError) as error:
            raise CacheArtifactError(f"Scrittura dell'artefatto di cache fallita: {error}", path=digest_path) from error

    def count_cached(self, archive_paths: Iterable[str]) -> int:
        return sum(
            1 for path in archive_paths
            if os.path.exists(self.config.digest_path_for(path))
            and self._read_digest(self.config.digest_path_for(path)) is not None
        )

    def _read_digest(self, digest_path: str) -> Optional[Digest]:
        try:
            with open(digest_path, "rb") as f:
                content = f.read()
        except OSError as error:
            raise CacheArtifactError(f"Lettura dell'artefatto di cache fallita: {error}", path=digest_path) from error

        if not content.strip():
            return None
        try:
            return Digest.from_dict(json.loads(content))
        except ValueError:
            return None
