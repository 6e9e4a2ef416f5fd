"""
Eccezioni del Domain Layer della pipeline di digest.

Ogni errore porta con sé il percorso del file coinvolto e la fase
della pipeline in cui si è verificato, così che l'adapter di ingresso
(CLI) possa produrre una diagnostica precisa prima di terminare.
"""

from typing import Optional

from .types import DigestStage


class DigestPipelineError(Exception):
    """Eccezione base per tutti gli errori irrecuperabili della pipeline."""

    def __init__(self, message: str, path: Optional[str] = None, stage: Optional[DigestStage] = None):
        super().__init__(message)
        self.path = path
        self.stage = stage

    def __str__(self) -> str:
        base = super().__str__()
        context = []
        if self.stage:
            context.append(f"fase={self.stage}")
        if self.path:
            context.append(f"file={self.path}")
        return f"{base} ({', '.join(context)})" if context else base


class FilenameParseError(DigestPipelineError, ValueError):
    """
    Sollevata quando il nome di un archivio non contiene un'ora valida
    nel formato YYYY-MM-DD-H(H).
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, path=path, stage="filename")


class ArchiveReadError(DigestPipelineError):
    """Errore di I/O o di decompressione durante la lettura di un archivio."""
    pass


class ArchiveDecodeError(DigestPipelineError):
    """Un elemento JSON dell'archivio non è decodificabile o non rispetta il contratto."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, path=path, stage="extract")


class CacheArtifactError(DigestPipelineError):
    """Errore imprevisto nella gestione dell'artefatto di cache `<archivio>.digest.json`."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, path=path, stage="cache")


class SummaryWriteError(DigestPipelineError):
    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, path=path, stage="summary")


class KnownUsersError(DigestPipelineError):
    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, path=path, stage="known_users")


class CatalogExportError(DigestPipelineError):
    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, path=path, stage="catalog")
