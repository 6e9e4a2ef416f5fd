from .use_cases import DigestService
from .interfaces import IDigestUseCase

__all__ = [
    "DigestService",
    "IDigestUseCase",
]
