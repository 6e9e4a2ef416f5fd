import json
import os
from typing import List, Optional

from ..domain.entities import Digest
from ..domain.errors import SummaryWriteError
from ..domain.interfaces import ISummaryWriter
from ..domain.services import sort_digests
from .fs_utils import atomic_write_text


class JsonSummaryWriter(ISummaryWriter):
    """
    Scrive il riepilogo `summary.json`: array JSON di tutti i Digest
    ordinati per data, sostituito per intero a ogni esecuzione.
    """

    def __init__(self, summary_path: str):
        self.summary_path = summary_path

    def write_summary(self, digests: List[Digest]) -> None:
        ordered = sort_digests(digests)
        try:
            payload = json.dumps([digest.to_dict() for digest in ordered], indent=4)
            atomic_write_text(self.summary_path, payload + "\n")
        except (OSError, TypeError, ValueError) as error:
            raise SummaryWriteError(f"Scrittura del riepilogo fallita: {error}", path=self.summary_path) from error

    def read_summary(self) -> Optional[List[Digest]]:
        """Rilegge il riepilogo esistente; None se non è mai stato prodotto."""
        if not os.path.exists(self.summary_path):
            return None
        try:
            with open(self.summary_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, list):
                raise ValueError("il riepilogo deve essere un array JSON")
            return [Digest.from_dict(item) for item in data]
        except (OSError, ValueError) as error:
            raise SummaryWriteError(f"Lettura del riepilogo fallita: {error}", path=self.summary_path) from error
