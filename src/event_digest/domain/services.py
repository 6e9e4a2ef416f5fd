"""
Servizi del Domain Layer per il digest di un flusso di eventi già decompresso.

Le funzioni lavorano su stream binari e non conoscono file system,
compressione o configurazione: l'apertura e il riavvolgimento dello
stream sono responsabilità dell'Infrastructure Layer.
"""

import zlib
from typing import BinaryIO, Iterable, List, Optional

import ijson

from .entities import Digest, UsernameSet
from .errors import ArchiveDecodeError, ArchiveReadError

DEFAULT_BUFFER_SIZE = 1024 * 1024
_NEWLINE = b"\n"


def count_lines(stream: BinaryIO, buffer_size: int = DEFAULT_BUFFER_SIZE, source: Optional[str] = None) -> int:
    """
    Conta le righe di uno stream leggendolo a blocchi di dimensione fissa.

    Vengono contati i caratteri di newline; un'ultima riga non terminata
    vale comunque una riga, quindi N righe danno N con o senza newline
    finale. Uno stream vuoto restituisce 0.
    """
    count = 0
    last_byte = _NEWLINE
    try:
        while True:
            chunk = stream.read(buffer_size)
            if not chunk:
                break
            count += chunk.count(_NEWLINE)
            last_byte = chunk[-1:]
    except (OSError, EOFError, zlib.error) as error:
        raise ArchiveReadError(f"Lettura fallita durante il conteggio righe: {error}", path=source, stage="count") from error

    if last_byte != _NEWLINE:
        count += 1
    return count


class _ContentTrackingReader:
    """Inoltra le letture allo stream e registra se sono comparsi byte diversi da spazi."""

    def __init__(self, stream: BinaryIO):
        self._stream = stream
        self.saw_content = False

    def read(self, size: int = -1) -> bytes:
        chunk = self._stream.read(size)
        if not self.saw_content and chunk.strip():
            self.saw_content = True
        return chunk


def extract_usernames(stream: BinaryIO, users: UsernameSet, source: Optional[str] = None) -> int:
    """
    Decodifica in streaming un elemento JSON alla volta e aggiunge a `users`
    il login (in minuscolo) dell'attore di ciascun evento.

    Gli eventi privi di attore o di login vengono ignorati. Uno stream vuoto
    o di soli spazi è un'ora senza eventi, non un errore.
    Restituisce il numero di elementi decodificati.
    """
    reader = _ContentTrackingReader(stream)
    decoded = 0
    try:
        for event in ijson.items(reader, "", multiple_values=True):
            decoded += 1
            if not isinstance(event, dict):
                raise ArchiveDecodeError(
                    f"Elemento #{decoded} non è un oggetto JSON: {type(event).__name__}",
                    path=source,
                )

            actor = event.get("actor") or {}
            if not isinstance(actor, dict):
                raise ArchiveDecodeError(f"Campo 'actor' non valido nell'elemento #{decoded}", path=source)

            login = actor.get("login")
            if login is None:
                continue
            if not isinstance(login, str):
                raise ArchiveDecodeError(f"Campo 'actor.login' non valido nell'elemento #{decoded}", path=source)
            if login:
                users.add(login.lower())
    except ijson.IncompleteJSONError as error:
        if decoded == 0 and not reader.saw_content:
            return 0
        raise ArchiveDecodeError(f"JSON non valido dopo {decoded} elementi: {error}", path=source) from error
    except (ijson.JSONError, UnicodeDecodeError) as error:
        raise ArchiveDecodeError(f"JSON non valido dopo {decoded} elementi: {error}", path=source) from error
    except (OSError, EOFError, zlib.error) as error:
        raise ArchiveReadError(f"Lettura fallita durante l'estrazione: {error}", path=source, stage="extract") from error

    return decoded


def sort_digests(digests: Iterable[Digest]) -> List[Digest]:
    """Ordina i Digest per data crescente (ordinamento stabile)."""
    return sorted(digests, key=lambda digest: digest.date)
