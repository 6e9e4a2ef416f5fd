from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Any, Iterable, Iterator, List, Set

from .types import DigestCacheStatus

RFC3339_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


@dataclass(frozen=True)
class Digest:
    """Aggregato di un singolo archivio orario: numero di righe e ora di riferimento (UTC)."""
    count: int
    date: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "count": self.count,
            "date": self.date.astimezone(timezone.utc).strftime(RFC3339_FORMAT),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Digest":
        """
        Ricostruisce un Digest dalla sua forma JSON.
        Solleva ValueError se i campi mancano o non sono validi.
        """
        if not isinstance(data, dict):
            raise ValueError("Il Digest deve essere un oggetto JSON.")

        count = data.get("count")
        raw_date = data.get("date")
        if not isinstance(count, int) or isinstance(count, bool) or count < 0:
            raise ValueError(f"Campo 'count' non valido: {count!r}")
        if not isinstance(raw_date, str):
            raise ValueError(f"Campo 'date' non valido: {raw_date!r}")

        parsed = datetime.fromisoformat(raw_date.replace("Z", "+00:00"))
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return cls(count=count, date=parsed.astimezone(timezone.utc))


class UsernameSet:
    """
    Insieme mutabile di username normalizzati in minuscolo.

    Un'unica istanza viene passata per riferimento a tutti i passi di
    estrazione di un'esecuzione. Non ha alcun lock: è sicura solo
    nel contratto sequenziale a singolo worker della pipeline.
    """

    def __init__(self, usernames: Iterable[str] = ()):
        self._members: Set[str] = set()
        for username in usernames:
            self.add(username)

    @staticmethod
    def normalize(username: str) -> str:
        return username.lower()

    def add(self, username: str) -> None:
        self._members.add(self.normalize(username))

    def clone(self) -> "UsernameSet":
        snapshot = UsernameSet()
        snapshot._members = set(self._members)
        return snapshot

    def difference(self, other: "UsernameSet") -> "UsernameSet":
        """Username presenti in questo insieme ma assenti in `other`."""
        result = UsernameSet()
        result._members = self._members - other._members
        return result

    def __contains__(self, username: object) -> bool:
        return isinstance(username, str) and self.normalize(username) in self._members

    def __iter__(self) -> Iterator[str]:
        return iter(self._members)

    def __len__(self) -> int:
        return len(self._members)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UsernameSet):
            return NotImplemented
        return self._members == other._members

    def __repr__(self) -> str:
        return f"UsernameSet({sorted(self._members)!r})"


@dataclass
class DigestRunReport:
    digests: List[Digest] = field(default_factory=list)
    new_users: UsernameSet = field(default_factory=UsernameSet)
    status_counts: Dict[DigestCacheStatus, int] = field(
        default_factory=lambda: {"HIT": 0, "INCOMPLETE": 0, "MISS": 0}
    )

    @property
    def total_events(self) -> int:
        return sum(digest.count for digest in self.digests)

    def record(self, status: DigestCacheStatus, digest: Digest) -> None:
        self.digests.append(digest)
        self.status_counts[status] = self.status_counts.get(status, 0) + 1
