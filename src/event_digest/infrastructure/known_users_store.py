import logging
import os
from typing import Optional, Union

from ..domain.entities import UsernameSet
from ..domain.errors import KnownUsersError
from ..domain.interfaces import IKnownUsersStore


class TextKnownUsersStore(IKnownUsersStore):
    """
    Archivio degli username già scoperti: file di testo con uno username
    per riga, mai riscritto, solo esteso in coda.
    """

    def __init__(
        self,
        users_path: str,
        logger: Optional[Union[logging.Logger, logging.LoggerAdapter]] = None,
    ):
        self.users_path = users_path
        self.logger = logger or logging.getLogger(self.__class__.__name__)

    def load(self) -> UsernameSet:
        users = UsernameSet()
        try:
            with open(self.users_path, "r", encoding="utf-8") as f:
                for line in f:
                    username = line.strip()
                    if username:
                        users.add(username)
        except FileNotFoundError:
            self.logger.warning(f"Impossibile leggere {self.users_path}: file assente. Si parte da un insieme vuoto.")
            return UsernameSet()
        except (OSError, UnicodeDecodeError) as error:
            raise KnownUsersError(f"Lettura degli utenti noti fallita: {error}", path=self.users_path) from error
        return users

    def append(self, usernames: UsernameSet) -> None:
        dir_path = os.path.dirname(self.users_path)
        try:
            if dir_path:
                os.makedirs(dir_path, exist_ok=True)
            needs_separator = self._ends_without_newline()
            with open(self.users_path, "a", encoding="utf-8") as f:
                if needs_separator:
                    f.write("\n")
                for username in sorted(usernames):
                    f.write(username + "\n")
        except OSError as error:
            raise KnownUsersError(f"Aggiunta dei nuovi utenti fallita: {error}", path=self.users_path) from error

    def _ends_without_newline(self) -> bool:
        """True se il file esiste, non è vuoto e l'ultima riga non è terminata (es. modifica manuale)."""
        if not os.path.exists(self.users_path) or os.path.getsize(self.users_path) == 0:
            return False
        with open(self.users_path, "rb") as f:
            f.seek(-1, os.SEEK_END)
            return f.read(1) != b"\n"
