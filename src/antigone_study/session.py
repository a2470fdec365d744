"""Observable session state shared by the views.

``SessionContext`` is created once by the application and passed to whatever
needs to know who is logged in. It mirrors the session record in the store,
follows changes made by any writer to that record and tells its observers
whenever the logged-in state changes.
"""
import logging
from typing import Callable

from antigone_study import auth
from antigone_study.models import User
from antigone_study.roster import StudentDirectory
from antigone_study.store import STORAGE_KEYS, subscribe

logger = logging.getLogger(__name__)

Observer = Callable[["SessionContext"], None]


class AuthenticationRequired(Exception):
    """Raised when a view that needs a logged-in student is opened without one."""


class SessionContext:

    def __init__(self, db_path: str, directory: StudentDirectory):
        self.db_path = db_path
        self.directory = directory
        self.authenticated = False
        self.user: User | None = None
        self.loading = True
        self._observers: list[Observer] = []
        self._unsubscribe: Callable[[], None] | None = None

    def initialize(self) -> None:
        """Read the stored session and start following store changes."""
        if self._unsubscribe is None:
            self._unsubscribe = subscribe(self.db_path, self._on_store_change)
        if auth.is_authenticated(self.db_path) and auth.get_current_user(self.db_path) is None:
            # A session record we cannot read would leave us "logged in" as nobody.
            auth.logout(self.db_path)
        self._refresh()
        self.loading = False

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._observers.clear()

    def login(self, username: str, password: str) -> bool:
        success = auth.login(self.db_path, self.directory, username, password)
        if success:
            self._refresh()
        return success

    def logout(self) -> None:
        auth.logout(self.db_path)
        self._refresh()

    def require_user(self) -> User:
        if not self.authenticated or self.user is None:
            raise AuthenticationRequired("Please log in first")
        return self.user

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _on_store_change(self, key: str) -> None:
        if key == STORAGE_KEYS["auth"]:
            self._refresh()

    def _refresh(self) -> None:
        authenticated = auth.is_authenticated(self.db_path)
        user = auth.get_current_user(self.db_path) if authenticated else None
        # An unreadable record grants nothing.
        authenticated = authenticated and user is not None
        if (authenticated, user) == (self.authenticated, self.user):
            return
        self.authenticated = authenticated
        self.user = user
        logger.debug("Session changed: authenticated=%s", authenticated)
        for observer in list(self._observers):
            observer(self)
