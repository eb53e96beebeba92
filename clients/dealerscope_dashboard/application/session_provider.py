from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

SIGNED_IN = "signed_in"
SIGNED_OUT = "signed_out"

SessionListener = Callable[[str, "SessionUser | None"], None]


@dataclass(frozen=True)
class SessionUser:
    user_id: str
    access_token: str
    email: str | None = None


class SessionProvider:
    def __init__(self) -> None:
        self._user: SessionUser | None = None
        self._listeners: list[SessionListener] = []

    def current_user(self) -> SessionUser | None:
        return self._user

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def sign_in(self, user: SessionUser) -> None:
        self._user = user
        self._emit(SIGNED_IN, user)

    def sign_out(self) -> None:
        if self._user is None:
            return
        self._user = None
        self._emit(SIGNED_OUT, None)

    def _emit(self, event: str, user: SessionUser | None) -> None:
        for listener in list(self._listeners):
            listener(event, user)
