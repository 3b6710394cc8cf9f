from __future__ import annotations

import threading

XCSRF_HEADER = "x-csrf-token"


class SessionContext:
    """
    Session cookie plus the rotating x-csrf-token.

    One instance per client. The executor reads the token on every mutating
    request and the retry wrapper replaces it when the server rotates it.
    """

    def __init__(self, roblosecurity: str, token: str = ""):
        self._roblosecurity = roblosecurity
        self._token = token
        self._lock = threading.Lock()

    def current_token(self) -> str:
        return self._token

    def set_token(self, new: str) -> None:
        with self._lock:
            self._token = new

    def credential_header(self) -> str:
        return f".ROBLOSECURITY={self._roblosecurity}"

    def __repr__(self) -> str:
        has_token = bool(self._token)
        return f"SessionContext(roblosecurity=<hidden>, has_token={has_token})"
