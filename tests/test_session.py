from __future__ import annotations

from rbx_economy.session import SessionContext


def test_token_starts_empty_and_updates_in_place():
    s = SessionContext("cookie")
    assert s.current_token() == ""

    s.set_token("abc")
    assert s.current_token() == "abc"

    s.set_token("def")
    assert s.current_token() == "def"


def test_credential_header_format():
    s = SessionContext("secret-value")
    assert s.credential_header() == ".ROBLOSECURITY=secret-value"


def test_repr_hides_credential():
    s = SessionContext("secret-value", token="tok")
    assert "secret-value" not in repr(s)
    assert "tok" not in repr(s)
