from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class _Raw(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, extra="ignore")


class _Paged(_Raw):
    next_page_cursor: str | None = None

    @field_validator("next_page_cursor")
    @classmethod
    def _empty_cursor_is_none(cls, v: str | None) -> str | None:
        return v or None


# ---------- Error bodies ----------


class RawError(_Raw):
    code: int
    message: str


class ErrorResponse(_Raw):
    errors: list[RawError]


class ChallengeMetadata(_Raw):
    """
    Decoded from the base64 rblx-challenge-metadata header. The rblx-challenge-id
    header is not the id the challenge flow expects; this one is.
    """
    challenge_id: str
    user_id: str | None = None
    action_type: str | None = None
    request_path: str | None = None
    request_method: str | None = None


# ---------- Users API ----------


class AuthenticatedUserResponse(_Raw):
    id: int
    name: str
    display_name: str


# ---------- Economy API ----------


class CurrencyResponse(_Raw):
    robux: int


class RawSeller(_Raw):
    id: int
    name: str


class RawListing(_Raw):
    user_asset_id: int
    seller: RawSeller
    price: int
    serial_number: int | None = None


class ResellersResponse(_Paged):
    data: list[RawListing]


class RawAgent(_Raw):
    id: int
    name: str


class RawDetails(_Raw):
    id: int
    name: str


class RawCurrency(_Raw):
    amount: int


class RawSale(_Raw):
    id: int
    is_pending: bool
    agent: RawAgent
    details: RawDetails
    currency: RawCurrency


class UserSalesResponse(_Paged):
    data: list[RawSale]


class PurchaseLimitedResponse(_Raw):
    purchased: bool
    error_msg: str | None = None
