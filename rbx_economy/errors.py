from __future__ import annotations

from enum import Enum


class EconomyError(Exception):
    """Base class for every failure surfaced by the economy client."""

    kind = "EconomyError"


class TransportFailureError(EconomyError):
    kind = "TransportFailure"

    def __init__(self, reason: str):
        super().__init__(f"Request failed before a response was received: {reason}")
        self.reason = reason


class MalformedResponseError(EconomyError):
    """The call succeeded but the body did not match the expected shape."""

    kind = "MalformedResponse"

    def __init__(self, detail: str = ""):
        msg = "Response body did not match the expected shape"
        super().__init__(f"{msg}: {detail}" if detail else msg)
        self.detail = detail


class InvalidCredentialError(EconomyError):
    kind = "AuthInvalid"

    def __init__(self):
        super().__init__("The .ROBLOSECURITY cookie was rejected (HTTP 401)")


class StaleTokenError(EconomyError):
    """
    The x-csrf-token was rejected and the server sent a replacement.
    Only escapes to callers when the single refresh-and-retry also fails.
    """

    kind = "StaleToken"

    def __init__(self, new_token: str):
        super().__init__("x-csrf-token is invalid; a new token was returned")
        self.new_token = new_token


class TokenMissingError(EconomyError):
    kind = "TokenMissing"

    def __init__(self):
        super().__init__("x-csrf-token is invalid and no replacement was returned")


class ChallengeRequiredError(EconomyError):
    kind = "ChallengeRequired"

    def __init__(self, challenge_id: str):
        super().__init__(f"Challenge is required to authorize the request (challenge id {challenge_id})")
        self.challenge_id = challenge_id


class TooManyRequestsError(EconomyError):
    kind = "RateLimited"

    def __init__(self):
        super().__init__("Too many requests (HTTP 429)")


class InternalServerError(EconomyError):
    kind = "ServerError"

    def __init__(self):
        super().__init__("Remote internal server error (HTTP 500)")


class BadRequestError(EconomyError):
    kind = "BadRequest"

    def __init__(self, code: int | None = None, message: str | None = None):
        if code is None:
            super().__init__("Bad request (HTTP 400)")
        else:
            super().__init__(f"Bad request (HTTP 400): [{code}] {message}")
        self.code = code
        self.message = message


class UnidentifiedStatusCodeError(EconomyError):
    kind = "UnidentifiedStatusCode"

    def __init__(self, status_code: int):
        super().__init__(f"Unidentified status code: HTTP {status_code}")
        self.status_code = status_code


class UnknownRemoteCodeError(EconomyError):
    kind = "UnknownRemoteError"

    def __init__(self, code: int, message: str):
        super().__init__(f"Unknown remote error: [{code}] {message}")
        self.code = code
        self.message = message


class MalformedStatusFormatError(EconomyError):
    """A 403 arrived in a shape that is neither a token error nor a readable challenge."""

    kind = "MalformedStatusFormat"

    def __init__(self):
        super().__init__("Unknown HTTP 403 response format")


class PurchaseErrorKind(str, Enum):
    """
    Business failures reported inside a 200 purchase response.

    The server answers PENDING_TRANSACTION when it cannot name the real
    failure, so keep retrying on PENDING_TRANSACTION, PRICE_CHANGED and
    UNKNOWN_MESSAGE until ITEM_NOT_FOR_SALE comes back. ITEM_NOT_FOR_SALE,
    NOT_ENOUGH_ROBUX and CANNOT_BUY_OWN_ITEM are final.
    """

    PENDING_TRANSACTION = "PendingTransaction"
    ITEM_NOT_FOR_SALE = "ItemNotForSale"
    NOT_ENOUGH_ROBUX = "NotEnoughRobux"
    PRICE_CHANGED = "PriceChanged"
    CANNOT_BUY_OWN_ITEM = "CannotBuyOwnItem"
    UNKNOWN_MESSAGE = "UnknownMessage"

    @property
    def retry_worthy(self) -> bool:
        return self in _RETRY_WORTHY


_RETRY_WORTHY = frozenset(
    {
        PurchaseErrorKind.PENDING_TRANSACTION,
        PurchaseErrorKind.PRICE_CHANGED,
        PurchaseErrorKind.UNKNOWN_MESSAGE,
    }
)


class PurchaseError(EconomyError):
    kind = "Purchase"

    def __init__(self, purchase_kind: PurchaseErrorKind, message: str):
        super().__init__(f"Purchase failed ({purchase_kind.value}): {message}")
        self.purchase_kind = purchase_kind
        self.message = message
