"""
Turns a raw httpx outcome into one ClassifiedResponse variant.

403 is overloaded by the remote service: it means either "x-csrf-token
invalid/missing" or "a challenge is required". classify_403 is the only place
that tells them apart, so callers never look at status codes themselves.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass

import httpx
from pydantic import ValidationError

from rbx_economy.errors import (
    BadRequestError,
    ChallengeRequiredError,
    EconomyError,
    InternalServerError,
    InvalidCredentialError,
    MalformedStatusFormatError,
    StaleTokenError,
    TokenMissingError,
    TooManyRequestsError,
    TransportFailureError,
    UnidentifiedStatusCodeError,
    UnknownRemoteCodeError,
)
from rbx_economy.responses import ChallengeMetadata, ErrorResponse
from rbx_economy.session import XCSRF_HEADER

CHALLENGE_METADATA_HEADER = "rblx-challenge-metadata"
CHALLENGE_REQUIRED_MESSAGE = "Challenge is required to authorize the request"


@dataclass(frozen=True)
class Success:
    body: bytes


@dataclass(frozen=True)
class StaleToken:
    new_token: str

    def to_error(self) -> EconomyError:
        return StaleTokenError(self.new_token)


@dataclass(frozen=True)
class TokenMissing:
    def to_error(self) -> EconomyError:
        return TokenMissingError()


@dataclass(frozen=True)
class ChallengeRequired:
    challenge_id: str

    def to_error(self) -> EconomyError:
        return ChallengeRequiredError(self.challenge_id)


@dataclass(frozen=True)
class AuthInvalid:
    def to_error(self) -> EconomyError:
        return InvalidCredentialError()


@dataclass(frozen=True)
class RateLimited:
    def to_error(self) -> EconomyError:
        return TooManyRequestsError()


@dataclass(frozen=True)
class ServerError:
    def to_error(self) -> EconomyError:
        return InternalServerError()


@dataclass(frozen=True)
class BadRequest:
    code: int | None = None
    message: str | None = None

    def to_error(self) -> EconomyError:
        return BadRequestError(self.code, self.message)


@dataclass(frozen=True)
class UnknownRemoteError:
    code: int
    message: str

    def to_error(self) -> EconomyError:
        return UnknownRemoteCodeError(self.code, self.message)


@dataclass(frozen=True)
class MalformedStatusFormat:
    def to_error(self) -> EconomyError:
        return MalformedStatusFormatError()


@dataclass(frozen=True)
class UnidentifiedStatusCode:
    status_code: int

    def to_error(self) -> EconomyError:
        return UnidentifiedStatusCodeError(self.status_code)


@dataclass(frozen=True)
class TransportFailure:
    reason: str

    def to_error(self) -> EconomyError:
        return TransportFailureError(self.reason)


ClassifiedResponse = (
    Success
    | StaleToken
    | TokenMissing
    | ChallengeRequired
    | AuthInvalid
    | RateLimited
    | ServerError
    | BadRequest
    | UnknownRemoteError
    | MalformedStatusFormat
    | UnidentifiedStatusCode
    | TransportFailure
)


def _parse_errors(body: bytes) -> ErrorResponse | None:
    try:
        return ErrorResponse.model_validate_json(body)
    except ValidationError:
        return None


def _token_outcome(headers: httpx.Headers) -> StaleToken | TokenMissing:
    token = headers.get(XCSRF_HEADER)
    if token is not None:
        return StaleToken(token)
    return TokenMissing()


def _decode_challenge_id(encoded: str) -> str | None:
    try:
        raw = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError):
        return None

    try:
        metadata = ChallengeMetadata.model_validate_json(raw)
    except ValidationError:
        return None
    return metadata.challenge_id


def classify_400(response: httpx.Response) -> BadRequest:
    parsed = _parse_errors(response.content)
    if parsed is None or not parsed.errors:
        return BadRequest()
    first = parsed.errors[0]
    return BadRequest(first.code, first.message)


def classify_403(response: httpx.Response) -> ClassifiedResponse:
    parsed = _parse_errors(response.content)
    if parsed is None:
        return _token_outcome(response.headers)

    if not parsed.errors:
        return MalformedStatusFormat()

    first = parsed.errors[0]

    # Code 0 shows up with a body but still means the token is bad.
    if first.code == 0:
        return _token_outcome(response.headers)

    if first.message != CHALLENGE_REQUIRED_MESSAGE:
        return UnknownRemoteError(first.code, first.message)

    encoded = response.headers.get(CHALLENGE_METADATA_HEADER)
    if not encoded:
        return MalformedStatusFormat()

    challenge_id = _decode_challenge_id(encoded)
    if challenge_id is None:
        return MalformedStatusFormat()
    return ChallengeRequired(challenge_id)


def classify(outcome: httpx.Response | httpx.RequestError) -> ClassifiedResponse:
    if isinstance(outcome, httpx.RequestError):
        return TransportFailure(f"{type(outcome).__name__}: {outcome}")

    status = outcome.status_code
    if status == 200:
        return Success(outcome.content)
    if status == 400:
        return classify_400(outcome)
    if status == 401:
        return AuthInvalid()
    if status == 403:
        return classify_403(outcome)
    if status == 429:
        return RateLimited()
    if status == 500:
        return ServerError()
    return UnidentifiedStatusCode(status)
