from __future__ import annotations

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from rbx_economy.classifier import Success, classify
from rbx_economy.errors import MalformedResponseError
from rbx_economy.session import XCSRF_HEADER, SessionContext

logger = logging.getLogger(__name__)

MUTATING_METHODS = frozenset({"POST", "PATCH", "PUT", "DELETE"})

ModelT = TypeVar("ModelT", bound=BaseModel)


class RequestExecutor:
    """
    Sends one request with the session attached and classifies the outcome.

    Anything other than a plain success is raised as the matching
    EconomyError; the body is only decoded on success.
    """

    def __init__(
        self,
        session: SessionContext,
        *,
        timeout: float = 60.0,
        user_agent: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.session = session
        self.timeout = timeout
        self.user_agent = user_agent
        self.transport = transport

    def _headers(self, method: str, extra: dict[str, str] | None = None) -> dict[str, str]:
        h = {"Cookie": self.session.credential_header()}
        if self.user_agent:
            h["User-Agent"] = self.user_agent
        if method in MUTATING_METHODS:
            h[XCSRF_HEADER] = self.session.current_token()
        if extra:
            h.update(extra)
        return h

    async def send(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> bytes:
        method = method.upper()
        logger.debug("%s %s", method, url)

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                r = await client.request(
                    method,
                    url,
                    params=params,
                    json=json,
                    headers=self._headers(method, headers),
                )
            except httpx.RequestError as e:
                logger.debug("%s %s transport failure: %r", method, url, e)
                raise classify(e).to_error() from e

        outcome = classify(r)
        if isinstance(outcome, Success):
            return outcome.body

        logger.debug("%s %s -> HTTP %s classified as %s", method, url, r.status_code, type(outcome).__name__)
        raise outcome.to_error()

    async def request(
        self,
        method: str,
        url: str,
        model: type[ModelT],
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> ModelT:
        body = await self.send(method, url, params=params, json=json, headers=headers)
        try:
            return model.model_validate_json(body)
        except ValidationError as e:
            raise MalformedResponseError(f"{model.__name__}: {e.error_count()} validation error(s)") from e
