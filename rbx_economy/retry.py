from __future__ import annotations

import logging
from typing import Awaitable, Callable, TypeVar

from rbx_economy.errors import StaleTokenError
from rbx_economy.session import SessionContext

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def with_token_refresh(session: SessionContext, attempt: Callable[[], Awaitable[T]]) -> T:
    """
    Run ``attempt``; if the server rotated the x-csrf-token, store the new
    token and run it exactly once more.

    The second attempt's result or error is returned as-is, including a second
    StaleTokenError. Every other error from the first attempt propagates.
    """
    try:
        return await attempt()
    except StaleTokenError as e:
        logger.info("x-csrf-token rotated by server; retrying once with the new token")
        session.set_token(e.new_token)

    return await attempt()
