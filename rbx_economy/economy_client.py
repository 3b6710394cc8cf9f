from __future__ import annotations

import logging
from typing import Any

import httpx

from rbx_economy.config import Settings, settings as default_settings
from rbx_economy.errors import PurchaseError, PurchaseErrorKind, StaleTokenError
from rbx_economy.executor import RequestExecutor
from rbx_economy.models import AuthenticatedUser, Limit, Listing, Page, Reseller, UserSale
from rbx_economy.responses import (
    AuthenticatedUserResponse,
    CurrencyResponse,
    PurchaseLimitedResponse,
    ResellersResponse,
    UserSalesResponse,
)
from rbx_economy.retry import with_token_refresh
from rbx_economy.session import XCSRF_HEADER, SessionContext

logger = logging.getLogger(__name__)

USER_SALES_TRANSACTION_TYPE = "Sale"
PURCHASE_CONTENT_TYPE = "application/json;charset=utf-8"
ROBUX_CURRENCY = 1

_PURCHASE_ERROR_MESSAGES: dict[str, PurchaseErrorKind] = {
    "You have a pending transaction. Please wait 1 minute and try again.": PurchaseErrorKind.PENDING_TRANSACTION,
    "You already own this item.": PurchaseErrorKind.CANNOT_BUY_OWN_ITEM,
    "This item is not for sale.": PurchaseErrorKind.ITEM_NOT_FOR_SALE,
    "You do not have enough Robux to purchase this item.": PurchaseErrorKind.NOT_ENOUGH_ROBUX,
    "This item has changed price. Please try again.": PurchaseErrorKind.PRICE_CHANGED,
}


def purchase_error_from_message(message: str) -> PurchaseError:
    kind = _PURCHASE_ERROR_MESSAGES.get(message, PurchaseErrorKind.UNKNOWN_MESSAGE)
    return PurchaseError(kind, message)


def _page_params(limit: Limit, cursor: str | None) -> dict[str, Any]:
    params: dict[str, Any] = {"limit": int(limit)}
    if cursor:
        params["cursor"] = cursor
    return params


class EconomyClient:
    """
    Typed operations over the economy and users APIs for one logged-in account.

    Reads go straight through the executor. PATCH/POST operations are wrapped
    in with_token_refresh so a rotated x-csrf-token is picked up once.
    """

    def __init__(
        self,
        roblosecurity: str,
        *,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings or default_settings
        self.session = SessionContext(roblosecurity)
        self.executor = RequestExecutor(
            self.session,
            timeout=self.settings.request_timeout,
            user_agent=self.settings.user_agent,
            transport=transport,
        )
        self.economy_base = self.settings.economy_api_base.rstrip("/")
        self.users_base = self.settings.users_api_base.rstrip("/")
        self.auth_base = self.settings.auth_api_base.rstrip("/")

    def __repr__(self) -> str:
        return f"EconomyClient(economy_base={self.economy_base!r}, session={self.session!r})"

    # ---------- Users API ----------

    async def authenticated_user(self) -> AuthenticatedUser:
        url = f"{self.users_base}/v1/users/authenticated"
        raw = await self.executor.request("GET", url, AuthenticatedUserResponse)
        return AuthenticatedUser(user_id=raw.id, username=raw.name, display_name=raw.display_name)

    async def user_id(self) -> int:
        user = await self.authenticated_user()
        return user.user_id

    async def _resolve_user_id(self, user_id: int | None) -> int:
        if user_id is not None:
            return int(user_id)
        return await self.user_id()

    # ---------- Economy API (reads) ----------

    async def robux(self, user_id: int | None = None) -> int:
        """
        Robux balance of the account. Looks up the authenticated user id when
        ``user_id`` is not given.
        """
        uid = await self._resolve_user_id(user_id)
        url = f"{self.economy_base}/v1/users/{uid}/currency"
        raw = await self.executor.request("GET", url, CurrencyResponse)
        return raw.robux

    async def resellers(self, item_id: int, limit: Limit, cursor: str | None = None) -> Page[Listing]:
        """
        Resale listings of a limited item, cheapest first as the server orders them.
        Pass ``cursor=None`` for the first page.
        """
        url = f"{self.economy_base}/v1/assets/{item_id}/resellers"
        raw = await self.executor.request("GET", url, ResellersResponse, params=_page_params(limit, cursor))

        listings = [
            Listing(
                uaid=item.user_asset_id,
                price=item.price,
                reseller=Reseller(user_id=item.seller.id, name=item.seller.name),
                serial_number=item.serial_number,
            )
            for item in raw.data
        ]
        return Page(items=listings, next_cursor=raw.next_page_cursor)

    async def user_sales(
        self,
        limit: Limit,
        cursor: str | None = None,
        user_id: int | None = None,
    ) -> Page[UserSale]:
        uid = await self._resolve_user_id(user_id)
        url = f"{self.economy_base}/v2/users/{uid}/transactions"
        params = _page_params(limit, cursor)
        params["transactionType"] = USER_SALES_TRANSACTION_TYPE

        raw = await self.executor.request("GET", url, UserSalesResponse, params=params)

        sales = [
            UserSale(
                sale_id=s.id,
                is_pending=s.is_pending,
                user_id=s.agent.id,
                user_display_name=s.agent.name,
                robux_received=s.currency.amount,
                asset_id=s.details.id,
                asset_name=s.details.name,
            )
            for s in raw.data
        ]
        return Page(items=sales, next_cursor=raw.next_page_cursor)

    # ---------- Economy API (writes) ----------

    async def _toggle_sale(self, item_id: int, uaid: int, payload: dict[str, Any]) -> None:
        url = f"{self.economy_base}/v1/assets/{item_id}/resellable-copies/{uaid}"

        async def attempt() -> None:
            # Only the 200 matters; the body is ignored.
            await self.executor.send("PATCH", url, json=payload)

        await with_token_refresh(self.session, attempt)

    async def put_limited_on_sale(self, item_id: int, uaid: int, price: int) -> None:
        await self._toggle_sale(item_id, uaid, {"price": int(price)})

    async def take_limited_off_sale(self, item_id: int, uaid: int) -> None:
        await self._toggle_sale(item_id, uaid, {})

    async def purchase_tradable_limited(self, product_id: int, seller_id: int, uaid: int, price: int) -> None:
        """
        Buy one copy of a tradable (legacy) limited. ``product_id`` is the
        product id, not the item id.

        Raises PurchaseError when the server answers 200 with purchased=false.
        Check ``err.purchase_kind.retry_worthy`` to decide whether to try
        again; the client itself does not.
        """
        url = f"{self.economy_base}/v1/purchases/products/{product_id}"
        payload = {
            "expectedCurrency": ROBUX_CURRENCY,
            "expectedPrice": int(price),
            "expectedSellerId": int(seller_id),
            "userAssetId": int(uaid),
        }

        async def attempt() -> PurchaseLimitedResponse:
            return await self.executor.request(
                "POST",
                url,
                PurchaseLimitedResponse,
                json=payload,
                headers={"Content-Type": PURCHASE_CONTENT_TYPE},
            )

        raw = await with_token_refresh(self.session, attempt)
        if raw.purchased:
            return

        err = purchase_error_from_message(raw.error_msg or "")
        logger.debug("purchase of product %s rejected: %s", product_id, err.purchase_kind.value)
        raise err

    # ---------- Auth API ----------

    async def force_refresh_token(self) -> None:
        """
        Fetch a fresh x-csrf-token without waiting for a mutating call to fail.

        The logout endpoint rejects a request carrying a bad token with 403 and
        a replacement token, and does nothing else.
        """
        url = f"{self.auth_base}/v2/logout"
        try:
            # Never send the live token here: a valid token would log the session out.
            await self.executor.send("POST", url, headers={XCSRF_HEADER: ""})
        except StaleTokenError as e:
            self.session.set_token(e.new_token)
            logger.info("x-csrf-token refreshed")
