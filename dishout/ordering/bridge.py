from __future__ import annotations

import logging
from datetime import datetime, timezone
from urllib.parse import quote

from ..integrations.background import fire_and_forget
from ..integrations.endpoints import DishOutApi, get_api_client
from .config import DEFAULT_ORDER_CONFIG, DEFAULT_PHONE_PLAN, OrderConfig, PhonePlan
from .models import LeadRecord, OrderLink, PendingOrder
from .phone import normalize_phone

logger = logging.getLogger(__name__)

# Characters encodeURIComponent leaves untouched, beyond letters, digits and "-_.~".
_URI_COMPONENT_SAFE = "!*'()"

_bridge: "OrderBridge | None" = None


def compose_order_message(
    restaurant: str,
    dish_name: str,
    provider: str,
    image_url: str | None = None,
    config: OrderConfig = DEFAULT_ORDER_CONFIG,
) -> str:
    message = (
        f"Hello, I found {restaurant} on {config.app_name}, and I would like to order "
        f"{dish_name}, I would like my delivery through {provider}."
    )
    if image_url:
        message += f" Here's the dish I'm looking for: {image_url}"
    return message


def build_whatsapp_link(
    digits: str, message: str, config: OrderConfig = DEFAULT_ORDER_CONFIG
) -> str:
    return f"{config.deep_link_base}/{digits}?text={quote(message, safe=_URI_COMPONENT_SAFE)}"


class OrderBridge:
    """Turns a pending order and a chosen provider into a WhatsApp deep link."""

    def __init__(
        self,
        api: DishOutApi | None = None,
        plan: PhonePlan = DEFAULT_PHONE_PLAN,
        config: OrderConfig = DEFAULT_ORDER_CONFIG,
    ) -> None:
        self.api = api
        self.plan = plan
        self.config = config

    def compose(
        self,
        order: PendingOrder,
        provider: str,
        dish_name: str | None,
        image_url: str | None = None,
        user_email: str | None = None,
    ) -> OrderLink:
        digits = normalize_phone(order.phone, self.plan)
        dish = dish_name or self.config.unknown_dish
        restaurant = order.restaurant_title or self.config.unknown_restaurant
        message = compose_order_message(restaurant, dish, provider, image_url, self.config)
        lead = LeadRecord(
            dish_name=dish,
            restaurant_name=restaurant,
            restaurant_phone=digits,
            user_email=user_email,
            timestamp=datetime.now(timezone.utc).isoformat(),
            dish_image_url=image_url or None,
        )
        return OrderLink(
            url=build_whatsapp_link(digits, message, self.config),
            phone=digits,
            message=message,
            lead=lead,
        )

    def report(self, lead: LeadRecord) -> None:
        """Schedule lead tracking; never raises and never waits on the network."""
        if self.api is None:
            logger.debug("No tracking client configured, dropping lead for %s", lead.restaurant_name)
            return
        fire_and_forget(self.api.track_lead(lead), name="track-lead")

    def place(
        self,
        order: PendingOrder,
        provider: str,
        dish_name: str | None,
        image_url: str | None = None,
        user_email: str | None = None,
    ) -> OrderLink:
        link = self.compose(order, provider, dish_name, image_url, user_email)
        self.report(link.lead)
        return link


def get_order_bridge() -> OrderBridge:
    global _bridge
    if _bridge is None:
        _bridge = OrderBridge(api=get_api_client())
    return _bridge
