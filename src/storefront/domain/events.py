"""In-process publish/subscribe bus and the event names the storefront uses.

Handlers are called synchronously, in registration order, for the exact
event name they subscribed to.  A handler may emit further events from
inside its own call: every ``emit`` dispatches to a snapshot of the
handler list taken when it started, so handlers that subscribe or
unsubscribe during dispatch take effect from the next emission on.

Exceptions raised by a handler propagate to whoever called ``emit``.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable

logger = logging.getLogger(__name__)

Handler = Callable[[Any], None]

# ---------------------------------------------------------------------------
# Events published by the stores and the controller (consumed by the view)
# ---------------------------------------------------------------------------
CATALOG_LOADED = "catalog:loaded"
CATALOG_ERROR = "catalog:error"
BASKET_CHANGED = "basket:changed"
ORDER_VALID = "order:valid"
CONTACTS_VALID = "contacts:valid"
ORDER_PENDING = "order:pending"
ORDER_SUCCESS = "order:success"
ORDER_ERROR = "order:error"
PAGE_LOCKED = "page:locked"

# ---------------------------------------------------------------------------
# Events published by the view (consumed by the controller)
# ---------------------------------------------------------------------------
PRODUCT_SELECT = "product:select"
BASKET_ADD = "basket:add"
BASKET_REMOVE = "basket:remove"
BASKET_CLEAR = "basket:clear"
BASKET_OPEN = "basket:open"
ORDER_OPEN = "order:open"
ORDER_PAYMENT = "order:payment"
ORDER_ADDRESS = "order:address"
ORDER_SUBMIT = "order:submit"
CONTACTS_EMAIL = "contacts:email"
CONTACTS_PHONE = "contacts:phone"
CONTACTS_SUBMIT = "contacts:submit"
SUCCESS_CLOSE = "success:close"
MODAL_CLOSE = "modal:close"


class EventBus:

    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = defaultdict(list)

    def on(self, event: str, handler: Handler) -> Callable[[], None]:
        """Subscribe *handler* to *event*.

        Returns a callable that removes this subscription again.
        """
        self._handlers[event].append(handler)
        return lambda: self.off(event, handler)

    def off(self, event: str, handler: Handler) -> None:
        """Remove one subscription of *handler*; unknown handlers are ignored."""
        handlers = self._handlers.get(event)
        if not handlers:
            return
        try:
            handlers.remove(handler)
        except ValueError:
            return
        if not handlers:
            del self._handlers[event]

    def emit(self, event: str, payload: Any = None) -> None:
        handlers = list(self._handlers.get(event, ()))
        logger.debug("emit %s -> %d handler(s)", event, len(handlers))
        for handler in handlers:
            handler(payload)
