"""
Project: Digital Menu marketplace

Description:
The client shell: wires storage, request layer, services, session and cart
together and opens pages through the role-gated router.
"""

import logging

from config import ClientConfig
from client import pages
from client.api_client import ApiClient
from client.cart import Cart
from client.notify import Toaster
from client.router import Redirect, resolve
from client.services import (
    AuthService,
    CartService,
    MenuItemService,
    OrderService,
    RestaurantService,
    StatisticsService,
    UserService,
)
from client.session import AuthSession
from client.storage import LocalStorage

logger = logging.getLogger(__name__)


class Shell:
    def __init__(self, api_base_url=None, storage_path=None, http_session=None, confirm=None):
        self.storage = LocalStorage(storage_path or ClientConfig.STORAGE_PATH)
        self.api = ApiClient(api_base_url or ClientConfig.API_BASE_URL, self.storage,
                             session=http_session, timeout=ClientConfig.TIMEOUT)
        self.toaster = Toaster()
        self.confirm = confirm or (lambda message: True)

        self.auth = AuthService(self.api, self.storage)
        self.users = UserService(self.api, self.storage)
        self.restaurants = RestaurantService(self.api, self.storage)
        self.menu_items = MenuItemService(self.api, self.storage)
        self.orders = OrderService(self.api, self.storage)
        self.statistics = StatisticsService(self.api, self.storage)

        self.session = AuthSession(self.auth, self.toaster)
        self.cart = Cart(CartService(self.api, self.storage), self.toaster, confirm=self.confirm)

    def open(self, path):
        """Follow redirects until a page renders; returns (path, page name, page data)."""
        seen = set()
        while True:
            result = resolve(path, self.session.user)
            if isinstance(result, Redirect):
                if result.to in seen:
                    raise RuntimeError(f"Redirect loop at {path}")
                seen.add(path)
                logger.debug("Redirect %s -> %s", path, result.to)
                path = result.to
                continue
            view = getattr(pages, result.page)
            return path, result.page, view(self, **result.params)
