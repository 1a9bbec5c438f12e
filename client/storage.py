"""
Project: Digital Menu marketplace

Description:
Local storage for the client: a JSON file of key -> value, rewritten on
every change. Collections used by the offline fallback are seeded from
mock data the first time they are read.
"""

import copy
import json
import logging
import os
import tempfile

from client import mock_data

logger = logging.getLogger(__name__)

USERS = "digital_menu_users"
RESTAURANTS = "digital_menu_restaurants"
MENU_ITEMS = "digital_menu_items"
ORDERS = "digital_menu_orders"
AUTH_USER = "digital_menu_auth_user"
CART = "digital_menu_cart"
TOKEN = "digital_menu_token"

SEEDS = {
    USERS: mock_data.USERS,
    RESTAURANTS: mock_data.RESTAURANTS,
    MENU_ITEMS: mock_data.MENU_ITEMS,
    ORDERS: mock_data.ORDERS,
}


class LocalStorage:
    def __init__(self, path):
        self.path = path
        self._data = self._load()

    def _load(self):
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable storage file %s: %s", self.path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data):
        """Replace the file with ``data``; on failure memory and disk keep the old state."""
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, indent=2)
            os.replace(tmp, self.path)
        except Exception:
            os.unlink(tmp)
            raise
        self._data = data

    def get_item(self, key, default=None):
        if key not in self._data:
            return default
        return copy.deepcopy(self._data[key])

    def set_item(self, key, value):
        self._write({**self._data, key: copy.deepcopy(value)})

    def remove_item(self, key):
        if key in self._data:
            self._write({k: v for k, v in self._data.items() if k != key})

    def collection(self, key):
        """A seeded collection (users, restaurants, menu items, orders)."""
        if key not in self._data:
            self.set_item(key, SEEDS.get(key, []))
        return self.get_item(key)
