"""
Project: Digital Menu marketplace

Description:
Shopping cart: (menu item, quantity) lines from a single restaurant,
saved to local storage after every change and restored on start.
"""

from decimal import Decimal

SWITCH_RESTAURANT_PROMPT = ("Your cart contains items from a different restaurant. "
                            "Adding this item will clear your current cart. Continue?")


def _accept(message):
    return True


class Cart:
    def __init__(self, cart_service, toaster, confirm=None):
        """``confirm(message) -> bool`` answers the switch-restaurant prompt."""
        self.cart_service = cart_service
        self.toaster = toaster
        self.confirm = confirm or _accept
        saved = cart_service.get()
        self.items = saved["items"]
        self.restaurant_id = saved["restaurant_id"]

    def _save(self):
        self.cart_service.save(self.items, self.restaurant_id)

    def _find(self, menu_item_id):
        for line in self.items:
            if str(line["menu_item"]["id"]) == str(menu_item_id):
                return line
        return None

    def add(self, menu_item, quantity=1):
        """Returns False when the user declines replacing another restaurant's cart."""
        other = self.restaurant_id is not None and str(menu_item["restaurant_id"]) != str(self.restaurant_id)
        if other and self.items:
            if not self.confirm(SWITCH_RESTAURANT_PROMPT):
                return False
            self.items = [{"menu_item": menu_item, "quantity": quantity}]
            self.restaurant_id = menu_item["restaurant_id"]
            self._save()
            self.toaster.success(f"{menu_item['name']} added to cart")
            return True

        if not self.items:
            self.restaurant_id = menu_item["restaurant_id"]

        line = self._find(menu_item["id"])
        if line is not None:
            line["quantity"] += quantity
        else:
            self.items.append({"menu_item": menu_item, "quantity": quantity})
        self._save()
        self.toaster.success(f"{menu_item['name']} added to cart")
        return True

    def remove(self, menu_item_id):
        self.items = [line for line in self.items if str(line["menu_item"]["id"]) != str(menu_item_id)]
        if not self.items:
            self.restaurant_id = None
        self._save()

    def update_quantity(self, menu_item_id, quantity):
        if quantity <= 0:
            self.remove(menu_item_id)
            return
        line = self._find(menu_item_id)
        if line is not None:
            line["quantity"] = quantity
            self._save()

    def clear(self):
        self.items = []
        self.restaurant_id = None
        self.cart_service.clear()

    @property
    def total_items(self):
        return sum(line["quantity"] for line in self.items)

    @property
    def total_amount(self):
        total = sum((Decimal(str(line["menu_item"]["price"])) * line["quantity"] for line in self.items), Decimal("0"))
        return float(total)
