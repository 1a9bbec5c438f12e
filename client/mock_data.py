"""Demo data the client falls back to when the API cannot be reached."""

USERS = [
    {"id": "user_1", "name": "Admin", "email": "admin", "role": "admin", "is_active": True,
     "created_at": "2024-04-01T09:00:00"},
    {"id": "user_2", "name": "Marco Rossi", "email": "marco@trattoria.example.com", "role": "restaurant",
     "is_active": True, "created_at": "2024-04-02T10:30:00"},
    {"id": "user_3", "name": "Yuki Tanaka", "email": "yuki@sakura.example.com", "role": "restaurant",
     "is_active": False, "created_at": "2024-04-05T14:10:00"},
    {"id": "user_4", "name": "Jane Doe", "email": "jane@example.com", "role": "customer", "is_active": True,
     "created_at": "2024-04-06T18:45:00"},
]

RESTAURANTS = [
    {"id": "restaurant_1", "owner_id": "user_2", "name": "Trattoria Roma",
     "description": "Wood-fired pizza and fresh pasta", "address": "12 Via Appia", "phone": "+1 555 0101",
     "image": "https://images.unsplash.com/photo-1517248135467-4c7edcad34c4?w=600", "cuisine": "Italian",
     "is_active": True, "created_at": "2024-04-02T11:00:00"},
    {"id": "restaurant_2", "owner_id": "user_3", "name": "Sakura House",
     "description": "Sushi, ramen and small plates", "address": "8 Cherry Lane", "phone": "+1 555 0102",
     "image": "https://images.unsplash.com/photo-1579871494447-9811cf80d66c?w=600", "cuisine": "Japanese",
     "is_active": True, "created_at": "2024-04-05T15:00:00"},
]

MENU_ITEMS = [
    {"id": "menuItem_1", "restaurant_id": "restaurant_1", "name": "Margherita Pizza",
     "description": "Tomato, mozzarella, basil", "price": 11.99, "category": "Pizza",
     "image": "https://images.unsplash.com/photo-1574071318508-1cdbab80d002?w=600", "is_available": True,
     "created_at": "2024-04-02T11:05:00"},
    {"id": "menuItem_2", "restaurant_id": "restaurant_1", "name": "Spaghetti Bolognese",
     "description": "Slow-cooked beef ragu", "price": 12.25, "category": "Pasta",
     "image": "https://images.unsplash.com/photo-1622973536968-3ead9e780960?w=600", "is_available": True,
     "created_at": "2024-04-02T11:06:00"},
    {"id": "menuItem_3", "restaurant_id": "restaurant_2", "name": "Salmon Nigiri",
     "description": "Two pieces", "price": 6.5, "category": "Sushi",
     "image": "https://images.unsplash.com/photo-1579584425555-c3ce17fd4351?w=600", "is_available": True,
     "created_at": "2024-04-05T15:05:00"},
]

ORDERS = [
    {"id": "order_1", "customer_id": "user_4", "restaurant_id": "restaurant_1",
     "items": [{"menu_item_id": "menuItem_1", "name": "Margherita Pizza", "price": 11.99, "quantity": 2}],
     "status": "delivered", "total_amount": 23.98,
     "created_at": "2024-04-10T19:20:00", "updated_at": "2024-04-10T20:05:00"},
]
