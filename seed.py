from werkzeug.security import generate_password_hash
from models import db, User, Restaurant, MenuItem
from app import create_app


def seed():
    if not User.query.filter_by(role="admin").first():
        db.session.add(User(name="Admin", email="admin", password_hash=generate_password_hash("admin"),
                            role="admin", is_active=True))

    owner = User.query.filter_by(email="owner@digitalmenu.dev").first()
    if owner is None:
        owner = User(name="Demo Owner", email="owner@digitalmenu.dev",
                     password_hash=generate_password_hash("password"), role="restaurant", is_active=True)
        db.session.add(owner)
        db.session.flush()

    if not User.query.filter_by(email="customer@digitalmenu.dev").first():
        db.session.add(User(name="Demo Customer", email="customer@digitalmenu.dev",
                            password_hash=generate_password_hash("password"), role="customer", is_active=True))

    if Restaurant.query.count() == 0:
        trattoria = Restaurant(owner_id=owner.id, name="Trattoria Roma", description="Wood-fired pizza and fresh pasta",
                               address="12 Via Appia", phone="+1 555 0101", cuisine="Italian",
                               image="https://images.unsplash.com/photo-1517248135467-4c7edcad34c4?w=600")
        sakura = Restaurant(owner_id=owner.id, name="Sakura House", description="Sushi, ramen and small plates",
                            address="8 Cherry Lane", phone="+1 555 0102", cuisine="Japanese",
                            image="https://images.unsplash.com/photo-1579871494447-9811cf80d66c?w=600")
        db.session.add_all([trattoria, sakura])
        db.session.flush()
        db.session.add_all([
            MenuItem(restaurant_id=trattoria.id, name="Margherita Pizza", description="Tomato, mozzarella, basil",
                     price=11.99, category="Pizza", image="https://images.unsplash.com/photo-1574071318508-1cdbab80d002?w=600"),
            MenuItem(restaurant_id=trattoria.id, name="Spaghetti Bolognese", description="Slow-cooked beef ragu",
                     price=12.25, category="Pasta", image="https://images.unsplash.com/photo-1622973536968-3ead9e780960?w=600"),
            MenuItem(restaurant_id=sakura.id, name="Salmon Nigiri", description="Two pieces",
                     price=6.50, category="Sushi", image="https://images.unsplash.com/photo-1579584425555-c3ce17fd4351?w=600"),
            MenuItem(restaurant_id=sakura.id, name="Tonkotsu Ramen", description="Pork broth, chashu, egg",
                     price=14.00, category="Ramen", image="https://images.unsplash.com/photo-1569718212165-3a8278d5f624?w=600"),
        ])

    db.session.commit()


if __name__ == "__main__":
    app = create_app()
    with app.app_context():
        db.create_all()
        seed()
    print("Seeded. Admin login: admin / admin")
