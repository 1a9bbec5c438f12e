from app import create_app
from models import db

app = create_app()

# Create tables on startup
with app.app_context():
    db.create_all()

if __name__ == "__main__":
    app.run()
