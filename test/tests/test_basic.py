def test_health(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.get_json() == {"status": "ok"}


def test_unknown_route_is_json_404(client):
    r = client.get("/api/nope")
    assert r.status_code == 404
    assert r.get_json()["message"] == "Not Found"


def test_missing_restaurant_is_404(client):
    assert client.get("/api/restaurants/999").status_code == 404


def test_seed_is_idempotent(app):
    from seed import seed
    from models import Restaurant, User

    with app.app_context():
        seed()
        seed()
        assert User.query.filter_by(role="admin").count() == 1
        assert Restaurant.query.count() == 2


def test_oversized_path_id_is_404(client):
    r = client.get("/api/restaurants/100000000000000000000")
    assert r.status_code == 404
    assert r.get_json()["message"] == "Not Found"
