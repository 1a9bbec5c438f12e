"""
Project: Digital Menu marketplace

Description:
Dashboard statistics computed from stored orders. Cancelled orders count
as orders but not as revenue.
"""

from decimal import Decimal

from flask import Blueprint, jsonify

from models import db, Order, Restaurant
from api.tokens import role_required

bp = Blueprint("statistics", __name__)

TOP_RESTAURANTS = 5


def _revenue(order):
    if order.status == "cancelled":
        return Decimal("0")
    return Decimal(order.total_amount)


def _sales_by(orders, fmt):
    buckets = {}
    for o in orders:
        key = o.created_at.strftime(fmt)
        buckets.setdefault(key, Decimal("0"))
        buckets[key] += _revenue(o)
    return [{"date": k, "amount": float(v)} for k, v in sorted(buckets.items())]


@bp.get("/admin/statistics")
@role_required("admin")
def admin_statistics():
    orders = Order.query.all()
    per_restaurant = {}
    for o in orders:
        row = per_restaurant.setdefault(o.restaurant_id, {"orders": 0, "revenue": Decimal("0"), "customers": set()})
        row["orders"] += 1
        row["revenue"] += _revenue(o)
        row["customers"].add(o.customer_id)

    names = dict(db.session.query(Restaurant.id, Restaurant.name).all())
    ranked = sorted(per_restaurant.items(), key=lambda kv: kv[1]["revenue"], reverse=True)
    top = [
        {"restaurant_id": rid, "name": names.get(rid), "orders": row["orders"],
         "revenue": float(row["revenue"]), "customers": len(row["customers"])}
        for rid, row in ranked[:TOP_RESTAURANTS]
    ]
    return jsonify({
        "total_restaurants": Restaurant.query.count(),
        "total_orders": len(orders),
        "total_revenue": float(sum((_revenue(o) for o in orders), Decimal("0"))),
        "top_restaurants": top,
        "monthly_sales": _sales_by(orders, "%Y-%m"),
    })


@bp.get("/restaurants/<int:restaurant_id>/statistics")
@role_required("restaurant")
def restaurant_statistics(restaurant_id):
    db.get_or_404(Restaurant, restaurant_id)
    orders = Order.query.filter_by(restaurant_id=restaurant_id).all()
    return jsonify({
        "restaurant_id": restaurant_id,
        "total_customers": len({o.customer_id for o in orders}),
        "total_orders": len(orders),
        "total_revenue": float(sum((_revenue(o) for o in orders), Decimal("0"))),
        "monthly_sales": _sales_by(orders, "%Y-%m"),
        "yearly_sales": _sales_by(orders, "%Y"),
    })
