"""
Product catalogue: categories and the example products filed under them.
"""

from flask import Blueprint, jsonify, request

from tariffsmart.web.db.models import Product, ProductCategory
from tariffsmart.web.hooks import load_model

bp = Blueprint("catalog", __name__, url_prefix="/api")


@bp.route("/categories", methods=["GET"])
def list_categories():
    categories = ProductCategory.query.order_by(ProductCategory.id).all()
    return jsonify({"categories": ProductCategory.as_dicts(categories)})


@bp.route("/categories/<category_id>", methods=["GET"])
@load_model(ProductCategory, label="category")
def get_category(category):
    return jsonify({"category": category.as_dict()})


@bp.route("/products", methods=["GET"])
def list_products():
    """
    List products.

    Query params:
        categoryId: Only products in this category
    """
    category_id = request.args.get("categoryId")
    if category_id:
        try:
            products = Product.for_category(int(category_id))
        except ValueError:
            return jsonify({"message": "Invalid category ID"}), 400
    else:
        products = Product.query.order_by(Product.id).all()

    return jsonify({"products": Product.as_dicts(products)})


@bp.route("/products/<product_id>", methods=["GET"])
@load_model(Product, label="product")
def get_product(product):
    return jsonify({"product": product.as_dict()})
