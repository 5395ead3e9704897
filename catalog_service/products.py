import logging

from flask import Blueprint, jsonify, request

from catalog_service import validation
from catalog_service.errors import CatalogError, error_response

logger = logging.getLogger('catalog_service.products')


def create_products_blueprint(store):
    bp = Blueprint('products', __name__)

    # create products
    @bp.route("/products", methods=["POST"])
    def create_product():
        logger.info("Create product request", extra={'endpoint': '/products'})
        try:
            fields = validation.product_create(request.get_json(silent=True))
            product = store.create_product(**fields)
        except CatalogError as e:
            return error_response(logger, e, '/products')

        logger.info("Product created successfully", extra={'endpoint': '/products', 'product_id': product.id, 'status_code': 201})
        return jsonify(product.to_dict()), 201

    # endpoint to get a single product
    @bp.route("/products/<int:product_id>", methods=["GET"])
    def get_product(product_id):
        logger.info(f"Get product request for product_id: {product_id}", extra={'endpoint': '/products/<int:product_id>', 'product_id': product_id})
        try:
            product = store.get_product(product_id)
        except CatalogError as e:
            return error_response(logger, e, '/products/<int:product_id>', product_id=product_id)

        return jsonify(product.to_dict())

    # list products with paging, sorting and name search
    @bp.route("/products", methods=["GET"])
    def list_products():
        logger.info("List products request", extra={'endpoint': '/products'})
        try:
            products, pagination = store.list_products(request.args)
        except CatalogError as e:
            return error_response(logger, e, '/products')

        logger.info(f"Retrieved {len(products)} products", extra={'endpoint': '/products', 'count': len(products), 'status_code': 200})
        return jsonify({
            "products": [p.to_dict() for p in products],
            "pagination": pagination,
        })

    # update product
    @bp.route("/products/<int:product_id>", methods=["PATCH"])
    def update_product(product_id):
        logger.info(f"Update product request for product_id: {product_id}", extra={'endpoint': '/products/<int:product_id>', 'product_id': product_id})
        try:
            product = store.get_product(product_id)
            changes = validation.product_changes(request.get_json(silent=True))
            product = store.update_product(product, changes)
        except CatalogError as e:
            return error_response(logger, e, '/products/<int:product_id>', product_id=product_id)

        logger.info("Product updated successfully", extra={'endpoint': '/products/<int:product_id>', 'product_id': product_id, 'status_code': 200})
        return jsonify(product.to_dict())

    # delete product
    @bp.route("/products/<int:product_id>", methods=["DELETE"])
    def delete_product(product_id):
        logger.info(f"Delete product request for product_id: {product_id}", extra={'endpoint': '/products/<int:product_id>', 'product_id': product_id})
        try:
            store.delete_product(product_id)
        except CatalogError as e:
            return error_response(logger, e, '/products/<int:product_id>', product_id=product_id)

        logger.info("Product deleted successfully", extra={'endpoint': '/products/<int:product_id>', 'product_id': product_id, 'status_code': 200})
        return jsonify({"message": "Product deleted successfully"})

    return bp
