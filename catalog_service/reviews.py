import logging

from flask import Blueprint, jsonify, request

from catalog_service import validation
from catalog_service.errors import CatalogError, error_response

logger = logging.getLogger('catalog_service.reviews')


def create_reviews_blueprint(store):
    bp = Blueprint('reviews', __name__)

    @bp.route("/reviews", methods=["POST"])
    def create_review():
        logger.info("Create review request", extra={'endpoint': '/reviews'})
        try:
            fields = validation.review_create(request.get_json(silent=True))
            review = store.create_review(**fields)
        except CatalogError as e:
            return error_response(logger, e, '/reviews')

        logger.info("Review created successfully", extra={'endpoint': '/reviews', 'review_id': review.id, 'product_id': review.product_id, 'status_code': 201})
        return jsonify(review.to_dict()), 201

    @bp.route("/reviews/<int:review_id>", methods=["GET"])
    def get_review(review_id):
        logger.info(f"Get review request for review_id: {review_id}", extra={'endpoint': '/reviews/<int:review_id>', 'review_id': review_id})
        try:
            review = store.get_review(review_id)
        except CatalogError as e:
            return error_response(logger, e, '/reviews/<int:review_id>', review_id=review_id)

        return jsonify(review.to_dict())

    # reviews of one product, paged and sorted like the product list
    @bp.route("/products/<int:product_id>/reviews", methods=["GET"])
    def list_product_reviews(product_id):
        logger.info(f"List reviews request for product_id: {product_id}", extra={'endpoint': '/products/<int:product_id>/reviews', 'product_id': product_id})
        try:
            reviews, pagination = store.list_reviews(product_id, request.args)
        except CatalogError as e:
            return error_response(logger, e, '/products/<int:product_id>/reviews', product_id=product_id)

        return jsonify({
            "reviews": [r.to_dict() for r in reviews],
            "pagination": pagination,
        })

    @bp.route("/reviews/<int:review_id>", methods=["PATCH"])
    def update_review(review_id):
        logger.info(f"Update review request for review_id: {review_id}", extra={'endpoint': '/reviews/<int:review_id>', 'review_id': review_id})
        try:
            review = store.get_review(review_id)
            changes = validation.review_changes(request.get_json(silent=True))
            review = store.update_review(review, changes)
        except CatalogError as e:
            return error_response(logger, e, '/reviews/<int:review_id>', review_id=review_id)

        logger.info("Review updated successfully", extra={'endpoint': '/reviews/<int:review_id>', 'review_id': review_id, 'status_code': 200})
        return jsonify(review.to_dict())

    @bp.route("/reviews/<int:review_id>", methods=["DELETE"])
    def delete_review(review_id):
        logger.info(f"Delete review request for review_id: {review_id}", extra={'endpoint': '/reviews/<int:review_id>', 'review_id': review_id})
        try:
            store.delete_review(review_id)
        except CatalogError as e:
            return error_response(logger, e, '/reviews/<int:review_id>', review_id=review_id)

        logger.info("Review deleted successfully", extra={'endpoint': '/reviews/<int:review_id>', 'review_id': review_id, 'status_code': 200})
        return jsonify({"message": "Review deleted successfully"})

    return bp
