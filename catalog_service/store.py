import logging
from contextlib import contextmanager

from sqlalchemy import false
from sqlalchemy.exc import SQLAlchemyError

from catalog_service.errors import NotFoundError, PersistenceError
from catalog_service.metrics import ENTITY_COUNT
from catalog_service.model import Product, Review, utcnow
from catalog_service.query import DEFAULT_LIMIT, MAX_INT64, PRODUCT_LIST, REVIEW_LIST

logger = logging.getLogger('catalog_service.store')


class CatalogStore:
    """Every database operation the handlers need, on one Flask-SQLAlchemy handle.

    Built once by the application factory and handed to each blueprint.
    Lookups only ever see live rows; deletes only mark ``deleted_at``.
    """

    def __init__(self, db, default_limit=DEFAULT_LIMIT):
        self.db = db
        self.default_limit = default_limit

    @property
    def session(self):
        return self.db.session

    @contextmanager
    def _guard(self, action):
        try:
            yield self.session
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Database error while trying to {action}", extra={'error': str(e)})
            raise PersistenceError(f"Failed to {action}") from e

    def _get_live(self, model, entity_id, label):
        if entity_id > MAX_INT64:
            raise NotFoundError(f"{label} not found")
        with self._guard(f"retrieve {label.lower()}"):
            row = self.session.query(model).filter_by(id=entity_id, deleted_at=None).first()
        if row is None:
            raise NotFoundError(f"{label} not found")
        return row

    def _add(self, row, entity):
        with self._guard(f"create {entity}"):
            self.session.add(row)
            self.session.commit()
        ENTITY_COUNT.labels(entity, 'create').inc()
        return row

    def _update(self, row, changes, entity):
        with self._guard(f"update {entity}"):
            for field, value in changes.items():
                setattr(row, field, value)
            self.session.commit()
        ENTITY_COUNT.labels(entity, 'update').inc()

    def _soft_delete(self, model, entity_id, label):
        if entity_id > MAX_INT64:
            raise NotFoundError(f"{label} not found")
        with self._guard(f"delete {label.lower()}"):
            affected = (self.session.query(model)
                        .filter_by(id=entity_id, deleted_at=None)
                        .update({'deleted_at': utcnow()}, synchronize_session=False))
            self.session.commit()
        if affected == 0:
            raise NotFoundError(f"{label} not found")
        ENTITY_COUNT.labels(label.lower(), 'delete').inc()

    # products

    def create_product(self, name, price):
        return self._add(Product(name=name, price=price), 'product')

    def get_product(self, product_id):
        return self._get_live(Product, product_id, 'Product')

    def list_products(self, args):
        params = PRODUCT_LIST.parse(args, self.default_limit)
        with self._guard("retrieve products"):
            return PRODUCT_LIST.run(self.session.query(Product), params)

    def update_product(self, product, changes):
        self._update(product, changes, 'product')
        return self.get_product(product.id)

    def delete_product(self, product_id):
        self._soft_delete(Product, product_id, 'Product')

    # reviews

    def create_review(self, content, product_id):
        self.get_product(product_id)
        return self._add(Review(content=content, product_id=product_id), 'review')

    def get_review(self, review_id):
        return self._get_live(Review, review_id, 'Review')

    def list_reviews(self, product_id, args):
        params = REVIEW_LIST.parse(args, self.default_limit)
        with self._guard("retrieve reviews"):
            query = self.session.query(Review)
            if product_id > MAX_INT64:
                query = query.filter(false())
            else:
                query = query.filter(Review.product_id == product_id)
            return REVIEW_LIST.run(query, params)

    def update_review(self, review, changes):
        if 'product_id' in changes:
            self.get_product(changes['product_id'])
        self._update(review, changes, 'review')
        return self.get_review(review.id)

    def delete_review(self, review_id):
        self._soft_delete(Review, review_id, 'Review')
