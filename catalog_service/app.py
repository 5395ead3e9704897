import logging
import time

from flask import Flask, g, jsonify, request
from flask_cors import CORS
from flask_migrate import Migrate
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from sqlalchemy.exc import OperationalError
from werkzeug.exceptions import HTTPException

from catalog_service.config import Config
from catalog_service.logging_config import LOGGER_NAME, setup_logging
from catalog_service.metrics import REQUEST_COUNT, REQUEST_DURATION
from catalog_service.model import db
from catalog_service.products import create_products_blueprint
from catalog_service.reviews import create_reviews_blueprint
from catalog_service.store import CatalogStore

logger = logging.getLogger(LOGGER_NAME)
migrate = Migrate()


def create_app(config_object=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if isinstance(config_object, dict):
        app.config.update(config_object)
    elif config_object is not None:
        app.config.from_object(config_object)

    setup_logging(app.config['SERVICE_NAME'], app.config['LOG_LEVEL'])

    db.init_app(app)
    migrate.init_app(app, db)
    CORS(app)

    store = CatalogStore(db, default_limit=app.config['DEFAULT_PAGE_SIZE'])
    app.extensions['catalog_store'] = store
    app.register_blueprint(create_products_blueprint(store))
    app.register_blueprint(create_reviews_blueprint(store))

    @app.before_request
    def start_timer():
        g.start_time = time.time()

    @app.after_request
    def record_request(response):
        endpoint = request.url_rule.rule if request.url_rule else 'unmatched'
        REQUEST_COUNT.labels(request.method, endpoint, str(response.status_code)).inc()
        if 'start_time' in g:
            REQUEST_DURATION.observe(time.time() - g.start_time)
        return response

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        logger.warning(e.description, extra={'endpoint': request.path, 'status_code': e.code})
        return jsonify({"error": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        logger.error("Unhandled error", exc_info=e, extra={'endpoint': request.path, 'status_code': 500, 'error': str(e)})
        return jsonify({"error": "Internal server error"}), 500

    # health check
    @app.route("/health")
    def health():
        logger.info("Health check", extra={'endpoint': '/health', 'status_code': 200})
        return "OK", 200

    # Prometheus metrics endpoint
    @app.route('/metrics')
    def metrics():
        logger.info("Metrics endpoint accessed", extra={'endpoint': '/metrics'})
        resp = generate_latest()
        return resp, 200, {'Content-Type': CONTENT_TYPE_LATEST}

    logger.info("Catalog service started", extra={'endpoint': 'startup'})
    return app


def create_tables(app, attempts=10, delay=2):
    with app.app_context():
        for _ in range(attempts):
            try:
                db.create_all()
                return True
            except OperationalError:
                logger.warning(f"Database unavailable, retrying in {delay} seconds...")
                time.sleep(delay)
    return False


def main():
    app = create_app()
    create_tables(app)
    logger.info(f"Starting catalog service on port {app.config['PORT']}", extra={'endpoint': 'startup'})
    app.run(host=app.config['HOST'], port=app.config['PORT'])


if __name__ == "__main__":
    main()
