"""Order API Flask application."""

from __future__ import annotations

import logging
from typing import Optional

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from config import OrderApiConfig
from ordering.db.session import create_db_engine, init_db, make_session_factory
from ordering.services.auth import TokenDecoder
from ordering.services.logging import set_log_level
from ordering.services.order_service import OrderService
from routes import orders


logger = logging.getLogger(__name__)


def create_app(config: Optional[OrderApiConfig] = None) -> Flask:
    config = config or OrderApiConfig.load()
    logging.basicConfig(level=config.log_level)
    set_log_level(config.log_level)

    app = Flask(__name__)
    app.config["SECRET_KEY"] = config.secret_key
    app.config["ORDER_API_CONFIG"] = config

    engine = create_db_engine(config.database_url)
    init_db(engine)

    components = {
        "engine": engine,
        "order_service": OrderService(make_session_factory(engine), page_size=config.page_size),
        "token_decoder": TokenDecoder(config.secret_key, config.jwt_algorithm),
    }
    app.extensions["order_api_components"] = components

    app.register_blueprint(orders.orders_bp)

    @app.get("/api/health")
    def health():
        return jsonify({"status": "healthy", "service": "order-api"}), 200

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        return jsonify({"message": exc.description}), exc.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return jsonify({"message": "Server error."}), 500

    return app


def main() -> None:
    app = create_app()
    app.run(host="0.0.0.0", port=5000, debug=False)


if __name__ == "__main__":
    main()
