"""
FLASK APP ENTRY POINT - TOKEN SERVICE
=====================================

Sets up the Flask app, enables CORS and registers the token blueprint.

Configuration, applied in order:
- built-in defaults (TOTP_ALGORITHM, TOTP_PERIOD, TOTP_DIGITS)
- environment variables prefixed with TOKENGEN_ (e.g. TOKENGEN_TOTP_PERIOD=60)
- the `test_config` mapping passed to create_app()
"""
import logging

from flask import Flask, jsonify
from flask_cors import CORS

from tokengen.config import DEFAULT_ALGORITHM, DEFAULT_DIGITS, DEFAULT_PERIOD

from .routes import token_bp

logger = logging.getLogger(__name__)


def create_app(test_config=None) -> Flask:
    app = Flask(__name__)
    app.config.from_mapping(
        TOTP_ALGORITHM=DEFAULT_ALGORITHM.value,
        TOTP_PERIOD=DEFAULT_PERIOD,
        TOTP_DIGITS=DEFAULT_DIGITS,
    )
    # TOKENGEN_TOTP_PERIOD=60 -> app.config["TOTP_PERIOD"] == 60
    app.config.from_prefixed_env("TOKENGEN")
    if test_config is not None:
        app.config.from_mapping(test_config)

    # Allow browser frontends on another origin to call the API
    CORS(app, send_wildcard=True)
    app.register_blueprint(token_bp)

    @app.route("/", methods=["GET"])
    def index():
        return jsonify({
            "service": "tokengen",
            "endpoints": {
                "GET /algorithms": "supported hash algorithms and defaults",
                "POST /token": "TOTP token for {key, algorithm?, period?, digits?, timestamp?}",
                "POST /hotp": "HOTP token for {key, counter, algorithm?, digits?}",
            },
        })

    logger.info("tokengen API ready (default algorithm=%s)", app.config["TOTP_ALGORITHM"])
    return app


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    create_app().run(debug=True, host="0.0.0.0", port=5000)
