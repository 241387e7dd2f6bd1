"""
TOKEN API ROUTES - FLASK BLUEPRINT

    curl http://localhost:5000/algorithms
    curl -X POST http://localhost:5000/token -H "Content-Type: application/json" \
         -d '{"key": "JBSWY3DPEHPK3PXP", "timestamp": 1675324259}'
    curl -X POST http://localhost:5000/hotp -H "Content-Type: application/json" \
         -d '{"key": "JBSWY3DPEHPK3PXP", "counter": 1}'

Token errors come back as 400 {"error": "...", "type": "InvalidKeyError"}.
"""
import logging

from flask import Blueprint, current_app, jsonify, request
from werkzeug.exceptions import BadRequest

from tokengen.base32 import decode_base32, validate_key
from tokengen.config import TokenConfig
from tokengen.errors import TokenError
from tokengen.generator import TokenGenerator
from tokengen.otp_core import HashAlgorithm, hotp
from tokengen.timestamps import is_plain_int, parse_timestamp

logger = logging.getLogger(__name__)

token_bp = Blueprint("token", __name__)


@token_bp.errorhandler(TokenError)
def handle_token_error(e):
    logger.warning("Rejected %s: %s", request.path, e)
    return jsonify({"error": str(e), "type": type(e).__name__}), 400


@token_bp.errorhandler(BadRequest)
def handle_bad_request(e):
    logger.warning("Bad request on %s: %s", request.path, e.description)
    return jsonify({"error": e.description, "type": "BadRequest"}), 400


def _json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise BadRequest("A JSON object body is required")
    if "key" not in data:
        raise BadRequest("key is required")
    return data


def _with_app_defaults(options: dict, names) -> dict:
    """Fill missing/null options from the TOTP_* app config."""
    for name in names:
        if options.get(name) is None:
            options[name] = current_app.config[f"TOTP_{name.upper()}"]
    return options


@token_bp.route("/algorithms", methods=["GET"])
def list_algorithms():
    return jsonify({
        "algorithms": HashAlgorithm.names(),
        "defaults": {
            "algorithm": current_app.config["TOTP_ALGORITHM"],
            "period": current_app.config["TOTP_PERIOD"],
            "digits": current_app.config["TOTP_DIGITS"],
        },
    })


@token_bp.route("/token", methods=["POST"])
def create_token():
    """
    TOTP TOKEN

    Input (JSON body):
      {
        "key": "JBSWY3DPEHPK3PXP",   # required, base32
        "algorithm": "SHA-256",      # optional
        "period": 30,                # optional, seconds
        "digits": 6,                 # optional
        "timestamp": 1675324259      # optional: 10/13-digit int or ISO-8601 string
      }
    """
    data = _json_body()
    options = {name: value for name, value in data.items() if name != "key"}
    if isinstance(options.get("timestamp"), str):
        options["timestamp"] = parse_timestamp(options["timestamp"])
    config = TokenConfig.from_mapping(_with_app_defaults(options, ("algorithm", "period", "digits")))

    gen = TokenGenerator(config)
    token = gen.generate(data["key"])
    logger.info("Issued TOTP token (algorithm=%s, period=%d)", config.algorithm.value, config.period)
    return jsonify({
        "token": token,
        "algorithm": config.algorithm.value,
        "period": config.period,
        "digits": config.digits,
        "counter": gen.counter(),
        "remaining": gen.remaining_seconds(),
    })


@token_bp.route("/hotp", methods=["POST"])
def create_hotp():
    """
    HOTP TOKEN

    Input (JSON body): {"key": "...", "counter": 1, "algorithm": "SHA-1", "digits": 6}
    """
    data = _json_body()
    counter = data.get("counter")
    if not is_plain_int(counter) or counter < 0:
        raise BadRequest("counter must be a non-negative integer")
    options = _with_app_defaults(
        {"algorithm": data.get("algorithm"), "digits": data.get("digits")},
        ("algorithm", "digits"),
    )
    config = TokenConfig.from_mapping(options)

    key = validate_key(data["key"])
    try:
        token = hotp(decode_base32(key), counter, config.algorithm, config.digits)
    except ValueError as e:
        raise BadRequest(str(e)) from e
    return jsonify({"token": token, "counter": counter})
