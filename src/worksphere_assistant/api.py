"""
Flask REST API for the WorkSphere AI assistant.
"""
import logging
from typing import Optional

from flask import Blueprint, Flask, current_app, jsonify, request
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from .config import AssistantConfig
from .exceptions import InternalError, InvalidRequestError, NotFoundError
from .service import AssistantService

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "POST, GET, OPTIONS, PUT, DELETE",
}

EXTENSION_KEY = "worksphere_assistant"

# Rate limiting
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri="memory://",
)

assistant_bp = Blueprint("assistant", __name__)


def _route_limit() -> str:
    return current_app.config["ASSISTANT_RATE_LIMIT"]


@assistant_bp.route("/ai-assistant", methods=["POST", "OPTIONS"])
@limiter.limit(_route_limit, exempt_when=lambda: request.method == "OPTIONS")
def ai_assistant():
    """Assistant endpoint."""
    if request.method == "OPTIONS":
        return "ok", 200

    service = current_app.extensions[EXTENSION_KEY]

    try:
        payload = request.get_json(force=True, silent=True)
        if payload is None:
            raise InvalidRequestError("Request body must be valid JSON")

        return jsonify(service.answer(payload))

    except InvalidRequestError as e:
        logger.warning(f"Rejected assistant request: {e}")
        return jsonify({"error": str(e)}), 400
    except NotFoundError:
        return jsonify({"error": "User not found"}), 404
    except InternalError:
        # Already logged with its cause by the service
        logger.warning("AI assistant request failed with an internal error")
        return jsonify({"error": "Internal server error"}), 500
    except Exception as e:
        logger.error(f"AI assistant endpoint error: {e}", exc_info=True)
        return jsonify({"error": "Internal server error"}), 500


def create_app(config: AssistantConfig, service: Optional[AssistantService] = None) -> Flask:
    """
    Build the Flask application.

    :param config: Service configuration
    :param service: Pre-wired service (tests); defaults to the Supabase-backed one
    """
    app = Flask(__name__)
    app.extensions[EXTENSION_KEY] = service or AssistantService.for_supabase(config)

    app.config["RATELIMIT_ENABLED"] = config.rate_limit_enabled
    app.config["ASSISTANT_RATE_LIMIT"] = config.rate_limit
    limiter.init_app(app)

    @app.after_request
    def add_cors_headers(response):
        response.headers.update(CORS_HEADERS)
        return response

    @app.errorhandler(429)
    def rate_limited(e):
        logger.warning(f"Rate limit exceeded for {get_remote_address()}")
        return jsonify({"error": "Rate limit exceeded"}), 429

    app.register_blueprint(assistant_bp)
    return app
