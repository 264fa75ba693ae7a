"""Flask application entry point."""

import logging
from flask import Flask, abort, jsonify
from flask_cors import CORS

from .config import settings
from .db import init_db
from .exceptions import (
    AuthenticationError,
    ConflictError,
    ResourceNotFound,
    TodoListError,
    ValidationError,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# Create Flask app
app = Flask(__name__, static_folder="static", static_url_path="/static")

# CORS configuration
CORS(app, origins=settings.cors_origins)


# Database initialization (runs once on app startup)
def initialize_database():
    """Initialize database on app startup. Failure aborts startup."""
    try:
        init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise


# Initialize database with app context
with app.app_context():
    initialize_database()


# Error handlers
def _error_response(error: TodoListError, status: int):
    """Render a TodoListError as the standard JSON error body."""
    response = {
        "error": {
            "type": error.__class__.__name__,
            "message": error.message
        }
    }
    if error.details:
        response["error"]["details"] = error.details
    return jsonify(response), status


@app.errorhandler(ResourceNotFound)
def handle_not_found(error):
    """Handle ResourceNotFound exceptions."""
    return _error_response(error, 404)


@app.errorhandler(ValidationError)
def handle_validation_error(error):
    """Handle ValidationError exceptions."""
    return _error_response(error, 400)


@app.errorhandler(ConflictError)
def handle_conflict(error):
    """Handle ConflictError exceptions."""
    return _error_response(error, 409)


@app.errorhandler(AuthenticationError)
def handle_authentication_error(error):
    """Handle AuthenticationError and InvalidCredentials exceptions."""
    return _error_response(error, 401)


@app.errorhandler(TodoListError)
def handle_todo_list_error(error):
    """Handle generic TodoListError exceptions."""
    return _error_response(error, 500)


@app.errorhandler(500)
def handle_internal_error(error):
    """Handle internal server errors."""
    logger.error(f"Internal error: {error}")
    return jsonify({
        "error": {
            "type": "InternalServerError",
            "message": "An internal error occurred"
        }
    }), 500


# Health check endpoint
@app.route("/health")
def health():
    """Health check endpoint."""
    return jsonify({"status": "ok"})


# Browser client
@app.route("/")
def index():
    """Serve the single-page client."""
    if not settings.serve_client:
        abort(404)
    return app.send_static_file("index.html")


# Register API blueprints
from .auth.api import auth_bp  # noqa: E402
from .api import api_bp  # noqa: E402

app.register_blueprint(auth_bp, url_prefix=f"{settings.api_prefix}/auth")
app.register_blueprint(api_bp, url_prefix=settings.api_prefix)


def run():
    """Run the development server on the configured host and port."""
    app.run(host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
