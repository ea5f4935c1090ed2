"""Application factory for the campus hub service."""

import logging

from flask import Flask, Response, jsonify
from werkzeug.exceptions import HTTPException

from . import routes
from .services import store


def create_web_app() -> Flask:
    """Initialize an instance of the campus hub web application."""
    app = Flask('campushub')
    app.config.from_pyfile('config.py')
    logging.getLogger('campushub').setLevel(app.config['LOGLEVEL'])

    store.init_app(app)
    app.register_blueprint(routes.blueprint)
    register_error_handlers(app)
    app.after_request(disable_caching)
    return app


def register_error_handlers(app: Flask) -> None:
    """Register error handlers for the Flask app."""
    app.errorhandler(HTTPException)(jsonify_exception)


def jsonify_exception(error: HTTPException) -> Response:
    """Render exceptions as JSON."""
    exc_resp = error.get_response()
    response: Response = jsonify(ok=False, error=error.description)
    response.status_code = exc_resp.status_code
    for key, value in exc_resp.headers.items():
        if key.lower() not in ('content-type', 'content-length'):
            response.headers.add(key, value)
    return response


def disable_caching(response: Response) -> Response:
    """Responses reflect live state and must not be cached."""
    response.headers['Cache-Control'] = 'no-store'
    return response
