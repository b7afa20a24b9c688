"""
Flask-based Web API for schemadoc.

Serves the structured-data descriptor and publishes it into HTML posted by
other build tools.

Endpoints:
    GET  /api/health     - Health check endpoint
    GET  /api/descriptor - The JSON-LD descriptor (application/ld+json)
    POST /api/inject     - Return the posted HTML with the descriptor in <head>
"""

from typing import Any

from flask import Flask, Response, jsonify, request

from schemadoc import __version__
from schemadoc.publisher import EnvironmentUnavailable, publish_html
from schemadoc.renderer import JSONLD_CONTENT_TYPE, PublishOptions, serialize_descriptor
from schemadoc.schema import build_descriptor

app = Flask(__name__)
app.config["MAX_CONTENT_LENGTH"] = 10 * 1024 * 1024  # 10MB max page


def options_from_request(data: dict[str, Any]) -> PublishOptions:
    """
    Build PublishOptions from JSON body fields or query-string parameters.

    Recognized parameters: indent (int), sort_keys (bool), escape_html (bool).
    """
    def flag(name: str, default: bool) -> bool:
        if name in data:
            value = data[name]
        else:
            value = request.args.get(name)
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        return str(value).lower() == "true"

    indent = data.get("indent", request.args.get("indent"))
    if indent is not None:
        try:
            indent = int(indent)
        except (TypeError, ValueError):
            raise ValueError(f"indent must be an integer, got {indent!r}")

    return PublishOptions(
        indent=indent,
        sort_keys=flag("sort_keys", False),
        escape_html=flag("escape_html", True),
    )


@app.route("/api/health", methods=["GET"])
def health_check() -> Response:
    """Health check endpoint."""
    return jsonify({"status": "healthy", "version": __version__})


@app.route("/api/descriptor", methods=["GET"])
def get_descriptor() -> tuple[Response, int]:
    """Return the JSON-LD descriptor."""
    try:
        options = options_from_request({})
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    payload = serialize_descriptor(build_descriptor(), options)
    return Response(payload, mimetype=JSONLD_CONTENT_TYPE), 200


@app.route("/api/inject", methods=["POST"])
def inject() -> tuple[Response, int]:
    """
    Publish the descriptor into posted HTML.

    Request can be:
        - JSON with an 'html' field (plus optional rendering options)
        - Any other body, treated as raw HTML

    Returns:
        The updated HTML (text/html), or a JSON error with status 400
    """
    if request.is_json:
        data = request.get_json(silent=True)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            return jsonify({"error": "JSON body must be an object"}), 400
        html = data.get("html")
    else:
        data = {}
        html = request.get_data(as_text=True)

    if not html:
        return jsonify({"error": "No HTML provided"}), 400
    if not isinstance(html, str):
        return jsonify({"error": "'html' must be a string"}), 400

    try:
        options = options_from_request(data)
        updated = publish_html(html, options=options)
    except EnvironmentUnavailable as e:
        return jsonify({"error": str(e)}), 400
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    return Response(updated, mimetype="text/html"), 200


@app.errorhandler(413)
def request_entity_too_large(error):
    """Handle page too large errors."""
    return jsonify({"error": "Page too large. Maximum size is 10MB."}), 413


@app.errorhandler(500)
def internal_server_error(error):
    """Handle internal server errors."""
    return jsonify({"error": "Internal server error"}), 500


def create_app() -> Flask:
    """
    Application factory for creating the Flask app.

    Returns:
        Configured Flask application instance.
    """
    return app


def main() -> None:
    """Run the development server."""
    print("Starting schemadoc API server...")
    print()
    print("API Endpoints:")
    print("  GET  /api/descriptor - JSON-LD descriptor")
    print("  POST /api/inject     - Publish descriptor into posted HTML")
    print("  GET  /api/health     - Health check")
    print()
    app.run(host="127.0.0.1", port=5001, debug=False)


if __name__ == "__main__":
    main()
