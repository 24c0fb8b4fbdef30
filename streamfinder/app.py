from __future__ import annotations

from typing import Any, Mapping

from flask import Flask, current_app, jsonify, render_template, request

from .aggregator import SearchError, search_with_streaming
from .config import APP_VERSION, DEBOUNCE_SECONDS, load_config
from .utils import serialize_result


def create_app(config: Mapping[str, Any] | None = None) -> Flask:
    app = Flask(__name__)
    app.config.update(load_config())
    if config:
        app.config.update(config)

    app.register_error_handler(SearchError, handle_search_error)
    app.add_url_rule("/", "index", index)
    app.add_url_rule("/api/movies/search", "api_search", api_search)
    return app


def handle_search_error(exc: SearchError) -> Any:
    return jsonify(exc.to_dict()), exc.status_code


def index() -> Any:
    return render_template(
        "index.html",
        app_version=APP_VERSION,
        debounce_ms=int(DEBOUNCE_SECONDS * 1000),
    )


def api_search() -> Any:
    config = current_app.config
    results = search_with_streaming(
        request.args.get("query"),
        tmdb_api_key=config.get("TMDB_API_KEY"),
        justwatch_api_key=config.get("JUSTWATCH_API_KEY"),
        isolate_failures=bool(config.get("ISOLATE_STREAMING_FAILURES")),
        timeout=config.get("REQUEST_TIMEOUT"),
    )
    return jsonify([serialize_result(result) for result in results])


app = create_app()


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=5000, debug=True)
