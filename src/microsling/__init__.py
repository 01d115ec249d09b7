# Copyright 2026 The Apache Software Foundation
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import asyncio
import logging
import os
import sys
import traceback

from typing import Any, Optional

import flask
import werkzeug

from microsling.context import Context, Resource, Response, resolve_resource
from microsling.exceptions import MalformedContentException, MicroslingException
from microsling.renderer import render, render_markup

_RENDER_STATUS_HEADER_FIELD = "X-Microsling-Status"
_CRASH = "crash"

_NOT_A_CONTEXT_DOCUMENT = "Request body must be a JSON context document"

logger = logging.getLogger(__name__)


def setup_logging():
    logging.getLogger().setLevel(logging.INFO)
    info_handler = logging.StreamHandler(sys.stdout)
    info_handler.setLevel(logging.NOTSET)
    info_handler.addFilter(lambda record: record.levelno <= logging.INFO)
    logging.getLogger().addHandler(info_handler)

    warn_handler = logging.StreamHandler(sys.stderr)
    warn_handler.setLevel(logging.WARNING)
    logging.getLogger().addHandler(warn_handler)


def _render_view_func_wrapper(request, escape_html):
    def view_func(path):
        data = request.get_json(force=True, silent=True)
        if data is None:
            flask.abort(400, description=_NOT_A_CONTEXT_DOCUMENT)
        try:
            context = Context.from_dict(data)
            # gthread workers have no running event loop
            asyncio.run(render(context, escape=escape_html))
        except MalformedContentException as e:
            flask.abort(400, description=str(e))
        return flask.Response(
            context.response.body, headers=context.response.headers
        )

    return view_func


def read_request(response):
    """
    Force the framework to read the entire request before responding, to avoid
    connection errors when returning prematurely.
    """

    if not response.is_streamed:
        flask.request.get_data()

    return response


def crash_handler(e):
    """
    Return crash header to allow logging 'crash' message in logs.
    """
    return str(e), 500, {_RENDER_STATUS_HEADER_FIELD: _CRASH}


def create_app(escape_html: Optional[bool] = None) -> flask.Flask:
    """Create a Flask WSGI application that renders POSTed context documents.

    Args:
        escape_html: HTML-escape title and body. Defaults to the
            MICROSLING_ESCAPE_HTML environment variable.
    """
    if escape_html is None:
        escape_html = _enable_html_escaping()

    _app = flask.Flask(__name__)
    _app.register_error_handler(500, crash_handler)

    # Mount the renderer at the root and under every path. Modify the url_map
    # and view_functions directly so robots.txt and favicon.ico can be
    # answered before the catch-all rule.
    _app.url_map.add(
        werkzeug.routing.Rule(
            "/", defaults={"path": ""}, endpoint="run", methods=["POST"]
        )
    )
    _app.url_map.add(werkzeug.routing.Rule("/robots.txt", endpoint="error"))
    _app.url_map.add(werkzeug.routing.Rule("/favicon.ico", endpoint="error"))
    _app.url_map.add(
        werkzeug.routing.Rule("/<path:path>", endpoint="run", methods=["POST"])
    )
    _app.view_functions["run"] = _render_view_func_wrapper(flask.request, escape_html)
    _app.view_functions["error"] = lambda: flask.abort(404, description="Not Found")
    _app.after_request(read_request)

    return _app


def create_asgi_app(escape_html: Optional[bool] = None) -> Any:
    """Create a Starlette ASGI application that renders POSTed context documents.

    Args:
        escape_html: HTML-escape title and body. Defaults to the
            MICROSLING_ESCAPE_HTML environment variable.

    Returns:
        A Starlette ASGI application instance
    """
    from starlette.applications import Starlette
    from starlette.responses import JSONResponse, PlainTextResponse
    from starlette.responses import Response as HTTPResponse
    from starlette.routing import Route

    if escape_html is None:
        escape_html = _enable_html_escaping()

    async def render_handler(request):
        try:
            data = await request.json()
        except ValueError:
            return PlainTextResponse(_NOT_A_CONTEXT_DOCUMENT, status_code=400)

        try:
            context = Context.from_dict(data)
            await render(context, escape=escape_html)
        except MalformedContentException as e:
            return PlainTextResponse(str(e), status_code=400)

        return HTTPResponse(context.response.body, headers=context.response.headers)

    async def not_found(request):
        return PlainTextResponse("Not Found", status_code=404)

    routes = [
        Route("/", render_handler, methods=["POST"]),
        Route("/robots.txt", not_found),
        Route("/favicon.ico", not_found),
        Route("/{path:path}", render_handler, methods=["POST"]),
    ]

    async def exception_handler(request, exc):
        stacktrace = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )
        logger.error("Render failed: %s\n%s", exc, stacktrace)

        return JSONResponse(
            content={"error": str(exc), "stacktrace": stacktrace},
            status_code=500,
            headers={_RENDER_STATUS_HEADER_FIELD: _CRASH},
        )

    return Starlette(
        debug=bool(os.environ.get("DEBUG")),
        routes=routes,
        exception_handlers={Exception: exception_handler},
    )


class LazyWSGIApp:
    """
    Wrap the WSGI app in a lazily initialized wrapper to prevent initialization
    at import-time
    """

    def __init__(self, escape_html=None):
        self.escape_html = escape_html

        # Placeholder for the app which will be initialized on first call
        self.app = None

    def __call__(self, *args, **kwargs):
        if not self.app:
            self.app = create_app(self.escape_html)
        return self.app(*args, **kwargs)


def _enable_html_escaping():
    # Based on distutils.util.strtobool
    truthy_values = ("y", "yes", "t", "true", "on", "1")
    env_var_value = os.environ.get("MICROSLING_ESCAPE_HTML", "").lower()
    return env_var_value in truthy_values


app = LazyWSGIApp()
