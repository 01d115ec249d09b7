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

import logging

from microsling._http.flask import FlaskApplication

logger = logging.getLogger(__name__)


class HTTPServer:
    """HTTP server for both the WSGI and the ASGI renderer applications.

    In debug mode the framework's own development server is used: Flask's
    for WSGI, Uvicorn's for ASGI. Otherwise Gunicorn serves the app, with
    thread workers for WSGI and Uvicorn workers for ASGI. If Gunicorn cannot
    be imported (e.g. on Windows) the development servers are used instead.
    """

    def __init__(self, app, debug, framework="wsgi", **options):
        self.app = app
        self.debug = debug
        self.framework = framework
        self.options = options

        if self.framework == "asgi":
            from microsling._http.asgi import UvicornDevApplication

            if self.debug:
                self.server_class = UvicornDevApplication
            else:
                try:
                    from microsling._http.gunicorn import UvicornApplication

                    self.server_class = UvicornApplication
                except ImportError:
                    logger.warning(
                        "Failed to import gunicorn. Falling back to the uvicorn "
                        "development server."
                    )
                    self.server_class = UvicornDevApplication
        else:
            if self.debug:
                self.server_class = FlaskApplication
            else:
                try:
                    from microsling._http.gunicorn import GunicornApplication

                    self.server_class = GunicornApplication
                except ImportError:
                    self.server_class = FlaskApplication

    def run(self, host, port):
        http_server = self.server_class(
            self.app, host, port, self.debug, **self.options
        )
        http_server.run()


def create_server(app, debug, framework="wsgi", **options):
    """Create an HTTP server for a Flask (wsgi) or Starlette (asgi) app."""
    return HTTPServer(app, debug, framework, **options)
