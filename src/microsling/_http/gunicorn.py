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

import os

import gunicorn.app.base


def _server_options(host, port, debug):
    """Gunicorn settings shared by the WSGI and ASGI renderer servers.

    Rendering never streams or uploads, so request lines are unbounded and
    the worker timeout is off unless REQUEST_TIMEOUT_SECONDS sets one.
    """
    return {
        "bind": "%s:%s" % (host, port),
        "workers": int(os.environ.get("WORKERS", 1)),
        "loglevel": "debug" if debug else os.environ.get("GUNICORN_LOG_LEVEL", "error"),
        "timeout": int(os.environ.get("REQUEST_TIMEOUT_SECONDS", 0)),
        "limit_request_line": 0,
    }


class BaseGunicornApplication(gunicorn.app.base.BaseApplication):
    """Embeds Gunicorn around an already-built renderer app.

    Subclasses pick the worker model through ``worker_options``; keyword
    options passed by the caller win over both the environment and those.
    """

    def __init__(self, app, host, port, debug, **options):
        self.options = _server_options(host, port, debug)
        self.options.update(self.worker_options())
        self.options.update(options)
        self.app = app
        super().__init__()

    def worker_options(self):
        return {}

    def load_config(self):
        for key, value in self.options.items():
            self.cfg.set(key, value)

    def load(self):
        return self.app


class GunicornApplication(BaseGunicornApplication):
    """Serves the Flask renderer app with gthread workers.

    THREADS sets the threads per worker, defaulting to four per CPU.
    """

    def worker_options(self):
        return {"threads": int(os.environ.get("THREADS", (os.cpu_count() or 1) * 4))}


class UvicornApplication(BaseGunicornApplication):
    """Serves the Starlette renderer app with Uvicorn workers.

    Without WORKERS, one process per CPU plus one is started, capped at four.
    """

    def worker_options(self):
        default_workers = min((os.cpu_count() or 1) + 1, 4)
        return {
            "workers": int(os.environ.get("WORKERS", default_workers)),
            "worker_class": "uvicorn.workers.UvicornWorker",
        }
