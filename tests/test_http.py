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
import platform
import sys

import pretend
import pytest

import microsling._http
import microsling._http.asgi
import microsling._http.flask


def test_create_server(monkeypatch):
    server_stub = pretend.stub()
    httpserver = pretend.call_recorder(lambda *a, **kw: server_stub)
    monkeypatch.setattr(microsling._http, "HTTPServer", httpserver)
    app = pretend.stub()
    options = {"a": pretend.stub(), "b": pretend.stub()}

    assert microsling._http.create_server(app, True, "asgi", **options) == server_stub
    assert httpserver.calls == [pretend.call(app, True, "asgi", **options)]


@pytest.mark.parametrize(
    "debug, gunicorn_missing, expected",
    [
        (True, False, "flask"),
        (False, False, "flask" if platform.system() == "Windows" else "gunicorn"),
        (True, True, "flask"),
        (False, True, "flask"),
    ],
)
def test_httpserver(monkeypatch, debug, gunicorn_missing, expected):
    app = pretend.stub()
    http_server = pretend.stub(run=pretend.call_recorder(lambda: None))
    server_classes = {
        "flask": pretend.call_recorder(lambda *a, **kw: http_server),
        "gunicorn": pretend.call_recorder(lambda *a, **kw: http_server),
    }
    options = {"a": pretend.stub(), "b": pretend.stub()}

    monkeypatch.setattr(microsling._http, "FlaskApplication", server_classes["flask"])
    if gunicorn_missing or platform.system() == "Windows":
        monkeypatch.setitem(sys.modules, "microsling._http.gunicorn", None)
    else:
        from microsling._http import gunicorn

        monkeypatch.setattr(gunicorn, "GunicornApplication", server_classes["gunicorn"])

    wrapper = microsling._http.HTTPServer(app, debug, **options)

    assert wrapper.app == app
    assert wrapper.server_class == server_classes[expected]
    assert wrapper.options == options

    host = pretend.stub()
    port = pretend.stub()

    wrapper.run(host, port)

    assert wrapper.server_class.calls == [
        pretend.call(app, host, port, debug, **options)
    ]
    assert http_server.run.calls == [pretend.call()]


@pytest.mark.parametrize(
    "debug, gunicorn_missing, expected",
    [
        (True, False, "uvicorn"),
        (False, False, "uvicorn" if platform.system() == "Windows" else "gunicorn"),
        (True, True, "uvicorn"),
        (False, True, "uvicorn"),
    ],
)
def test_httpserver_asgi(monkeypatch, debug, gunicorn_missing, expected):
    app = pretend.stub()
    http_server = pretend.stub(run=pretend.call_recorder(lambda: None))
    server_classes = {
        "uvicorn": pretend.call_recorder(lambda *a, **kw: http_server),
        "gunicorn": pretend.call_recorder(lambda *a, **kw: http_server),
    }

    monkeypatch.setattr(
        microsling._http.asgi, "UvicornDevApplication", server_classes["uvicorn"]
    )
    if gunicorn_missing or platform.system() == "Windows":
        monkeypatch.setitem(sys.modules, "microsling._http.gunicorn", None)
    else:
        from microsling._http import gunicorn

        monkeypatch.setattr(gunicorn, "UvicornApplication", server_classes["gunicorn"])

    wrapper = microsling._http.HTTPServer(app, debug, framework="asgi")

    assert wrapper.server_class == server_classes[expected]

    wrapper.run("1.2.3.4", "1234")

    assert wrapper.server_class.calls == [
        pretend.call(app, "1.2.3.4", "1234", debug)
    ]
    assert http_server.run.calls == [pretend.call()]


@pytest.mark.skipif("platform.system() == 'Windows'")
@pytest.mark.parametrize("debug", [True, False])
def test_gunicorn_application(debug):
    app = pretend.stub()
    host = "1.2.3.4"
    port = "1234"
    options = {}

    import microsling._http.gunicorn

    gunicorn_app = microsling._http.gunicorn.GunicornApplication(
        app, host, port, debug, **options
    )

    assert gunicorn_app.app == app
    assert gunicorn_app.options == {
        "bind": "%s:%s" % (host, port),
        "workers": 1,
        "threads": (os.cpu_count() or 1) * 4,
        "timeout": 0,
        "loglevel": "debug" if debug else "error",
        "limit_request_line": 0,
    }

    assert gunicorn_app.cfg.bind == ["1.2.3.4:1234"]
    assert gunicorn_app.cfg.workers == 1
    assert gunicorn_app.cfg.threads == (os.cpu_count() or 1) * 4
    assert gunicorn_app.cfg.timeout == 0
    assert gunicorn_app.load() == app


@pytest.mark.skipif("platform.system() == 'Windows'")
def test_gunicorn_application_environment(monkeypatch):
    monkeypatch.setenv("WORKERS", "3")
    monkeypatch.setenv("THREADS", "2")
    monkeypatch.setenv("GUNICORN_LOG_LEVEL", "warning")
    monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", "30")

    import microsling._http.gunicorn

    gunicorn_app = microsling._http.gunicorn.GunicornApplication(
        pretend.stub(), "1.2.3.4", "1234", False
    )

    assert gunicorn_app.cfg.workers == 3
    assert gunicorn_app.cfg.threads == 2
    assert gunicorn_app.cfg.timeout == 30
    assert gunicorn_app.options["loglevel"] == "warning"


@pytest.mark.skipif("platform.system() == 'Windows'")
def test_uvicorn_application():
    app = pretend.stub()
    host = "1.2.3.4"
    port = "1234"
    options = {"timeout": 120}

    import microsling._http.gunicorn

    uvicorn_app = microsling._http.gunicorn.UvicornApplication(
        app, host, port, False, **options
    )

    assert uvicorn_app.app == app
    assert uvicorn_app.options == {
        "bind": "%s:%s" % (host, port),
        "workers": min((os.cpu_count() or 1) + 1, 4),
        "worker_class": "uvicorn.workers.UvicornWorker",
        "timeout": 120,
        "loglevel": "error",
        "limit_request_line": 0,
    }

    assert uvicorn_app.cfg.bind == ["1.2.3.4:1234"]
    assert uvicorn_app.cfg.timeout == 120
    assert uvicorn_app.load() == app


@pytest.mark.parametrize("debug", [True, False])
def test_flask_application(debug):
    app = pretend.stub(run=pretend.call_recorder(lambda *a, **kw: None))
    host = pretend.stub()
    port = pretend.stub()
    options = {"a": pretend.stub(), "b": pretend.stub()}

    flask_app = microsling._http.flask.FlaskApplication(
        app, host, port, debug, **options
    )

    assert flask_app.app == app
    assert flask_app.host == host
    assert flask_app.port == port
    assert flask_app.debug == debug
    assert flask_app.options == options

    flask_app.run()

    assert app.run.calls == [
        pretend.call(host, port, debug=debug, a=options["a"], b=options["b"]),
    ]


@pytest.mark.parametrize("debug", [True, False])
def test_uvicorn_dev_application(monkeypatch, debug):
    run = pretend.call_recorder(lambda app, **kwargs: None)
    monkeypatch.setattr(microsling._http.asgi.uvicorn, "run", run)
    app = pretend.stub()

    dev_app = microsling._http.asgi.UvicornDevApplication(
        app, "1.2.3.4", "1234", debug, reload=False
    )
    dev_app.run()

    assert run.calls == [
        pretend.call(
            app,
            host="1.2.3.4",
            port=1234,
            log_level="debug" if debug else "info",
            reload=False,
        )
    ]


@pytest.mark.skipif("platform.system() == 'Windows'")
def test_uvicorn_application_option_precedence(monkeypatch):
    monkeypatch.setenv("WORKERS", "3")

    import microsling._http.gunicorn

    from_env = microsling._http.gunicorn.UvicornApplication(
        pretend.stub(), "1.2.3.4", "1234", False
    )
    from_caller = microsling._http.gunicorn.UvicornApplication(
        pretend.stub(), "1.2.3.4", "1234", False, workers=2
    )

    assert from_env.cfg.workers == 3
    assert from_caller.cfg.workers == 2
    assert from_caller.options["worker_class"] == "uvicorn.workers.UvicornWorker"
