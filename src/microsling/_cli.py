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
import json

import click

from microsling import create_app, create_asgi_app, setup_logging
from microsling._http import create_server
from microsling.context import Context
from microsling.exceptions import MalformedContentException
from microsling.renderer import render


@click.group()
def _cli():
    pass


@_cli.command()
@click.option("--host", envvar="HOST", type=click.STRING, default="0.0.0.0")
@click.option("--port", envvar="PORT", type=click.INT, default=8080)
@click.option("--debug", envvar="DEBUG", is_flag=True)
@click.option(
    "--gateway-interface",
    envvar="GATEWAY_INTERFACE",
    type=click.Choice(["wsgi", "asgi"]),
    default="wsgi",
    help="Web server gateway interface to use (wsgi or asgi)",
)
@click.option(
    "--escape-html",
    envvar="MICROSLING_ESCAPE_HTML",
    is_flag=True,
    help="HTML-escape resource title and body before rendering",
)
def serve(host, port, debug, gateway_interface, escape_html):
    """Serve the renderer over HTTP."""
    setup_logging()
    if gateway_interface == "asgi":
        asgi_app = create_asgi_app(escape_html)
        create_server(asgi_app, debug, framework="asgi").run(host, port)
    else:
        app = create_app(escape_html)
        create_server(app, debug).run(host, port)


@_cli.command("render")
@click.argument("context_file", type=click.File("r"))
@click.option(
    "--escape-html",
    envvar="MICROSLING_ESCAPE_HTML",
    is_flag=True,
    help="HTML-escape resource title and body before rendering",
)
def render_command(context_file, escape_html):
    """Render a JSON context document to stdout."""
    try:
        data = json.load(context_file)
    except ValueError as e:
        raise click.ClickException("Invalid JSON context document: {}".format(e))

    try:
        context = Context.from_dict(data)
        asyncio.run(render(context, escape=escape_html))
    except MalformedContentException as e:
        raise click.ClickException(str(e))

    click.echo(context.response.body, nl=False)
