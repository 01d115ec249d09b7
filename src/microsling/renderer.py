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

from collections.abc import MutableMapping
from typing import Any, Optional

import markupsafe

from microsling.context import Resource, Response, resolve_resource

CONTENT_TYPE = "text/html"

MARKUP_TEMPLATE = (
    "<html>\n"
    "<head>\n"
    "<title>{title}</title>\n"
    "</head>\n"
    "<body>\n"
    "<h1>\n"
    "    {title}\n"
    "</h1>\n"
    "<div>{body}</div>\n"
    "</body>\n"
    "</html>\n"
)

logger = logging.getLogger(__name__)


def render_markup(resource: Resource, escape: bool = False) -> str:
    """Interpolate a resource into the page template.

    Title and body are inserted verbatim unless ``escape`` is set, in which
    case both are HTML-escaped first.
    """
    title, body = resource.title, resource.body
    if escape:
        title, body = str(markupsafe.escape(title)), str(markupsafe.escape(body))
    return MARKUP_TEMPLATE.format(title=title, body=body)


def _response_fragment(context):
    if isinstance(context, MutableMapping):
        response = context.get("response")
        if response is None:
            response = context["response"] = Response()
        return response
    response = getattr(context, "response", None)
    if response is None:
        response = context.response = Response()
    return response


async def render(
    context: Any, *, logger: Optional[logging.Logger] = logger, escape: bool = False
) -> Any:
    """Render the context's resource as an HTML page.

    Sets ``response.body`` to the markup and replaces ``response.headers``
    with a ``Content-Type: text/html`` mapping, then returns the same
    context. The resource is validated before the response is touched, so a
    MalformedContentException leaves the response as it was.

    Args:
        context: Object (or mapping) carrying ``content.resource.content``
            with string ``title`` and ``body`` fields.
        logger: Receives the resolved resource at INFO level; pass None to
            silence it.
        escape: HTML-escape title and body before interpolation.
    """
    resource = resolve_resource(context)
    if logger is not None:
        logger.info("Rendering resource %r", resource)

    markup = render_markup(resource, escape=escape)

    response = _response_fragment(context)
    if isinstance(response, MutableMapping):
        response["body"] = markup
        response["headers"] = {"Content-Type": CONTENT_TYPE}
    else:
        response.body = markup
        response.headers = {"Content-Type": CONTENT_TYPE}
    return context
