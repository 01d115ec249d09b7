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

from collections.abc import Mapping
from typing import Any, Dict, Optional

from microsling.exceptions import MalformedContentException

# Field path from the context to the resource record, in lookup order.
_RESOURCE_PATH = ("content", "resource", "content")
_MISSING = object()


class Resource:
    def __init__(self, title: str, body: str):
        self.title = title
        self.body = body

    def __eq__(self, other):
        if not isinstance(other, Resource):
            return NotImplemented
        return (self.title, self.body) == (other.title, other.body)

    def __repr__(self):
        return "Resource(title={!r}, body={!r})".format(self.title, self.body)


class Response:
    """The response fragment a render populates."""

    def __init__(self, body: Optional[str] = None, headers: Optional[Dict[str, str]] = None):
        self.body = body
        self.headers = headers if headers is not None else {}


class Context:
    """Mutable carrier passed into and returned from a render.

    ``content`` holds the input side and may be built from attributes or
    nested mappings; ``response`` is the output fragment.
    """

    def __init__(self, content: Any = None, response: Optional[Response] = None):
        self.content = content
        self.response = response if response is not None else Response()

    @classmethod
    def from_dict(cls, data: Any) -> "Context":
        """Build a context from a decoded JSON context document.

        Any ``response`` key in the document is ignored; the response
        fragment always starts empty.
        """
        if not isinstance(data, Mapping):
            raise MalformedContentException(
                "Context document must be an object, got {}".format(
                    type(data).__name__
                )
            )
        return cls(content=data.get("content"))


# Values that never carry named fields; getattr would find their methods.
_PRIMITIVES = (str, bytes, int, float, list, tuple)


def _get_field(obj, name, path):
    if isinstance(obj, Mapping):
        return obj.get(name, _MISSING)
    if isinstance(obj, _PRIMITIVES):
        raise MalformedContentException(
            "Field {} must be an object".format(path), path=path
        )
    return getattr(obj, name, _MISSING)


def resolve_resource(context: Any) -> Resource:
    """Resolve ``context.content.resource.content`` into a Resource.

    Raises:
        MalformedContentException: If a segment of the path is absent or
            None, if a segment is a primitive value instead of an object, or
            if ``title`` or ``body`` is not a string.
    """
    current = context
    path = []
    for name in _RESOURCE_PATH:
        current = _get_field(current, name, ".".join(path) or "context")
        path.append(name)
        if current is _MISSING or current is None:
            raise MalformedContentException(
                "Missing field {}".format(".".join(path)), path=".".join(path)
            )

    fields = {}
    for name in ("title", "body"):
        field_path = ".".join(path + [name])
        value = _get_field(current, name, ".".join(path))
        if value is _MISSING:
            raise MalformedContentException(
                "Missing field {}".format(field_path), path=field_path
            )
        if not isinstance(value, str):
            raise MalformedContentException(
                "Field {} must be a string, got {}".format(
                    field_path, type(value).__name__
                ),
                path=field_path,
            )
        fields[name] = value

    return Resource(**fields)
