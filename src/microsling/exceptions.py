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


class MicroslingException(Exception):
    pass


class MalformedContentException(MicroslingException):
    """Raised when a context does not carry a renderable resource.

    ``path`` is the dotted field path that could not be resolved, e.g.
    ``content.resource.content.title``.
    """

    def __init__(self, message, path=None):
        super().__init__(message)
        self.path = path
