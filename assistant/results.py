"""
Tagged results returned by assistant tools.

A tool either succeeds with JSON-serializable data (``ToolOk``) or fails
softly with a message the model can relay (``ToolError``). Both serialize to
the JSON text fed back into the transcript.
"""

import json
from dataclasses import dataclass
from typing import Any, Union

from django.core.serializers.json import DjangoJSONEncoder


@dataclass(frozen=True)
class ToolOk:
    data: Any

    ok = True

    def to_json(self) -> str:
        return json.dumps(self.data, indent=2, cls=DjangoJSONEncoder)


@dataclass(frozen=True)
class ToolError:
    message: str

    ok = False

    def to_json(self) -> str:
        return json.dumps({"error": self.message}, cls=DjangoJSONEncoder)


ToolResult = Union[ToolOk, ToolError]
