import json
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class AgentRequest:
    input: str                 # concatenated context, oldest first

    def to_payload(self) -> dict:
        return {"input": self.input}


@dataclass(frozen=True)
class AgentResponse:
    payload: Any               # decoded JSON body, opaque to callers

    @property
    def text(self) -> str:
        """Display text for the chat reply."""
        if isinstance(self.payload, str):
            return self.payload
        if isinstance(self.payload, dict):
            for key in ("output", "completion", "text"):
                value = self.payload.get(key)
                if isinstance(value, str) and value:
                    return value
        return json.dumps(self.payload)
