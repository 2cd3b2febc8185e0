"""
Transcript message types.

A chat transcript is a tagged union discriminated on `role`. Callers may only
submit user and assistant entries; the system entry is injected by the
completion proxy.
"""

from typing import Annotated, List, Literal, Union

from pydantic import BaseModel, Field


class UserMessage(BaseModel):
    role: Literal["user"] = "user"
    content: str


class AssistantMessage(BaseModel):
    role: Literal["assistant"] = "assistant"
    content: str


class SystemMessage(BaseModel):
    role: Literal["system"] = "system"
    content: str


# Inbound transcript entry (what a caller is allowed to send)
TranscriptMessage = Annotated[
    Union[UserMessage, AssistantMessage], Field(discriminator="role")
]

# Outbound entry sent upstream
UpstreamMessage = Annotated[
    Union[SystemMessage, UserMessage, AssistantMessage], Field(discriminator="role")
]


def with_system_preamble(
    system_prompt: str, transcript: List[Union[UserMessage, AssistantMessage]]
) -> List[Union[SystemMessage, UserMessage, AssistantMessage]]:
    """Prepend the fixed system instruction to a caller transcript"""
    return [SystemMessage(content=system_prompt), *transcript]
