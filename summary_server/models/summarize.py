from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field


class SummarizeRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    # Type is checked by the gateway so that bad input maps to a 400, not a 422.
    text: Any = None


class CompletionMessage(BaseModel):
    content: str


class CompletionChoice(BaseModel):
    message: CompletionMessage


class SummarizeResponse(BaseModel):
    choices: List[CompletionChoice] = Field(default_factory=list)

    @classmethod
    def from_summary(cls, summary: str) -> "SummarizeResponse":
        return cls(choices=[CompletionChoice(message=CompletionMessage(content=summary))])


class ErrorResponse(BaseModel):
    message: str
