"""
Pydantic models for the tool adapter.

Validate the loosely-typed argument bundles of tool calls and convert them
into the immutable records the generators work on. Field aliases follow
the camelCase wire format.
"""

import re
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator, validator

from ..generation.models import (
    ElementDescriptor,
    Interaction,
    InteractionType,
    MockResponse,
    NetworkExchange,
)

_HTTP_TOKEN = re.compile(r"^[!#$%&'*+.^_`|~0-9A-Za-z-]+$")


class ElementInput(BaseModel):
    """Identifying attributes of a DOM element."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    tag_name: str = Field(
        ..., alias="tagName", description="The HTML tag name (e.g., 'button', 'input', 'div')"
    )
    role: Optional[str] = Field(None, description="The ARIA role attribute")
    text_content: Optional[str] = Field(
        None, alias="textContent", description="Visible text content inside the element"
    )
    aria_label: Optional[str] = Field(
        None, alias="ariaLabel", description="The aria-label attribute"
    )
    placeholder: Optional[str] = Field(
        None, description="The placeholder attribute (for inputs)"
    )
    test_id: Optional[str] = Field(
        None, alias="testId", description="The data-testid attribute"
    )
    name: Optional[str] = Field(
        None, description="The name attribute (for form elements)"
    )

    @validator("tag_name")
    def validate_tag_name(cls, v):
        if not v or not v.strip():
            raise ValueError("Tag name cannot be empty")
        return v.strip()

    def to_descriptor(self) -> ElementDescriptor:
        return ElementDescriptor(
            tag_name=self.tag_name,
            role=self.role,
            text_content=self.text_content,
            aria_label=self.aria_label,
            placeholder=self.placeholder,
            test_id=self.test_id,
            name=self.name,
        )


class ResponseInput(BaseModel):
    """Captured response data."""

    model_config = ConfigDict(extra="ignore")

    status: Optional[int] = Field(None, ge=100, le=599, description="HTTP status code")
    body: Any = Field(
        ..., description="Response body (can be any JSON-serializable value)"
    )


class NetworkRequestInput(BaseModel):
    """A captured network request with its response."""

    model_config = ConfigDict(extra="ignore")

    url: str = Field(..., description="The request URL")
    method: str = Field(..., description="The HTTP method (GET, POST, etc.)")
    response: ResponseInput = Field(..., description="The response data")

    @validator("method")
    def validate_method(cls, v):
        v = v.strip()
        if not _HTTP_TOKEN.match(v):
            raise ValueError("Method must be a non-empty HTTP token")
        return v

    def to_exchange(self) -> NetworkExchange:
        return NetworkExchange(
            url=self.url,
            method=self.method,
            response=MockResponse(body=self.response.body, status=self.response.status),
        )


class InteractionInput(BaseModel):
    """One user interaction captured from the browser."""

    model_config = ConfigDict(extra="ignore")

    type: InteractionType = Field(..., description="The type of user interaction")
    target: Optional[ElementInput] = Field(
        None, description="The target element for the interaction"
    )
    value: Optional[str] = Field(None, description="The text content for 'type' events")
    url: Optional[str] = Field(None, description="The URL for 'navigate' events")
    timestamp: Optional[float] = Field(None, description="Timestamp of the interaction")

    @model_validator(mode="after")
    def validate_target(self):
        if self.type != InteractionType.NAVIGATE and self.target is None:
            raise ValueError(f"A target element is required for '{self.type.value}' interactions")
        return self

    def to_interaction(self) -> Interaction:
        return Interaction(
            type=self.type,
            target=self.target.to_descriptor() if self.target else None,
            value=self.value,
            url=self.url,
            timestamp=self.timestamp,
        )


class SuggestSelectorsInput(ElementInput):
    """Arguments of the suggestSelectors tool."""


class GenerateMocksInput(BaseModel):
    """Arguments of the generateMocksFromNetwork tool."""

    model_config = ConfigDict(extra="ignore")

    requests: List[NetworkRequestInput] = Field(
        ..., description="Array of captured network requests"
    )

    def to_exchanges(self) -> List[NetworkExchange]:
        return [request.to_exchange() for request in self.requests]


class GenerateTestInput(BaseModel):
    """Arguments of the generateTestFromRecording tool."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    interactions: List[InteractionInput] = Field(
        ..., description="Array of user interactions captured from browser"
    )
    network_calls: Optional[List[NetworkRequestInput]] = Field(
        None, alias="networkCalls", description="Optional array of network requests to mock"
    )
    test_name: Optional[str] = Field(
        None,
        alias="testName",
        description="Name for the generated test (defaults to 'recorded user flow')",
    )

    def to_interactions(self) -> List[Interaction]:
        return [interaction.to_interaction() for interaction in self.interactions]

    def to_exchanges(self) -> List[NetworkExchange]:
        return [request.to_exchange() for request in self.network_calls or []]


class ToolDefinition(BaseModel):
    """A tool as advertised to clients."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., description="Tool name")
    description: str = Field(..., description="What the tool does")
    input_schema: Dict[str, Any] = Field(..., description="JSON schema of the arguments")

    @validator("name")
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError("Tool name cannot be empty")
        return v.strip()


class ToolResult(BaseModel):
    """Text payload returned from a tool call."""

    model_config = ConfigDict(extra="forbid")

    text: str = Field(..., description="Tool output or error message")
    is_error: bool = Field(False, description="Whether the call failed")
