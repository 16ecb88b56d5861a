"""Pydantic models for MCP JSON-RPC 2.0 protocol."""

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

# Largest batch accepted in a single HTTP request
MAX_BATCH_SIZE = 100


# =============================================================================
# JSON-RPC 2.0 Base Models
# =============================================================================


class JsonRpcRequest(BaseModel):
    """JSON-RPC 2.0 request object."""

    jsonrpc: Literal["2.0"]
    id: int | float | str | None = None  # absent for notifications
    method: str = Field(..., min_length=1, max_length=100)
    params: dict[str, Any] | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _check_id(cls, value: Any) -> Any:
        # Only runs when id is present; a missing id keeps the default.
        if value is None or isinstance(value, bool):
            raise ValueError("id must be a string or a number")
        return value

    @property
    def is_notification(self) -> bool:
        """Requests without an id never receive a response."""
        return self.id is None


class JsonRpcError(BaseModel):
    """JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None


class JsonRpcResponse(BaseModel):
    """JSON-RPC 2.0 response object."""

    jsonrpc: Literal["2.0"] = "2.0"
    id: int | float | str | None = None
    result: Any = None
    error: JsonRpcError | None = None

    def to_payload(self) -> dict[str, Any]:
        """Serialize with exactly one of result/error present."""
        data: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            data["error"] = self.error.model_dump(exclude_none=True)
        else:
            data["result"] = self.result
        return data


# =============================================================================
# MCP Content Types
# =============================================================================


class TextContent(BaseModel):
    """Text content returned by tools."""

    type: Literal["text"] = "text"
    text: str


# =============================================================================
# MCP Tool Models
# =============================================================================


class Tool(BaseModel):
    """MCP tool definition."""

    name: str = Field(..., description="Tool name (lowercase with underscores)")
    description: str = Field(..., description="Human-readable description")
    inputSchema: dict[str, Any] = Field(
        ..., description="JSON Schema for tool input"
    )


class ToolCallResult(BaseModel):
    """Result of a tool call."""

    content: list[TextContent]
    isError: bool = False

    @classmethod
    def text(cls, text: str) -> "ToolCallResult":
        """Successful result with a single text block."""
        return cls(content=[TextContent(text=text)])

    @classmethod
    def error(cls, text: str) -> "ToolCallResult":
        """Tool-level failure with a single text block."""
        return cls(content=[TextContent(text=text)], isError=True)


# =============================================================================
# MCP Protocol Models
# =============================================================================


class ClientInfo(BaseModel):
    """Client information sent during initialization."""

    name: str
    version: str


class ServerInfo(BaseModel):
    """Server information returned during initialization."""

    name: str
    version: str


class Capabilities(BaseModel):
    """Server capabilities."""

    tools: dict[str, Any] = Field(default_factory=dict)


class InitializeParams(BaseModel):
    """Parameters for initialize request."""

    protocolVersion: str
    capabilities: dict[str, Any] = Field(default_factory=dict)
    clientInfo: ClientInfo


class InitializeResult(BaseModel):
    """Result of initialize request."""

    protocolVersion: str
    capabilities: Capabilities
    serverInfo: ServerInfo


class ToolsListResult(BaseModel):
    """Result of tools/list request."""

    tools: list[Tool]


class ToolCallParams(BaseModel):
    """Parameters for tools/call request."""

    name: str = Field(..., min_length=1, max_length=100)
    arguments: dict[str, Any] = Field(default_factory=dict)

    @field_validator("arguments", mode="before")
    @classmethod
    def _default_arguments(cls, value: Any) -> Any:
        return {} if value is None else value


# =============================================================================
# Tool Argument Models
# =============================================================================


class PatternNameArgs(BaseModel):
    """Arguments for get_pattern and get_pattern_examples."""

    patternName: str = Field(..., min_length=1, max_length=100)


class SearchArgs(BaseModel):
    """Arguments for search tools."""

    query: str = Field(..., min_length=1, max_length=200)


class PatternSearchArgs(SearchArgs):
    """Arguments for search_patterns."""

    category: str | None = Field(default=None, max_length=100)


class TagNameArgs(BaseModel):
    """Arguments for get_component."""

    tagName: str = Field(..., min_length=1, max_length=100)


StyleGuideSection = Literal["colors", "typography", "spacing", "breakpoints", "all"]


class StyleGuideSectionArgs(BaseModel):
    """Arguments for get_style_guide."""

    section: StyleGuideSection | None = None


class ColorCategoryArgs(BaseModel):
    """Arguments for get_colors."""

    category: str | None = Field(default=None, max_length=100)


class GenerateBoilerplateArgs(BaseModel):
    """Arguments for generate_boilerplate."""

    projectName: str | None = Field(default=None, max_length=100)
    theme: Literal["light", "dark"] | None = None
    includeExamples: bool | None = None
