"""
Wire messages exchanged between the host and the live preview surface.

Every message is a JSON object with a ``type`` discriminator. Text fields
are carried verbatim: escaping is done by the surface at display time,
never by the producer.

Host -> surface: update, error, schema-error, theme-variables, openDevTools
Surface -> host: export, ready
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from textui.core.errors import MalformedInputError

# =============================================================================
# Host -> surface
# =============================================================================


class _Message(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class UpdateMessage(_Message):
    """Full render state: fragment plus the theme CSS it needs."""

    type: Literal["update"] = "update"
    fragment: str = Field(description="HTML fragment")
    css_variables: str = Field(alias="cssVariables", description="Theme CSS block")


class ErrorMessage(_Message):
    """Input could not be parsed; the surface shows an escaped banner."""

    type: Literal["error"] = "error"
    message: str


class SchemaErrorMessage(_Message):
    """Input parsed but violated the component contract."""

    type: Literal["schema-error"] = "schema-error"
    message: str
    path: str | None = Field(default=None, description="Offending document path")


class ThemeVariablesMessage(_Message):
    """Theme CSS changed while no document is on screen."""

    type: Literal["theme-variables"] = "theme-variables"
    css_variables: str = Field(alias="cssVariables")


class OpenDevToolsMessage(_Message):
    type: Literal["openDevTools"] = "openDevTools"


HostMessage = Annotated[
    UpdateMessage
    | ErrorMessage
    | SchemaErrorMessage
    | ThemeVariablesMessage
    | OpenDevToolsMessage,
    Field(discriminator="type"),
]


# =============================================================================
# Surface -> host
# =============================================================================


class ExportRequest(_Message):
    """Surface asks the host to export the last-known-good document."""

    type: Literal["export"] = "export"


class ReadyMessage(_Message):
    """Surface finished loading and wants the current state."""

    type: Literal["ready"] = "ready"


SurfaceMessage = Annotated[ExportRequest | ReadyMessage, Field(discriminator="type")]


_host_adapter: TypeAdapter[HostMessage] = TypeAdapter(HostMessage)
_surface_adapter: TypeAdapter[SurfaceMessage] = TypeAdapter(SurfaceMessage)


# =============================================================================
# Encoding
# =============================================================================


def encode(message: BaseModel) -> str:
    """Serialize a message to its JSON wire form."""
    return message.model_dump_json(by_alias=True)


def decode_host_message(raw: str | bytes) -> HostMessage:
    """
    Parse a host -> surface message.

    Raises:
        MalformedInputError: If the payload is not JSON or has an unknown type
    """
    return _decode(_host_adapter, raw, "host")


def decode_surface_message(raw: str | bytes) -> SurfaceMessage:
    """
    Parse a surface -> host message.

    Raises:
        MalformedInputError: If the payload is not JSON or has an unknown type
    """
    return _decode(_surface_adapter, raw, "surface")


def _decode(adapter: TypeAdapter, raw: str | bytes, origin: str):  # type: ignore[no-untyped-def]
    try:
        return adapter.validate_json(raw)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        detail = f"{location}: {first['msg']}" if location else first["msg"]
        raise MalformedInputError(f"invalid {origin} message: {detail}") from e
