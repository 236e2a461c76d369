"""
Surface adapters: the live preview protocol and the static exports.
"""

from textui.surfaces.export import (
    DEFAULT_EXPORT_TITLE,
    ExportFormat,
    export_document,
    export_static,
    write_export,
)
from textui.surfaces.live import LiveSurface, SurfaceState
from textui.surfaces.messages import (
    ErrorMessage,
    ExportRequest,
    HostMessage,
    OpenDevToolsMessage,
    ReadyMessage,
    SchemaErrorMessage,
    SurfaceMessage,
    ThemeVariablesMessage,
    UpdateMessage,
    decode_host_message,
    decode_surface_message,
    encode,
)

__all__ = [
    "DEFAULT_EXPORT_TITLE",
    "ExportFormat",
    "export_document",
    "export_static",
    "write_export",
    "LiveSurface",
    "SurfaceState",
    "ErrorMessage",
    "ExportRequest",
    "HostMessage",
    "OpenDevToolsMessage",
    "ReadyMessage",
    "SchemaErrorMessage",
    "SurfaceMessage",
    "ThemeVariablesMessage",
    "UpdateMessage",
    "decode_host_message",
    "decode_surface_message",
    "encode",
]
