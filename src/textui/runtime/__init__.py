"""
Host runtime: render pipeline, preview session, file watching and the
preview server.
"""

from textui.runtime.pipeline import OutcomeKind, RenderOutcome, RenderPipeline
from textui.runtime.session import ExportService, LastKnownGood, PreviewSession

__all__ = [
    "OutcomeKind",
    "RenderOutcome",
    "RenderPipeline",
    "ExportService",
    "LastKnownGood",
    "PreviewSession",
]
