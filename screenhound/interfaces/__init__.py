"""Abstract interfaces implemented by ScreenHound providers."""

from .document_provider import DocumentProvider, RemoteFile, RemoteProject

__all__ = ["DocumentProvider", "RemoteFile", "RemoteProject"]
