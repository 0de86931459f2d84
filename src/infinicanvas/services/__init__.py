"""Services layered on top of the drawing engine."""

from infinicanvas.services.export import ExportService
from infinicanvas.services.pages import Page, PageManager

__all__ = ["ExportService", "Page", "PageManager"]
