"""Services module - file export of health history."""

from .export import ExportService, ExportError

__all__ = ['ExportService', 'ExportError']
