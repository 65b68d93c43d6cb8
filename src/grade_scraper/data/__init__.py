from .export import ExportError, render_courses, write_courses

__all__ = ["ExportError", "render_courses", "write_courses"]
