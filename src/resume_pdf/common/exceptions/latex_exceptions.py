"""LaTeX rendering exceptions."""


class LatexRenderingError(Exception):
    """Base exception for LaTeX rendering errors."""

    pass


class TemplateReadError(LatexRenderingError, OSError):
    """A template exists but its content could not be read."""

    pass


class WorkspaceError(LatexRenderingError, OSError):
    """The compilation workspace could not be created, written or read back."""

    pass
