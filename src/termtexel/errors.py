class RenderError(ValueError):
    """Base class for invalid renderer input."""


class InvalidRaster(RenderError):
    pass


class InvalidTarget(RenderError):
    pass


class TemplateError(RenderError):
    pass


class TerminalSizeError(OSError):
    """The terminal size could not be queried (e.g. stdout is not a tty)."""
