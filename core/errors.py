"""
Exceptions raised by the report pipeline.
"""


class ReportError(Exception):
    """Base class for every error raised by this package."""


class ReportWriteError(ReportError):
    """A report file could not be written. Nothing is left at `path`."""

    def __init__(self, path, message: str):
        super().__init__(f"{message}: {path}")
        self.path = path


class MissingEvent(ReportError):
    """The handler was invoked without an event payload."""


class UnrecognisedTask(ReportError):
    """The event names a task the handler does not know."""

    def __init__(self, task):
        super().__init__(f"Unrecognised task: {task!r}")
        self.task = task
