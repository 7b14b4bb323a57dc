"""
Custom exceptions for mirari.
"""


class MirariError(Exception):
    """Base exception for mirari errors."""

    pass


class ConfigError(MirariError):
    """Error in the configuration file or the values it declares."""

    pass


class CommandError(MirariError):
    """An external command exited with a non-zero status."""

    def __init__(self, command: str, return_code: int):
        self.command = command
        self.return_code = return_code
        super().__init__(f'The command "{command}" exited with code {return_code}.')


class StateError(MirariError):
    """Operation requested before the step it depends on has run."""

    pass


class ToolNotFoundError(MirariError):
    """A required external tool is not on the search path."""

    pass


class TemplateError(MirariError):
    """Error accessing or processing templates."""

    pass
