class TermImgViewError(Exception):
    """Base class for all termimgview errors."""


class ConfigError(TermImgViewError):
    """An option value was rejected before rendering started."""

    def __init__(self, option: str, message: str):
        self.option = option
        super().__init__(f"{option}: {message}")


class DecodeError(TermImgViewError):
    """The input file could not be turned into an RGBA pixel grid."""

    def __init__(self, path, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")


class RenderError(TermImgViewError):
    """An invariant broke while rendering. Indicates a bug, not bad input."""
