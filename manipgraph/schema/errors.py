"""Errors raised while reading graph and path files."""


class SchemaLoadError(Exception):
    """A graph or path file could not be read as a YAML mapping."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)


class SchemaValidationError(Exception):
    """A graph or path file does not match its model.

    ``errors`` holds one ``{"loc", "msg", "type"}`` entry per pydantic error,
    ``loc`` being the dotted location in the file.
    """

    def __init__(self, message: str, errors: list[dict[str, str]] | None = None):
        self.errors = list(errors or [])
        super().__init__(message)

    def lines(self) -> list[str]:
        """One ``location: message`` line per error."""
        return [f"{err['loc']}: {err['msg']}" for err in self.errors]
