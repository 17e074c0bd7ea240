# json_table_editor/errors.py


class EditorError(Exception):
    """Base class for errors reported back to the user as a status message."""


class NetworkError(EditorError):
    """A load/save request failed or the server answered with an error."""


class ParseError(EditorError):
    """Editor text or an imported file is not valid JSON."""


class MappingError(EditorError):
    """A cell or row edit cannot be located inside the document."""


class ValidationError(EditorError):
    """An action is not allowed in the current session state."""
