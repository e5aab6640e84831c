"""Error taxonomy for the version history.

Every error carries the HTTP status the API answers with; the handler in
``wordtrail.main`` renders them as ``{"message": ...}``.
"""


class VersionError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(VersionError):
    """Submitted text is missing or empty."""

    status_code = 400


class NotFound(VersionError):
    """No version has the requested id."""

    status_code = 404


class StoreUnavailable(VersionError):
    """The document store failed; surfaced as-is, never retried."""

    status_code = 500
