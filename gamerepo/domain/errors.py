from __future__ import annotations


class RepositoryError(Exception):
    """Base class for failures raised while resolving a repository request."""


class MalformedResourcePath(RepositoryError):
    """
    The parsed path did not reconstruct to the original request path.

    This points at a resolver bug rather than a bad client request, so the
    request is aborted instead of serving a guess.
    """

    def __init__(self, uri: str, reconstructed: str):
        super().__init__(f"{uri} != {reconstructed}")
        self.uri = uri
        self.reconstructed = reconstructed


class MetadataFormatError(RepositoryError):
    """Metadata bytes did not parse as a JSON object."""
