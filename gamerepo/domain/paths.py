import re
from typing import Optional

from gamerepo.domain.errors import MalformedResourcePath
from gamerepo.domain.models import ResourcePath

# Trailing "/v<digits>" segment of a prefix.
_VERSION_SEGMENT = re.compile(r"/v([0-9]+)$")

# Immediate child names that mark a version directory.
VERSION_DIR_NAME = re.compile(r"^v([0-9]+)$")


def version_of_dir_name(name: str) -> Optional[int]:
    """
    Return N for a child named ``v<N>``, or None for any other name.
    """
    match = VERSION_DIR_NAME.match(name)
    if match is None:
        return None
    return int(match.group(1))


def expand_directory_uri(uri: str, namespace_prefix: str, metadata_leaf: str) -> str:
    """
    Accessing a resource's directory means fetching its metadata, so a
    trailing slash past the namespace itself gets the metadata leaf appended.
    """
    if uri.endswith("/") and len(uri) > len(namespace_prefix):
        return uri + metadata_leaf
    return uri


def parse_resource_path(uri: str) -> ResourcePath:
    """
    Split a versioned request path into (prefix, explicit version, leaf).

    The split happens at the last slash; a trailing ``/v<N>`` segment of the
    prefix becomes the explicit version. The result is validated by
    reconstruction and ``MalformedResourcePath`` is raised on a mismatch
    (for example ``/games/R/v01/METADATA``, whose version reconstructs as v1).
    """
    prefix, _, leaf = uri.rpartition("/")

    explicit_version: Optional[int] = None
    match = _VERSION_SEGMENT.search(prefix)
    if match is not None:
        try:
            explicit_version = int(match.group(1))
            prefix = prefix[: match.start()]
        except ValueError:
            # Digits past the int conversion limit: no explicit version.
            explicit_version = None

    parsed = ResourcePath(prefix=prefix, explicit_version=explicit_version, leaf=leaf)

    reconstructed = parsed.to_uri()
    if reconstructed != uri:
        raise MalformedResourcePath(uri, reconstructed)
    return parsed
