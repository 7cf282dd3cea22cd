from __future__ import annotations

import json
from typing import Any, Dict, Optional

from gamerepo.domain.errors import MetadataFormatError


def parse_metadata_object(meta_bytes: bytes) -> Dict[str, Any]:
    """
    Parse metadata bytes, which must hold a single JSON object.
    """
    try:
        meta = json.loads(meta_bytes.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise MetadataFormatError(f"Metadata is not valid JSON: {e}") from e
    if not isinstance(meta, dict):
        raise MetadataFormatError(f"Metadata is a JSON {type(meta).__name__}, not an object")
    return meta


def adjust_metadata_json(
    meta_bytes: bytes,
    explicit_version: Optional[int],
    max_version: int,
) -> bytes:
    """
    Stamp the effective version onto a resource's metadata.

    When a version was requested explicitly the metadata reports that
    version; otherwise it reports the most recent one. All other fields are
    left as they are.
    """
    meta = parse_metadata_object(meta_bytes)
    meta["version"] = max_version if explicit_version is None else explicit_version
    return json.dumps(meta).encode("utf-8")
