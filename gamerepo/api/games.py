from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from gamerepo.core.dependencies import get_repository
from gamerepo.domain.entities import GameRepository
from gamerepo.domain.errors import MalformedResourcePath, MetadataFormatError

logger = logging.getLogger(__name__)
router = APIRouter()


# ---------------------------------------------------------------------------
# Catch-all resource endpoint. Must be included after every other route.
# ---------------------------------------------------------------------------

@router.api_route("/{resource_path:path}", methods=["GET", "HEAD"])
async def get_resource(
    resource_path: str,
    request: Request,
    repo: GameRepository = Depends(get_repository),
) -> Response:
    """
    Serve a repository resource.

    Versioned paths look like ``/games/<name>[/v<N>]/<file>``; a trailing
    slash fetches the resource's metadata and ``/games/metadata`` returns
    the metadata of every resource. Anything else is read straight from
    the store root.
    """
    # Already percent-decoded; may contain "?" or "#".
    uri = request.scope["path"]

    try:
        content = await repo.get_content(uri)
    except MalformedResourcePath as e:
        logger.error(f"Resolver could not reconstruct {uri}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Malformed resource path")
    except MetadataFormatError as e:
        logger.error(f"Bad metadata for {uri}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Malformed resource metadata")

    if content is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    return Response(
        content=content.body,
        status_code=status.HTTP_200_OK,
        media_type=content.media_type,
    )
