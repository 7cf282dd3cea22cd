from fastapi import Request

from gamerepo.domain.entities import GameRepository


def get_repository(request: Request) -> GameRepository:
    """The repository owned by the running app (see ``gamerepo.main.create_app``)."""
    return request.app.state.repository
