"""BaseService — shared foundation for projctl services.

Every service receives a :class:`ProjectsGateway` (the GraphQL boundary)
and the loaded settings at construction time.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from projctl.config.settings import ProjSettings
from projctl.services.result import ServiceError

if TYPE_CHECKING:
    from projctl.infrastructure.graphql import TransportError
    from projctl.infrastructure.projects import ProjectsGateway


class BaseService:
    """Base for service-layer classes.

    Usage::

        class ProjectService(BaseService):
            def locate(self, number: int, ...) -> ServiceResult:
                project = self._gateway.find_project(number, ...)
                ...
    """

    def __init__(self, gateway: ProjectsGateway, settings: ProjSettings | None = None) -> None:
        self._gateway = gateway
        self._settings = settings or ProjSettings()


def transport_error(exc: TransportError) -> ServiceError:
    """Convert a TransportError into a structured ServiceError keyed by its kind."""
    return ServiceError(code=exc.kind, message=exc.message, detail=exc.detail)
