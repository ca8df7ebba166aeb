from opentelemetry import trace

from filmpass.platform.logging.loguru_io import Logger
from filmpass.service.catalog.app.interface.i_catalog_gateway import ICatalogGateway
from filmpass.service.catalog.domain.catalog_entity import Movie, MovieDetails, Theater


class ListCatalogUseCase:
    """Theater -> movie -> showtime browsing that precedes seat selection."""

    def __init__(self, *, catalog_gateway: ICatalogGateway) -> None:
        self.catalog_gateway = catalog_gateway
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    async def list_theaters(self) -> list[Theater]:
        with self.tracer.start_as_current_span('use_case.list_theaters'):
            theaters = await self.catalog_gateway.list_theaters()
            return sorted(theaters, key=lambda theater: theater.name.casefold())

    @Logger.io
    async def list_movies(self) -> list[Movie]:
        with self.tracer.start_as_current_span('use_case.list_movies'):
            return await self.catalog_gateway.list_movies()

    @Logger.io
    async def get_movie_details(self, *, movie_id: int) -> MovieDetails:
        with self.tracer.start_as_current_span(
            'use_case.get_movie_details', attributes={'movie.id': movie_id}
        ):
            return await self.catalog_gateway.get_movie_details(movie_id=movie_id)
