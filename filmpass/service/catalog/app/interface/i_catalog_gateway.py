from abc import ABC, abstractmethod

from filmpass.service.catalog.domain.catalog_entity import Movie, MovieDetails, Theater


class ICatalogGateway(ABC):
    """Read-only catalog endpoints (theaters, movies, showtimes)."""

    @abstractmethod
    async def list_theaters(self) -> list[Theater]:
        pass

    @abstractmethod
    async def list_movies(self) -> list[Movie]:
        pass

    @abstractmethod
    async def get_movie_details(self, *, movie_id: int) -> MovieDetails:
        pass
