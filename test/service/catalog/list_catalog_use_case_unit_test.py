from decimal import Decimal

import pytest

from filmpass.service.catalog.app.interface.i_catalog_gateway import ICatalogGateway
from filmpass.service.catalog.app.query.list_catalog_use_case import ListCatalogUseCase
from filmpass.service.catalog.domain.catalog_entity import Movie, MovieDetails, Showtime, Theater


class StubCatalogGateway(ICatalogGateway):
    def __init__(self) -> None:
        self.requested_movie_ids: list[int] = []

    async def list_theaters(self) -> list[Theater]:
        return [Theater(id=2, name='odeon'), Theater(id=1, name='Apollo'), Theater(id=3, name='Cinemaxx')]

    async def list_movies(self) -> list[Movie]:
        return [Movie(id=1, title='Metropolis')]

    async def get_movie_details(self, *, movie_id: int) -> MovieDetails:
        self.requested_movie_ids.append(movie_id)
        return MovieDetails(
            movie=Movie(id=movie_id, title='Metropolis'),
            showtimes=(Showtime(id=10, show_date='2025-01-10', price=Decimal('12.50')),),
        )


@pytest.fixture
def catalog_gateway() -> StubCatalogGateway:
    return StubCatalogGateway()


@pytest.fixture
def list_catalog_use_case(catalog_gateway: StubCatalogGateway) -> ListCatalogUseCase:
    return ListCatalogUseCase(catalog_gateway=catalog_gateway)


@pytest.mark.unit
class TestListCatalogUseCase:
    @pytest.mark.asyncio
    async def test_list_theaters__sorted_by_name(self, list_catalog_use_case: ListCatalogUseCase) -> None:
        """Test theaters are listed alphabetically regardless of case"""
        theaters = await list_catalog_use_case.list_theaters()

        assert [theater.name for theater in theaters] == ['Apollo', 'Cinemaxx', 'odeon']

    @pytest.mark.asyncio
    async def test_list_movies(self, list_catalog_use_case: ListCatalogUseCase) -> None:
        movies = await list_catalog_use_case.list_movies()

        assert movies == [Movie(id=1, title='Metropolis')]

    @pytest.mark.asyncio
    async def test_get_movie_details__showtime_lookup(
        self, list_catalog_use_case: ListCatalogUseCase, catalog_gateway: StubCatalogGateway
    ) -> None:
        details = await list_catalog_use_case.get_movie_details(movie_id=3)

        assert catalog_gateway.requested_movie_ids == [3]
        assert details.find_showtime(10).price == Decimal('12.50')
        assert details.find_showtime(99) is None
