from decimal import Decimal
from typing import Optional

import attrs


@attrs.define(frozen=True)
class Theater:
    id: int
    name: str
    location: Optional[str] = None


@attrs.define(frozen=True)
class Movie:
    id: int
    title: str
    description: Optional[str] = None
    duration_minutes: Optional[int] = None


@attrs.define(frozen=True)
class Showtime:
    id: int
    show_date: Optional[str] = None
    start_time: Optional[str] = None
    theater_name: Optional[str] = None
    theater_location: Optional[str] = None
    price: Optional[Decimal] = None

    @property
    def starts_at(self) -> Optional[str]:
        if self.show_date and self.start_time:
            return f'{self.show_date} {self.start_time}'
        return self.show_date or self.start_time


@attrs.define(frozen=True)
class MovieDetails:
    movie: Movie
    showtimes: tuple[Showtime, ...] = ()

    def find_showtime(self, showtime_id: int) -> Optional[Showtime]:
        for showtime in self.showtimes:
            if showtime.id == showtime_id:
                return showtime
        return None
