"""Consumer-facing contract for receiving weather results."""

from typing import Protocol

from weatherapp.models import WeatherModel


class WeatherPresenter(Protocol):
    """Sink for the outcome of one winning `WeatherRepository.request()` call.

    Exactly one of the two methods is invoked per winning call, always on the
    repository's callback context and never on its background worker. Dropped
    calls (made while a fetch is already in flight) receive nothing.
    """

    def on_data(self, model: WeatherModel) -> None:
        """Called with the decoded weather reading."""

    def on_error(self) -> None:
        """Called when no usable reading could be produced."""
