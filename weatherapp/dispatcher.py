"""Decode weather payloads and deliver outcomes on the consumer's callback context."""
from __future__ import annotations

from typing import Optional

from pydantic import ValidationError

from weatherapp.contract import WeatherPresenter
from weatherapp.errors import DecodeFailure
from weatherapp.executors import CallbackContext
from weatherapp.models import WeatherModel
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="dispatcher")


class ResultDispatcher:
    """Decoding happens on the caller's (background) thread; callbacks on `context`."""

    def __init__(self, context: CallbackContext) -> None:
        self.context = context

    @staticmethod
    def decode(raw: str | None) -> WeatherModel:
        """Parse a raw JSON document into a WeatherModel or raise DecodeFailure."""
        if raw is None or not raw.strip():
            raise DecodeFailure("empty weather payload")
        try:
            model = WeatherModel.model_validate_json(raw)
        except ValidationError as exc:
            raise DecodeFailure(f"unparseable weather payload: {exc.error_count()} error(s)") from exc
        return model

    def try_decode(self, raw: str | None, *, source: str = "cached") -> Optional[WeatherModel]:
        """Like `decode`, but logs the failure and returns None instead of raising."""
        try:
            return self.decode(raw)
        except DecodeFailure as exc:
            logger.warning("Discarding %s weather payload: %s", source, exc)
            return None

    def decode_and_dispatch(self, raw: str | None, presenter: WeatherPresenter) -> bool:
        """Decode `raw` and deliver on_data, or on_error if it does not decode."""
        model = self.try_decode(raw)
        if model is None:
            self.dispatch_error(presenter)
            return False
        self.dispatch_data(model, presenter)
        return True

    def dispatch_data(self, model: WeatherModel, presenter: WeatherPresenter) -> None:
        self.context.execute(lambda: presenter.on_data(model))

    def dispatch_error(self, presenter: WeatherPresenter) -> None:
        self.context.execute(presenter.on_error)
