"""Exception types raised inside the weather repository."""


class WeatherError(Exception):
    """Base class for weather repository failures."""


class TransportFailure(WeatherError):
    """The remote call failed at the I/O level (connection, timeout, HTTP status)."""


class DecodeFailure(WeatherError):
    """A payload was empty or could not be parsed into a WeatherModel."""
