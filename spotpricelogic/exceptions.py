class SpotPriceError(Exception): ...


class CanonError(SpotPriceError): ...


class ArgumentError(SpotPriceError): ...


class InvalidZone(ArgumentError): ...


class InvalidDate(ArgumentError): ...


class InvalidChargingDuration(ArgumentError): ...


class UnknownArgument(ArgumentError): ...


class FeedError(SpotPriceError): ...


class DataUnavailable(SpotPriceError): ...


class NoData(SpotPriceError): ...


class InsufficientData(SpotPriceError): ...


def require(condition: bool, message: str, exc: type[SpotPriceError] = SpotPriceError):
    """Raise the given exception if condition is False."""
    if not condition:
        raise exc(message)
