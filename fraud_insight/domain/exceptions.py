"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class StatisticsAPIError(DomainException):
    """Statistics service returned an error or is unavailable"""

    pass


class InvalidPayloadError(StatisticsAPIError):
    """Statistics service payload is malformed"""

    pass


class AuthenticationError(DomainException):
    """No valid session, or the backend rejected the bearer token"""

    pass


class NotFoundError(StatisticsAPIError):
    """Requested resource does not exist on the statistics service"""

    pass
