"""Failure conditions surfaced by the Clash subscription endpoint.

Each error carries the HTTP status and the plain-text body the boundary
answers with. Problems inside the settings documents never show up here,
they are recovered by the extractor.
"""


class SubscriptionError(Exception):
    """Base class for all subscription failures."""

    status_code = 500
    message = "subscription failed"

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidIdentifier(SubscriptionError):
    """The requested id is not a base-10 integer."""

    status_code = 400
    message = "invalid id"


class RecordNotFound(SubscriptionError):
    """The storage API has no inbound with the requested id."""

    status_code = 404
    message = "inbound not found"


class UnsupportedProtocol(SubscriptionError):
    """The inbound uses a protocol the translator cannot describe."""

    status_code = 400
    message = "only vmess supported"


class MissingAddress(SubscriptionError):
    """The inbound has no client-facing address, or it is the wildcard bind address."""

    status_code = 400
    message = "speed ip not set"


class SerializationFailed(SubscriptionError):
    """YAML encoding failed."""

    status_code = 500
    message = "build yaml failed"
