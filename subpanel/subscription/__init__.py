# Inbound -> Clash subscription translator.

from .errors import (
    SubscriptionError,
    InvalidIdentifier,
    RecordNotFound,
    UnsupportedProtocol,
    MissingAddress,
    SerializationFailed
)
from .models import InboundRecord
from .serializer import CONTENT_TYPE
from .service import ClashSubscription, generate_clash_subscription, parse_inbound_id

__all__ = [
    'SubscriptionError',
    'InvalidIdentifier',
    'RecordNotFound',
    'UnsupportedProtocol',
    'MissingAddress',
    'SerializationFailed',
    'InboundRecord',
    'CONTENT_TYPE',
    'ClashSubscription',
    'generate_clash_subscription',
    'parse_inbound_id'
]
