from .subscriber_model import Subscriber, SubscriberStatus
from .donation_model import Donation


__all__ = [
    "Subscriber",
    "SubscriberStatus",
    "Donation",
]
