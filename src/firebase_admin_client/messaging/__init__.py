"""Cloud Messaging public exports."""

from .errors import FirebaseMessagingError, MessagingErrorCode
from .models import BatchResponse, Message, MulticastMessage, Notification, SendResponse

__all__ = [
    "Message",
    "MulticastMessage",
    "Notification",
    "SendResponse",
    "BatchResponse",
    "MessagingErrorCode",
    "FirebaseMessagingError",
]
