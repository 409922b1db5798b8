"""
Messaging API controllers.

- MessagesController: direct messages (/api/messages/)
"""

from academia.messaging.api.messages import MessagesController

__all__ = [
    "MessagesController",
]
