"""
Messages API controller.
"""

from uuid import UUID

from django.http import HttpRequest
from ninja_extra import api_controller
from ninja_extra import http_delete
from ninja_extra import http_get
from ninja_extra import http_post

from academia.core.api import BaseAPI
from academia.core.api import HasAction
from academia.core.exceptions import ErrorSchema
from academia.core.policy import Action
from academia.core.schemas import SuccessSchema
from academia.core.schemas import UserSummarySchema
from academia.messaging.schemas import ConversationSummarySchema
from academia.messaging.schemas import MarkedCountSchema
from academia.messaging.schemas import MarkManyReadSchema
from academia.messaging.schemas import MessageSchema
from academia.messaging.schemas import SendMessageSchema
from academia.messaging.schemas import UnreadMessagesSchema
from academia.messaging.services import MessagingService

ERRORS = {400: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema}


@api_controller("/messages", tags=["Messages"], permissions=[HasAction.to(Action.SEND_MESSAGE)])
class MessagesController(BaseAPI):
    """API endpoints for direct messages."""

    messaging = MessagingService()

    @http_post("/", response={201: MessageSchema, **ERRORS}, url_name="messages_send")
    def send_message(self, request: HttpRequest, data: SendMessageSchema):
        """Send a message to a user the caller is allowed to reach."""
        message = self.messaging.send_message(
            sender_id=request.user.id,
            receiver_id=data.receiver_id,
            content=data.content,
            subject=data.subject,
            parent_id=data.parent_id,
        )
        return 201, MessageSchema.from_message(message)

    @http_get("/inbox", response={200: list[MessageSchema]}, url_name="messages_inbox")
    def inbox(
        self,
        request: HttpRequest,
        unread_only: bool = False,
        limit: int = 50,
        offset: int = 0,
    ):
        messages = self.messaging.inbox(request.user.id, unread_only=unread_only, limit=limit, offset=offset)
        return 200, [MessageSchema.from_message(m) for m in messages]

    @http_get("/sent", response={200: list[MessageSchema]}, url_name="messages_sent")
    def sent(
        self,
        request: HttpRequest,
        limit: int = 50,
        offset: int = 0,
    ):
        messages = self.messaging.sent(request.user.id, limit=limit, offset=offset)
        return 200, [MessageSchema.from_message(m) for m in messages]

    @http_get("/conversations", response={200: list[ConversationSummarySchema]}, url_name="messages_conversations")
    def conversations(self, request: HttpRequest):
        """One entry per correspondent, most recent first."""
        summaries = self.messaging.conversations(request.user.id)
        return 200, [ConversationSummarySchema.from_summary(s) for s in summaries]

    @http_get(
        "/conversations/{uuid:user_id}",
        response={200: list[MessageSchema], 403: ErrorSchema, 404: ErrorSchema},
        url_name="messages_conversation",
    )
    def conversation(
        self,
        request: HttpRequest,
        user_id: UUID,
        limit: int = 50,
        offset: int = 0,
    ):
        messages = self.messaging.conversation(request.user.id, user_id, limit=limit, offset=offset)
        return 200, [MessageSchema.from_message(m) for m in messages]

    @http_get("/unread-count", response={200: UnreadMessagesSchema}, url_name="messages_unread_count")
    def unread_count(self, request: HttpRequest):
        return 200, UnreadMessagesSchema(count=self.messaging.unread_count(request.user.id))

    @http_get("/users", response={200: list[UserSummarySchema], 404: ErrorSchema}, url_name="messages_users")
    def messageable_users(self, request: HttpRequest):
        """Users the caller can start a conversation with."""
        users = self.messaging.get_messageable_users(request.user.id)
        return 200, [UserSummarySchema.from_user(u) for u in users]

    @http_post("/read", response={200: MarkedCountSchema}, url_name="messages_mark_many_read")
    def mark_many_as_read(self, request: HttpRequest, data: MarkManyReadSchema):
        count = self.messaging.mark_many_as_read(data.message_ids, request.user.id)
        return 200, MarkedCountSchema(count=count)

    @http_get(
        "/{uuid:message_id}",
        response={200: MessageSchema, 403: ErrorSchema, 404: ErrorSchema},
        url_name="messages_detail",
    )
    def get_message(self, request: HttpRequest, message_id: UUID):
        message = self.messaging.get_message(message_id, request.user.id)
        return 200, MessageSchema.from_message(message)

    @http_post(
        "/{uuid:message_id}/read",
        response={200: MessageSchema, 403: ErrorSchema, 404: ErrorSchema},
        url_name="messages_mark_read",
    )
    def mark_as_read(self, request: HttpRequest, message_id: UUID):
        message = self.messaging.mark_as_read(message_id, request.user.id)
        return 200, MessageSchema.from_message(message)

    @http_delete(
        "/{uuid:message_id}",
        response={200: SuccessSchema, 403: ErrorSchema, 404: ErrorSchema},
        url_name="messages_delete",
    )
    def delete_message(self, request: HttpRequest, message_id: UUID):
        """Remove the message from the caller's mailbox."""
        self.messaging.delete(message_id, request.user.id)
        return 200, SuccessSchema(success=True, message="Message deleted.")
