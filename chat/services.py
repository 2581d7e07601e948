import logging

from django.db.models import Count, Q
from django.utils import timezone

from api.exceptions import ForbiddenError, NotFoundError, ValidationError
from .models import Conversation, Message

logger = logging.getLogger(__name__)


def _clean_content(content):
    content = (content or '').strip()
    if not content:
        raise ValidationError("Message cannot be empty")
    return content


def get_or_create_conversation(user, subject=None):
    """Reuse the user's open conversation, or start a new one."""
    conversation = Conversation.objects.filter(user=user, status=Conversation.OPEN).first()
    if conversation:
        return conversation
    conversation = Conversation.objects.create(user=user, subject=(subject or '').strip() or 'Support Request')
    logger.info("Chat conversation %s opened for user %s", conversation.id, user.id)
    return conversation


def list_user_conversations(user):
    return Conversation.objects.filter(user=user).annotate(
        unreadCount=Count('messages', filter=Q(messages__isFromAdmin=True, messages__readAt__isnull=True))
    ).order_by('-lastMessageAt', '-id')


def _user_conversation(conversation_id, user):
    try:
        return Conversation.objects.get(pk=conversation_id, user=user)
    except Conversation.DoesNotExist:
        raise NotFoundError("Conversation not found")


def get_messages(conversation_id, user):
    """Messages of the user's conversation. Admin messages become read."""
    conversation = _user_conversation(conversation_id, user)
    conversation.messages.filter(isFromAdmin=True, readAt__isnull=True).update(readAt=timezone.now())
    return conversation.messages.select_related('sender')


def send_message(conversation_id, user, content):
    content = _clean_content(content)
    conversation = _user_conversation(conversation_id, user)
    if conversation.status != Conversation.OPEN:
        raise ForbiddenError("This conversation is closed")

    message = Message.objects.create(conversation=conversation, sender=user, content=content)
    conversation.lastMessageAt = message.createdAt
    conversation.save(update_fields=['lastMessageAt'])
    logger.info("User %s sent message in conversation %s", user.id, conversation.id)
    return message


def user_unread_count(user):
    return Message.objects.filter(
        conversation__user=user, isFromAdmin=True, readAt__isnull=True
    ).count()


def list_all_conversations(status=None):
    conversations = Conversation.objects.select_related('user').annotate(
        unreadCount=Count('messages', filter=Q(messages__isFromAdmin=False, messages__readAt__isnull=True))
    ).order_by('-lastMessageAt', '-id')
    if status:
        conversations = conversations.filter(status=status)
    return conversations


def get_conversation_for_admin(conversation_id):
    """Conversation detail for support staff. User messages become read."""
    try:
        conversation = Conversation.objects.select_related('user').get(pk=conversation_id)
    except Conversation.DoesNotExist:
        raise NotFoundError("Conversation not found")
    conversation.messages.filter(isFromAdmin=False, readAt__isnull=True).update(readAt=timezone.now())
    return conversation


def admin_reply(conversation_id, admin, content):
    content = _clean_content(content)
    try:
        conversation = Conversation.objects.get(pk=conversation_id)
    except Conversation.DoesNotExist:
        raise NotFoundError("Conversation not found")

    message = Message.objects.create(conversation=conversation, sender=admin, content=content, isFromAdmin=True)
    # A reply reopens a closed conversation
    conversation.lastMessageAt = message.createdAt
    conversation.status = Conversation.OPEN
    conversation.save(update_fields=['lastMessageAt', 'status'])
    logger.info("Admin %s replied to conversation %s", admin.id, conversation.id)
    return message


def set_conversation_status(conversation_id, status):
    if status not in dict(Conversation.STATUS_CHOICES):
        raise ValidationError("Status must be OPEN or CLOSED")
    try:
        conversation = Conversation.objects.get(pk=conversation_id)
    except Conversation.DoesNotExist:
        raise NotFoundError("Conversation not found")
    conversation.status = status
    conversation.save(update_fields=['status'])
    return conversation


def admin_unread_count():
    return Message.objects.filter(isFromAdmin=False, readAt__isnull=True).count()
