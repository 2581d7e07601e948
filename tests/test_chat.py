from datetime import timedelta

import pytest
from django.core.paginator import UnorderedObjectListWarning
from django.utils import timezone

from chat.models import Conversation, Message

pytestmark = pytest.mark.django_db


@pytest.fixture
def conversation(as_user, customer):
    response = as_user(customer).post("/chat/conversations/start/", {"subject": "Late delivery"}, format="json")
    return Conversation.objects.get(pk=response.json()["data"]["id"])


def test_start_reuses_open_conversation(as_user, customer, conversation):
    response = as_user(customer).post("/chat/conversations/start/", {}, format="json")
    assert response.json()["data"]["id"] == conversation.id
    assert conversation.subject == "Late delivery"


def test_user_and_support_exchange_messages(as_user, customer, admin_user, conversation):
    user_client = as_user(customer)
    response = user_client.post(
        f"/chat/conversations/{conversation.id}/send/", {"content": "Where is my order?"}, format="json"
    )
    assert response.status_code == 201

    admin = as_user(admin_user)
    assert admin.get("/chat/admin/unread/").json() == {"unreadCount": 1}
    detail = admin.get(f"/chat/admin/conversations/{conversation.id}/").json()["data"]
    assert [m["content"] for m in detail["messages"]] == ["Where is my order?"]
    assert admin.get("/chat/admin/unread/").json() == {"unreadCount": 0}

    response = admin.post(
        f"/chat/admin/conversations/{conversation.id}/reply/", {"content": "It left Douala today"}, format="json"
    )
    assert response.status_code == 201
    assert response.json()["data"]["isFromAdmin"] is True

    user_client = as_user(customer)
    assert user_client.get("/chat/unread/").json() == {"unreadCount": 1}
    listed = user_client.get("/chat/conversations/").json()["data"]
    assert listed[0]["unreadCount"] == 1
    assert listed[0]["lastMessage"]["content"] == "It left Douala today"

    messages = user_client.get(f"/chat/conversations/{conversation.id}/messages/").json()["data"]
    assert len(messages) == 2
    assert user_client.get("/chat/unread/").json() == {"unreadCount": 0}


def test_empty_message_is_rejected(as_user, customer, conversation):
    response = as_user(customer).post(f"/chat/conversations/{conversation.id}/send/", {"content": "   "}, format="json")
    assert response.status_code == 400
    assert not Message.objects.exists()


def test_closed_conversation_refuses_user_messages(as_user, customer, admin_user, conversation):
    as_user(admin_user).post(f"/chat/admin/conversations/{conversation.id}/status/", {"status": "CLOSED"}, format="json")

    response = as_user(customer).post(f"/chat/conversations/{conversation.id}/send/", {"content": "Hello?"}, format="json")
    assert response.status_code == 403
    assert response.json() == {"message": "This conversation is closed"}


def test_admin_reply_reopens_conversation(as_user, admin_user, conversation):
    admin = as_user(admin_user)
    admin.post(f"/chat/admin/conversations/{conversation.id}/status/", {"status": "CLOSED"}, format="json")
    admin.post(f"/chat/admin/conversations/{conversation.id}/reply/", {"content": "Following up"}, format="json")
    conversation.refresh_from_db()
    assert conversation.status == Conversation.OPEN


def test_users_only_see_their_own_conversations(as_user, other_customer, conversation):
    response = as_user(other_customer).get(f"/chat/conversations/{conversation.id}/messages/")
    assert response.status_code == 404


def test_invalid_status_is_rejected(as_user, admin_user, conversation):
    response = as_user(admin_user).post(
        f"/chat/admin/conversations/{conversation.id}/status/", {"status": "ARCHIVED"}, format="json"
    )
    assert response.status_code == 400


def test_conversations_are_listed_by_latest_activity(as_user, admin_user, other_customer, conversation, recwarn):
    newer = as_user(other_customer).post(
        "/chat/conversations/start/", {"subject": "Wrong size"}, format="json"
    ).json()["data"]["id"]
    Conversation.objects.filter(pk=conversation.pk).update(lastMessageAt=timezone.now() + timedelta(minutes=5))

    data = as_user(admin_user).get("/chat/admin/conversations/").json()["data"]
    assert [c["id"] for c in data] == [conversation.id, newer]
    assert not [w for w in recwarn if issubclass(w.category, UnorderedObjectListWarning)]
