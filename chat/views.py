from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from api.pagination import paginate
from api.permissions import IsAdmin
from . import services
from .serializers import (
    ConversationDetailSerializer,
    ConversationSerializer,
    MessageSerializer,
    SendMessageSerializer,
)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def startConversation(request):
    conversation = services.get_or_create_conversation(request.user, request.data.get('subject'))
    return Response({
        "message": "Conversation ready",
        "data": ConversationDetailSerializer(conversation).data
    }, status=status.HTTP_200_OK)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def getMyConversations(request):
    return paginate(request, services.list_user_conversations(request.user), ConversationSerializer)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def getMessages(request, conversationID):
    messages = services.get_messages(conversationID, request.user)
    return Response({"data": MessageSerializer(messages, many=True).data})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def sendMessage(request, conversationID):
    serializer = SendMessageSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    message = services.send_message(conversationID, request.user, serializer.validated_data['content'])
    return Response({"message": "Message sent", "data": MessageSerializer(message).data},
                    status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def getUnreadCount(request):
    return Response({"unreadCount": services.user_unread_count(request.user)})


# ---------------------------------------------------
# Admin
# ---------------------------------------------------
@api_view(['GET'])
@permission_classes([IsAdmin])
def adminGetConversations(request):
    conversations = services.list_all_conversations(request.query_params.get('status'))
    return paginate(request, conversations, ConversationSerializer)


@api_view(['GET'])
@permission_classes([IsAdmin])
def adminGetConversation(request, conversationID):
    conversation = services.get_conversation_for_admin(conversationID)
    return Response({"data": ConversationDetailSerializer(conversation).data})


@api_view(['POST'])
@permission_classes([IsAdmin])
def adminReply(request, conversationID):
    serializer = SendMessageSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    message = services.admin_reply(conversationID, request.user, serializer.validated_data['content'])
    return Response({"message": "Reply sent", "data": MessageSerializer(message).data},
                    status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([IsAdmin])
def adminSetStatus(request, conversationID):
    conversation = services.set_conversation_status(conversationID, request.data.get('status'))
    return Response({"message": "Conversation updated", "data": ConversationSerializer(conversation).data})


@api_view(['GET'])
@permission_classes([IsAdmin])
def adminUnreadCount(request):
    return Response({"unreadCount": services.admin_unread_count()})
