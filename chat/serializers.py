from rest_framework import serializers
from .models import Conversation, Message


class MessageSerializer(serializers.ModelSerializer):
    senderName = serializers.CharField(source='sender.name', read_only=True)
    senderRole = serializers.CharField(source='sender.role', read_only=True)

    class Meta:
        model = Message
        fields = ['id', 'conversation', 'sender', 'senderName', 'senderRole', 'content',
                  'isFromAdmin', 'readAt', 'createdAt']
        read_only_fields = fields


class ConversationSerializer(serializers.ModelSerializer):
    userPhone = serializers.CharField(source='user.phone', read_only=True)
    userName = serializers.CharField(source='user.name', read_only=True)
    lastMessage = serializers.SerializerMethodField()
    unreadCount = serializers.SerializerMethodField()

    class Meta:
        model = Conversation
        fields = ['id', 'user', 'userPhone', 'userName', 'subject', 'status',
                  'lastMessage', 'unreadCount', 'lastMessageAt', 'createdAt']
        read_only_fields = fields

    def get_lastMessage(self, obj):
        message = obj.messages.select_related('sender').order_by('-createdAt', '-id').first()
        return MessageSerializer(message).data if message else None

    def get_unreadCount(self, obj):
        return getattr(obj, 'unreadCount', 0)


class ConversationDetailSerializer(ConversationSerializer):
    messages = MessageSerializer(many=True, read_only=True)

    class Meta(ConversationSerializer.Meta):
        fields = ConversationSerializer.Meta.fields + ['messages']
        read_only_fields = fields


class SendMessageSerializer(serializers.Serializer):
    content = serializers.CharField(max_length=5000)
