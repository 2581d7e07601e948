from django.urls import path
from .views import *

urlpatterns = [
    path('conversations/', getMyConversations, name='getMyConversations'),
    path('conversations/start/', startConversation, name='startConversation'),
    path('conversations/<int:conversationID>/messages/', getMessages, name='getMessages'),
    path('conversations/<int:conversationID>/send/', sendMessage, name='sendMessage'),
    path('unread/', getUnreadCount, name='getUnreadCount'),

    path('admin/conversations/', adminGetConversations, name='adminGetConversations'),
    path('admin/conversations/<int:conversationID>/', adminGetConversation, name='adminGetConversation'),
    path('admin/conversations/<int:conversationID>/reply/', adminReply, name='adminReply'),
    path('admin/conversations/<int:conversationID>/status/', adminSetStatus, name='adminSetStatus'),
    path('admin/unread/', adminUnreadCount, name='adminUnreadCount'),
]
