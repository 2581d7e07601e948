from django.db import models
from api.models import CustomUser


class Conversation(models.Model):
    OPEN = 'OPEN'
    CLOSED = 'CLOSED'
    STATUS_CHOICES = (
        (OPEN, 'Open'),
        (CLOSED, 'Closed'),
    )

    user = models.ForeignKey(CustomUser, on_delete=models.CASCADE, related_name='conversations')
    subject = models.CharField(max_length=255, default='Support Request')
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=OPEN)
    lastMessageAt = models.DateTimeField(auto_now_add=True)
    createdAt = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-lastMessageAt', '-id']

    def __str__(self):
        return f"{self.subject} ({self.user.phone}) - {self.status}"


class Message(models.Model):
    conversation = models.ForeignKey(Conversation, on_delete=models.CASCADE, related_name='messages')
    sender = models.ForeignKey(CustomUser, on_delete=models.CASCADE, related_name='chatMessages')
    content = models.TextField()
    isFromAdmin = models.BooleanField(default=False)
    readAt = models.DateTimeField(null=True, blank=True)
    createdAt = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['createdAt', 'id']

    def __str__(self):
        return f"Message {self.id} in conversation {self.conversation_id}"
