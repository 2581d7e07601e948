import logging

from django.conf import settings
from django.core.mail import send_mail

logger = logging.getLogger(__name__)


def send_order_email(order, subject, message):
    """
    Notify the customer about their order by e-mail when they gave an
    address. A failed send is logged and never fails the request.
    """
    email = order.customer.email
    if not email:
        return False
    try:
        send_mail(
            subject=subject,
            message=f"Dear {order.customer.name},\n\n{message}\n\nThank you for shopping with us!",
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[email],
            fail_silently=False,
        )
        logger.info("Order %s e-mail sent to %s", order.id, email)
        return True
    except Exception as e:
        logger.error("Failed to send order %s e-mail to %s: %s", order.id, email, e)
        return False
