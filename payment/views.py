from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from api.pagination import paginate
from api.permissions import IsAdmin
from .models import Payment
from .serializers import PaymentSerializer
from .services import confirm_payment, fail_payment


@api_view(["GET"])
@permission_classes([IsAdmin])
def getPayments(request):
    payments = Payment.objects.select_related('order', 'order__customer')
    status_filter = request.query_params.get('status')
    if status_filter:
        payments = payments.filter(status=status_filter)
    method = request.query_params.get('paymentMethod')
    if method:
        payments = payments.filter(paymentMethod=method)
    return paginate(request, payments, PaymentSerializer)


@api_view(["POST"])
@permission_classes([IsAdmin])
def confirmPayment(request, paymentID):
    payment = confirm_payment(paymentID, request.user, request.data.get('transactionId'))
    return Response({"message": "Payment confirmed", "data": PaymentSerializer(payment).data})


@api_view(["POST"])
@permission_classes([IsAdmin])
def failPayment(request, paymentID):
    payment = fail_payment(paymentID, request.user)
    return Response({"message": "Payment marked as failed", "data": PaymentSerializer(payment).data})
