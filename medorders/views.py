"""
HTTP 层。

View 只做三件事：
  1. 用 intake parser 解析请求体
  2. 把 request.user（Principal）和参数交给 service
  3. 把 service 返回的 dict 包成 Response

所有错误都由 service / parser 抛出，exception_handler 统一格式化。
"""

from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from .intake import parse_request
from .services import DeliveryService, MedicineService, OrderService


# ── Orders ─────────────────────────────────────────────────────────────────

class OrderCollectionView(APIView):
    """
    POST   /api/order/v1/orders   患者下单
    PUT    /api/order/v1/orders   医生替换订单明细
    GET    /api/order/v1/orders   调用者的订单历史
    DELETE /api/order/v1/orders   医生取消订单
    """

    def post(self, request):
        body = parse_request('create_order', request.data)
        result = OrderService().create_order(request.user, note=body.note)
        return Response(result, status=status.HTTP_201_CREATED)

    def put(self, request):
        body = parse_request('update_order', request.data)
        result = OrderService().update_order(request.user, body.order_id, body.items)
        return Response(result)

    def get(self, request):
        return Response(OrderService().get_all_orders_history_by_patient_id(request.user))

    def delete(self, request):
        body = parse_request('order_action', request.data)
        return Response(OrderService().cancel_order(request.user, body.order_id))


class OrderDetailView(APIView):

    def get(self, request, order_id):
        return Response(OrderService().get_order_by_id(request.user, order_id))


class LatestOrderView(APIView):

    def get(self, request):
        return Response(OrderService().get_latest_order_by_patient_id(request.user))


class LatestOrderForDoctorView(APIView):

    def get(self, request, patient_id):
        return Response(
            OrderService().get_latest_order_by_patient_id_for_doctor(request.user, patient_id)
        )


class ApproveOrderView(APIView):

    def post(self, request):
        body = parse_request('order_action', request.data)
        return Response(OrderService().approve_order(request.user, body.order_id))


class RejectOrderView(APIView):

    def post(self, request):
        body = parse_request('order_action', request.data)
        return Response(OrderService().reject_order(request.user, body.order_id))


class PayOrderView(APIView):

    def post(self, request):
        body = parse_request('order_action', request.data)
        return Response(OrderService().pay_order(request.user, body.order_id))


class DoctorOrdersView(APIView):

    def get(self, request):
        return Response(OrderService().get_all_orders_by_doctor_id(request.user))


class DoctorOrderHistoryView(APIView):

    def get(self, request):
        status_filter = request.query_params.get('status', '').strip()
        return Response(
            OrderService().get_all_orders_history_for_doctor(request.user, status_filter or None)
        )


# ── Medicines (public) ─────────────────────────────────────────────────────

class MedicineListView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request):
        return Response(MedicineService().get_all_medicines())


class MedicineDetailView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request, medicine_id):
        return Response(MedicineService().get_medicine_by_id(medicine_id))


# ── Delivery information ───────────────────────────────────────────────────

class DeliveryInfoCollectionView(APIView):
    """
    POST   /api/delivery-info/v1   新建，version = 1
    PUT    /api/delivery-info/v1   覆盖更新，version + 1
    DELETE /api/delivery-info/v1   硬删除
    GET    /api/delivery-info/v1   全部
    """

    def post(self, request):
        body = parse_request('delivery_info', request.data)
        result = DeliveryService().create_delivery_info(
            request.user, body.address, body.phone_number, body.delivery_method,
        )
        return Response(result, status=status.HTTP_201_CREATED)

    def put(self, request):
        body = parse_request('delivery_info_update', request.data)
        result = DeliveryService().update_delivery_info(
            body.id, body.address, body.phone_number, body.delivery_method,
        )
        return Response(result)

    def delete(self, request):
        body = parse_request('delivery_info_id', request.data)
        return Response(DeliveryService().delete_delivery_info(body.id))

    def get(self, request):
        return Response(DeliveryService().get_all_delivery_infos())


class DeliveryInfoDetailView(APIView):

    def get(self, request, info_id):
        return Response(DeliveryService().get_delivery_info_by_id(info_id))


class DeliveryInfoByUserView(APIView):

    def get(self, request, user_id):
        return Response(DeliveryService().get_delivery_infos_by_user_id(user_id))


# ── Health ─────────────────────────────────────────────────────────────────

class HealthView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request):
        return Response({'status': 'ok', 'service': 'medorders'})
