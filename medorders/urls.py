from django.urls import path

from .views import (
    ApproveOrderView,
    DeliveryInfoByUserView,
    DeliveryInfoCollectionView,
    DeliveryInfoDetailView,
    DoctorOrderHistoryView,
    DoctorOrdersView,
    HealthView,
    LatestOrderForDoctorView,
    LatestOrderView,
    MedicineDetailView,
    MedicineListView,
    OrderCollectionView,
    OrderDetailView,
    PayOrderView,
    RejectOrderView,
)

# 固定路径必须排在 orders/<order_id> 之前
urlpatterns = [
    path('order/v1/orders', OrderCollectionView.as_view(), name='order-collection'),
    path('order/v1/orders/latest', LatestOrderView.as_view(), name='order-latest'),
    path('order/v1/orders/latest/<str:patient_id>', LatestOrderForDoctorView.as_view(), name='order-latest-for-doctor'),
    path('order/v1/orders/confirm', ApproveOrderView.as_view(), name='order-approve'),
    path('order/v1/orders/reject', RejectOrderView.as_view(), name='order-reject'),
    path('order/v1/orders/pay', PayOrderView.as_view(), name='order-pay'),
    path('order/v1/orders/doctor', DoctorOrdersView.as_view(), name='order-doctor'),
    path('order/v1/orders/doctor/history', DoctorOrderHistoryView.as_view(), name='order-doctor-history'),
    path('order/v1/orders/<str:order_id>', OrderDetailView.as_view(), name='order-detail'),

    path('medicine/v1/medicines', MedicineListView.as_view(), name='medicine-list'),
    path('medicine/v1/medicines/<str:medicine_id>', MedicineDetailView.as_view(), name='medicine-detail'),

    path('delivery-info/v1', DeliveryInfoCollectionView.as_view(), name='delivery-info-collection'),
    path('delivery-info/v1/user/<str:user_id>', DeliveryInfoByUserView.as_view(), name='delivery-info-by-user'),
    path('delivery-info/v1/<str:info_id>', DeliveryInfoDetailView.as_view(), name='delivery-info-detail'),

    path('health', HealthView.as_view(), name='health'),
]
