from .delivery import DeliveryService
from .medicines import MedicineService
from .orders import OrderService

__all__ = ["DeliveryService", "MedicineService", "OrderService"]
