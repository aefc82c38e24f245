"""
DeliveryService: 收货信息（DeliveryInformation）的增删改查。

每次更新覆盖 address / phone_number / delivery_method，version + 1。
不保留历史，也不比较版本号：并发更新时最后一次写入生效。
"""

import logging

from django.utils import timezone

from ..exceptions import NotFoundError
from ..repositories import DeliveryInformationRepository
from ..serializers import format_timestamp, serialize_delivery_info
from .orders import parse_uuid

logger = logging.getLogger(__name__)


class DeliveryService:

    def __init__(self, delivery_infos=None):
        self.delivery_infos = delivery_infos or DeliveryInformationRepository()

    def _get_info(self, info_id):
        info_uuid = parse_uuid(
            info_id, 'Invalid delivery information ID format', 'INVALID_DELIVERY_INFO_ID',
        )
        info = self.delivery_infos.find_by_id(info_uuid)
        if info is None:
            raise NotFoundError('Delivery information not found', code='DELIVERY_INFO_NOT_FOUND')
        return info

    def create_delivery_info(self, principal, address, phone_number, delivery_method):
        user_id = principal.subject_uuid()
        info = self.delivery_infos.create(
            user_id=user_id,
            address=address,
            phone_number=phone_number,
            delivery_method=delivery_method,
            version=1,
        )
        logger.info('Delivery information %s created for user %s', info.id, user_id)
        return {'delivery_info': serialize_delivery_info(info)}

    def get_delivery_info_by_id(self, info_id):
        return {'delivery_info': serialize_delivery_info(self._get_info(info_id))}

    def get_delivery_infos_by_user_id(self, user_id):
        user_uuid = parse_uuid(user_id, 'Invalid user ID format', 'INVALID_USER_ID')
        infos = self.delivery_infos.find_by_user_id(user_uuid)
        return {'delivery_infos': [serialize_delivery_info(info) for info in infos]}

    def get_all_delivery_infos(self):
        infos = self.delivery_infos.find_all()
        return {'delivery_infos': [serialize_delivery_info(info) for info in infos]}

    def update_delivery_info(self, info_id, address, phone_number, delivery_method):
        info = self._get_info(info_id)

        info.address = address
        info.phone_number = phone_number
        info.delivery_method = delivery_method
        info.version = info.version + 1
        self.delivery_infos.save(
            info, update_fields=['address', 'phone_number', 'delivery_method', 'version'],
        )

        logger.info('Delivery information %s updated to version %d', info.id, info.version)
        return {'delivery_info': serialize_delivery_info(info)}

    def delete_delivery_info(self, info_id):
        info = self._get_info(info_id)
        self.delivery_infos.delete(info)

        logger.info('Delivery information %s deleted', info_id)
        return {'id': str(info_id), 'deleted_at': format_timestamp(timezone.now())}
