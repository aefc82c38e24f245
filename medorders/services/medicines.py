"""MedicineService: 药品目录，只读。软删除的药品在 repository 层已经过滤。"""

from ..exceptions import BadRequestError, NotFoundError
from ..repositories import MedicineRepository
from ..serializers import serialize_medicine
from .orders import parse_uuid


class MedicineService:

    def __init__(self, medicines=None):
        self.medicines = medicines or MedicineRepository()

    def get_all_medicines(self):
        medicines = [serialize_medicine(m) for m in self.medicines.find_all()]
        return {'medicines': medicines, 'total': len(medicines)}

    def get_medicine_by_id(self, medicine_id):
        if not medicine_id:
            raise BadRequestError('Medicine ID is required', code='MEDICINE_ID_REQUIRED')

        medicine_uuid = parse_uuid(medicine_id, 'Invalid medicine ID format', 'INVALID_MEDICINE_ID')
        medicine = self.medicines.find_by_id(medicine_uuid)
        if medicine is None:
            raise NotFoundError('Medicine not found', code='MEDICINE_NOT_FOUND')

        return {'medicine': serialize_medicine(medicine)}
