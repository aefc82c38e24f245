"""
Shared fixtures for all tests.

factory-boy factories 和假的外部 Client 都放在这里，unit/ 和 integration/ 都能 import。
"""
import uuid
from decimal import Decimal

import factory
import pytest
from django.conf import settings
from django.test import Client
from jose import jwt

from medorders.authentication import ROLE_DOCTOR, ROLE_PATIENT, Principal
from medorders.clients import Appointment, BaseAppointmentClient, BaseUserClient, ClientError, PatientProfile
from medorders.models import Delivery, DeliveryInformation, Medicine, Order, OrderItem


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

class MedicineFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Medicine

    name = factory.Sequence(lambda n: f'Medicine {n}')
    price = Decimal('10.00')
    stock = Decimal('100')
    unit = 'tablet'


class OrderFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Order

    patient_id = factory.LazyFunction(uuid.uuid4)
    doctor_id = factory.LazyFunction(uuid.uuid4)
    total_amount = Decimal('0')
    status = 'pending'


class OrderItemFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = OrderItem

    order = factory.SubFactory(OrderFactory)
    medicine = factory.SubFactory(MedicineFactory)
    quantity = Decimal('1')


class DeliveryFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Delivery

    order_id = factory.LazyFunction(uuid.uuid4)
    delivery_information_id = factory.LazyFunction(uuid.uuid4)
    status = 'pending'


class DeliveryInformationFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = DeliveryInformation

    user_id = factory.LazyFunction(uuid.uuid4)
    address = '1 Main Street'
    phone_number = '0800000000'
    delivery_method = 'flash'
    version = 1


# ---------------------------------------------------------------------------
# Fake external clients
# ---------------------------------------------------------------------------

class FakeAppointmentClient(BaseAppointmentClient):
    """doctor_id=None → 没有预约；error=True → 调用失败。"""

    def __init__(self, doctor_id=None, error=False):
        self.doctor_id = doctor_id
        self.error = error
        self.calls = []

    def get_latest_appointment_by_patient_id(self, patient_id, token=None):
        self.calls.append((patient_id, token))
        if self.error:
            raise ClientError('appointment service unreachable')
        if self.doctor_id is None:
            return None
        return Appointment(
            appointment_id=str(uuid.uuid4()),
            patient_id=patient_id,
            doctor_id=str(self.doctor_id),
        )


class FakeUserClient(BaseUserClient):

    def __init__(self, profiles=None, error=False):
        self.profiles = {p.id: p for p in (profiles or [])}
        self.error = error
        self.calls = []

    def get_patients_by_ids(self, patient_ids, token=None):
        self.calls.append((list(patient_ids), token))
        if self.error:
            raise ClientError('user service unreachable')
        return [self.profiles[pid] for pid in patient_ids if pid in self.profiles]


def make_profile(patient_id, first_name='Jane', last_name='Roe'):
    return PatientProfile(
        id=str(patient_id),
        first_name=first_name,
        last_name=last_name,
        gender='female',
        phone_number='0811111111',
    )


# ---------------------------------------------------------------------------
# Auth helpers
# ---------------------------------------------------------------------------

def make_token(subject_id, role, **claims):
    payload = {'sub': str(subject_id), 'role': role, **claims}
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def auth_header(principal):
    """Django test Client 的 extra kwargs：Authorization: Bearer <jwt>。"""
    token = make_token(principal.subject_id, principal.role)
    return {'HTTP_AUTHORIZATION': f'Bearer {token}'}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def api_client():
    """Django test client for integration tests."""
    return Client()


@pytest.fixture
def patient_id():
    return uuid.uuid4()


@pytest.fixture
def doctor_id():
    return uuid.uuid4()


@pytest.fixture
def patient(patient_id):
    return Principal(subject_id=str(patient_id), role=ROLE_PATIENT, token='patient-token')


@pytest.fixture
def doctor(doctor_id):
    return Principal(subject_id=str(doctor_id), role=ROLE_DOCTOR, token='doctor-token')


@pytest.fixture
def other_doctor():
    return Principal(subject_id=str(uuid.uuid4()), role=ROLE_DOCTOR, token='other-doctor-token')
