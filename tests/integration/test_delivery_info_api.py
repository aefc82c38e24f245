import json
import uuid

import pytest

from medorders.models import DeliveryInformation
from tests.conftest import DeliveryInformationFactory, auth_header

BASE = '/api/delivery-info/v1'


def send(api_client, method, path, principal, payload=None):
    kwargs = auth_header(principal)
    if payload is not None:
        kwargs.update(data=json.dumps(payload), content_type='application/json')
    response = getattr(api_client, method)(path, **kwargs)
    return response.status_code, json.loads(response.content)


@pytest.mark.django_db
class TestDeliveryInfoApi:

    def test_create(self, api_client, patient, patient_id):
        status, body = send(api_client, 'post', BASE, patient, {
            'address': '22 Soi Sukhumvit', 'phone_number': '0812345678', 'delivery_method': 'flash',
        })

        assert status == 201
        info = body['delivery_info']
        assert info['user_id'] == str(patient_id)
        assert info['version'] == 1
        assert set(info) == {'id', 'user_id', 'address', 'phone_number', 'version', 'delivery_method', 'created_at'}

    def test_create_validation(self, api_client, patient):
        status, body = send(api_client, 'post', BASE, patient, {'address': 'x', 'delivery_method': 'boat'})

        assert status == 400
        fields = {e['field'] for e in body['detail']['errors']}
        assert fields == {'phone_number', 'delivery_method'}

    def test_update_bumps_version(self, api_client, patient):
        info = DeliveryInformationFactory(version=1)

        status, body = send(api_client, 'put', BASE, patient, {
            'id': str(info.id), 'address': 'new', 'phone_number': '1', 'delivery_method': 'pick_up',
        })

        assert status == 200
        assert body['delivery_info']['version'] == 2
        assert body['delivery_info']['address'] == 'new'

    def test_update_missing(self, api_client, patient):
        status, body = send(api_client, 'put', BASE, patient, {
            'id': str(uuid.uuid4()), 'address': 'a', 'phone_number': '1', 'delivery_method': 'flash',
        })
        assert status == 404

    def test_delete(self, api_client, patient):
        info = DeliveryInformationFactory()

        status, body = send(api_client, 'delete', BASE, patient, {'id': str(info.id)})

        assert status == 200
        assert body['id'] == str(info.id)
        assert body['deleted_at']
        assert not DeliveryInformation.objects.filter(id=info.id).exists()

    def test_get_all(self, api_client, patient):
        DeliveryInformationFactory.create_batch(3)
        status, body = send(api_client, 'get', BASE, patient)
        assert status == 200
        assert len(body['delivery_infos']) == 3

    def test_get_by_id(self, api_client, patient):
        info = DeliveryInformationFactory()
        status, body = send(api_client, 'get', f'{BASE}/{info.id}', patient)
        assert status == 200
        assert body['delivery_info']['id'] == str(info.id)

    def test_get_by_id_malformed(self, api_client, patient):
        status, body = send(api_client, 'get', f'{BASE}/abc', patient)
        assert status == 400

    def test_get_by_user(self, api_client, patient):
        user_id = uuid.uuid4()
        DeliveryInformationFactory(user_id=user_id, version=1)
        DeliveryInformationFactory(user_id=user_id, version=2)

        status, body = send(api_client, 'get', f'{BASE}/user/{user_id}', patient)

        assert status == 200
        assert [i['version'] for i in body['delivery_infos']] == [2, 1]

    def test_requires_token(self, api_client):
        assert api_client.get(BASE).status_code == 401
