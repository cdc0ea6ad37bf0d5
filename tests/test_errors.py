import re
from datetime import datetime, timedelta

from petstore.exceptions import (
    CategoryInUseException,
    CartEmptyException,
    UserInUseException,
)


def test_error_body_shape(client):
    response = client.get('/api/pets/999')
    assert response.status_code == 404
    body = response.get_json()
    assert set(body) == {'status', 'error', 'message', 'path', 'code', 'timestamp'}
    assert body['status'] == 404
    assert body['error'] == 'Not Found'
    assert body['code'] == 'ERROR_4001'
    assert body['path'] == '/api/pets/999'
    assert "Pet with ID '999' not found" == body['message']
    assert re.fullmatch(r'\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}', body['timestamp'])


def test_forbidden_error_body(client, user_headers):
    response = client.get('/api/users', headers=user_headers)
    assert response.status_code == 403
    body = response.get_json()
    assert body['error'] == 'Forbidden'
    assert body['code'] == 'ERROR_403'


def test_request_parser_errors_use_standard_body(client):
    response = client.get('/api/discounts/validate')
    assert response.status_code == 400
    body = response.get_json()
    assert body['code'] == 'ERROR_400'
    assert 'code' in body['message']


def test_method_not_allowed(client):
    response = client.patch('/api/categories')
    assert response.status_code == 405
    assert response.get_json()['code'] == 'ERROR_405'


def test_unexpected_error_does_not_leak(app, client, monkeypatch):
    from petstore.services import category_service

    def explode():
        raise RuntimeError('database password is hunter2')

    monkeypatch.setattr(category_service, 'get_all_categories', explode)
    response = client.get('/api/categories')
    assert response.status_code == 500
    body = response.get_json()
    assert body['message'] == 'An unexpected error occurred'
    assert body['code'] == 'ERROR_500'
    assert 'hunter2' not in response.get_data(as_text=True)


def test_exception_messages():
    assert str(CartEmptyException(3)) == 'Cart is empty for user with ID: 3'
    assert '2 pet(s)' in CategoryInUseException(1, 'Dogs', 2).message
    error = UserInUseException(5, 'a@b.com', owned_pet_count=1, created_pet_count=2)
    assert 'ownership of 1 pet(s) and created 2 pet(s)' in error.message
    assert error.total_pet_count == 3
    assert error.status_code == 409


def test_error_timestamp_is_utc(client):
    body = client.get('/api/pets/999').get_json()
    stamped = datetime.strptime(body['timestamp'], '%Y-%m-%dT%H:%M:%S')
    assert abs(datetime.utcnow() - stamped) < timedelta(minutes=1)
