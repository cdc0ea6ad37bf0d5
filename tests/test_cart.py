import pytest

from petstore import db
from petstore.models import Cart, PetStatus, Role

from conftest import auth_header, make_discount, make_pet, make_user


def test_add_pet_creates_cart(client, user, user_headers):
    pet = make_pet('Rex', price='100.00')
    response = client.post(f'/api/stores/cart/add/{pet.id}', headers=user_headers)
    assert response.status_code == 200
    body = response.get_json()
    assert body['userId'] == user.id
    assert body['itemCount'] == 1
    assert body['items'][0]['petId'] == pet.id
    assert body['items'][0]['price'] == 100.0
    assert body['totalPrice'] == 100.0


def test_cart_captures_price_at_add_time(client, user, user_headers):
    pet = make_pet('Rex', price='100.00')
    client.post(f'/api/stores/cart/add/{pet.id}', headers=user_headers)
    pet.price = 150
    db.session.commit()
    body = client.get('/api/stores/cart', headers=user_headers).get_json()
    assert body['items'][0]['price'] == 100.0


def test_add_same_pet_twice_conflicts(client, user_headers):
    pet = make_pet('Rex')
    client.post(f'/api/stores/cart/add/{pet.id}', headers=user_headers)
    response = client.post(f'/api/stores/cart/add/{pet.id}', headers=user_headers)
    assert response.status_code == 409
    assert response.get_json()['code'] == 'ERROR_4003'


def test_add_sold_pet_conflicts(client, user_headers):
    pet = make_pet('Rex', status=PetStatus.SOLD)
    response = client.post(f'/api/stores/cart/add/{pet.id}', headers=user_headers)
    assert response.status_code == 409
    assert response.get_json()['code'] == 'ERROR_4002'
    assert Cart.query.count() == 0


def test_add_missing_pet(client, user_headers):
    assert client.post('/api/stores/cart/add/31337', headers=user_headers).status_code == 404


def test_admin_cannot_use_cart_endpoints_without_user_role(client):
    admin_only = make_user('root@example.com', roles=(Role.ADMIN,))
    pet = make_pet('Rex')
    assert client.post(f'/api/stores/cart/add/{pet.id}', headers=auth_header(admin_only)).status_code == 403


def test_get_cart_without_cart(client, user_headers):
    response = client.get('/api/stores/cart', headers=user_headers)
    assert response.status_code == 404
    assert response.get_json()['code'] == 'ERROR_6002'


def test_view_cart_by_user_id(client, user, other_user, user_headers, admin_headers):
    pet = make_pet('Rex')
    client.post(f'/api/stores/cart/add/{pet.id}', headers=user_headers)
    assert client.get(f'/api/stores/cart/{user.id}', headers=user_headers).status_code == 200
    assert client.get(f'/api/stores/cart/{user.id}', headers=admin_headers).status_code == 200
    assert client.get(f'/api/stores/cart/{user.id}', headers=auth_header(other_user)).status_code == 403


def test_remove_cart_item(client, user_headers):
    rex = make_pet('Rex')
    fido = make_pet('Fido')
    client.post(f'/api/stores/cart/add/{rex.id}', headers=user_headers)
    cart = client.post(f'/api/stores/cart/add/{fido.id}', headers=user_headers).get_json()
    item_id = cart['items'][0]['id']

    response = client.delete(f'/api/stores/cart/item/{item_id}', headers=user_headers)
    assert response.status_code == 200
    assert [i['petId'] for i in response.get_json()['items']] == [fido.id]


def test_remove_item_from_someone_elses_cart(client, other_user, user_headers):
    pet = make_pet('Rex')
    theirs = client.post(f'/api/stores/cart/add/{pet.id}', headers=auth_header(other_user)).get_json()
    mine = make_pet('Fido')
    client.post(f'/api/stores/cart/add/{mine.id}', headers=user_headers)
    response = client.delete(f"/api/stores/cart/item/{theirs['items'][0]['id']}", headers=user_headers)
    assert response.status_code == 404
    assert response.get_json()['code'] == 'ERROR_6001'


def test_cart_discount_preview(client, user_headers):
    make_discount('SAVE10', '10')
    response = client.get('/api/stores/cart/discount/validate?code=SAVE10&total=100', headers=user_headers)
    assert response.status_code == 200
    assert response.get_json() == {'code': 'SAVE10', 'percentage': 10.0, 'discountAmount': 10.0, 'newTotal': 90.0}


def test_cart_discount_preview_rounds_half_up(client, user_headers):
    make_discount('ODD', '12.5')
    body = client.get('/api/stores/cart/discount/validate?code=ODD&total=19.99', headers=user_headers).get_json()
    # 19.99 * 12.5% = 2.49875
    assert body['discountAmount'] == 2.5
    assert body['newTotal'] == 17.49


def test_cart_discount_preview_invalid_code(client, user_headers):
    response = client.get('/api/stores/cart/discount/validate?code=NOPE&total=100', headers=user_headers)
    assert response.status_code == 400
    assert response.get_json()['code'] == 'ERROR_5000'


@pytest.mark.parametrize('total', ['NaN', 'Infinity', '-Infinity', '1e8', '-5'])
def test_cart_discount_preview_rejects_bad_totals(client, user_headers, total):
    make_discount('SAVE10', '10')
    response = client.get(f'/api/stores/cart/discount/validate?code=SAVE10&total={total}', headers=user_headers)
    assert response.status_code == 400
    assert response.get_json()['code'] == 'ERROR_400'
