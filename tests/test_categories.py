from petstore import db
from petstore.models import Category

from conftest import make_category, make_pet


def test_list_categories_is_public(client):
    make_category('Dogs')
    make_category('Cats')
    response = client.get('/api/categories')
    assert response.status_code == 200
    assert [c['name'] for c in response.get_json()] == ['Dogs', 'Cats']


def test_admin_creates_category(client, admin_headers):
    response = client.post('/api/categories', headers=admin_headers, json={'name': '  Birds '})
    assert response.status_code == 201
    assert response.get_json()['name'] == 'Birds'


def test_user_cannot_create_category(client, user_headers):
    response = client.post('/api/categories', headers=user_headers, json={'name': 'Birds'})
    assert response.status_code == 403


def test_create_category_requires_name(client, admin_headers):
    response = client.post('/api/categories', headers=admin_headers, json={'name': ' '})
    assert response.status_code == 400
    assert response.get_json()['code'] == 'ERROR_3000'


def test_duplicate_category_conflicts(client, admin_headers):
    make_category('Dogs')
    response = client.post('/api/categories', headers=admin_headers, json={'name': 'dogs'})
    assert response.status_code == 409
    assert response.get_json()['code'] == 'ERROR_3003'


def test_update_category(client, admin_headers):
    category = make_category('Dogz')
    response = client.put(f'/api/categories/{category.id}', headers=admin_headers, json={'name': 'Dogs'})
    assert response.status_code == 200
    assert db.session.get(Category, category.id).name == 'Dogs'


def test_rename_to_existing_name_conflicts(client, admin_headers):
    make_category('Dogs')
    cats = make_category('Cats')
    response = client.put(f'/api/categories/{cats.id}', headers=admin_headers, json={'name': 'DOGS'})
    assert response.status_code == 409


def test_get_missing_category(client):
    response = client.get('/api/categories/77')
    assert response.status_code == 404
    assert response.get_json()['code'] == 'ERROR_3001'


def test_delete_unused_category(client, admin_headers):
    category = make_category('Fish')
    response = client.delete(f'/api/categories/{category.id}', headers=admin_headers)
    assert response.status_code == 200
    assert db.session.get(Category, category.id) is None


def test_delete_category_in_use(client, admin_headers):
    dogs = make_category('Dogs')
    make_pet('Rex', category=dogs)
    make_pet('Fido', category=dogs)
    response = client.delete(f'/api/categories/{dogs.id}', headers=admin_headers)
    assert response.status_code == 409
    body = response.get_json()
    assert body['code'] == 'ERROR_3002'
    assert '2 pet(s)' in body['message']
    assert f"Cannot delete category 'Dogs' (ID: {dogs.id})" in body['message']
    assert db.session.get(Category, dogs.id) is not None
