import io
import os
from datetime import timedelta

from models import utcnow
from models.product import DEFAULT_PRODUCT_IMAGE
from utils.tokens import TokenService


def png_file(name='photo.png'):
    return (io.BytesIO(b'\x89PNG\r\n\x1a\nfake-image-bytes'), name)


def test_list_paginates_newest_first(client, make_product):
    ids = [make_product() for _ in range(5)]
    r = client.get('/api/products?limit=2&page=2')
    body = r.get_json()
    assert [p['id'] for p in body['data']] == [ids[2], ids[1]]
    assert body['pagination'] == {'page': 2, 'limit': 2, 'total': 5, 'pages': 3}


def test_list_filters_by_category_and_search(client, make_product):
    make_product(name='Aloo Bhujia', category='Namkeen')
    make_product(name='Moong Dal', category='Namkeen')
    make_product(name='Besan Ladoo', category='Sweets')

    names = [p['name'] for p in client.get('/api/products?category=Namkeen').get_json()['data']]
    assert sorted(names) == ['Aloo Bhujia', 'Moong Dal']

    names = [p['name'] for p in client.get('/api/products?search=bhujia').get_json()['data']]
    assert names == ['Aloo Bhujia']


def test_list_hides_inactive(client, make_product):
    make_product(is_active=False)
    assert client.get('/api/products').get_json()['data'] == []


def test_distinct_categories(client, make_product):
    make_product(category='Sweets')
    make_product(category='Namkeen')
    make_product(category='Namkeen')
    make_product(category='Retired', is_active=False)
    assert client.get('/api/products/categories').get_json()['data'] == ['Namkeen', 'Sweets']


def test_inactive_product_visible_to_admin_only(client, auth_headers, make_product):
    product_id = make_product(is_active=False)
    assert client.get(f'/api/products/{product_id}').status_code == 404
    r = client.get(f'/api/products/{product_id}', headers=auth_headers)
    assert r.status_code == 200
    assert r.get_json()['data']['isActive'] is False


def test_admin_list_includes_inactive(client, auth_headers, make_product):
    make_product(is_active=False)
    make_product()
    r = client.get('/api/products/all', headers=auth_headers)
    assert r.get_json()['pagination']['total'] == 2


def test_create_from_json(client, auth_headers):
    r = client.post('/api/products', headers=auth_headers, json={
        'name': 'Aloo Bhujia',
        'description': 'Thin potato sev',
        'category': 'Namkeen',
        'price': 140,
        'isBestSeller': True,
    })
    assert r.status_code == 201
    data = r.get_json()['data']
    assert data['price'] == 140.0
    assert data['stock'] == 100
    assert data['weight'] == '200g'
    assert data['isBestSeller'] is True
    assert data['image'] == DEFAULT_PRODUCT_IMAGE


def test_create_with_uploaded_images(client, app, auth_headers):
    r = client.post('/api/products', headers=auth_headers, content_type='multipart/form-data', data={
        'name': 'Moong Dal',
        'description': 'Fried lentils',
        'category': 'Namkeen',
        'price': '100',
        'isPalmOilFree': 'true',
        'images': [png_file('one.png'), png_file('two.png')],
    })
    assert r.status_code == 201
    data = r.get_json()['data']
    assert len(data['images']) == 2
    assert data['image'] == data['images'][0]
    assert data['image'].startswith('/uploads/products/product-')
    assert data['isPalmOilFree'] is True
    saved = os.path.join(app.config['UPLOAD_FOLDER'], data['image'][len('/uploads/'):])
    assert os.path.exists(saved)
    assert client.get(data['image']).status_code == 200


def test_create_rejects_base64_image(client, auth_headers):
    r = client.post('/api/products', headers=auth_headers, json={
        'name': 'Gajak', 'description': 'Sesame brittle', 'category': 'Sweets',
        'image': 'data:image/png;base64,AAAA',
    })
    assert r.status_code == 400
    assert r.get_json()['details'][0]['field'] == 'image'


def test_create_rejects_non_image_upload(client, auth_headers):
    r = client.post('/api/products', headers=auth_headers, content_type='multipart/form-data', data={
        'name': 'Gajak', 'description': 'Sesame brittle', 'category': 'Sweets',
        'images': [(io.BytesIO(b'#!/bin/sh'), 'run.sh')],
    })
    assert r.status_code == 400


def test_create_requires_admin(client):
    r = client.post('/api/products', json={'name': 'Gajak', 'description': 'Brittle', 'category': 'Sweets'})
    assert r.status_code == 401


def test_update_replaces_removed_images(client, app, auth_headers):
    created = client.post('/api/products', headers=auth_headers, content_type='multipart/form-data', data={
        'name': 'Chakli', 'description': 'Spiral snack', 'category': 'Chips & Crackers',
        'images': [png_file('a.png'), png_file('b.png')],
    }).get_json()['data']
    keep, drop = created['images']

    r = client.put(f"/api/products/{created['id']}", headers=auth_headers, content_type='multipart/form-data', data={
        'price': '130',
        'existingImages': f'["{keep}"]',
        'images': [png_file('c.png')],
    })
    assert r.status_code == 200
    data = r.get_json()['data']
    assert data['price'] == 130.0
    assert data['images'][0] == keep
    assert len(data['images']) == 2
    assert drop not in data['images']
    dropped_path = os.path.join(app.config['UPLOAD_FOLDER'], drop[len('/uploads/'):])
    assert not os.path.exists(dropped_path)


def test_partial_update_keeps_other_fields(client, auth_headers, make_product):
    product_id = make_product(name='Sev Mamra', weight='300g')
    r = client.put(f'/api/products/{product_id}', headers=auth_headers, json={'stock': 5})
    data = r.get_json()['data']
    assert data['stock'] == 5
    assert data['weight'] == '300g'
    assert data['name'] == 'Sev Mamra'


def test_delete_is_soft(client, auth_headers, make_product):
    product_id = make_product()
    r = client.delete(f'/api/products/{product_id}', headers=auth_headers)
    assert r.status_code == 200
    assert client.get(f'/api/products/{product_id}').status_code == 404
    assert client.get(f'/api/products/{product_id}', headers=auth_headers).status_code == 200


def test_bad_token_on_optional_auth_route_is_anonymous(client, make_product):
    active = make_product()
    hidden = make_product(is_active=False)
    headers = {'Authorization': 'Bearer garbage'}
    assert client.get(f'/api/products/{active}', headers=headers).status_code == 200
    assert client.get(f'/api/products/{hidden}', headers=headers).status_code == 404


def test_expired_admin_token_on_optional_auth_route(client, app, admin_account, make_product):
    stale = TokenService(app.config['JWT_SECRET'], clock=lambda: utcnow() - timedelta(hours=25))
    token = stale.issue(admin_account['id'], admin_account['email'], 'admin')
    hidden = make_product(is_active=False)
    r = client.get(f'/api/products/{hidden}', headers={'Authorization': f'Bearer {token}'})
    assert r.status_code == 404
