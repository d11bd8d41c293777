from datetime import datetime, timedelta

import pytest

from config import ProductionConfig
from utils.rate_limit import check_and_record

START = datetime(2024, 3, 1, 10, 0, 0)
WINDOW = timedelta(minutes=15)


def test_window_slides(app):
    with app.app_context():
        for minute in range(3):
            assert check_and_record('auth', '1.2.3.4', 3, WINDOW, now=START + timedelta(minutes=minute)) == 0

        # oldest request leaves the window 10 minutes later
        assert check_and_record('auth', '1.2.3.4', 3, WINDOW, now=START + timedelta(minutes=5)) == 600
        assert check_and_record('auth', '1.2.3.4', 3, WINDOW, now=START + timedelta(minutes=15, seconds=1)) == 0


def test_scopes_and_clients_are_separate(app):
    with app.app_context():
        for _ in range(2):
            check_and_record('contact', '1.2.3.4', 2, WINDOW, now=START)
        assert check_and_record('contact', '1.2.3.4', 2, WINDOW, now=START) > 0
        assert check_and_record('auth', '1.2.3.4', 2, WINDOW, now=START) == 0
        assert check_and_record('contact', '5.6.7.8', 2, WINDOW, now=START) == 0


@pytest.fixture()
def general_limit(app):
    app.config['GENERAL_RATE_LIMIT_ENABLED'] = True
    app.config['GENERAL_RATE_LIMIT_MAX'] = 3
    return app


def test_general_limit_off_outside_production(client):
    for _ in range(120):
        r = client.get('/api/categories')
    assert r.status_code == 200


def test_production_config_turns_general_limit_on():
    assert ProductionConfig.GENERAL_RATE_LIMIT_ENABLED is True
    assert ProductionConfig.GENERAL_RATE_LIMIT_MAX == 100


def test_general_limit_counts_api_requests(general_limit, client):
    for _ in range(3):
        assert client.get('/api/categories').status_code == 200
    r = client.get('/api/products')
    assert r.status_code == 429
    assert r.get_json()['error'] == 'Too many requests'
    assert int(r.headers['Retry-After']) > 0


def test_general_limit_skips_health_checks(general_limit, client):
    for _ in range(5):
        assert client.get('/api/health').status_code == 200
        assert client.get('/health').status_code == 200
    assert client.get('/api/categories').status_code == 200


def test_general_limit_is_per_ip_and_account(general_limit, client, auth_headers):
    for _ in range(3):
        client.get('/api/categories', environ_base={'REMOTE_ADDR': '10.2.2.2'})
    assert client.get('/api/categories', environ_base={'REMOTE_ADDR': '10.2.2.2'}).status_code == 429
    assert client.get('/api/categories', environ_base={'REMOTE_ADDR': '10.2.2.3'}).status_code == 200
    r = client.get('/api/categories', headers=auth_headers, environ_base={'REMOTE_ADDR': '10.2.2.2'})
    assert r.status_code == 200
