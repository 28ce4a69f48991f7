"""Shared fixtures for lease ledger tests."""
from datetime import date

import pytest

from lease_ledger.lease_accounting.core.models import FixedPayment, Lease, Scheduled


_DEFAULT_TERMS = FixedPayment(1000.0)


def make_lease(payment_terms=_DEFAULT_TERMS, start=date(2024, 1, 1), end=date(2025, 1, 1), rate=0.06, **kwargs):
    """Lease with sensible defaults: 12 months at 1000/month, 6% discount rate"""
    return Lease(
        name=kwargs.pop('name', 'HQ Office'),
        start_date=start,
        end_date=end,
        discount_rate=rate,
        payment_terms=payment_terms,
        **kwargs
    )


def scheduled(*periods):
    return Scheduled(periods=tuple(periods))


LEASE_PAYLOAD = {
    "name": "HQ Office",
    "start_date": "2024-01-01",
    "end_date": "2025-01-01",
    "monthly_payment": 1000,
    "discount_rate": 0.06,
}


@pytest.fixture
def app(tmp_path):
    from lease_ledger.app import create_app

    app = create_app('testing', {'DATABASE_PATH': tmp_path / 'lease_ledger_test.db'})
    return app


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


def login(client, username='alice', password='s3cret-pass'):
    """Register (once) and log in; returns Authorization headers"""
    client.post('/api/register', json={'username': username, 'password': password})
    response = client.post('/api/login', json={'username': username, 'password': password})
    assert response.status_code == 200, response.get_data(as_text=True)
    return {'Authorization': f"Bearer {response.get_json()['token']}"}


@pytest.fixture
def auth_headers(client):
    return login(client)
