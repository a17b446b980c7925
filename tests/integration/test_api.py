"""
Tests for the Flask API endpoints through the test client.
"""
from dataclasses import replace
from unittest.mock import MagicMock

import jwt
import pytest

from conftest import FakeSource, item
from dealscope.api import create_app
from dealscope.errors import SourceError
from dealscope.search import Aggregator
from dealscope.sources import ApifySource, FlipkartSource, SerpApiSource


def json_response(payload):
    resp = MagicMock()
    resp.json.return_value = payload
    return resp


def make_client(config, sources):
    app = create_app(config, aggregator=Aggregator(sources))
    app.config['TESTING'] = True
    return app.test_client()


class TestSearchEndpoint:
    """Tests for GET /api/search."""

    def test_no_sources_configured(self, client):
        response = client.get('/api/search?q=phone')

        assert response.status_code == 200
        assert response.get_json() == {'query': 'phone', 'results': []}

    @pytest.mark.parametrize('url', ['/api/search', '/api/search?q=', '/api/search?q=%20%20'])
    def test_missing_query(self, client, url):
        response = client.get(url)

        assert response.status_code == 400
        assert response.get_json() == {'error': 'query param q required'}

    def test_failing_source_does_not_fail_request(self, config):
        client = make_client(config, [
            FakeSource('flipkart', [item('flipkart', 'FK phone', '₹1,299.00', 'https://fk/1?aff=x')]),
            FakeSource('ajio', error=SourceError('ajio', 'run crashed')),
            FakeSource('serpapi', [
                item('serpapi', 'Same phone', 999, 'https://fk/1?utm=serp'),
                item('serpapi', 'Cheap phone', 499, 'https://other/2'),
            ]),
        ])

        response = client.get('/api/search?q=phone')

        assert response.status_code == 200
        results = response.get_json()['results']
        assert [(r['source'], r['title'], r['price']) for r in results] == [
            ('serpapi', 'Cheap phone', 499),
            ('flipkart', 'FK phone', 1299),
        ]

    def test_malformed_apify_poll_keeps_other_results(self, config):
        flipkart_session = MagicMock()
        flipkart_session.get.return_value = json_response(
            {'products': [{'title': 'FK phone', 'price': 999, 'url': 'https://fk/1'}]}
        )
        apify_session = MagicMock()
        apify_session.post.return_value = json_response({'data': {'id': 'run-1'}})
        apify_session.get.return_value = json_response({'data': 'not-an-object'})
        config = replace(
            config,
            flipkart_affiliate_id='id',
            flipkart_affiliate_token='token',
            apify_token='apify',
        )
        client = make_client(config, [
            FlipkartSource(config, session=flipkart_session),
            ApifySource(config, session=apify_session, sleep=MagicMock(), max_attempts=2),
            SerpApiSource(config),
        ])

        response = client.get('/api/search?q=phone')

        assert response.status_code == 200
        assert [r['title'] for r in response.get_json()['results']] == ['FK phone']

    def test_unexpected_source_exception_keeps_other_results(self, config):
        client = make_client(config, [
            FakeSource('flipkart', [item('flipkart', 'FK phone', 999, 'https://fk/1')]),
            FakeSource('ajio', error=AttributeError("'str' object has no attribute 'get'")),
        ])

        response = client.get('/api/search?q=phone')

        assert response.status_code == 200
        assert [r['title'] for r in response.get_json()['results']] == ['FK phone']

    def test_search_open_by_default(self, client):
        assert client.get('/api/search?q=tv').status_code == 200

    def test_search_can_require_auth(self, config):
        client = make_client(replace(config, require_auth_for_search=True), [])

        assert client.get('/api/search?q=tv').status_code == 401

        token = client.post('/api/register', json={'email': 'a@example.com', 'password': 'pw'}).get_json()['token']
        response = client.get('/api/search?q=tv', headers={'Authorization': f'Bearer {token}'})
        assert response.status_code == 200
        assert response.get_json() == {'query': 'tv', 'results': []}


class TestAuthEndpoints:
    """Tests for register, login and the bearer gate."""

    def test_register_and_duplicate(self, client):
        body = {'name': 'Asha', 'email': 'asha@example.com', 'password': 'pw'}

        first = client.post('/api/register', json=body)
        second = client.post('/api/register', json=body)

        assert first.status_code == 200
        data = first.get_json()
        assert data['user']['name'] == 'Asha'
        assert data['user']['email'] == 'asha@example.com'
        assert 'passwordHash' not in data['user']
        assert second.status_code == 400
        assert second.get_json() == {'error': 'email already in use'}

    def test_duplicate_email_is_case_insensitive(self, client):
        client.post('/api/register', json={'email': 'Case@Example.com', 'password': 'pw'})

        response = client.post('/api/register', json={'email': 'case@example.com ', 'password': 'pw'})

        assert response.status_code == 400

    @pytest.mark.parametrize('body', [
        {'email': 'a@example.com'},
        {'password': 'pw'},
        {'email': '', 'password': 'pw'},
        {},
    ])
    def test_register_requires_email_and_password(self, client, body):
        response = client.post('/api/register', json=body)

        assert response.status_code == 400
        assert response.get_json() == {'error': 'email and password required'}

    def test_register_without_json_body(self, client):
        response = client.post('/api/register', data='nope', content_type='text/plain')

        assert response.status_code == 400

    def test_login(self, client):
        registered = client.post('/api/register', json={'email': 'b@example.com', 'password': 'pw'}).get_json()

        ok = client.post('/api/login', json={'email': 'b@example.com', 'password': 'pw'})
        wrong = client.post('/api/login', json={'email': 'b@example.com', 'password': 'bad'})
        unknown = client.post('/api/login', json={'email': 'nobody@example.com', 'password': 'pw'})
        missing = client.post('/api/login', json={})

        assert ok.status_code == 200
        assert ok.get_json()['user'] == registered['user']
        for response in (wrong, unknown, missing):
            assert response.status_code == 401
            assert response.get_json() == {'error': 'invalid credentials'}

    def test_register_token_accepted_by_gate(self, client, config):
        data = client.post('/api/register', json={'email': 'c@example.com', 'password': 'pw'}).get_json()

        response = client.get('/api/me', headers={'Authorization': f"Bearer {data['token']}"})

        assert response.status_code == 200
        assert response.get_json()['user']['id'] == data['user']['id']
        assert jwt.decode(data['token'], config.jwt_secret, algorithms=['HS256'])['id'] == data['user']['id']

    @pytest.mark.parametrize('header, message', [
        (None, 'missing auth token'),
        ('Token abc', 'invalid auth header'),
        ('Bearer', 'invalid auth header'),
        ('Bearer not-a-jwt', 'invalid token'),
    ])
    def test_gate_rejections(self, client, header, message):
        headers = {'Authorization': header} if header else {}

        response = client.get('/api/me', headers=headers)

        assert response.status_code == 401
        assert response.get_json() == {'error': message}

    def test_token_signed_with_other_secret_rejected(self, client):
        token = jwt.encode({'id': 1, 'email': 'x@example.com'}, 'someone-else', algorithm='HS256')

        response = client.get('/api/me', headers={'Authorization': f'Bearer {token}'})

        assert response.status_code == 401


class TestFrontend:
    """Tests for static files and the catch-all entry page."""

    def test_health(self, client):
        assert client.get('/health').get_json()['status'] == 'healthy'

    def test_root_serves_entry_page(self, client):
        response = client.get('/')

        assert response.status_code == 200
        assert b'card-template' in response.data

    def test_static_file(self, client):
        response = client.get('/app.js')

        assert response.status_code == 200
        assert b'searchProducts' in response.data

    def test_unknown_route_falls_back_to_entry_page(self, client):
        response = client.get('/deals/some/client/route')

        assert response.status_code == 200
        assert b'card-template' in response.data
