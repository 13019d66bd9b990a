import pytest

from comicvote.config import TestingConfig
from comicvote import create_app
from comicvote.models.vote import Vote
from comicvote.services import vote_service

from .conftest import VISITOR_A


def use_visitor(client, visitor_id):
    client.set_cookie('visitorId', visitor_id)


def test_get_requires_comic_param(client):
    response = client.get('/api/vote')
    assert response.status_code == 400
    assert 'error' in response.get_json()


def test_get_with_empty_comic_param(client):
    response = client.get('/api/vote?comic=')
    assert response.status_code == 400
    assert 'error' in response.get_json()


def test_get_returns_counts_in_request_order(seeded, client):
    use_visitor(client, VISITOR_A)
    response = client.get('/api/vote?comic=003,001,002')
    assert response.status_code == 200
    assert response.get_json() == {'result': [
        {'comicId': '003', 'votes': 0, 'userVoted': False},
        {'comicId': '001', 'votes': 2, 'userVoted': True},
        {'comicId': '002', 'votes': 1, 'userVoted': True},
    ]}


def test_new_visitor_gets_a_cookie(seeded, client):
    response = client.get('/api/vote?comic=001')
    assert response.get_json()['result'][0]['userVoted'] is False

    set_cookie = response.headers.get('Set-Cookie')
    assert set_cookie.startswith('visitorId=')
    assert 'HttpOnly' in set_cookie
    assert 'SameSite=Lax' in set_cookie
    assert 'Path=/' in set_cookie
    assert 'Max-Age=31536000' in set_cookie


def test_known_visitor_is_not_reassigned(client):
    use_visitor(client, VISITOR_A)
    response = client.get('/api/vote?comic=001')
    assert response.headers.get('Set-Cookie') is None


def test_cookie_is_secure_outside_tests():
    class SecureCookieConfig(TestingConfig):
        VISITOR_COOKIE_SECURE = True

    app = create_app(SecureCookieConfig)
    response = app.test_client().get('/api/vote?comic=001')
    assert 'Secure' in response.headers.get('Set-Cookie')


def test_post_toggles_vote(seeded, client):
    use_visitor(client, VISITOR_A)

    response = client.post('/api/vote', json={'comicId': '001'})
    assert response.status_code == 200
    assert response.get_json() == {'comicId': '001', 'count': 1, 'voted': False}

    response = client.post('/api/vote', json={'comicId': '001'})
    assert response.get_json() == {'comicId': '001', 'count': 2, 'voted': True}


def test_first_post_assigns_visitor_and_counts_the_vote(client):
    response = client.post('/api/vote', json={'comicId': '007'})
    assert response.status_code == 200
    assert response.get_json() == {'comicId': '007', 'count': 1, 'voted': True}

    # the cookie is sent back, so the second click undoes the first
    response = client.post('/api/vote', json={'comicId': '007'})
    assert response.get_json() == {'comicId': '007', 'count': 0, 'voted': False}


@pytest.mark.parametrize('body', [
    {},
    {'comicId': ''},
    {'comicId': 1},
    {'comicId': None},
    {'comicId': ['001']},
    {'comicId': '001', 'visitorId': 'someone-else'},
    ['001'],
])
def test_post_rejects_malformed_body(client, body):
    response = client.post('/api/vote', json=body)
    assert response.status_code == 400
    assert 'error' in response.get_json()


def test_post_rejects_invalid_json(client):
    response = client.post('/api/vote', data='{not json', content_type='application/json')
    assert response.status_code == 400
    assert response.get_json() == {'error': 'Invalid JSON body'}


def test_post_store_failure_is_500(seeded, client, monkeypatch):
    use_visitor(client, VISITOR_A)
    monkeypatch.setattr(vote_service, 'getVote', lambda comic_id, visitor_id: None)

    response = client.post('/api/vote', json={'comicId': '001'})
    assert response.status_code == 500
    assert response.get_json() == {'error': 'Internal server error'}
    assert Vote.query.filter_by(comic_id='001').count() == 2


def test_health(client):
    assert client.get('/health').get_json() == {'status': 'ok'}
