import pytest

from comicvote import create_app
from comicvote.config import TestingConfig
from comicvote.extensions import db as _db
from comicvote.models.vote import Vote

VISITOR_A = '0b7c3f5e-4a41-4c1e-9f6e-2d7a1a9d5c01'
VISITOR_B = '9e2d6b8a-1c3f-4e5d-8a7b-6c5d4e3f2a10'


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def seeded(db):
    """Comic 001 liked by A and B, comic 002 by A."""
    db.session.add_all([
        Vote(comic_id='001', visitor_id=VISITOR_A),
        Vote(comic_id='001', visitor_id=VISITOR_B),
        Vote(comic_id='002', visitor_id=VISITOR_A),
    ])
    db.session.commit()
    return db
