import pytest
from flask_jwt_extended import create_access_token

from votely import create_app
from votely.config import TestingConfig
from votely.extensions import db
from votely.models import Poll, User, Vote


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    counter = {"n": 0}

    def _make_user(username=None, password="StrongPass123"):
        counter["n"] += 1
        username = username or f"user{counter['n']}"
        user = User(email=f"{username}@example.com", username=username)
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        return user

    return _make_user


@pytest.fixture
def auth_headers(app):
    def _auth_headers(user):
        token = create_access_token(identity=str(user.id))
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest.fixture
def owner(make_user):
    return make_user("owner")


@pytest.fixture
def voter(make_user):
    return make_user("voter")


@pytest.fixture
def make_poll(app, owner):
    def _make_poll(question="Favourite colour?", options=("Red", "Green", "Blue"), created_by=None):
        poll = Poll(question=question, options=list(options), created_by=(created_by or owner).id)
        db.session.add(poll)
        db.session.commit()
        return poll

    return _make_poll


@pytest.fixture
def add_vote(app):
    def _add_vote(poll, user, option_index):
        vote = Vote(poll_id=poll.id, voted_by=user.id, option_index=option_index)
        db.session.add(vote)
        db.session.commit()
        return vote

    return _add_vote
