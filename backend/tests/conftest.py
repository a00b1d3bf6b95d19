"""Shared fixtures: an app on in-memory SQLite, users, tokens and pages."""

import pytest
from flask_jwt_extended import create_access_token

from chemistry import create_app
from chemistry.extensions import db
from chemistry.models.user import User
from chemistry.application.cms.create_page import create_page
from chemistry.application.cms.publish_page import publish_page


@pytest.fixture
def app():
    app = create_app("testing")

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
    def _make_user(email="editor@example.com", role="editor", password="secret-password", active=True):
        user = User()
        user.email = email
        user.role = role
        user.is_active = active
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        return user

    return _make_user


@pytest.fixture
def auth_headers(app):
    def _auth_headers(user):
        token = create_access_token(identity=user.id, additional_claims={"role": user.role})
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest.fixture
def editor(make_user):
    return make_user()


@pytest.fixture
def make_page(app):
    """Create a draft page; ``parent`` may be a Page."""

    def _make_page(slug, title=None, parent=None, **data):
        data.setdefault("title", title or slug.replace("-", " ").title())
        data["slug"] = slug
        if parent is not None:
            data["parent_id"] = parent.id
        return create_page(actor_id=None, data=data)

    return _make_page


@pytest.fixture
def publish(app):
    def _publish(page, **overrides):
        return publish_page(page_id=page.id, overrides=overrides or None)

    return _publish
