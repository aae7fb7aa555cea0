import os
import sys
import pytest

# Ensure the backend root (containing the `weighin` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from weighin import create_app, db


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LEADERBOARD_LIMIT = 10
    OPENAI_API_KEY = 'test-openai-key'
    OPENAI_API_URL = 'https://completions.test/v1/chat/completions'
    OPENAI_MODEL = 'gpt-3.5-turbo'
    OPENAI_MAX_TOKENS = 10
    PIXABAY_API_KEY = 'test-pixabay-key'
    PIXABAY_API_URL = 'https://images.test/api/'
    PIXABAY_PER_PAGE = 5
    PROVIDER_TIMEOUT_SEC = 0


class FakeCompletionClient:
    """Returns a canned reply, or raises the given error."""

    def __init__(self, reply='75', error=None):
        self.reply = reply
        self.error = error
        self.prompts = []

    def complete(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


class FakeImageSearchClient:
    def __init__(self, hits=None, error=None):
        self.hits = hits if hits is not None else []
        self.error = error
        self.queries = []

    def search(self, query, per_page=5):
        self.queries.append((query, per_page))
        if self.error is not None:
            raise self.error
        return list(self.hits)


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import weighin.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def leaderboard_service(flask_app):
    return flask_app.extensions['weighin']['leaderboard']


@pytest.fixture()
def fake_completion(flask_app):
    """Swap the weight service's provider for a FakeCompletionClient."""
    from weighin.services import WeightService
    fake = FakeCompletionClient()
    flask_app.extensions['weighin']['weight'] = WeightService(fake)
    return fake


@pytest.fixture()
def fake_images(flask_app):
    from weighin.services import ImageService
    fake = FakeImageSearchClient()
    flask_app.extensions['weighin']['images'] = ImageService(fake, per_page=5)
    return fake
