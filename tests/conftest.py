# tests/conftest.py
"""
Fixtures compartilhados para todos os testes
"""
import os
import pytest
from datetime import datetime, timedelta

# Forçar variáveis de ambiente ANTES de importar a app
os.environ['DATABASE_URL'] = 'sqlite:///:memory:'
os.environ['SECRET_KEY'] = 'test-secret-key-for-testing'

from config import Config
from app import create_app, db as _db
from app.models import User, Post, Report, ReportStatus


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SECRET_KEY = 'test-secret-key-for-testing'


# Instante fixo para ordenar denúncias de forma determinística
BASE_TIME = datetime(2026, 1, 10, 12, 0, 0)


@pytest.fixture(scope='function')
def app():
    """Cria a aplicação Flask para testes"""
    return create_app(TestConfig)


@pytest.fixture(scope='function')
def db(app):
    """Cria e limpa o banco de dados para cada teste"""
    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.rollback()
        _db.drop_all()


@pytest.fixture
def client(app, db):
    """Cliente de teste HTTP"""
    with app.test_client() as client:
        with app.app_context():
            yield client


@pytest.fixture
def app_context(app, db):
    """Contexto da aplicação"""
    with app.app_context():
        yield app


def _make_user(db, name, email, password, role=User.ROLE_USER):
    user = User(name=name, email=email, role=role)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def author(db):
    """Autor dos posts denunciados"""
    return _make_user(db, 'Post Author', 'author@test.com', 'AuthorPass123')


@pytest.fixture
def reporter(db):
    return _make_user(db, 'First Reporter', 'reporter@test.com', 'ReporterPass123')


@pytest.fixture
def second_reporter(db):
    return _make_user(db, 'Second Reporter', 'reporter2@test.com', 'ReporterPass123')


@pytest.fixture
def third_reporter(db):
    return _make_user(db, 'Third Reporter', 'reporter3@test.com', 'ReporterPass123')


@pytest.fixture
def admin_user(db):
    """Cria um admin de teste"""
    return _make_user(db, 'Admin User', 'admin@test.com', 'AdminPass123', role=User.ROLE_ADMIN)


@pytest.fixture
def post(db, author):
    """Post de teste"""
    p = Post(
        author_id=author.id,
        title='Hello world',
        content='First post content',
        type='social',
        created_at=BASE_TIME - timedelta(days=1),
    )
    db.session.add(p)
    db.session.commit()
    return p


@pytest.fixture
def other_post(db, author):
    p = Post(
        author_id=author.id,
        content='Another post without title',
        type='professional',
        created_at=BASE_TIME - timedelta(hours=20),
    )
    db.session.add(p)
    db.session.commit()
    return p


def make_report(db, post, reporter, reason='spam', minutes=0, status=ReportStatus.PENDING):
    """Cria uma denúncia com created_at = BASE_TIME + minutos"""
    report = Report(
        post_id=post.id if post is not None else None,
        reporter_id=reporter.id,
        reason=reason,
        status=status,
        created_at=BASE_TIME + timedelta(minutes=minutes),
    )
    db.session.add(report)
    db.session.commit()
    return report


def login(client, email, password):
    """Helper para fazer login nos testes"""
    return client.post('/api/auth/login', json={
        'email': email,
        'password': password,
    })


def logout(client):
    """Helper para fazer logout"""
    return client.post('/api/auth/logout')
