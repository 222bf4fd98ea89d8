# tests/test_auth.py
"""
Testes das rotas de autenticação
"""
from app.models import User
from tests.conftest import login, logout


class TestLogin:
    """Testes de login"""

    def test_login_success(self, client, reporter):
        resp = login(client, 'reporter@test.com', 'ReporterPass123')
        assert resp.status_code == 200
        data = resp.get_json()
        assert data['email'] == 'reporter@test.com'
        assert 'password_hash' not in data

    def test_login_is_case_insensitive_on_email(self, client, reporter):
        resp = login(client, '  Reporter@Test.com ', 'ReporterPass123')
        assert resp.status_code == 200

    def test_login_wrong_password(self, client, reporter):
        resp = login(client, 'reporter@test.com', 'WrongPass1')
        assert resp.status_code == 401
        assert resp.get_json()['error'] == 'Invalid email or password'

    def test_login_nonexistent_email(self, client, db):
        resp = login(client, 'nobody@test.com', 'Whatever1')
        assert resp.status_code == 401

    def test_login_empty_body(self, client, db):
        resp = client.post('/api/auth/login')
        assert resp.status_code == 401

    def test_login_non_string_fields(self, client, reporter):
        resp = client.post('/api/auth/login', json={'email': 42, 'password': 'x'})
        assert resp.status_code == 400
        assert resp.get_json()['error'] == 'Invalid email'

    def test_login_banned(self, client, db, reporter):
        reporter.is_banned = True
        db.session.commit()

        resp = login(client, 'reporter@test.com', 'ReporterPass123')
        assert resp.status_code == 403


class TestRegister:
    """Testes de registro"""

    def test_register_success(self, client, db):
        resp = client.post('/api/auth/register', json={
            'name': 'New User',
            'email': 'NewUser@test.com',
            'password': 'secret1',
        })

        assert resp.status_code == 201
        data = resp.get_json()
        assert data['email'] == 'newuser@test.com'
        assert data['role'] == User.ROLE_USER

        user = User.query.filter_by(email='newuser@test.com').first()
        assert user.check_password('secret1')

    def test_register_logs_in(self, client, db):
        client.post('/api/auth/register', json={
            'name': 'New User', 'email': 'new@test.com', 'password': 'secret1',
        })
        resp = client.get('/api/auth/me')
        assert resp.status_code == 200
        assert resp.get_json()['email'] == 'new@test.com'

    def test_register_duplicate_email(self, client, reporter):
        resp = client.post('/api/auth/register', json={
            'name': 'Dup', 'email': 'reporter@test.com', 'password': 'secret1',
        })
        assert resp.status_code == 400
        assert resp.get_json()['error'] == 'Email already registered'

    def test_register_short_password(self, client, db):
        resp = client.post('/api/auth/register', json={
            'name': 'Short', 'email': 'short@test.com', 'password': '123',
        })
        assert resp.status_code == 400
        assert User.query.count() == 0

    def test_register_missing_name(self, client, db):
        resp = client.post('/api/auth/register', json={
            'email': 'noname@test.com', 'password': 'secret1',
        })
        assert resp.status_code == 400

    def test_register_non_string_fields(self, client, db):
        for body in (
            {'name': 123, 'email': 'a@test.com', 'password': 'secret1'},
            {'name': 'A', 'email': ['a@test.com'], 'password': 'secret1'},
            {'name': 'A', 'email': 'a@test.com', 'password': 123456},
        ):
            resp = client.post('/api/auth/register', json=body)
            assert resp.status_code == 400
        assert User.query.count() == 0


class TestSession:

    def test_me_requires_login(self, client, db):
        resp = client.get('/api/auth/me')
        assert resp.status_code == 401
        assert resp.get_json()['error'] == 'Authentication required'

    def test_me_returns_current_user(self, client, reporter):
        login(client, 'reporter@test.com', 'ReporterPass123')
        resp = client.get('/api/auth/me')
        assert resp.get_json()['id'] == reporter.id

    def test_logout(self, client, reporter):
        login(client, 'reporter@test.com', 'ReporterPass123')
        assert logout(client).get_json() == {'success': True}
        assert client.get('/api/auth/me').status_code == 401
