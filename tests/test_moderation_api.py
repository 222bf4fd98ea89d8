# tests/test_moderation_api.py
"""
Testes da API de moderação (fila e resolução de denúncias)
"""
import json
import pytest
from unittest.mock import patch

from app.models import Post, Report, ReportStatus
from sqlalchemy.exc import OperationalError
from app.services.report_aggregator import ReportAggregator
from tests.conftest import login, make_report


@pytest.fixture
def reported(db, post, reporter, second_reporter):
    r1 = make_report(db, post, reporter, 'spam', minutes=1)
    r2 = make_report(db, post, second_reporter, 'abuse', minutes=2)
    return post, r1, r2


class TestModerationAccess:
    """Controle de acesso à API de moderação"""

    def test_queue_anonymous_forbidden(self, client):
        resp = client.get('/api/admin/reported-content')
        assert resp.status_code == 403
        assert resp.get_json()['error'] == 'Unauthorized'

    def test_queue_regular_user_forbidden(self, client, reporter):
        login(client, 'reporter@test.com', 'ReporterPass123')
        resp = client.get('/api/admin/reported-content')
        assert resp.status_code == 403

    def test_resolve_regular_user_forbidden(self, client, db, reported):
        _, r1, _ = reported
        login(client, 'reporter@test.com', 'ReporterPass123')
        resp = client.patch(f'/api/admin/reported-content/{r1.id}', json={'action': 'approve'})
        assert resp.status_code == 403
        assert db.session.get(Report, r1.id).status == ReportStatus.PENDING


class TestModerationQueue:

    def test_empty_queue(self, client, admin_user):
        login(client, 'admin@test.com', 'AdminPass123')
        resp = client.get('/api/admin/reported-content')
        assert resp.status_code == 200
        assert resp.get_json() == []

    def test_queue_aggregates_reports(self, client, admin_user, reported, author):
        post, r1, r2 = reported
        login(client, 'admin@test.com', 'AdminPass123')

        resp = client.get('/api/admin/reported-content')
        data = resp.get_json()

        assert resp.status_code == 200
        assert len(data) == 1
        entry = data[0]
        assert entry['id'] == post.id
        assert entry['title'] == 'Hello world'
        assert entry['reportCount'] == 2
        assert entry['reportReason'] == 'abuse'
        assert entry['reportId'] == r2.id
        assert entry['lastReportDate'] == r2.created_at.isoformat()
        assert entry['author']['name'] == 'Post Author'

    def test_queue_storage_failure(self, client, admin_user):
        login(client, 'admin@test.com', 'AdminPass123')
        with patch.object(ReportAggregator, 'pending_reports',
                          side_effect=OperationalError('SELECT', {}, Exception('connection lost'))):
            resp = client.get('/api/admin/reported-content')
        assert resp.status_code == 500
        assert resp.get_json()['error'] == 'Failed to fetch reported content'


class TestResolveEndpoint:

    def test_reject(self, client, db, admin_user, reported):
        post, r1, r2 = reported
        login(client, 'admin@test.com', 'AdminPass123')

        resp = client.patch(f'/api/admin/reported-content/{r1.id}', json={'action': 'reject'})

        assert resp.status_code == 200
        data = resp.get_json()
        assert data['success'] is True
        assert data['message'] == 'Report rejected'
        assert db.session.get(Report, r1.id).status == ReportStatus.REJECTED
        assert db.session.get(Report, r2.id).status == ReportStatus.PENDING

    def test_approve_removes_content(self, client, db, admin_user, reported):
        post, r1, r2 = reported
        post_id = post.id
        login(client, 'admin@test.com', 'AdminPass123')

        resp = client.patch(f'/api/admin/reported-content/{r1.id}', json={'action': 'approve'})

        assert resp.status_code == 200
        assert resp.get_json()['message'] == 'Report approved and content removed'
        assert db.session.get(Post, post_id) is None
        assert db.session.get(Report, r2.id).status == ReportStatus.APPROVED

        queue = client.get('/api/admin/reported-content').get_json()
        assert queue == []

    def test_missing_action_defaults_to_approve(self, client, db, admin_user, reported):
        post, r1, _ = reported
        post_id = post.id
        login(client, 'admin@test.com', 'AdminPass123')

        resp = client.patch(f'/api/admin/reported-content/{r1.id}')

        assert resp.status_code == 200
        assert resp.get_json()['outcome'] == 'removed'
        assert db.session.get(Post, post_id) is None

    def test_empty_json_defaults_to_approve(self, client, admin_user, reported):
        _, r1, _ = reported
        login(client, 'admin@test.com', 'AdminPass123')

        resp = client.patch(f'/api/admin/reported-content/{r1.id}', json={})
        assert resp.get_json()['outcome'] == 'removed'

    def test_second_approval_reports_already_removed(self, client, admin_user, reported):
        _, r1, _ = reported
        login(client, 'admin@test.com', 'AdminPass123')

        client.patch(f'/api/admin/reported-content/{r1.id}', json={'action': 'approve'})
        resp = client.patch(f'/api/admin/reported-content/{r1.id}', json={'action': 'approve'})

        assert resp.status_code == 200
        data = resp.get_json()
        assert data['success'] is True
        assert data['message'] == 'Report approved but post not found'

    def test_approve_after_reject_removes_content(self, client, db, admin_user, reported):
        post, r1, _ = reported
        post_id = post.id
        login(client, 'admin@test.com', 'AdminPass123')

        client.patch(f'/api/admin/reported-content/{r1.id}', json={'action': 'reject'})
        resp = client.patch(f'/api/admin/reported-content/{r1.id}', json={'action': 'approve'})

        assert resp.get_json()['outcome'] == 'removed'
        assert db.session.get(Post, post_id) is None
        assert db.session.get(Report, r1.id).status == ReportStatus.APPROVED

    def test_invalid_action(self, client, db, admin_user, reported):
        post, r1, _ = reported
        login(client, 'admin@test.com', 'AdminPass123')

        resp = client.patch(f'/api/admin/reported-content/{r1.id}', json={'action': 'invalid'})

        assert resp.status_code == 400
        assert 'Invalid action' in resp.get_json()['error']
        assert db.session.get(Report, r1.id).status == ReportStatus.PENDING
        assert db.session.get(Post, post.id) is not None

    def test_report_not_found(self, client, admin_user):
        login(client, 'admin@test.com', 'AdminPass123')
        resp = client.patch('/api/admin/reported-content/9999', json={'action': 'reject'})
        assert resp.status_code == 404
        assert resp.get_json()['error'] == 'Report not found'

    def test_invalid_action_checked_before_lookup(self, client, admin_user):
        login(client, 'admin@test.com', 'AdminPass123')
        resp = client.patch('/api/admin/reported-content/9999', json={'action': 'delete'})
        assert resp.status_code == 400

    def test_non_json_body_defaults_to_approve(self, client, admin_user, reported):
        _, r1, _ = reported
        login(client, 'admin@test.com', 'AdminPass123')

        resp = client.patch(f'/api/admin/reported-content/{r1.id}',
                            data='not json', content_type='text/plain')
        assert resp.status_code == 200
        assert json.loads(resp.data)['outcome'] == 'removed'
