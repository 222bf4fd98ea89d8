# app/services/report_service.py
import logging
from app import db
from app.models import Post, Report, ReportStatus
from app.services.exceptions import InvalidArgument, NotFound
from app.services.transaction import transaction

logger = logging.getLogger(__name__)


class ReportService:
    """Criação de denúncias pelos usuários"""

    @staticmethod
    def submit(reporter, post_id, reason):
        """
        Registra a denúncia de um post

        Regras: motivo não vazio, post existente, não denunciar o próprio post
        e no máximo uma denúncia por (post, usuário), mesmo depois de resolvida.
        """
        if not reason or not isinstance(reason, str) or not reason.strip():
            raise InvalidArgument('A valid reason is required for reporting content')

        post = db.session.get(Post, post_id)
        if post is None:
            raise NotFound('Post')

        if post.author_id == reporter.id:
            raise InvalidArgument('You cannot report your own content')

        existing = Report.query.filter_by(post_id=post_id, reporter_id=reporter.id).first()
        if existing:
            raise InvalidArgument('You have already reported this content')

        with transaction('Failed to report content') as session:
            report = Report(
                post_id=post_id,
                reporter_id=reporter.id,
                reason=reason,
                status=ReportStatus.PENDING,
            )
            session.add(report)

        logger.info(f"Post {post_id} denunciado por {reporter.id} (denúncia {report.id})")
        return report
