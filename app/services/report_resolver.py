# app/services/report_resolver.py
"""
Resolvedor de denúncias

Aplica a decisão do administrador a uma denúncia e propaga o efeito para as
demais denúncias pendentes do mesmo post, tudo em uma única transação.
"""
import logging

from app.models import Comment, Like, Post, Report, ReportStatus
from app.services.exceptions import InvalidArgument, NotFound
from app.services.moderation import ModerationContext, ResolveAction, ResolveOutcome
from app.services.transaction import transaction

logger = logging.getLogger(__name__)


class ReportResolver:
    """Aprova (remove o conteúdo) ou rejeita denúncias"""

    @staticmethod
    def resolve(context: ModerationContext, report_id, action: ResolveAction) -> ResolveOutcome:
        """
        Resolve uma denúncia

        Args:
            context: capacidade do chamador (precisa ser admin)
            report_id: ID da denúncia
            action: ResolveAction.APPROVE ou ResolveAction.REJECT

        Returns:
            ResolveOutcome: resultado da resolução

        Raises:
            Unauthorized, InvalidArgument, NotFound, StorageFailure
        """
        context.require_admin()

        if not isinstance(action, ResolveAction):
            raise InvalidArgument('Invalid action. Must be "approve" or "reject"')

        with transaction('Failed to process report') as session:
            report = ReportResolver._lock_report(session, report_id)

            if report is None:
                raise NotFound('Report')

            if action is ResolveAction.REJECT:
                if report.status != ReportStatus.PENDING:
                    # Já rejeitada, ou aprovada com o conteúdo removido
                    outcome = ResolveOutcome.ALREADY_RESOLVED
                else:
                    report.status = ReportStatus.REJECTED
                    outcome = ResolveOutcome.REJECTED

            elif report.post_id is None:
                # Post já removido por uma resolução anterior
                report.status = ReportStatus.APPROVED
                outcome = ResolveOutcome.CONTENT_ALREADY_REMOVED

            else:
                # Vale também para denúncia rejeitada antes: aprovar remove o post
                report.status = ReportStatus.APPROVED
                session.flush()
                outcome = ReportResolver._remove_post(session, report.post_id)

        logger.info(
            f"Denúncia {report_id} resolvida por {context.actor_id}: "
            f"{action.value} -> {outcome.value}"
        )
        return outcome

    @staticmethod
    def _lock_report(session, report_id):
        """Trava o post da denúncia e depois a própria denúncia, sempre nessa ordem

        Aprovações concorrentes de denúncias do mesmo post ficam serializadas no
        post, em vez de cada uma travar a sua denúncia e esperar pela outra.
        """
        post_id = session.query(Report.post_id).filter(Report.id == report_id).scalar()
        if post_id is not None:
            session.query(Post.id).filter(Post.id == post_id).with_for_update().first()

        return session.query(Report).filter(
            Report.id == report_id
        ).with_for_update().populate_existing().first()

    @staticmethod
    def _remove_post(session, post_id):
        """Encerra as denúncias pendentes do post e remove o post com likes e comentários"""
        siblings = session.query(Report).filter(
            Report.post_id == post_id,
            Report.status == ReportStatus.PENDING
        ).update({Report.status: ReportStatus.APPROVED}, synchronize_session='evaluate')

        # Denúncias ficam como histórico, desvinculadas do post
        session.query(Report).filter(
            Report.post_id == post_id
        ).update({Report.post_id: None}, synchronize_session='evaluate')

        session.query(Like).filter(Like.post_id == post_id).delete(synchronize_session='evaluate')
        session.query(Comment).filter(Comment.post_id == post_id).delete(synchronize_session='evaluate')

        deleted = session.query(Post).filter(Post.id == post_id).delete(synchronize_session='evaluate')

        if not deleted:
            logger.info(f"Post {post_id} já havia sido removido")
            return ResolveOutcome.CONTENT_ALREADY_REMOVED

        logger.info(f"Post {post_id} removido; {siblings} outras denúncias encerradas")
        return ResolveOutcome.REMOVED
