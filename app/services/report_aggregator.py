# app/services/report_aggregator.py
"""
Agregador da fila de moderação

Colapsa as denúncias PENDING de cada post em uma única linha da fila,
com a contagem de denúncias e o motivo/data da denúncia mais recente.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import joinedload

from app.models import Post, Report, ReportStatus
from app.services.exceptions import StorageFailure
from app.services.moderation import ModerationContext

logger = logging.getLogger(__name__)

UNTITLED_POST = 'Untitled Post'


@dataclass
class ReportQueueEntry:
    """Linha da fila de moderação (read-model, não persistido)"""
    post_id: int
    title: str
    content: str
    type: str
    image_url: Optional[str]
    created_at: datetime
    author: dict
    report_count: int
    report_reason: str
    last_report_date: datetime
    report_id: int

    @classmethod
    def from_report(cls, report):
        post = report.post
        return cls(
            post_id=post.id,
            title=post.title or UNTITLED_POST,
            content=post.content,
            type=post.type,
            image_url=post.image_url,
            created_at=post.created_at,
            author=post.author.to_summary(),
            report_count=1,
            report_reason=report.reason,
            last_report_date=report.created_at,
            report_id=report.id,
        )

    def to_dict(self):
        return {
            'id': self.post_id,
            'title': self.title,
            'content': self.content,
            'type': self.type,
            'imageUrl': self.image_url,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'author': self.author,
            'reportCount': self.report_count,
            'reportReason': self.report_reason,
            'lastReportDate': self.last_report_date.isoformat() if self.last_report_date else None,
            'reportId': self.report_id,
        }


class ReportAggregator:
    """Monta a fila de moderação a partir das denúncias pendentes"""

    @staticmethod
    def aggregate(reports: Iterable[Report]) -> List[ReportQueueEntry]:
        """
        Agrupa denúncias por post, na ordem em que aparecem

        Args:
            reports: denúncias PENDING, já ordenadas da mais recente para a mais antiga

        Returns:
            list: uma ReportQueueEntry por post denunciado
        """
        entries: List[ReportQueueEntry] = []
        by_post = {}

        for report in reports:
            # Denúncia órfã (post já removido) é ignorada
            if report.post is None:
                continue

            current = ReportQueueEntry.from_report(report)
            existing = by_post.get(current.post_id)

            if existing is None:
                by_post[current.post_id] = current
                entries.append(current)
                continue

            existing.report_count += 1

            # Só sobrescreve se for estritamente mais recente; empate mantém a primeira vista
            if current.last_report_date > existing.last_report_date:
                existing.last_report_date = current.last_report_date
                existing.report_reason = current.report_reason
                existing.report_id = current.report_id

        return entries

    @staticmethod
    def pending_reports():
        """Denúncias pendentes com post e autor, da mais recente para a mais antiga"""
        return Report.query.options(
            joinedload(Report.post).joinedload(Post.author)
        ).filter(
            Report.status == ReportStatus.PENDING
        ).order_by(
            Report.created_at.desc(),
            Report.id.desc()
        ).all()

    @staticmethod
    def fetch_queue(context: ModerationContext) -> List[ReportQueueEntry]:
        """Fila de moderação atual; exige contexto de administrador"""
        context.require_admin()

        try:
            reports = ReportAggregator.pending_reports()
        except SQLAlchemyError as e:
            logger.error(f"Erro ao buscar denúncias pendentes: {e}")
            raise StorageFailure('Failed to fetch reported content') from e

        queue = ReportAggregator.aggregate(reports)
        logger.debug(f"Fila de moderação: {len(reports)} denúncias em {len(queue)} posts")
        return queue
