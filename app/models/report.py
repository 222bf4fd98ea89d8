# app/models/report.py
from app import db
from datetime import datetime


class ReportStatus:
    PENDING = 'PENDING'
    APPROVED = 'APPROVED'  # denúncia procedente, conteúdo removido
    REJECTED = 'REJECTED'  # denúncia descartada


class Report(db.Model):
    __tablename__ = 'reports'
    # Um usuário só denuncia um mesmo post uma vez, independente do status
    __table_args__ = (
        db.UniqueConstraint('post_id', 'reporter_id', name='uq_reports_post_reporter'),
    )

    id = db.Column(db.Integer, primary_key=True)
    # Nulo quando o post foi removido pela moderação; a denúncia fica como histórico
    post_id = db.Column(db.Integer, db.ForeignKey('posts.id'), nullable=True, index=True)
    reporter_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    reason = db.Column(db.Text, nullable=False)
    status = db.Column(db.String(20), nullable=False, default=ReportStatus.PENDING, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)

    reporter = db.relationship('User')

    def __repr__(self):
        return f'<Report {self.id} - {self.status}>'
