from app import db
from datetime import datetime

class Follow(db.Model):
    __tablename__ = 'follows'
    __table_args__ = (
        db.UniqueConstraint('follower_id', 'following_id', name='uq_follows_pair'),
    )

    id = db.Column(db.Integer, primary_key=True)
    follower_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    following_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f'<Follow {self.follower_id} -> {self.following_id}>'
