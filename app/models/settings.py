from app import db
from datetime import datetime

class UserSettings(db.Model):
    __tablename__ = 'user_settings'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, unique=True)
    public_profile = db.Column(db.Boolean, nullable=False, default=True)
    show_email = db.Column(db.Boolean, nullable=False, default=False)
    email_notifications = db.Column(db.Boolean, nullable=False, default=True)
    new_post_notifications = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'userId': self.user_id,
            'publicProfile': self.public_profile,
            'showEmail': self.show_email,
            'emailNotifications': self.email_notifications,
            'newPostNotifications': self.new_post_notifications,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f'<UserSettings user={self.user_id}>'
