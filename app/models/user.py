from app import db
from flask_login import UserMixin
from datetime import datetime
import bcrypt

class User(UserMixin, db.Model):
    __tablename__ = 'users'

    ROLE_USER = 'USER'
    ROLE_ADMIN = 'ADMIN'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(128))
    image = db.Column(db.String(500))
    bio = db.Column(db.Text)
    headline = db.Column(db.String(200))
    location = db.Column(db.String(100))
    role = db.Column(db.String(20), nullable=False, default=ROLE_USER)  # USER, ADMIN
    is_banned = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # Relacionamentos
    posts = db.relationship('Post', backref='author', lazy='dynamic')
    following = db.relationship('Follow', foreign_keys='Follow.follower_id',
                                backref='follower', lazy='dynamic')
    followers = db.relationship('Follow', foreign_keys='Follow.following_id',
                                backref='following', lazy='dynamic')

    @property
    def is_admin(self):
        return self.role == self.ROLE_ADMIN

    def set_password(self, password):
        self.password_hash = bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')

    def check_password(self, password):
        if not self.password_hash:
            return False
        try:
            return bcrypt.checkpw(password.encode('utf-8'), self.password_hash.encode('utf-8'))
        except ValueError:
            return False

    def to_summary(self):
        """Dados públicos mínimos, usados como autor de posts e comentários"""
        return {
            'id': self.id,
            'name': self.name,
            'image': self.image,
        }

    def to_dict(self):
        """Perfil sem dados sensíveis"""
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'image': self.image,
            'bio': self.bio,
            'headline': self.headline,
            'location': self.location,
            'role': self.role,
            'isBanned': self.is_banned,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<User {self.email}>'
