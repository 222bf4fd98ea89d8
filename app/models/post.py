from app import db
from datetime import datetime

POST_TYPES = ('professional', 'social')

class Post(db.Model):
    __tablename__ = 'posts'

    id = db.Column(db.Integer, primary_key=True)
    author_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    title = db.Column(db.String(200))
    content = db.Column(db.Text, nullable=False)
    image_url = db.Column(db.String(500))
    type = db.Column(db.String(20), nullable=False, default='social')  # professional, social
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relacionamentos
    likes = db.relationship('Like', backref='post', lazy='dynamic')
    comments = db.relationship('Comment', backref='post', lazy='dynamic')
    reports = db.relationship('Report', backref='post', lazy='dynamic')

    def to_dict(self, viewer_id=None):
        """Serializa o post com contadores derivados de likes e comentários"""
        is_liked = False
        if viewer_id is not None:
            is_liked = self.likes.filter_by(user_id=viewer_id).first() is not None

        return {
            'id': self.id,
            'title': self.title,
            'content': self.content,
            'imageUrl': self.image_url,
            'type': self.type,
            'author': self.author.to_summary(),
            'likes': self.likes.count(),
            'comments': self.comments.count(),
            'isLiked': is_liked,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f'<Post {self.id} - {self.type}>'

class Like(db.Model):
    __tablename__ = 'likes'
    __table_args__ = (
        db.UniqueConstraint('post_id', 'user_id', name='uq_likes_post_user'),
    )

    id = db.Column(db.Integer, primary_key=True)
    post_id = db.Column(db.Integer, db.ForeignKey('posts.id'), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    user = db.relationship('User')

    def __repr__(self):
        return f'<Like post={self.post_id} user={self.user_id}>'

class Comment(db.Model):
    __tablename__ = 'comments'

    id = db.Column(db.Integer, primary_key=True)
    post_id = db.Column(db.Integer, db.ForeignKey('posts.id'), nullable=False, index=True)
    author_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    content = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    author = db.relationship('User')

    def to_dict(self):
        return {
            'id': self.id,
            'content': self.content,
            'author': self.author.to_summary(),
            'postId': self.post_id,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f'<Comment {self.id} post={self.post_id}>'
