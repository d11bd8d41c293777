"""
Blog post model definition
"""
from models import db, utcnow, isoformat

BLOG_CATEGORIES = ('Recipes', 'Culture', 'Health', 'News', 'Other')


class Blog(db.Model):
    __tablename__ = 'blogs'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(100), nullable=False)
    excerpt = db.Column(db.String(200), nullable=False)
    content = db.Column(db.Text, nullable=False)
    author = db.Column(db.String(100), default='Admin')
    category = db.Column(db.String(20), default='Other')
    image = db.Column(db.String(500), default='no-photo.jpg')
    read_time = db.Column(db.String(30), default='5 min read')
    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=utcnow, index=True)

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'excerpt': self.excerpt,
            'content': self.content,
            'author': self.author,
            'category': self.category,
            'image': self.image,
            'readTime': self.read_time,
            'isActive': self.is_active,
            'createdAt': isoformat(self.created_at),
        }

    def __repr__(self):
        return f'<Blog {self.title}>'
