import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.post import Post, utcnow

logger = logging.getLogger('postboard.api.repository')


class PostRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, post_id: int) -> Post | None:
        return self.db.get(Post, post_id)

    def count(self) -> int:
        return self.db.query(func.count(Post.id)).scalar()

    def page(self, offset: int, limit: int) -> list[Post]:
        return (
            self.db.query(Post)
            .order_by(Post.created_at.desc(), Post.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )

    def create(self, fields: dict) -> Post:
        # Una sola lectura del reloj: created_at == updated_at
        now = utcnow()
        post = Post(**fields, created_at=now, updated_at=now)
        self.db.add(post)
        self.db.commit()
        self.db.refresh(post)
        logger.info(f'Post {post.id} created')
        return post

    def update(self, post: Post, changes: dict) -> Post:
        dirty = False
        for field, value in changes.items():
            if getattr(post, field) != value:
                setattr(post, field, value)
                dirty = True

        # Sin cambios reales no se toca updated_at
        if dirty:
            post.updated_at = utcnow()
            self.db.commit()
            logger.info(f'Post {post.id} updated: {", ".join(changes)}')

        # Recarga desde la base de datos para devolver el estado confirmado
        self.db.refresh(post)
        return post

    def delete(self, post: Post) -> None:
        post_id = post.id
        self.db.delete(post)
        self.db.commit()
        logger.info(f'Post {post_id} deleted')
