from sqlalchemy import func, select
from sqlalchemy.orm import Session
from twilight.core.errors import store_errors
from twilight.models.like_model import Like
from twilight.repositories.crud import Table, insert_one


def get_like(db: Session, tweet_id: int, user_id: int) -> Like | None:
    stmt = select(Like).where(Like.tweet_id == tweet_id).where(Like.user_id == user_id)
    with store_errors(db, "Like lookup"):
        return db.execute(stmt).scalars().first()


def create_like(db: Session, tweet_id: int, user_id: int) -> Like:
    return insert_one(db, Table.LIKES, {"tweet_id": tweet_id, "user_id": user_id})


def delete_like(db: Session, like: Like):
    with store_errors(db, "Like deletion"):
        db.delete(like)
        db.commit()


def count_likes(db: Session, tweet_id: int) -> int:
    stmt = select(func.count(Like.like_id)).where(Like.tweet_id == tweet_id)
    with store_errors(db, "Like count"):
        return db.execute(stmt).scalar_one()
