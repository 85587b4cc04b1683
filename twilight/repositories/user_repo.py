from datetime import datetime
from sqlalchemy.orm import Session
from twilight.models.user_model import User
from twilight.repositories.crud import Table, delete_one, find_one, insert_one, update_one
from twilight.schemas.user_schema import UserCreate


def get_user_by_id(db: Session, user_id: int) -> User | None:
    return find_one(db, Table.USERS, "user_id", user_id)


def get_user_by_username(db: Session, username: str) -> User | None:
    return find_one(db, Table.USERS, "username", username)


def get_user_by_email(db: Session, email: str) -> User | None:
    return find_one(db, Table.USERS, "email", email)


def get_user_by_token_hash(db: Session, token_hash: str) -> User | None:
    return find_one(db, Table.USERS, "token", token_hash)


def create_user(
    db: Session,
    data: UserCreate,
    password_hash: str,
    token_hash: str,
    token_expiration: datetime,
) -> User:
    return insert_one(
        db,
        Table.USERS,
        {
            "username": data.username,
            "email": data.email,
            "first_name": data.firstname,
            "password": password_hash,
            "is_verified": False,
            "token": token_hash,
            "token_expiration": token_expiration,
        },
    )


def mark_user_verified(db: Session, user_id: int) -> User | None:
    return update_one(
        db,
        Table.USERS,
        "user_id",
        user_id,
        {"is_verified": True, "token": None, "token_expiration": None},
    )


def set_user_token(db: Session, user_id: int, token_hash: str, token_expiration: datetime) -> User | None:
    return update_one(
        db,
        Table.USERS,
        "user_id",
        user_id,
        {"token": token_hash, "token_expiration": token_expiration},
    )


def update_user_password(db: Session, user_id: int, password_hash: str) -> User | None:
    # a reset token is single use
    return update_one(
        db,
        Table.USERS,
        "user_id",
        user_id,
        {"password": password_hash, "token": None, "token_expiration": None},
    )


def delete_user(db: Session, user_id: int) -> int:
    return delete_one(db, Table.USERS, user_id)


def is_active_user(db: Session, user_id: int) -> bool:
    user = get_user_by_id(db, user_id)
    return user is not None and user.is_verified
