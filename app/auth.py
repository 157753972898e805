from passlib.context import CryptContext
from sqlalchemy.orm import Session

from app.infrastructure.db.models import User, ProfileModel

# pbkdf2_sha256 - primary (no native deps)
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class RegistrationError(ValueError):
    pass


def hash_password(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)

def normalize_email(email: str) -> str:
    return (email or "").strip().lower()

def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == normalize_email(email)).first()

def authenticate(db: Session, email: str, password: str) -> User | None:
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        return None
    return user

def register_user(db: Session, email: str, password: str, full_name: str | None = None) -> User:
    """
    Создать пользователя + пустой профиль (profiles one-to-one)

    Raises:
        RegistrationError: email пустой / занят, пароль короче 6 символов
    """
    email = normalize_email(email)
    if not email or "@" not in email:
        raise RegistrationError("A valid email is required")
    if not password or len(password) < 6:
        raise RegistrationError("Password must be at least 6 characters")
    if get_user_by_email(db, email):
        raise RegistrationError("An account with this email already exists")

    user = User(email=email, password_hash=hash_password(password))
    db.add(user)
    db.flush()
    db.add(ProfileModel(user_id=user.id, full_name=(full_name or "").strip() or None))
    db.commit()
    db.refresh(user)
    return user
