# advisor_desk/services/auth.py
import hashlib
import hmac
import secrets
from pymongo import MongoClient
from pymongo.errors import DuplicateKeyError
from pydantic import BaseModel
from datetime import datetime, timezone
from typing import Optional, Tuple

from advisor_desk.config import MONGODB_URI, MONGODB_DB
from advisor_desk.logger import get_logger
from advisor_desk.services.errors import AuthenticationError, StoreWriteError

logger = get_logger(__name__)

_PBKDF2_DIGEST = "sha256"
_PBKDF2_ITERATIONS = 200_000


def _generate_salt() -> str:
    return secrets.token_bytes(16).hex()


def _pbkdf2_hash(password: str, salt_hex: str) -> str:
    return hashlib.pbkdf2_hmac(
        _PBKDF2_DIGEST,
        password.encode("utf-8"),
        bytes.fromhex(salt_hex),
        _PBKDF2_ITERATIONS,
    ).hex()


def hash_password(password: str) -> Tuple[str, str]:
    salt_hex = _generate_salt()
    return _pbkdf2_hash(password, salt_hex), salt_hex


def verify_password(password: str, stored_hash: str, stored_salt: str) -> bool:
    try:
        derived = _pbkdf2_hash(password, stored_salt)
    except ValueError:
        return False
    return hmac.compare_digest(stored_hash or "", derived)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class Advisor(BaseModel):
    id: str
    email: str
    name: Optional[str] = None


class AuthService:
    """Email/password sign-in against the advisors collection"""

    def __init__(self, db=None):
        if db is None:
            self.client = MongoClient(MONGODB_URI)
            db = self.client[MONGODB_DB]
        self.advisors = db.advisors
        self.advisors.create_index("email", unique=True)

    def create_advisor(self, email: str, password: str, name: Optional[str] = None) -> Advisor:
        email = normalize_email(email)
        if not email or not password:
            raise ValueError("Email and password are required")
        pw_hash, pw_salt = hash_password(password)
        doc = {
            "email": email,
            "name": name,
            "pw_hash": pw_hash,
            "pw_salt": pw_salt,
            "created_at": datetime.now(timezone.utc),
        }
        try:
            result = self.advisors.insert_one(doc)
        except DuplicateKeyError as e:
            raise StoreWriteError(f"An advisor with email {email} already exists") from e
        logger.info(f"Created advisor account {email}")
        return Advisor(id=str(result.inserted_id), email=email, name=name)

    def authenticate(self, email: str, password: str) -> Advisor:
        email = normalize_email(email)
        doc = self.advisors.find_one({"email": email})
        if not doc or not verify_password(password or "", doc.get("pw_hash"), doc.get("pw_salt", "")):
            logger.warning(f"Failed sign-in for {email}")
            raise AuthenticationError("Invalid email or password")
        logger.info(f"Advisor signed in: {email}")
        return Advisor(id=str(doc["_id"]), email=email, name=doc.get("name"))


class AdvisorSession(BaseModel):
    user: Optional[Advisor] = None
    loading: bool = True

    @property
    def is_authenticated(self) -> bool:
        return not self.loading and self.user is not None


class SessionProvider:
    """Owns the advisor session from app start until sign-out.

    The frontend keeps one provider per browser session and hands
    ``provider.session`` to the views.
    """

    def __init__(self, auth: AuthService):
        self.auth = auth
        self.session = AdvisorSession()

    def start(self) -> AdvisorSession:
        # Nothing persisted between browser sessions, so resolve to signed out
        if self.session.loading:
            self.session = AdvisorSession(user=None, loading=False)
        return self.session

    def sign_in(self, email: str, password: str) -> AdvisorSession:
        """Raises AuthenticationError and leaves the session untouched on failure"""
        advisor = self.auth.authenticate(email, password)
        self.session = AdvisorSession(user=advisor, loading=False)
        return self.session

    def sign_out(self) -> AdvisorSession:
        if self.session.user:
            logger.info(f"Advisor signed out: {self.session.user.email}")
        self.session = AdvisorSession(user=None, loading=False)
        return self.session
