import logging
from passlib.context import CryptContext

logger = logging.getLogger(__name__)


# Configure the hashing algorithm
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

def hash_password(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Unrecognized or corrupt hash
        logger.warning("Stored password hash could not be verified")
        return False

def normalize_email(email: str) -> str:
    return (email or "").strip().lower()
