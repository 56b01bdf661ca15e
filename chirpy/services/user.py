"""User service - sign-up, credential checks, profile updates and upgrades."""

from chirpy.core.database import Database
from chirpy.models.document import Document
from chirpy.models.user import User, UserRecord
from chirpy.services.auth import InvalidCredentialsError, hash_password, verify_password


class UserError(Exception):
    """Base user service error."""

    pass


class UserNotFoundError(UserError):
    """No user matches the given id or email."""

    pass


class EmailInUseError(UserError):
    """Another user already has this email."""

    pass


def _by_id(document: Document, user_id: int) -> UserRecord | None:
    return document.users.get(user_id)


def _by_email(document: Document, email: str) -> UserRecord | None:
    # Linear scan; emails compare case-sensitively, exactly as stored
    for user in document.users.values():
        if user.email == email:
            return user
    return None


class UserService:
    """User repository over the record store.

    Every method returns the public view of a user; password hashes never
    leave this class. Authorization (who may update which id) is the
    caller's concern.
    """

    def __init__(self, db: Database):
        self.db = db

    def create(self, email: str, password: str) -> User:
        """Create a user. Raises EmailInUseError if the email is taken."""
        # Hash outside the write lock; Argon2 is deliberately slow
        password_hash = hash_password(password)
        with self.db.transaction() as document:
            if _by_email(document, email) is not None:
                raise EmailInUseError(f"Email already in use: {email}")
            user = UserRecord(
                id=document.allocate_user_id(),
                email=email,
                password_hash=password_hash,
                is_upgraded=False,
            )
            document.users[user.id] = user
        return user.public()

    def get(self, user_id: int) -> User | None:
        user = _by_id(self.db.load(), user_id)
        return user.public() if user else None

    def get_by_email(self, email: str) -> User | None:
        user = _by_email(self.db.load(), email)
        return user.public() if user else None

    def validate_credentials(self, email: str, password: str) -> User:
        """Check an email/password pair.

        Raises UserNotFoundError for an unknown email and
        InvalidCredentialsError for a wrong password. The two stay distinct
        here so callers can log the real cause; they should answer both the
        same way.
        """
        user = _by_email(self.db.load(), email)
        if user is None:
            # Dummy hash so unknown emails take as long as wrong passwords
            verify_password(password, hash_password("dummy"))
            raise UserNotFoundError(f"No user with email: {email}")
        if not verify_password(password, user.password_hash):
            raise InvalidCredentialsError("Password does not match")
        return user.public()

    def update(self, user_id: int, email: str = "", password: str = "") -> User:
        """Update email and/or password. An empty value leaves that field unchanged."""
        password_hash = hash_password(password) if password else None
        with self.db.transaction() as document:
            user = _by_id(document, user_id)
            if user is None:
                raise UserNotFoundError(f"No user with id: {user_id}")
            if email and email != user.email:
                if _by_email(document, email) is not None:
                    raise EmailInUseError(f"Email already in use: {email}")
                user.email = email
            if password_hash is not None:
                user.password_hash = password_hash
        return user.public()

    def upgrade(self, user_id: int) -> User:
        """Mark a user as upgraded. Idempotent."""
        with self.db.transaction() as document:
            user = _by_id(document, user_id)
            if user is None:
                raise UserNotFoundError(f"No user with id: {user_id}")
            user.is_upgraded = True
        return user.public()
