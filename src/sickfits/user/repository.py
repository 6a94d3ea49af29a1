"""Repository for the User aggregate."""

from sickfits.domain import sickfits
from sickfits.user.user import User, normalize_email


@sickfits.repository(part_of=User)
class UserRepository:
    """Lookups by email and by reset token on top of the standard CRUD operations."""

    def find_by_email(self, email: str) -> User | None:
        return self._dao.query.filter(email=normalize_email(email)).all().first

    def find_by_reset_token(self, token: str) -> list[User]:
        if not token:
            return []
        return self._dao.query.filter(reset_token=token).all().items
