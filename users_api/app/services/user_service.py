"""
Business logic for users.

Every operation is a straight sequence of statements: write, then
re-read the row so the response reflects what the table holds.  A
``PersistenceError`` raised by any statement propagates unchanged to
the API layer.
"""

import logging
from typing import Any, Dict, List

from ..core.db import Database
from ..core.errors import UserNotFoundError
from ..schemas.user import UserCreate, UserUpdate, sanitize

logger = logging.getLogger(__name__)

# Columns a client may write; used to build the UPDATE statement.
WRITABLE_COLUMNS = ("email", "password", "name")


class UserService:
    """Run user queries against an injected ``Database``."""

    def __init__(self, db: Database) -> None:
        self.db = db

    def list_users(self) -> List[Dict[str, Any]]:
        """Return all rows of the ``user`` table without passwords."""
        rows = self.db.fetch_all("SELECT * FROM user")
        return [sanitize(row) for row in rows]

    def get_user(self, user_id: int) -> Dict[str, Any]:
        """Return a sanitized user or raise ``UserNotFoundError``."""
        row = self.db.fetch_one("SELECT * FROM user WHERE id = ?", (user_id,))
        if row is None:
            raise UserNotFoundError(user_id)
        return sanitize(row)

    def create_user(self, data: UserCreate) -> Dict[str, Any]:
        """Insert a user and return the stored row."""
        logger.info("Registering user %s", data.email)
        user_id = self.db.execute(
            "INSERT INTO user (email, password, name) VALUES (?, ?, ?)",
            (data.email, data.password, data.name),
        )
        return self.get_user(user_id)

    def update_user(self, user_id: int, data: UserUpdate) -> Dict[str, Any]:
        """Apply the supplied fields to a user and return the stored row.

        Fields the client did not send are left untouched.  With no
        fields at all the row is only re-read.
        """
        changes = {key: value for key, value in data.changes().items() if key in WRITABLE_COLUMNS}
        if changes:
            assignments = ", ".join(f"{column} = ?" for column in changes)
            logger.info("Updating user %s: %s", user_id, ", ".join(changes))
            self.db.execute(
                f"UPDATE user SET {assignments} WHERE id = ?",
                (*changes.values(), user_id),
            )
        return self.get_user(user_id)
