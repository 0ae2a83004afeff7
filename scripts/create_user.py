"""Create a user (any configured database).

Usage:
    python -m scripts.create_user <username> <email> [Admin|User]
Role defaults to User. Passwords are managed by the identity service, so the
stored hash is an unusable placeholder. Prints the new user id, which is the
`sub` claim bearer tokens must carry.
"""

import asyncio
import sys

from taskflow.domain.enums import UserRole
from taskflow.infrastructure.persistence.database import get_session_factory
from taskflow.infrastructure.persistence.unit_of_work import SqlAlchemyUnitOfWork
from taskflow.shared.utils.datetime import utc_now

UNUSABLE_PASSWORD_HASH = "!"


async def main() -> None:
    """Create one user with the requested role."""
    if len(sys.argv) < 3:
        print(
            "Usage: python -m scripts.create_user <username> <email> [Admin|User]",
            file=sys.stderr,
        )
        sys.exit(1)
    username = sys.argv[1]
    email = sys.argv[2]
    role_name = sys.argv[3] if len(sys.argv) > 3 else UserRole.USER.value
    if role_name not in UserRole.values():
        print(f"Unknown role {role_name!r}; expected one of {UserRole.values()}", file=sys.stderr)
        sys.exit(1)

    async with SqlAlchemyUnitOfWork(get_session_factory()) as uow:
        if await uow.users.get_by_email(email) is not None:
            print(f"Email already registered: {email}", file=sys.stderr)
            sys.exit(1)
        user = await uow.users.create_user(
            username,
            email,
            UNUSABLE_PASSWORD_HASH,
            UserRole(role_name),
            now=utc_now(),
        )
        await uow.commit()
    print(f"Created user: {user.id} ({username}, {user.role.value})")


if __name__ == "__main__":
    asyncio.run(main())
