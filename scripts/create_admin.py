"""

Initial admin account bootstrap.

- meant to run once when a server is first set up
- reads ADMIN_EMAIL / ADMIN_PASSWORD / ADMIN_NAME from the environment (.env)
- does nothing when an account with that email already exists

The web flow (POST /api/auth/initial-signup) does the same thing while the
user table is empty; this script is for servers set up from the shell.

Usage
- activate the virtualenv
- (.venv) ~/backend$ python -m scripts.create_admin

"""

import logging
import os
import sys

from dotenv import load_dotenv
load_dotenv()

from sqlalchemy import select

from app.core.logging import setup_logging
from app.core.security import get_password_hash
from app.db.session import SessionLocal
from app.models.user import User, Role

logger = logging.getLogger("scripts.create_admin")


def create_admin(db, *, email: str, password: str, name: str) -> User | None:
    email = email.lower()
    if db.scalar(select(User).where(User.email == email)):
        logger.info("User %s already exists. Skip creation.", email)
        return None

    user = User(
        email=email,
        password_hash=get_password_hash(password),
        name=name,
        role=Role.ADMIN,
        must_change_password=False,
    )
    db.add(user)
    db.commit()
    logger.info("Admin created: %s", email)
    return user


def main() -> int:
    setup_logging()
    try:
        email = os.environ["ADMIN_EMAIL"]
        password = os.environ["ADMIN_PASSWORD"]
    except KeyError as e:
        logger.error("Missing environment variable %s", e.args[0])
        return 1
    name = os.environ.get("ADMIN_NAME", "Administrator")

    db = SessionLocal()
    try:
        create_admin(db, email=email, password=password, name=name)
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
