"""Shared test helpers: a seeded in-memory SQLite database and user factories."""

from sqlalchemy import create_engine, event, select
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from inkwell.core import security
from inkwell.models import Base, Role
from inkwell.services.credentials import CredentialStore
from inkwell.services.rbac import RoleGraph
from inkwell.services.seed import seed_rbac

# Minimum bcrypt cost keeps the suite fast; hashes still verify normally.
security.BCRYPT_ROUNDS = 4

DEFAULT_PASSWORD = "correct-horse-battery"


def make_session_factory() -> sessionmaker:
    """Fresh in-memory database with the schema created and the RBAC catalogue seeded."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record) -> None:
        dbapi_connection.execute("PRAGMA foreign_keys=ON")

    Base.metadata.create_all(engine)
    factory = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    with factory() as db:
        seed_rbac(db)
    return factory


def role_id(db: Session, name: str) -> int:
    return db.scalar(select(Role.id).where(Role.name == name))


def create_user(
    db: Session,
    username: str,
    email: str,
    roles: tuple[str, ...] = (),
    password: str = DEFAULT_PASSWORD,
) -> int:
    """Create an active user holding the named roles; return the id."""
    user_id = CredentialStore(db).create(username, email, password)
    RoleGraph(db).assign_roles(user_id, [role_id(db, name) for name in roles])
    return user_id
