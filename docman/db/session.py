import logging

from sqlalchemy import create_engine, event, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase, Session
from docman.config import settings

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"
REGULAR_ROLE = "regular"
DEFAULT_ROLES = (ADMIN_ROLE, REGULAR_ROLE)

class Base(DeclarativeBase):
    pass

def normalize_url(url: str) -> str:
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+psycopg://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+psycopg://", 1)
    return url

url = normalize_url(settings.database_url or "sqlite:///./docman.db")

connect_args = {}
if url.startswith("sqlite"):
    connect_args = {"check_same_thread": False}

engine = create_engine(
    url,
    connect_args=connect_args,
    pool_pre_ping=True,
    future=True,
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    future=True,
)

@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # sqlite ignores ON DELETE CASCADE unless foreign keys are switched on per connection
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

def seed_roles(db: Session) -> None:
    from docman.models.role import Role

    existing = set(db.scalars(select(Role.title)).all())
    missing = [title for title in DEFAULT_ROLES if title not in existing]
    for title in missing:
        db.add(Role(title=title))
    if missing:
        db.commit()
        logger.info("seeded roles: %s", ", ".join(missing))

def seed_admin(db: Session, username: str | None, email: str | None, password: str | None) -> None:
    """Create the bootstrap admin account once; signup can never grant the admin role."""
    from docman.models.role import Role
    from docman.models.user import User
    from docman.utils.security import hash_password

    if not (username or email or password):
        return
    if not (username and email and password):
        logger.warning("ADMIN_USERNAME, ADMIN_EMAIL and ADMIN_PASSWORD must all be set; no admin created")
        return

    existing = db.scalar(select(User).where((User.username == username) | (User.email == email)))
    if existing is not None:
        return

    role_id = db.scalar(select(Role.id).where(Role.title == ADMIN_ROLE))
    db.add(User(
        username=username,
        first_name="Admin",
        last_name=username,
        email=email,
        password_hash=hash_password(password),
        role_id=role_id,
    ))
    db.commit()
    logger.info("created admin account %s", username)

def init_db(bind: Engine | None = None):
    from docman.models import role, user, document  # noqa: F401
    bind = bind or engine
    Base.metadata.create_all(bind=bind)
    with Session(bind) as db:
        seed_roles(db)
        seed_admin(db, settings.admin_username, settings.admin_email, settings.admin_password)
