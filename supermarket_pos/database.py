"""Database configuration and initialization."""
from sqlalchemy import create_engine, text, BigInteger, Integer
from sqlalchemy.orm import scoped_session, sessionmaker, declarative_base

# Create SQLAlchemy base
Base = declarative_base()

# BIGINT keys on PostgreSQL; SQLite only autoincrements INTEGER PRIMARY KEY
IdType = BigInteger().with_variant(Integer, 'sqlite')

# Global session and engine
engine = None
db_session = None


def init_db(app):
    """Initialize database connection."""
    global engine, db_session

    database_uri = app.config['SQLALCHEMY_DATABASE_URI']
    engine = create_engine(
        database_uri,
        echo=app.config.get('SQLALCHEMY_ECHO', False),
        **app.config.get('SQLALCHEMY_ENGINE_OPTIONS', {})
    )

    db_session = scoped_session(
        sessionmaker(autocommit=False, autoflush=False, bind=engine)
    )

    Base.query = db_session.query_property()

    # Register teardown
    @app.teardown_appcontext
    def shutdown_session(exception=None):
        """Close database session and rollback on error."""
        if exception:
            db_session.rollback()
        db_session.remove()


def get_session():
    """Get database session."""
    return db_session


def get_engine():
    """Get the engine bound by init_db."""
    return engine


def ping_database() -> bool:
    """Run a trivial query against the database."""
    row = db_session.execute(text("SELECT 1 as health_check")).fetchone()
    return bool(row and row[0] == 1)
