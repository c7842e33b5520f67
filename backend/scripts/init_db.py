"""
Initialize database tables and the first admin user
"""
import os
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy.orm import Session
from app.core.database import SessionLocal, init_db
from app.models.user import AppRole, UserRole
from app.auth.service import create_user, get_user_by_email
import structlog

logger = structlog.get_logger()


def create_admin_user(db: Session, email: str, password: str, full_name: str):
    """Create the admin user, or grant the admin role to an existing one"""
    user = get_user_by_email(db, email)
    if user is None:
        user = create_user(db, email=email, password=password, full_name=full_name, role=AppRole.ADMIN.value)
        logger.info("admin_user_created", email=email)
        return user

    has_admin = db.query(UserRole).filter(UserRole.user_id == user.id, UserRole.role == AppRole.ADMIN).first()
    if has_admin:
        logger.info("admin_user_exists", email=email)
    else:
        db.add(UserRole(user_id=user.id, role=AppRole.ADMIN))
        db.commit()
        logger.info("admin_role_granted", email=email)
    return user


def main():
    """Main initialization function"""
    logger.info("initializing_database")
    init_db()

    db: Session = SessionLocal()
    try:
        create_admin_user(
            db,
            email=os.getenv("ADMIN_EMAIL", "admin@talenttrack.dev"),
            password=os.getenv("ADMIN_PASSWORD", "change-me-admin"),
            full_name=os.getenv("ADMIN_NAME", "Administrator"),
        )
        logger.info("database_initialization_complete")
    except Exception as e:
        logger.error("database_initialization_failed", error=str(e))
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
