"""
Script to create demo data for development
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy.orm import Session
from app.core.database import SessionLocal, init_db
from app.models import Application, Candidate, Job, User
from app.auth.service import create_user, get_user_by_email
import structlog

logger = structlog.get_logger()

DEMO_USERS = [
    {"email": "recruiter@talenttrack.dev", "password": "recruiter123", "full_name": "Demo Recruiter", "role": "recruiter"},
    {"email": "viewer@talenttrack.dev", "password": "viewer12345", "full_name": "Demo Viewer", "role": "viewer"},
]

DEMO_JOBS = [
    {
        "title": "Senior Backend Engineer",
        "department": "Engineering",
        "location": "Remote",
        "description": "Build and operate the services behind our hiring platform.",
        "requirements": "5+ years of Python, PostgreSQL, API design",
    },
    {
        "title": "Product Designer",
        "department": "Design",
        "location": "Berlin",
        "description": "Own the end-to-end design of recruiter workflows.",
    },
    {
        "title": "Technical Recruiter",
        "department": "People",
        "location": "New York, NY",
        "description": "Source and close engineering candidates.",
    },
]

DEMO_CANDIDATES = [
    {"full_name": "Ada Lovelace", "email": "ada@example.org", "location": "London", "experience_years": 8,
     "skills": ["python", "mathematics"], "source": "referral"},
    {"full_name": "Grace Hopper", "email": "grace@example.org", "location": "Arlington, VA", "experience_years": 12},
    {"full_name": "Alan Turing", "email": "alan@example.org", "phone": "+44 20 7946 0000"},
    {"full_name": "Katherine Johnson", "email": "katherine@example.org", "experience_years": 6},
    {"full_name": "Linus Torvalds", "email": "linus@example.org", "location": "Portland, OR",
     "linkedin_url": "https://www.linkedin.com/in/linustorvalds"},
]


def create_demo_users(db: Session) -> User:
    """Create demo users and return the recruiter"""
    for user_data in DEMO_USERS:
        if get_user_by_email(db, user_data["email"]):
            logger.info("demo_user_exists", email=user_data["email"])
            continue
        create_user(db, **user_data)
    return get_user_by_email(db, DEMO_USERS[0]["email"])


def create_demo_records(db: Session, recruiter: User):
    """Create jobs, candidates and a couple of applications"""
    if db.query(Job).count():
        logger.info("demo_records_exist")
        return

    jobs = [Job(created_by=recruiter.id, **data) for data in DEMO_JOBS]
    candidates = [Candidate(**data) for data in DEMO_CANDIDATES]
    db.add_all(jobs + candidates)
    db.flush()

    db.add_all([
        Application(candidate_id=candidates[0].id, job_id=jobs[0].id, status="interview",
                    match_score=88, match_reasons="Strong Python background"),
        Application(candidate_id=candidates[1].id, job_id=jobs[0].id, status="screening", match_score=74),
    ])
    db.commit()
    logger.info("demo_records_created", jobs=len(jobs), candidates=len(candidates), applications=2)


def main():
    init_db()
    db: Session = SessionLocal()
    try:
        recruiter = create_demo_users(db)
        create_demo_records(db, recruiter)
    except Exception as e:
        logger.error("demo_data_failed", error=str(e))
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
