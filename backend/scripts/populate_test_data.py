#!/usr/bin/env python3
"""Populate a database with learner activity for manual testing.

This script creates a test user (if needed) and a set of lessons, then
replays lesson watches and comments through the activity service so the
achievement engine unlocks achievements and badges exactly as it does for
API traffic.

Usage:
    cd backend
    python scripts/populate_test_data.py

Environment Variables:
    DATABASE_URL: Connection string for the database (defaults to development DB)
"""

import os
import sys

# Add parent directory to path so we can import from backend
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from database import Base, SessionLocal, engine
from models.activity import Lesson
from models.user import User
from services.activity_service import ActivityService
from services.progress_query import ProgressQueryService


def create_test_user(db) -> User:
    """Create or retrieve the test user."""
    test_email = "learner@test.com"

    user = db.query(User).filter(User.email == test_email).first()

    if user:
        print(f"Found existing test user: {user.name} (ID: {user.id})")
        return user

    user = User(name="Test Learner", email=test_email)
    db.add(user)
    db.commit()
    db.refresh(user)

    print(f"Created new test user: {user.name} (ID: {user.id})")
    return user


def ensure_lessons_exist(db, count: int) -> list[Lesson]:
    """Ensure at least ``count`` lessons exist and return the first ``count``."""
    lessons = db.query(Lesson).order_by(Lesson.id).limit(count).all()
    missing = count - len(lessons)

    if missing > 0:
        print(f"Creating {missing} missing lessons...")
        for i in range(missing):
            db.add(Lesson(title=f"Lesson {len(lessons) + i + 1}"))
        db.commit()
        lessons = db.query(Lesson).order_by(Lesson.id).limit(count).all()

    return lessons


def populate_activity(db, user_id: int, lessons: int, comments: int):
    """Replay lesson watches and comments for the user."""
    service = ActivityService(db)

    print(f"Watching {lessons} lessons for user {user_id}...")
    for lesson in ensure_lessons_exist(db, lessons):
        service.record_lesson_watched(user_id, lesson.id)

    print(f"Writing {comments} comments for user {user_id}...")
    for i in range(comments):
        service.record_comment(user_id, f"Comment {i + 1}")


def main():
    """Main entry point."""
    print("=" * 60)
    print("Learner Activity Population Script")
    print("=" * 60)
    print()

    db_url = os.getenv("DATABASE_URL", "Not set - will use default")
    print(f"Database URL: {db_url}")
    print()

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()

    try:
        user = create_test_user(db)
        populate_activity(db, user.id, lessons=25, comments=5)

        progress = ProgressQueryService(db=db).get_progress(user.id)
        print()
        print("Progress:")
        print(f"  Unlocked: {', '.join(progress['unlocked_achievements']) or '-'}")
        print(f"  Next available: {', '.join(progress['next_available_achievements']) or '-'}")
        print(f"  Badge: {progress['current_badge']}")
        print(f"  Next badge: {progress['next_badge']} "
              f"({progress['remaining_to_unlock_next_badge']} to go)")
        return 0

    except Exception as e:
        print(f"ERROR: {e}")
        import traceback
        traceback.print_exc()
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
