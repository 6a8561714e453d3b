#!/usr/bin/env python3
"""
Seed a Sample TalentHub Marketplace into MongoDB

Inserts users (talents, recruiters, one admin), talent profiles, jobs,
applications, notifications, saved jobs and messages so every listing
has more than one page.

Usage:
    # Add sample data to whatever is already there
    python scripts/seed_data.py

    # Wipe the listing collections first
    python scripts/seed_data.py --reset

    # Bigger marketplace
    python scripts/seed_data.py --jobs 60 --talents 30
"""

import argparse
import os
import random
import sys
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Load environment variables
from dotenv import load_dotenv
load_dotenv()

from bson import ObjectId

from src.common.logger import setup_logging
from src.common.repositories import (
    APPLICATIONS,
    JOBS,
    KNOWN_COLLECTIONS,
    MESSAGES,
    NOTIFICATIONS,
    SAVED_JOBS,
    TALENTS,
    USERS,
    get_repository,
)
from src.services.list_filters import APPLICATION_STATUSES, JOB_TYPES

CATEGORIES = ["Engineering", "Design", "Marketing", "Data Science", "Product", "Sales"]
CITIES = ["Addis Ababa", "Nairobi", "Lagos", "Kigali", "Accra", "Remote"]
SKILLS = ["python", "react", "node.js", "figma", "sql", "aws", "django", "seo", "excel"]
FIRST_NAMES = ["Abebe", "Sara", "Daniel", "Hana", "Yonas", "Meron", "Samuel", "Liya"]
LAST_NAMES = ["Tesfaye", "Bekele", "Mekonnen", "Haile", "Girma", "Alemu"]


def _user(role: str, index: int, now: datetime, rng: random.Random) -> Dict[str, Any]:
    first = rng.choice(FIRST_NAMES)
    last = rng.choice(LAST_NAMES)
    return {
        "_id": ObjectId(),
        "firstName": first,
        "lastName": last,
        "email": f"{role}{index}@talenthub.example",
        "role": role,
        "isActive": rng.random() > 0.1,
        "location": rng.choice(CITIES),
        "bio": f"{first} is a {rng.choice(CATEGORIES).lower()} professional.",
        "createdAt": now - timedelta(days=rng.randint(0, 365)),
    }


def build_marketplace(job_count: int, talent_count: int, seed: int = 42) -> Dict[str, List[Dict[str, Any]]]:
    """Build sample documents for every listing collection."""
    rng = random.Random(seed)
    now = datetime.now(timezone.utc)

    recruiters = [_user("recruiter", i, now, rng) for i in range(max(1, job_count // 10))]
    talent_users = [_user("talent", i, now, rng) for i in range(talent_count)]
    admin = _user("admin", 0, now, rng)
    admin["isActive"] = True

    talents = []
    for user in talent_users:
        talents.append({
            "_id": ObjectId(),
            "user": user["_id"],
            "skills": [
                {"name": name, "level": rng.choice(["beginner", "intermediate", "expert"])}
                for name in rng.sample(SKILLS, 3)
            ],
            "availability": {"status": rng.choice(["available", "busy", "unavailable"])},
            "experience": {"yearsOfExperience": rng.randint(0, 12)},
            "isPublic": rng.random() > 0.2,
            "isProfileComplete": rng.random() > 0.3,
            "lastProfileUpdate": now - timedelta(days=rng.randint(0, 90)),
            "createdAt": user["createdAt"],
        })

    jobs = []
    for i in range(job_count):
        category = rng.choice(CATEGORIES)
        jobs.append({
            "_id": ObjectId(),
            "title": f"{category} Role #{i + 1}",
            "description": f"Join our {category.lower()} team.",
            "category": category,
            "type": rng.choice(JOB_TYPES),
            "status": rng.choices(["active", "draft", "closed"], weights=[8, 1, 1])[0],
            "visibility": "public" if rng.random() > 0.1 else "private",
            "location": {"city": rng.choice(CITIES)},
            "skills": rng.sample(SKILLS, 3),
            "recruiter": rng.choice(recruiters)["_id"],
            "isUrgent": rng.random() < 0.2,
            "isFeatured": rng.random() < 0.2,
            "createdAt": now - timedelta(hours=i * 7),
        })

    applications = []
    notifications = []
    messages = []
    saved_jobs = []
    for talent in talents:
        for job in rng.sample(jobs, min(2, len(jobs))):
            saved_jobs.append({
                "_id": ObjectId(),
                "talent": talent["user"],
                "job": job["_id"],
                "createdAt": now - timedelta(days=rng.randint(0, 30)),
            })
        for job in rng.sample(jobs, min(3, len(jobs))):
            application_id = ObjectId()
            applications.append({
                "_id": application_id,
                "job": job["_id"],
                "applicant": talent["user"],
                "talent": talent["_id"],
                "status": rng.choice(APPLICATION_STATUSES),
                "createdAt": now - timedelta(days=rng.randint(0, 30)),
            })
            notifications.append({
                "_id": ObjectId(),
                "recipient": job["recruiter"],
                "sender": talent["user"],
                "type": "job_application",
                "title": "New application",
                "message": f"New application for {job['title']}",
                "isRead": rng.random() < 0.5,
                "createdAt": now - timedelta(days=rng.randint(0, 30)),
            })
            messages.append({
                "_id": ObjectId(),
                "application": application_id,
                "sender": job["recruiter"],
                "recipient": talent["user"],
                "content": f"Thanks for applying to {job['title']}.",
                "isRead": rng.random() < 0.5,
                "createdAt": now - timedelta(days=rng.randint(0, 30)),
            })

    return {
        USERS: recruiters + talent_users + [admin],
        TALENTS: talents,
        JOBS: jobs,
        APPLICATIONS: applications,
        NOTIFICATIONS: notifications,
        SAVED_JOBS: saved_jobs,
        MESSAGES: messages,
    }


def seed(job_count: int = 30, talent_count: int = 15, reset: bool = False) -> Dict[str, int]:
    """
    Insert the sample marketplace.

    Returns:
        Number of documents inserted per collection
    """
    if reset:
        for name in KNOWN_COLLECTIONS:
            result = get_repository(name).delete_many({})
            print(f"  Cleared {name}: {result.modified_count:,} documents")

    inserted = {}
    for name, documents in build_marketplace(job_count, talent_count).items():
        result = get_repository(name).insert_many(documents)
        inserted[name] = len(result.inserted_ids or [])
        print(f"  Inserted {inserted[name]:,} into {name}")
    return inserted


def main():
    parser = argparse.ArgumentParser(
        description="Seed sample TalentHub listings into MongoDB",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python scripts/seed_data.py
    python scripts/seed_data.py --reset --jobs 60
        """
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Delete existing documents from the listing collections first"
    )
    parser.add_argument("--jobs", type=int, default=30, metavar="N", help="Jobs to create")
    parser.add_argument("--talents", type=int, default=15, metavar="N", help="Talents to create")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    args = parser.parse_args()
    setup_logging(level="DEBUG" if args.verbose else "INFO")

    print(f"\n{'='*60}")
    print("TalentHub Seed Data")
    print(f"{'='*60}")

    try:
        seed(job_count=args.jobs, talent_count=args.talents, reset=args.reset)
    except Exception as e:
        print(f"Seeding failed: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)

    print(f"{'='*60}\n")


if __name__ == "__main__":
    main()
