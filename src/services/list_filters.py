"""
Per-resource filters for paginated listings.

Each builder turns the query parameters a listing accepts into a ListQuery.
Status-like parameters are checked against whitelists; identifiers are
parsed as ObjectIds. Free text is matched case-insensitively with the
user's input escaped, so search terms are never interpreted as regex.
"""

import re
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

from bson import ObjectId
from pymongo import DESCENDING

from src.common.error_handling import AppError
from src.common.json_utils import optional_object_id, split_csv, to_object_id
from src.common.repositories import APPLICATIONS, JOBS, TALENTS, USERS
from src.common.repositories.base import CollectionRepositoryInterface
from src.services.listing_service import ListQuery, Populate

# Whitelists (mirror the stored enums)
JOB_STATUSES = ["draft", "active", "paused", "closed", "expired"]
JOB_TYPES = ["full-time", "part-time", "contract", "freelance", "internship"]
APPLICATION_STATUSES = [
    "pending",
    "reviewed",
    "shortlisted",
    "interviewed",
    "offered",
    "accepted",
    "rejected",
    "withdrawn",
]
USER_ROLES = ["talent", "recruiter", "admin"]
USER_STATES = ["active", "inactive"]
AVAILABILITY_STATUSES = ["available", "busy", "unavailable"]
NOTIFICATION_TYPES = [
    "job_application",
    "application_status_change",
    "interview_scheduled",
    "job_shortlisted",
    "job_rejected",
    "job_offered",
    "profile_viewed",
    "new_job_match",
    "system_message",
    "welcome",
    "password_reset",
    "email_verification",
]

USER_PROJECTION = {"password": 0, "refreshTokens": 0}

# Referenced documents, loaded with the fields list views render
USER_CARD = ("firstName", "lastName", "email", "avatar")
USER_PROFILE = USER_CARD + ("bio", "location")

RECRUITER = Populate("recruiter", USERS, USER_CARD)
APPLICANT = Populate("applicant", USERS, USER_CARD)
APPLICANT_TALENT = Populate("talent", TALENTS, ("skills", "experience"))
SENDER = Populate("sender", USERS, USER_CARD)
RECIPIENT = Populate("recipient", USERS, USER_CARD)

# Jobs visible on the public board
PUBLIC_ACTIVE = {"status": "active", "visibility": "public"}


def _check_choice(name: str, value: Optional[str], allowed: List[str]) -> Optional[str]:
    """Return value if allowed (None passes through), else raise a 400."""
    if value is None or value == "":
        return None
    if value not in allowed:
        raise AppError(
            f"Invalid {name} '{value}'. Allowed: {', '.join(allowed)}",
            status_code=400,
            code="INVALID_FILTER",
        )
    return value


def contains(text: str) -> Dict[str, Any]:
    """Case-insensitive substring match with the input escaped."""
    return {"$regex": re.escape(text.strip()), "$options": "i"}


def _any_of(terms: Iterable[str]) -> List[re.Pattern]:
    return [re.compile(re.escape(term), re.IGNORECASE) for term in terms]


def _combine(conditions: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Combine conditions with $and when there is more than one."""
    if not conditions:
        return {}
    if len(conditions) == 1:
        return conditions[0]
    return {"$and": conditions}


# ============================================================================
# Jobs
# ============================================================================

def public_jobs(status: Optional[str] = None, job_type: Optional[str] = None) -> ListQuery:
    """Public job board: every public job, optionally by status and type."""
    query: Dict[str, Any] = {"visibility": "public"}
    status = _check_choice("status", status, JOB_STATUSES)
    job_type = _check_choice("type", job_type, JOB_TYPES)
    if status:
        query["status"] = status
    if job_type:
        query["type"] = job_type
    return ListQuery(filter=query, populate=(RECRUITER,))


def job_search(
    q: Optional[str] = None,
    category: Optional[str] = None,
    location: Optional[str] = None,
    job_type: Optional[str] = None,
    skills: Optional[str] = None,
) -> ListQuery:
    """
    Active public jobs matching free text and facets.

    Args:
        q: Free text over title, description and category
        category: Substring of the category
        location: Substring of location.city
        job_type: One of JOB_TYPES
        skills: Comma-separated; a job matches if it lists any of them
    """
    conditions: List[Dict[str, Any]] = [dict(PUBLIC_ACTIVE)]

    if q and q.strip():
        conditions.append({"$or": [
            {"title": contains(q)},
            {"description": contains(q)},
            {"category": contains(q)},
        ]})
    if category and category.strip():
        conditions.append({"category": contains(category)})
    if location and location.strip():
        conditions.append({"location.city": contains(location)})
    job_type = _check_choice("type", job_type, JOB_TYPES)
    if job_type:
        conditions.append({"type": job_type})
    skill_terms = split_csv(skills)
    if skill_terms:
        conditions.append({"skills": {"$in": _any_of(skill_terms)}})

    return ListQuery(filter=_combine(conditions), populate=(RECRUITER,))


def jobs_by_category(category: str) -> ListQuery:
    return ListQuery(filter={**PUBLIC_ACTIVE, "category": contains(category)}, populate=(RECRUITER,))


def urgent_jobs() -> ListQuery:
    return ListQuery(filter={**PUBLIC_ACTIVE, "isUrgent": True}, populate=(RECRUITER,))


def featured_jobs() -> ListQuery:
    return ListQuery(filter={**PUBLIC_ACTIVE, "isFeatured": True}, populate=(RECRUITER,))


def admin_jobs(status: Optional[str] = None) -> ListQuery:
    """All jobs regardless of visibility."""
    status = _check_choice("status", status, JOB_STATUSES)
    return ListQuery(filter={"status": status} if status else {}, populate=(RECRUITER,))


def recruiter_jobs(recruiter_id: str, status: Optional[str] = None) -> ListQuery:
    query: Dict[str, Any] = {"recruiter": to_object_id(recruiter_id, "recruiter_id")}
    status = _check_choice("status", status, JOB_STATUSES)
    if status:
        query["status"] = status
    return ListQuery(filter=query)


# ============================================================================
# Applications
# ============================================================================

def job_applications(job_id: str, status: Optional[str] = None) -> ListQuery:
    query: Dict[str, Any] = {"job": to_object_id(job_id, "job_id")}
    status = _check_choice("status", status, APPLICATION_STATUSES)
    if status:
        query["status"] = status
    return ListQuery(filter=query, populate=(APPLICANT, APPLICANT_TALENT))


def recruiter_applications(
    recruiter_id: str,
    jobs: CollectionRepositoryInterface,
    status: Optional[str] = None,
    job_id: Optional[str] = None,
) -> ListQuery:
    """
    Applications to any of the recruiter's jobs.

    When job_id is given it must belong to the recruiter; otherwise the
    listing is empty rather than leaking another recruiter's applicants.
    """
    recruiter = to_object_id(recruiter_id, "recruiter_id")
    job_ids = jobs.distinct("_id", {"recruiter": recruiter})

    job_filter: Any = {"$in": job_ids}
    requested_job = optional_object_id(job_id, "jobId")
    if requested_job is not None:
        job_filter = requested_job if requested_job in job_ids else {"$in": []}

    query: Dict[str, Any] = {"job": job_filter}
    status = _check_choice("status", status, APPLICATION_STATUSES)
    if status:
        query["status"] = status
    return ListQuery(filter=query, populate=(
        Populate("job", JOBS, ("title", "company", "status")),
        APPLICANT,
        APPLICANT_TALENT,
    ))


def talent_applications(talent_id: str, status: Optional[str] = None) -> ListQuery:
    query: Dict[str, Any] = {"talent": to_object_id(talent_id, "talent_id")}
    status = _check_choice("status", status, APPLICATION_STATUSES)
    if status:
        query["status"] = status
    return ListQuery(filter=query, populate=(
        Populate("job", JOBS, ("title", "company.name", "location", "status")),
    ))


# ============================================================================
# Users and talents
# ============================================================================

def admin_users(
    role: Optional[str] = None,
    status: Optional[str] = None,
    search: Optional[str] = None,
) -> ListQuery:
    """Users by role, active state and name/email search. Secrets excluded."""
    conditions: List[Dict[str, Any]] = []
    role = _check_choice("role", role, USER_ROLES)
    if role:
        conditions.append({"role": role})
    status = _check_choice("status", status, USER_STATES)
    if status:
        conditions.append({"isActive": status == "active"})
    if search and search.strip():
        conditions.append({"$or": [
            {"firstName": contains(search)},
            {"lastName": contains(search)},
            {"email": contains(search)},
        ]})
    return ListQuery(filter=_combine(conditions), projection=USER_PROJECTION)


def talent_search(
    users: CollectionRepositoryInterface,
    q: Optional[str] = None,
    skills: Optional[str] = None,
    location: Optional[str] = None,
    availability: Optional[str] = None,
) -> ListQuery:
    """
    Public talent profiles.

    `q` and `location` match the owning user (active users only); when both
    are given a profile must match both.
    """
    query: Dict[str, Any] = {"isPublic": True}

    user_ids: Optional[Set[ObjectId]] = None
    if q and q.strip():
        matched = users.distinct("_id", {
            "isActive": True,
            "$or": [
                {"firstName": contains(q)},
                {"lastName": contains(q)},
                {"bio": contains(q)},
            ],
        })
        user_ids = set(matched)
    if location and location.strip():
        matched = set(users.distinct("_id", {"isActive": True, "location": contains(location)}))
        user_ids = matched if user_ids is None else user_ids & matched
    if user_ids is not None:
        query["user"] = {"$in": sorted(user_ids)}

    skill_terms = split_csv(skills)
    if skill_terms:
        query["skills.name"] = {"$in": _any_of(skill_terms)}

    availability = _check_choice("availability", availability, AVAILABILITY_STATUSES)
    if availability:
        query["availability.status"] = availability

    return ListQuery(
        filter=query,
        sort=[("lastProfileUpdate", DESCENDING)],
        populate=(Populate("user", USERS, USER_PROFILE),),
    )


def user_search(q: Optional[str] = None, role: Optional[str] = None) -> ListQuery:
    """Active users by name or email text and role. Secrets excluded."""
    query: Dict[str, Any] = {"isActive": True}
    if q and q.strip():
        query["$or"] = [
            {"firstName": contains(q)},
            {"lastName": contains(q)},
            {"email": contains(q)},
        ]
    role = _check_choice("role", role, USER_ROLES)
    if role:
        query["role"] = role
    return ListQuery(filter=query, projection=USER_PROJECTION)


def talents_for_job(
    recruiter_id: str,
    jobs: CollectionRepositoryInterface,
    users: CollectionRepositoryInterface,
    job_id: Optional[str] = None,
    skills: Optional[str] = None,
    experience: Optional[int] = None,
    location: Optional[str] = None,
) -> Tuple[ListQuery, Optional[Dict[str, Any]]]:
    """
    Complete public profiles a recruiter can approach.

    With job_id the job's own skills replace the `skills` parameter; the job
    must belong to the recruiter.

    Returns:
        (query, job) where job is None unless job_id was given

    Raises:
        AppError: 404 if the job does not exist, 403 if it is not the recruiter's
    """
    recruiter = to_object_id(recruiter_id, "recruiter_id")
    job = None
    requested_job = optional_object_id(job_id, "jobId")
    if requested_job is not None:
        job = jobs.find_one({"_id": requested_job})
        if job is None:
            raise AppError("Job not found", status_code=404, code="NOT_FOUND")
        if job.get("recruiter") != recruiter:
            raise AppError("Not authorized to access this job", status_code=403, code="FORBIDDEN")

    query: Dict[str, Any] = {"isPublic": True, "isProfileComplete": True}

    skill_terms = list(job.get("skills") or []) if job else []
    if not skill_terms:
        skill_terms = split_csv(skills)
    if skill_terms:
        query["skills.name"] = {"$in": _any_of(skill_terms)}

    if experience is not None:
        query["experience.yearsOfExperience"] = {"$gte": experience}

    if location and location.strip():
        query["user"] = {"$in": users.distinct("_id", {"isActive": True, "location": contains(location)})}

    return (
        ListQuery(
            filter=query,
            sort=[("lastProfileUpdate", DESCENDING)],
            populate=(Populate("user", USERS, USER_PROFILE),),
        ),
        job,
    )


# ============================================================================
# Notifications
# ============================================================================

def user_notifications(
    user_id: str,
    notification_type: Optional[str] = None,
    is_read: Optional[bool] = None,
) -> ListQuery:
    query: Dict[str, Any] = {"recipient": to_object_id(user_id, "user_id")}
    notification_type = _check_choice("type", notification_type, NOTIFICATION_TYPES)
    if notification_type:
        query["type"] = notification_type
    if is_read is not None:
        query["isRead"] = is_read
    return ListQuery(filter=query, populate=(SENDER,))


def admin_notifications(notification_type: Optional[str] = None) -> ListQuery:
    """Every user's notifications, optionally of one type."""
    notification_type = _check_choice("type", notification_type, NOTIFICATION_TYPES)
    return ListQuery(
        filter={"type": notification_type} if notification_type else {},
        populate=(
            Populate("recipient", USERS, ("firstName", "lastName", "email")),
            Populate("sender", USERS, ("firstName", "lastName", "email")),
        ),
    )


# ============================================================================
# Saved jobs and messages
# ============================================================================

def saved_jobs(talent_id: str) -> ListQuery:
    """Jobs a talent saved, newest save first, each with its recruiter."""
    return ListQuery(
        filter={"talent": to_object_id(talent_id, "talent_id")},
        populate=(Populate("job", JOBS, nested=(RECRUITER,)),),
    )


def application_messages(
    application_id: str,
    applications: CollectionRepositoryInterface,
) -> ListQuery:
    """
    Messages exchanged on one application.

    Pages are selected newest first; callers reverse each page to show it
    in chronological order.

    Raises:
        AppError: 404 if the application does not exist
    """
    application = to_object_id(application_id, "application_id")
    if applications.find_one({"_id": application}, projection={"_id": 1}) is None:
        raise AppError("Application not found", status_code=404, code="NOT_FOUND")
    return ListQuery(filter={"application": application}, populate=(SENDER, RECIPIENT))


def unread_messages(user_id: str) -> ListQuery:
    """Unread messages addressed to a user, with the job they concern."""
    return ListQuery(
        filter={"recipient": to_object_id(user_id, "user_id"), "isRead": False},
        populate=(
            SENDER,
            Populate(
                "application",
                APPLICATIONS,
                ("job",),
                nested=(Populate("job", JOBS, ("title", "company")),),
            ),
        ),
    )
