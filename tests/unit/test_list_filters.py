"""
Unit tests for src/services/list_filters.py

Each builder is checked for the MongoDB filter it produces; repositories
used for cross-collection lookups are MagicMocks.
"""

import re

import pytest
from bson import ObjectId
from pymongo import DESCENDING
from unittest.mock import MagicMock

from src.common.error_handling import AppError, InvalidIdentifierError
from src.services import list_filters
from src.services.listing_service import DEFAULT_SORT

RECRUITER_ID = ObjectId("65a000000000000000000001")
JOB_A = ObjectId("65a0000000000000000000a1")
JOB_B = ObjectId("65a0000000000000000000a2")
OTHER_JOB = ObjectId("65a0000000000000000000ff")


class TestContains:
    def test_escapes_regex_metacharacters(self):
        condition = list_filters.contains("c++ (senior)")

        pattern = condition["$regex"]
        assert re.search(pattern, "Senior C++ (Senior) dev", re.IGNORECASE)
        assert condition["$options"] == "i"
        assert "\\+" in pattern


class TestJobFilters:
    """Tests for job listing filters."""

    def test_public_jobs_default(self):
        query = list_filters.public_jobs()

        assert query.filter == {"visibility": "public"}
        assert query.sort == DEFAULT_SORT

    def test_public_jobs_status_and_type(self):
        query = list_filters.public_jobs(status="active", job_type="contract")

        assert query.filter == {"visibility": "public", "status": "active", "type": "contract"}

    def test_public_jobs_rejects_unknown_status(self):
        with pytest.raises(AppError) as exc_info:
            list_filters.public_jobs(status="archived")

        assert exc_info.value.status_code == 400
        assert exc_info.value.code == "INVALID_FILTER"

    def test_empty_status_is_ignored(self):
        assert list_filters.public_jobs(status="").filter == {"visibility": "public"}

    def test_search_without_terms_is_active_public(self):
        query = list_filters.job_search()

        assert query.filter == {"status": "active", "visibility": "public"}

    def test_search_combines_conditions_with_and(self):
        query = list_filters.job_search(q="python", location="Nairobi", skills="django, flask")

        conditions = query.filter["$and"]
        assert conditions[0] == {"status": "active", "visibility": "public"}
        assert set(conditions[1]["$or"][0]) == {"title"}
        assert "location.city" in conditions[2]
        skill_patterns = conditions[3]["skills"]["$in"]
        assert len(skill_patterns) == 2
        assert all(p.flags & re.IGNORECASE for p in skill_patterns)

    def test_blank_search_text_is_ignored(self):
        query = list_filters.job_search(q="   ")

        assert query.filter == {"status": "active", "visibility": "public"}

    def test_urgent_and_featured(self):
        assert list_filters.urgent_jobs().filter["isUrgent"] is True
        assert list_filters.featured_jobs().filter["isFeatured"] is True
        assert list_filters.featured_jobs().filter["status"] == "active"

    def test_category_is_case_insensitive_substring(self):
        query = list_filters.jobs_by_category("design")

        assert query.filter["category"]["$options"] == "i"

    def test_admin_jobs_sees_every_visibility(self):
        assert list_filters.admin_jobs().filter == {}
        assert list_filters.admin_jobs(status="draft").filter == {"status": "draft"}

    def test_recruiter_jobs_parses_id(self):
        query = list_filters.recruiter_jobs(str(RECRUITER_ID), status="paused")

        assert query.filter == {"recruiter": RECRUITER_ID, "status": "paused"}

    def test_recruiter_jobs_invalid_id(self):
        with pytest.raises(InvalidIdentifierError):
            list_filters.recruiter_jobs("not-an-id")


class TestApplicationFilters:
    """Tests for application listing filters."""

    @pytest.fixture
    def jobs_repo(self):
        repo = MagicMock()
        repo.distinct.return_value = [JOB_A, JOB_B]
        return repo

    def test_job_applications(self):
        query = list_filters.job_applications(str(JOB_A), status="shortlisted")

        assert query.filter == {"job": JOB_A, "status": "shortlisted"}

    def test_recruiter_applications_spans_all_jobs(self, jobs_repo):
        query = list_filters.recruiter_applications(str(RECRUITER_ID), jobs_repo)

        jobs_repo.distinct.assert_called_once_with("_id", {"recruiter": RECRUITER_ID})
        assert query.filter == {"job": {"$in": [JOB_A, JOB_B]}}

    def test_recruiter_applications_single_owned_job(self, jobs_repo):
        query = list_filters.recruiter_applications(
            str(RECRUITER_ID), jobs_repo, status="pending", job_id=str(JOB_B)
        )

        assert query.filter == {"job": JOB_B, "status": "pending"}

    def test_recruiter_applications_foreign_job_is_empty(self, jobs_repo):
        query = list_filters.recruiter_applications(
            str(RECRUITER_ID), jobs_repo, job_id=str(OTHER_JOB)
        )

        assert query.filter == {"job": {"$in": []}}

    def test_talent_applications_rejects_unknown_status(self):
        with pytest.raises(AppError):
            list_filters.talent_applications(str(JOB_A), status="ghosted")


class TestUserFilters:
    """Tests for admin user and talent search filters."""

    def test_admin_users_excludes_secrets(self):
        query = list_filters.admin_users()

        assert query.filter == {}
        assert query.projection == {"password": 0, "refreshTokens": 0}

    def test_admin_users_single_condition_not_wrapped(self):
        assert list_filters.admin_users(role="recruiter").filter == {"role": "recruiter"}

    def test_admin_users_status_maps_to_is_active(self):
        query = list_filters.admin_users(role="talent", status="inactive", search="abe")

        conditions = query.filter["$and"]
        assert {"role": "talent"} in conditions
        assert {"isActive": False} in conditions
        assert len(conditions[2]["$or"]) == 3

    def test_talent_search_public_only(self):
        users = MagicMock()

        query = list_filters.talent_search(users)

        assert query.filter == {"isPublic": True}
        assert query.sort == [("lastProfileUpdate", DESCENDING)]
        users.distinct.assert_not_called()

    def test_talent_search_intersects_text_and_location(self):
        both = ObjectId("65a0000000000000000000b1")
        only_text = ObjectId("65a0000000000000000000b2")
        only_city = ObjectId("65a0000000000000000000b3")
        users = MagicMock()
        users.distinct.side_effect = [[both, only_text], [both, only_city]]

        query = list_filters.talent_search(users, q="hana", location="Kigali")

        assert query.filter["user"] == {"$in": [both]}

    def test_talent_search_skills_and_availability(self):
        query = list_filters.talent_search(MagicMock(), skills="python", availability="available")

        assert "skills.name" in query.filter
        assert query.filter["availability.status"] == "available"


class TestNotificationFilters:
    def test_unread_of_type(self):
        user_id = ObjectId("65a0000000000000000000c1")

        query = list_filters.user_notifications(
            str(user_id), notification_type="job_application", is_read=False
        )

        assert query.filter == {"recipient": user_id, "type": "job_application", "isRead": False}

    def test_unknown_type_rejected(self):
        with pytest.raises(AppError):
            list_filters.user_notifications(str(JOB_A), notification_type="spam")

    def test_admin_notifications_all_types(self):
        query = list_filters.admin_notifications()

        assert query.filter == {}
        assert [ref.field for ref in query.populate] == ["recipient", "sender"]

    def test_admin_notifications_of_type(self):
        assert list_filters.admin_notifications("welcome").filter == {"type": "welcome"}


class TestReferences:
    """Which references each listing resolves."""

    @pytest.mark.parametrize("query", [
        list_filters.public_jobs(),
        list_filters.job_search(q="python"),
        list_filters.jobs_by_category("Design"),
        list_filters.urgent_jobs(),
        list_filters.featured_jobs(),
        list_filters.admin_jobs(),
    ])
    def test_job_listings_load_recruiter(self, query):
        assert query.populate == (list_filters.RECRUITER,)
        assert list_filters.RECRUITER.collection == "users"
        assert list_filters.RECRUITER.projection == {
            "firstName": 1, "lastName": 1, "email": 1, "avatar": 1,
        }

    def test_job_applications_load_applicant_and_talent(self):
        query = list_filters.job_applications(str(JOB_A))

        assert [(ref.field, ref.collection) for ref in query.populate] == [
            ("applicant", "users"),
            ("talent", "talents"),
        ]

    def test_recruiter_applications_load_job(self):
        jobs = MagicMock()
        jobs.distinct.return_value = [JOB_A]

        query = list_filters.recruiter_applications(str(RECRUITER_ID), jobs)

        assert query.populate[0].field == "job"
        assert query.populate[0].fields == ("title", "company", "status")

    def test_talent_search_loads_user_profile(self):
        query = list_filters.talent_search(MagicMock())

        assert query.populate[0].field == "user"
        assert "bio" in query.populate[0].fields


class TestUserSearch:
    def test_active_users_only(self):
        query = list_filters.user_search()

        assert query.filter == {"isActive": True}
        assert query.projection == {"password": 0, "refreshTokens": 0}

    def test_text_and_role(self):
        query = list_filters.user_search(q="sara", role="recruiter")

        assert query.filter["role"] == "recruiter"
        assert [list(c)[0] for c in query.filter["$or"]] == ["firstName", "lastName", "email"]

    def test_unknown_role_rejected(self):
        with pytest.raises(AppError):
            list_filters.user_search(role="owner")


class TestTalentsForJob:
    def test_without_job_uses_skills_parameter(self):
        jobs = MagicMock()

        query, job = list_filters.talents_for_job(
            str(RECRUITER_ID), jobs, MagicMock(), skills="python, sql", experience=3
        )

        assert job is None
        jobs.find_one.assert_not_called()
        assert query.filter["isPublic"] is True
        assert query.filter["isProfileComplete"] is True
        assert len(query.filter["skills.name"]["$in"]) == 2
        assert query.filter["experience.yearsOfExperience"] == {"$gte": 3}
        assert query.sort == [("lastProfileUpdate", DESCENDING)]

    def test_job_skills_replace_parameter(self):
        jobs = MagicMock()
        jobs.find_one.return_value = {"_id": JOB_A, "recruiter": RECRUITER_ID, "skills": ["react"]}

        query, job = list_filters.talents_for_job(
            str(RECRUITER_ID), jobs, MagicMock(), job_id=str(JOB_A), skills="python"
        )

        assert job["_id"] == JOB_A
        patterns = query.filter["skills.name"]["$in"]
        assert [p.pattern for p in patterns] == ["react"]

    def test_missing_job_is_404(self):
        jobs = MagicMock()
        jobs.find_one.return_value = None

        with pytest.raises(AppError) as exc_info:
            list_filters.talents_for_job(str(RECRUITER_ID), jobs, MagicMock(), job_id=str(JOB_A))

        assert exc_info.value.status_code == 404

    def test_other_recruiters_job_is_403(self):
        jobs = MagicMock()
        jobs.find_one.return_value = {"_id": OTHER_JOB, "recruiter": ObjectId(), "skills": []}

        with pytest.raises(AppError) as exc_info:
            list_filters.talents_for_job(str(RECRUITER_ID), jobs, MagicMock(), job_id=str(OTHER_JOB))

        assert exc_info.value.status_code == 403

    def test_location_restricts_users(self):
        user_id = ObjectId("65a0000000000000000000b1")
        users = MagicMock()
        users.distinct.return_value = [user_id]

        query, _ = list_filters.talents_for_job(str(RECRUITER_ID), MagicMock(), users, location="Lagos")

        assert query.filter["user"] == {"$in": [user_id]}


class TestSavedJobsAndMessages:
    def test_saved_jobs_load_job_with_recruiter(self):
        talent_id = ObjectId("65a0000000000000000000c1")

        query = list_filters.saved_jobs(str(talent_id))

        assert query.filter == {"talent": talent_id}
        job_ref = query.populate[0]
        assert (job_ref.field, job_ref.collection) == ("job", "jobs")
        assert job_ref.nested == (list_filters.RECRUITER,)

    def test_application_messages(self):
        applications = MagicMock()
        applications.find_one.return_value = {"_id": JOB_A}

        query = list_filters.application_messages(str(JOB_A), applications)

        assert query.filter == {"application": JOB_A}
        assert query.sort == DEFAULT_SORT
        assert [ref.field for ref in query.populate] == ["sender", "recipient"]

    def test_application_messages_missing_application(self):
        applications = MagicMock()
        applications.find_one.return_value = None

        with pytest.raises(AppError) as exc_info:
            list_filters.application_messages(str(JOB_A), applications)

        assert exc_info.value.status_code == 404

    def test_unread_messages(self):
        user_id = ObjectId("65a0000000000000000000c1")

        query = list_filters.unread_messages(str(user_id))

        assert query.filter == {"recipient": user_id, "isRead": False}
        application_ref = query.populate[1]
        assert application_ref.fields == ("job",)
        assert application_ref.nested[0].fields == ("title", "company")

    def test_invalid_talent_id(self):
        with pytest.raises(InvalidIdentifierError):
            list_filters.saved_jobs("nope")
