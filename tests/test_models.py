# =============================================================================
# ORM Model Tests
# =============================================================================
"""
Tests for model mapping details the services rely on.
"""

import pytest
from sqlalchemy import inspect
from sqlalchemy.exc import InvalidRequestError

from resume_api.database.models import Resume, User
from resume_api.models.resume import ResumeCreate


@pytest.mark.parametrize(
    "model, name",
    [(User, "resumes"), (Resume, "versions")],
)
def test_collections_are_never_loaded_implicitly(model, name):
    assert inspect(model).relationships[name].lazy == "raise"


async def test_collection_access_raises(resume_service, user):
    resume = await resume_service.create(user.id, ResumeCreate(title="CV"))

    with pytest.raises(InvalidRequestError):
        resume.versions

    with pytest.raises(InvalidRequestError):
        user.resumes


def test_tier_column_is_a_plain_string():
    column = User.__table__.c.subscription_tier

    assert column.type.python_type is str
    assert column.type.length == 20
