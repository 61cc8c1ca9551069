"""User factory for test data generation."""

from itertools import count
from uuid import uuid4

from polyfactory import Use

from src.scribe.models import User
from tests.factories.base import BaseFactory, utc_now

_github_ids = count(1000)


class UserFactory(BaseFactory):
    """Factory for generating signed-in GitHub users."""

    __model__ = User

    id = Use(uuid4)
    github_id = Use(lambda: next(_github_ids))
    username = Use(lambda: f"dev_{uuid4().hex[-8:]}")
    email = Use(lambda: f"dev_{uuid4().hex[-8:]}@example.com")
    name = "Test Developer"
    avatar_url = "https://avatars.githubusercontent.com/u/1"
    access_token = Use(lambda: f"gho_{uuid4().hex}")
    created_at = Use(utc_now)
    updated_at = Use(utc_now)
