import pytest

from app.models.nutrition import UserProfile


@pytest.fixture
def profile():
    return UserProfile(
        age=30,
        gender="male",
        weight=180,
        height=70,
        activity_level="moderate",
        goal="lose",
    )
