import pytest

from tests.test_utils import RaceScenario


@pytest.fixture
def scenario():
    """Factory fixture to create scenarios."""

    def _builder(rules, dice_rolls=None, **kwargs):
        return RaceScenario(rules, dice_rolls, **kwargs)

    return _builder
