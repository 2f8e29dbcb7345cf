"""Pytest fixtures for all test modules."""
import pytest
import yaml

from decision_registry.registry import Registry
from models.schema import Decision, Question

TAG_A = "Luke'sFunProjectA"
TAG_B = "Luke'sOtherFunProject"
TAG_C = "AriesThing"
TAG_D = "AdasEndeavor"

DEFAULT_TAGS = [TAG_A, TAG_B, TAG_C, TAG_D]


@pytest.fixture
def registry():
    """Provide a registry seeded with the default tags."""
    return Registry(tags=DEFAULT_TAGS)


@pytest.fixture
def sample_question():
    """Create a question filed under a registered tag."""
    return Question.create(
        "How many tests will luke end up writing?",
        tags={TAG_A},
    )


@pytest.fixture
def sample_decision():
    """Create a sample Decision for testing."""
    return Decision(
        choice="Red",
        rationale="favorite",
        decision_makers={"Luke"},
    )


@pytest.fixture
def sample_config():
    """
    Sample configuration for testing.

    Returns:
        dict: Sample configuration dict
    """
    return {
        "version": "1.0",
        "registry": {
            "seed_tags": list(DEFAULT_TAGS),
            "strict_mutations": False,
        },
        "logging": {
            "level": "ERROR",
        },
    }


@pytest.fixture
def config_file(tmp_path, sample_config):
    """Write sample_config to a YAML file and return its path."""
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(sample_config))
    return path
