"""Pytest fixtures for test suite."""

import pytest
import yaml
from pathlib import Path

from compliance_engine.core.config import Settings
from compliance_engine.core.ontology import Model, Relation, RelationType


FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_model(name: str) -> Model:
    """Load a model fixture from tests/fixtures."""
    with open(FIXTURES_DIR / name, encoding="utf-8") as f:
        return Model.model_validate(yaml.safe_load(f))


# =============================================================================
# Core Fixtures
# =============================================================================


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the environment and any .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def law_model() -> Model:
    """Law model separating Requisition from Procurement."""
    return load_model("procurement_law.yaml")


@pytest.fixture
def enterprise_model() -> Model:
    """Enterprise model where alice assumes both separated processes."""
    return load_model("procurement_enterprise.yaml")


@pytest.fixture
def compliant_enterprise(enterprise_model: Model) -> Model:
    """Enterprise model where Procurement is handled by bob instead."""
    relations = [
        Relation(type=RelationType.ASSUMES, source="bob", target="Procurement")
        if rel.type == RelationType.ASSUMES and rel.target == "Procurement"
        else rel
        for rel in enterprise_model.relations
    ]
    return enterprise_model.model_copy(update={"relations": relations})
