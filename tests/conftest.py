import pytest


@pytest.fixture(autouse=True)
def demo_mode(monkeypatch):
    """Every test runs inside a demo mode unless it says otherwise."""
    monkeypatch.setenv("DEMOGEN_MODE", "test")
    monkeypatch.delenv("DEMOGEN_SEED", raising=False)
