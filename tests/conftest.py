import pytest

from tcneo4j.BUILDERS.neo4j_builder import PASS_VAR, USER_VAR, VERSION_VAR


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: needs a running Docker daemon")


@pytest.fixture
def clean_env(monkeypatch):
    """Removes the override variables so defaults apply."""
    for var in (USER_VAR, PASS_VAR, VERSION_VAR):
        monkeypatch.delenv(var, raising=False)
    return monkeypatch
