import pytest

from iogrbot.commands import router


@pytest.fixture(autouse=True)
def _request_log(tmp_path, monkeypatch):
    """Keep the router's request log out of the project directory."""
    path = tmp_path / "iogrbot.log"
    monkeypatch.setattr(router, "_LOG_PATH", str(path))
    return path
