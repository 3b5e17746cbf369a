from __future__ import annotations

import pytest

from line_messaging.adapters.line.validators import LineMessageValidator
from line_messaging.config.settings import get_settings


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch):
    for name in ("LINE_CHANNEL_ACCESS_TOKEN", "ENVIRONMENT", "VALIDATION_MAX_DEPTH"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def validator() -> LineMessageValidator:
    return LineMessageValidator(max_depth=64)
