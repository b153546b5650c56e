from __future__ import annotations

import pytest

from datafixer.domain.context import PipelineContext
from datafixer.domain.model import CleaningRules
from tests.helpers.rows import make_rows

COMPANY_HEADERS = ("company", "website", "email", "phone")


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "GEMINI_API_KEY",
        "GEMINI_MODEL",
        "GEMINI_BASE_URL",
        "GEMINI_TIMEOUT_SECONDS",
        "GEMINI_MAX_CALLS_PER_MINUTE",
        "GEMINI_RETRIES",
        "DATAFIXER_PACING_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def company_context() -> PipelineContext:
    context = PipelineContext()
    context.load(
        COMPANY_HEADERS,
        make_rows(
            COMPANY_HEADERS,
            {"company": "Acme", "website": "acme.com"},
            {"company": "Acme Duplicate", "website": "ACME.com "},
            {"company": "No Site", "website": ""},
            {"company": "Globex", "website": "www.globex.com", "email": "placeholder"},
        ),
    )
    context.select_domain_column("website")
    context.set_target_columns(["email", "phone"])
    context.set_rules(CleaningRules())
    return context
