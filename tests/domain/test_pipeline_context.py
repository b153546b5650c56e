from __future__ import annotations

import pytest

from datafixer.domain.context import PipelineContext
from datafixer.domain.errors import PipelineConfigurationError, PipelineStateError
from datafixer.domain.model import CleaningRules, RowStatus


def test_load_replaces_previous_dataset() -> None:
    context = PipelineContext()
    context.load(["a"], [{"a": "1"}, {"a": "2"}])
    context.select_domain_column("a")
    context.is_finished = True

    context.load(["b", "c"], [{"b": "x"}])

    assert context.headers == ("b", "c")
    assert [row.values for row in context.rows] == [{"b": "x", "c": ""}]
    assert context.domain_column is None
    assert context.target_columns == []
    assert not context.is_finished
    assert all(row.status is RowStatus.PENDING for row in context.rows)


def test_select_domain_column_must_be_a_header() -> None:
    context = PipelineContext()
    context.load(["website"], [])

    with pytest.raises(PipelineConfigurationError):
        context.select_domain_column("domain")

    context.select_domain_column("website")
    assert context.domain_column == "website"
    context.select_domain_column(None)
    assert context.domain_column is None


def test_toggle_target_column_adds_and_removes() -> None:
    context = PipelineContext()
    context.load(["website", "email", "phone"], [])

    context.toggle_target_column("phone")
    context.toggle_target_column("email")
    assert context.target_columns == ["phone", "email"]

    context.toggle_target_column("phone")
    assert context.target_columns == ["email"]

    with pytest.raises(PipelineConfigurationError):
        context.toggle_target_column("fax")


def test_set_target_columns_drops_repeats() -> None:
    context = PipelineContext()
    context.load(["website", "email"], [])

    context.set_target_columns(["email", "email"])

    assert context.target_columns == ["email"]


def test_toggle_rule_replaces_rules() -> None:
    context = PipelineContext()
    original = context.rules

    context.toggle_rule("remove_duplicates")

    assert context.rules == CleaningRules(remove_duplicates=False)
    assert original.remove_duplicates


def test_unknown_rule_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unknown cleaning rule"):
        CleaningRules().toggled("remove_everything")  # type: ignore[arg-type]


def test_reset_restores_initial_state() -> None:
    context = PipelineContext()
    context.load(["website"], [{"website": "a.com"}])
    context.select_domain_column("website")
    context.toggle_rule("standardize_urls")
    context.is_finished = True

    context.reset()

    assert context.headers == ()
    assert context.rows == []
    assert context.rules == CleaningRules()
    assert not context.is_finished
    assert not context.is_processing


def test_configuration_is_frozen_while_processing() -> None:
    context = PipelineContext()
    context.load(["website", "email"], [])
    context.is_processing = True

    with pytest.raises(PipelineStateError):
        context.toggle_rule("validate_emails")
    with pytest.raises(PipelineStateError):
        context.toggle_target_column("email")
    with pytest.raises(PipelineStateError):
        context.reset()
    with pytest.raises(PipelineStateError):
        context.load(["x"], [])


def test_status_reflects_loaded_rows(company_context: PipelineContext) -> None:
    status = company_context.status()

    assert status.total == 4
    assert status.pending == 4
    assert status.progress == 0.0
    assert not status.is_processing
