"""FormSession tests — editing, the submit gate, and the async hand-off.

Uses a recording on_submit collaborator (a plain list of calls) to verify
that submission happens exactly once per successful validation and never
when a visible field fails.
"""

import datetime

import pytest

from intake_forms.constants import REQUIRED_MESSAGE
from intake_forms.models import FormSessionStatus
from intake_forms.session import FormSession, initial_responses

from conftest import make_field, make_schema


class Recorder:
    """on_submit/on_cancel stand-in that records every call."""

    def __init__(self, result=True):
        self.calls = []
        self.result = result

    def __call__(self, *args):
        self.calls.append(args)
        return self.result


@pytest.fixture
def name_schema():
    return make_schema(
        make_field("name", required=True, order=1),
        make_field("weight", "number", order=2, validation={"min": 20, "max": 300}),
    )


class TestEditing:

    def test_starts_empty(self, name_schema):
        session = FormSession(name_schema)
        assert session.responses == {}
        assert session.errors == {}
        assert session.status is FormSessionStatus.EDITING

    def test_initial_data_is_copied(self, name_schema):
        seed = {"name": "Ana"}
        session = FormSession(name_schema, initial_data=seed)
        session.set_value("name", "Bia")
        assert seed == {"name": "Ana"}
        assert session.value_for("name") == "Bia"

    def test_set_value_is_copy_on_write(self, name_schema):
        session = FormSession(name_schema)
        before = session.responses
        session.set_value("name", "Ana")
        assert before == {}
        assert session.responses == {"name": "Ana"}

    def test_snapshots_are_independent(self, name_schema):
        session = FormSession(name_schema)
        snapshot = session.responses
        snapshot["name"] = "tampered"
        assert session.responses == {}

    def test_set_value_clears_only_that_error(self):
        schema = make_schema(make_field("a", required=True), make_field("b", required=True))
        session = FormSession(schema)
        session.submit()
        assert session.errors == {"a": REQUIRED_MESSAGE, "b": REQUIRED_MESSAGE}

        session.set_value("a", "x")
        assert session.errors == {"b": REQUIRED_MESSAGE}
        assert session.status is FormSessionStatus.INVALID

        session.set_value("b", "y")
        assert session.errors == {}
        assert session.status is FormSessionStatus.EDITING

    def test_set_value_does_not_revalidate(self, name_schema):
        """Entering a bad value mid-typing shows no error until submit."""
        session = FormSession(name_schema)
        session.set_value("weight", 5)
        assert session.error_for("weight") is None

    def test_same_value_twice_is_idempotent(self, name_schema):
        session = FormSession(name_schema)
        session.submit()
        session.set_value("name", "Ana")
        first = session.responses
        session.set_value("name", "Ana")
        assert session.responses == first
        assert session.error_for("name") is None

    def test_section_header_rejects_values(self):
        schema = make_schema(make_field("header", "section_header"), make_field("name"))
        session = FormSession(schema)
        with pytest.raises(ValueError, match="has no value"):
            session.set_value("header", "x")
        assert session.responses == {}

    def test_stale_hidden_values_kept(self, therapy_schema):
        session = FormSession(therapy_schema)
        session.set_value("previous_therapy", "yes_stopped")
        session.set_value("previous_therapy_detail", "Parei em 2022")
        session.set_value("previous_therapy", "no")

        assert session.responses["previous_therapy_detail"] == "Parei em 2022"
        assert [f.id for f in session.visible_fields()] == ["previous_therapy"]

        # Toggling back reveals the earlier answer
        session.set_value("previous_therapy", "yes_stopped")
        plan = session.render()
        detail = plan.sections[0].fields[1]
        assert detail.field.id == "previous_therapy_detail"
        assert detail.value == "Parei em 2022"


class TestSubmitGate:

    def test_rejects_and_does_not_call_handler(self, name_schema):
        handler = Recorder()
        session = FormSession(name_schema, on_submit=handler, initial_data={"weight": 70})

        result = session.submit()

        assert result.type == "rejected"
        assert result.errors == {"name": REQUIRED_MESSAGE}
        assert handler.calls == []
        assert session.responses == {"weight": 70}
        assert session.errors == {"name": REQUIRED_MESSAGE}
        assert session.status is FormSessionStatus.INVALID

    def test_fix_then_submit_calls_handler_once(self, name_schema):
        handler = Recorder()
        session = FormSession(name_schema, on_submit=handler)

        session.submit()
        session.set_value("name", "Ana")
        result = session.submit()

        assert result.type == "submitted"
        assert result.responses == {"name": "Ana"}
        assert result.handler_result is True
        assert handler.calls == [({"name": "Ana"},)]
        assert session.status is FormSessionStatus.SUBMITTED

    def test_success_leaves_state_untouched(self, name_schema):
        session = FormSession(name_schema, initial_data={"name": "Ana"})
        session.submit()
        assert session.responses == {"name": "Ana"}
        assert session.errors == {}

    def test_new_run_replaces_error_set(self, name_schema):
        session = FormSession(name_schema, initial_data={"weight": 5})
        session.submit()
        assert session.errors == {"name": REQUIRED_MESSAGE, "weight": "Valor mínimo: 20"}

        session.set_value("name", "Ana")
        session.set_value("weight", 500)
        session.set_value("name", "")
        session.submit()
        assert session.errors == {"name": REQUIRED_MESSAGE, "weight": "Valor máximo: 300"}

    def test_hidden_fields_do_not_block(self, therapy_schema):
        handler = Recorder()
        schema = make_schema(
            *therapy_schema.fields,
            make_field(
                "why_stopped", required=True,
                conditional_on={"field_id": "previous_therapy", "value": "yes_stopped"},
            ),
        )
        session = FormSession(schema, on_submit=handler)
        session.set_value("previous_therapy", "no")
        assert session.submit().type == "submitted"
        assert len(handler.calls) == 1

    def test_handler_receives_snapshot(self, name_schema):
        received = []
        session = FormSession(name_schema, on_submit=received.append, initial_data={"name": "Ana"})
        session.submit()
        received[0]["name"] = "changed"
        assert session.value_for("name") == "Ana"

    def test_arbitrary_answer_types_submit_once(self):
        """Answers outside the wire types still produce an accepted result."""
        handler = Recorder()
        schema = make_schema(
            make_field("d", "date"),
            make_field("days", "multiselect", options=[{"label": "1", "value": "1"}]),
        )
        session = FormSession(schema, on_submit=handler)
        session.set_value("d", datetime.date(2020, 1, 1))
        session.set_value("days", [1, 2])

        result = session.submit()

        assert result.type == "submitted"
        assert result.responses == {"d": datetime.date(2020, 1, 1), "days": [1, 2]}
        assert len(handler.calls) == 1
        assert session.status is FormSessionStatus.SUBMITTED

    def test_submit_without_handler(self, name_schema):
        session = FormSession(name_schema, initial_data={"name": "Ana"})
        result = session.submit()
        assert result.type == "submitted"
        assert result.handler_result is None


class TestAsyncSubmit:

    @pytest.mark.asyncio
    async def test_awaits_async_handler_once(self, name_schema):
        calls = []

        async def save(responses):
            calls.append(responses)
            return {"id": "sub-1"}

        session = FormSession(name_schema, on_submit=save, initial_data={"name": "Ana"})
        result = await session.submit_async()

        assert result.type == "submitted"
        assert result.handler_result == {"id": "sub-1"}
        assert calls == [{"name": "Ana"}]

    @pytest.mark.asyncio
    async def test_sync_handler_also_works(self, name_schema):
        handler = Recorder(result="ok")
        session = FormSession(name_schema, on_submit=handler, initial_data={"name": "Ana"})
        result = await session.submit_async()
        assert result.handler_result == "ok"

    @pytest.mark.asyncio
    async def test_rejected_never_awaits(self, name_schema):
        calls = []

        async def save(responses):
            calls.append(responses)

        session = FormSession(name_schema, on_submit=save)
        result = await session.submit_async()
        assert result.type == "rejected"
        assert calls == []


class TestCancelAndDefaults:

    def test_cancel_notifies_only(self, name_schema):
        cancel = Recorder()
        session = FormSession(name_schema, on_cancel=cancel, initial_data={"name": "Ana"})
        session.cancel()
        assert cancel.calls == [()]
        assert session.responses == {"name": "Ana"}

    def test_cancel_without_handler(self, name_schema):
        FormSession(name_schema).cancel()

    def test_section_headers_never_reach_handler(self):
        handler = Recorder()
        schema = make_schema(
            make_field("hdr", "section_header", default_value="x"),
            make_field("name"),
        )
        assert initial_responses(schema) == {}

        session = FormSession(schema, on_submit=handler, initial_data={"hdr": "stale", "name": "Ana"})
        assert session.responses == {"name": "Ana"}
        session.submit()
        assert handler.calls == [({"name": "Ana"},)]

    def test_initial_responses_from_defaults(self):
        schema = make_schema(
            make_field("country", default_value="BR"),
            make_field("conditions", "checkbox", options=[{"label": "A", "value": "a"}], default_value=["a"]),
            make_field("notes"),
        )
        seed = initial_responses(schema)
        assert seed == {"country": "BR", "conditions": ["a"]}
        session = FormSession(schema, initial_data=seed)
        assert session.value_for("conditions") == ["a"]
