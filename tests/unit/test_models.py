"""Tests for relay.models -- unified request/response model."""

import pytest

from relay.errors import ValidationError
from relay.models import (
    DEFAULT_MAX_TOKENS,
    Message,
    OutputFormat,
    Provider,
    Request,
    Response,
    Role,
    Usage,
)


class TestMessage:
    def test_constructors(self):
        assert Message.user("hi").role == Role.USER
        assert Message.assistant("hi").role == Role.ASSISTANT
        assert Message.system("hi").role == Role.SYSTEM

    def test_string_role_coerced(self):
        msg = Message("User", "hello")
        assert msg.role is Role.USER

    def test_unknown_role_rejected(self):
        with pytest.raises(ValidationError, match="Unknown message role"):
            Message("tool", "x")

    def test_immutable(self):
        msg = Message.user("hi")
        with pytest.raises(AttributeError):
            msg.content = "changed"

    def test_to_dict(self):
        assert Message.assistant("ok").to_dict() == {"role": "assistant", "content": "ok"}


class TestRequestBuilder:
    def test_defaults(self):
        req = Request("gpt-4o-mini")
        assert req.messages == ()
        assert req.system_prompt is None
        assert req.max_tokens == DEFAULT_MAX_TOKENS == 1024
        assert req.temperature is None
        assert req.top_p is None
        assert req.output_format is OutputFormat.TEXT

    def test_builders_return_new_request(self):
        base = Request("gpt-4o-mini")
        built = (
            base.with_message(Message.user("Hello"))
            .with_system_prompt("Be brief")
            .with_max_tokens(50)
            .with_temperature(0.7)
            .with_top_p(0.9)
            .with_output_format(OutputFormat.JSON)
        )
        assert base.messages == ()
        assert base.system_prompt is None
        assert built.messages == (Message.user("Hello"),)
        assert built.system_prompt == "Be brief"
        assert built.max_tokens == 50
        assert built.temperature == 0.7
        assert built.top_p == 0.9
        assert built.output_format is OutputFormat.JSON

    def test_message_order_preserved(self):
        req = (
            Request("m")
            .with_message(Message.user("1"))
            .with_message(Message.assistant("2"))
            .with_message(Message.user("3"))
        )
        assert [m.content for m in req.messages] == ["1", "2", "3"]

    def test_with_messages_replaces(self):
        req = Request("m").with_message(Message.user("old"))
        req = req.with_messages([Message.user("a"), Message.assistant("b")])
        assert [m.content for m in req.messages] == ["a", "b"]
        assert isinstance(req.messages, tuple)

    def test_list_messages_converted_to_tuple(self):
        req = Request("m", messages=[Message.user("a")])
        assert req.messages == (Message.user("a"),)

    def test_output_format_from_string(self):
        assert Request("m").with_output_format("json").output_format is OutputFormat.JSON

    def test_out_of_range_accepted_by_builder(self):
        req = Request("m").with_temperature(5.0)
        assert req.temperature == 5.0


class TestRequestValidation:
    def _valid(self, **kwargs) -> Request:
        return Request("gpt-4o-mini", messages=(Message.user("hi"),), **kwargs)

    def test_valid_request(self):
        assert self._valid().validate() == []

    def test_requires_messages(self):
        errors = Request("gpt-4o-mini").validate()
        assert any("at least one message" in e for e in errors)

    def test_requires_model(self):
        errors = Request("  ", messages=(Message.user("hi"),)).validate()
        assert any("model" in e for e in errors)

    @pytest.mark.parametrize("temperature", [0.0, 1.0, 2.0])
    def test_temperature_boundaries_accepted(self, temperature):
        assert self._valid(temperature=temperature).validate() == []

    @pytest.mark.parametrize("temperature", [-0.1, 2.1])
    def test_temperature_out_of_range(self, temperature):
        errors = self._valid(temperature=temperature).validate()
        assert len(errors) == 1
        assert "temperature" in errors[0]

    def test_top_p_out_of_range(self):
        errors = self._valid(top_p=1.5).validate()
        assert "top_p" in errors[0]

    @pytest.mark.parametrize("max_tokens", [0, -5])
    def test_max_tokens_must_be_positive(self, max_tokens):
        errors = self._valid(max_tokens=max_tokens).validate()
        assert "max_tokens must be > 0" in errors[0]

    def test_max_tokens_rejects_non_int(self):
        errors = self._valid(max_tokens=True).validate()
        assert "integer" in errors[0]

    def test_max_tokens_none_is_valid_in_general(self):
        assert self._valid(max_tokens=None).validate() == []

    def test_ensure_valid_collects_all_problems(self):
        req = Request("", temperature=3.0)
        with pytest.raises(ValidationError) as exc_info:
            req.ensure_valid()
        assert len(exc_info.value.problems) == 3

    def test_no_clamping(self):
        req = self._valid(temperature=2.5)
        with pytest.raises(ValidationError):
            req.ensure_valid()
        assert req.temperature == 2.5


class TestUsageAndResponse:
    def test_usage_total_computed_when_missing(self):
        usage = Usage.from_counts(10, 4)
        assert usage.total_tokens == 14

    def test_usage_total_kept_when_provided(self):
        assert Usage.from_counts(10, 4, 20).total_tokens == 20

    def test_response_to_dict(self):
        resp = Response(
            content="hi",
            usage=Usage.from_counts(1, 2),
            model="gpt-4o",
            provider=Provider.OPENAI,
        )
        data = resp.to_dict()
        assert data["content"] == "hi"
        assert data["usage"] == {"prompt_tokens": 1, "completion_tokens": 2, "total_tokens": 3}
        assert data["provider"] == "openai"

    def test_response_metadata_is_read_only(self):
        source = {"finish_reason": "stop"}
        resp = Response(content="hi", metadata=source)
        with pytest.raises(TypeError):
            resp.metadata["finish_reason"] = "length"
        source["finish_reason"] = "length"
        assert resp.metadata["finish_reason"] == "stop"
        assert resp.to_dict()["metadata"] == {"finish_reason": "stop"}

    def test_response_without_usage(self):
        assert Response(content="x").to_dict()["usage"] is None
