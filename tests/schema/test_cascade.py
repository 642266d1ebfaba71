"""Tests for the validation cascade engine."""

from __future__ import annotations

import asyncio
from types import SimpleNamespace
from typing import Any

import pytest

from clinch import InvalidSchemaConfiguration, SchemaValidationError, validate_schema
from clinch.schema.cascade import (
    FieldView,
    ValidationState,
    apply_cascade,
    fields_of,
    is_dict,
    set_field,
)
from tests.conftest import GreetCommand, failing


def passing(candidate: Any, state: ValidationState) -> bool:
    return True


class TestValidationState:
    def test_push_error_returns_false(self) -> None:
        state = ValidationState()
        assert state.push_error("nope") is False
        assert state.errors == ["nope"]

    def test_push_coercion(self) -> None:
        state = ValidationState()
        op = lambda: None  # noqa: E731
        state.push_coercion("field", op)
        assert state.coercions == [("field", op)]


class TestFieldAccess:
    def test_field_view_sees_class_defaults(self) -> None:
        command = GreetCommand()
        view = fields_of(command)
        assert isinstance(view, FieldView)
        assert view["loud"] is False
        assert view.get("name") is None
        assert view.get("missing", "dflt") == "dflt"

    def test_field_view_iterates_instance_fields(self) -> None:
        command = GreetCommand()
        command.name = "Ada"
        assert set(fields_of(command)) == {"help", "name"}

    def test_mapping_returned_as_is(self) -> None:
        data = {"a": 1}
        assert fields_of(data) is data

    def test_set_field_on_object_and_mapping(self) -> None:
        command = GreetCommand()
        set_field(command, "name", "Ada")
        assert command.name == "Ada"
        data: dict[str, Any] = {}
        set_field(data, "name", "Ada")
        assert data == {"name": "Ada"}


class TestIsDict:
    @pytest.mark.parametrize("candidate", [{}, SimpleNamespace(), GreetCommand()])
    def test_accepts_objects(self, candidate: object) -> None:
        assert is_dict()(candidate, ValidationState()) is True

    @pytest.mark.parametrize("candidate", [None, 3, "text"])
    def test_rejects_values(self, candidate: object) -> None:
        state = ValidationState()
        assert is_dict()(candidate, state) is False
        assert state.errors[0].startswith("Expected an object")


class TestApplyCascade:
    @pytest.mark.asyncio
    async def test_all_entries_run_after_failure(self) -> None:
        calls: list[str] = []

        def tracking(name: str, ok: bool):
            def check(candidate: Any, state: ValidationState) -> bool:
                calls.append(name)
                return ok or state.push_error(name)

            return check

        state = ValidationState()
        check = apply_cascade(is_dict(), [tracking("a", False), tracking("b", True), tracking("c", False)])
        assert await check({}, state) is False
        assert calls == ["a", "b", "c"]
        assert state.errors == ["a", "c"]

    @pytest.mark.asyncio
    async def test_base_failure_skips_cascade(self) -> None:
        calls: list[str] = []

        def tracking(candidate: Any, state: ValidationState) -> bool:
            calls.append("ran")
            return True

        assert await apply_cascade(is_dict(), [tracking])(7, ValidationState()) is False
        assert calls == []

    @pytest.mark.asyncio
    async def test_async_predicates_awaited(self) -> None:
        async def slow_fail(candidate: Any, state: ValidationState) -> bool:
            await asyncio.sleep(0)
            return state.push_error("async")

        state = ValidationState()
        assert await apply_cascade(is_dict(), [passing, slow_fail])({}, state) is False
        assert state.errors == ["async"]

    @pytest.mark.asyncio
    async def test_empty_cascade_succeeds(self) -> None:
        assert await apply_cascade(is_dict(), [])({}, ValidationState()) is True


class TestValidateSchema:
    @pytest.mark.asyncio
    async def test_none_schema_never_touches_candidate(self) -> None:
        class Untouchable:
            def __getattribute__(self, name: str) -> Any:
                raise AssertionError(f"read {name}")

        await validate_schema(None, Untouchable())

    @pytest.mark.parametrize("schema", ["abc", {"a": passing}, passing, 3])
    @pytest.mark.asyncio
    async def test_non_sequence_schema_is_configuration_error(self, schema: Any) -> None:
        calls: list[str] = []

        class Watched:
            def __getattribute__(self, name: str) -> Any:
                calls.append(name)
                return object.__getattribute__(self, name)

        with pytest.raises(InvalidSchemaConfiguration):
            await validate_schema(schema, Watched())
        assert calls == []

    @pytest.mark.asyncio
    async def test_tuple_schema_accepted(self) -> None:
        await validate_schema((passing,), {})

    @pytest.mark.asyncio
    async def test_errors_aggregated(self) -> None:
        with pytest.raises(SchemaValidationError) as exc_info:
            await validate_schema([failing("A"), failing("B")], GreetCommand())
        assert exc_info.value.errors == ["A", "B"]
        assert "- A" in exc_info.value.message
        assert "- B" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_coercions_skipped_on_failure(self) -> None:
        command = GreetCommand()

        def coerce_name(candidate: Any, state: ValidationState) -> bool:
            state.push_coercion("name", lambda: set_field(candidate, "name", "changed"))
            return True

        with pytest.raises(SchemaValidationError):
            await validate_schema([coerce_name, failing("A")], command)
        assert command.name is None

    @pytest.mark.asyncio
    async def test_coercions_applied_in_append_order(self) -> None:
        order: list[str] = []

        def queue(name: str):
            def check(candidate: Any, state: ValidationState) -> bool:
                state.push_coercion(name, lambda: order.append(name))
                return True

            return check

        await validate_schema([queue("first"), queue("second"), queue("third")], {})
        assert order == ["first", "second", "third"]

    @pytest.mark.asyncio
    async def test_failure_without_message_still_raises(self) -> None:
        def silent(candidate: Any, state: ValidationState) -> bool:
            return False

        with pytest.raises(SchemaValidationError) as exc_info:
            await validate_schema([silent], {})
        assert exc_info.value.errors == []
