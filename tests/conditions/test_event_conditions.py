"""Tests for testkit.conditions.events — the event condition vocabulary."""

import pytest

from tests._support import at
from testkit.conditions import events as ev
from testkit.conditions.results import is_instance_of, message
from testkit.core.errors import PreconditionViolationError
from testkit.engine import NodeRole, TestDescriptor, TestExecutionResult
from testkit.execution.events import EventType, ExecutionEvent


class Outer:
    class Inner:
        pass


class TestPrimitives:
    def test_type(self, tree):
        condition = ev.type_(EventType.STARTED)
        assert condition(ExecutionEvent.started(tree.first, at(0)))
        assert condition.description == "type is STARTED"

    def test_roles(self, tree):
        engine_started = ExecutionEvent.started(tree.engine, at(0))
        container_started = ExecutionEvent.started(tree.container, at(0))
        test_started = ExecutionEvent.started(tree.first, at(0))

        assert ev.engine()(engine_started)
        assert not ev.engine()(container_started)
        assert ev.container()(container_started)
        assert ev.container()(engine_started)
        assert not ev.container()(test_started)
        assert ev.test()(test_started)
        assert not ev.test()(container_started)

    def test_unique_id_substring(self, tree):
        started = ExecutionEvent.started(tree.first, at(0))
        assert ev.unique_id_substring("FooTests")(started)
        assert ev.unique_id_substring("method:first")(started)
        assert not ev.unique_id_substring("Bar")(started)
        assert ev.unique_id_substring("Foo").description == "descriptor with uniqueId substring 'Foo'"

    def test_display_name(self, tree):
        assert ev.display_name("first()")(ExecutionEvent.started(tree.first, at(0)))
        assert not ev.display_name("first")(ExecutionEvent.started(tree.first, at(0)))

    def test_reason(self, tree):
        skipped = ExecutionEvent.skipped(tree.first, "disabled", at(0))
        assert ev.reason("disabled")(skipped)
        assert ev.reason(lambda text: text.startswith("dis"))(skipped)
        assert not ev.reason("disabled")(ExecutionEvent.started(tree.first, at(0)))
        assert ev.reason(str.isalpha).description == "event with custom reason predicate"

    def test_result(self, tree):
        finished = ExecutionEvent.finished(tree.first, TestExecutionResult.failed(KeyError("k")), at(0))
        assert ev.finished_with_failure()(finished)
        assert ev.finished_with_failure(is_instance_of(KeyError))(finished)
        assert not ev.finished_with_failure(is_instance_of(ValueError))(finished)
        assert not ev.finished_successfully()(finished)
        assert not ev.aborted_with_reason()(finished)

    def test_none_arguments_rejected(self):
        with pytest.raises(PreconditionViolationError):
            ev.type_(None)
        with pytest.raises(PreconditionViolationError):
            ev.reason(None)


class TestCompositions:
    def test_started(self, tree):
        assert ev.started()(ExecutionEvent.started(tree.first, at(0)))
        assert not ev.started()(ExecutionEvent.skipped(tree.first, "r", at(0)))

    def test_skipped_with_reason(self, tree):
        skipped = ExecutionEvent.skipped(tree.first, "disabled", at(0))
        assert ev.skipped_with_reason("disabled")(skipped)
        assert not ev.skipped_with_reason("other")(skipped)

    def test_aborted_with_reason(self, tree):
        finished = ExecutionEvent.finished(
            tree.first, TestExecutionResult.aborted(RuntimeError("assumption")), at(0)
        )
        assert ev.aborted_with_reason(message("assumption"))(finished)

    def test_container_forms(self, tree):
        started = ExecutionEvent.started(tree.container, at(0))
        assert ev.container("FooTests")(started)
        assert ev.container(ev.display_name("FooTests"))(started)
        assert not ev.container("BarTests")(started)

    def test_container_by_class(self):
        engine = TestDescriptor.engine("sample")
        node = engine.child("class", f"{Outer.__module__}.Outer", "Outer", NodeRole.CONTAINER)
        assert ev.container(Outer)(ExecutionEvent.started(node, at(0)))

    def test_nested_container_from_class(self):
        engine = TestDescriptor.engine("sample")
        outer = engine.child("class", f"{Outer.__module__}.Outer", "Outer", NodeRole.CONTAINER)
        inner = outer.child("nested-class", "Inner", "Inner", NodeRole.CONTAINER)
        assert ev.nested_container(Outer.Inner)(ExecutionEvent.started(inner, at(0)))
        assert not ev.nested_container(Outer.Inner)(ExecutionEvent.started(outer, at(0)))

    def test_nested_container_explicit(self):
        engine = TestDescriptor.engine("sample")
        outer = engine.child("class", "pkg.Outer", "Outer", NodeRole.CONTAINER)
        inner = outer.child("nested-class", "Inner", "Inner", NodeRole.CONTAINER)
        assert ev.nested_container("pkg.Outer", "Inner")(ExecutionEvent.started(inner, at(0)))

    def test_nested_container_rejects_top_level_class(self):
        with pytest.raises(PreconditionViolationError):
            ev.nested_container(Outer)

    def test_nested_container_for_function_local_classes(self):
        class LocalOuter:
            class LocalInner:
                pass

        engine = TestDescriptor.engine("sample")
        outer = engine.child("class", "pkg.LocalOuter", "LocalOuter", NodeRole.CONTAINER)
        inner = outer.child("nested-class", "LocalInner", "LocalInner", NodeRole.CONTAINER)

        condition = ev.nested_container(LocalOuter.LocalInner)
        assert "<locals>" not in condition.description
        assert condition(ExecutionEvent.started(inner, at(0)))
        assert not condition(ExecutionEvent.started(outer, at(0)))

    def test_nested_container_rejects_function_local_top_level_class(self):
        class LocalOnly:
            pass

        with pytest.raises(PreconditionViolationError):
            ev.nested_container(LocalOnly)

    def test_container_by_function_local_class(self):
        class LocalTests:
            pass

        engine = TestDescriptor.engine("sample")
        qualified = f"{LocalTests.__module__}.{LocalTests.__qualname__}"
        node = engine.child("class", qualified, "LocalTests", NodeRole.CONTAINER)
        assert ev.container(LocalTests)(ExecutionEvent.started(node, at(0)))

    def test_test_forms(self, tree):
        started = ExecutionEvent.started(tree.second, at(0))
        assert ev.test("second")(started)
        assert ev.test("second", "second()")(started)
        assert not ev.test("second", "first()")(started)

    def test_dynamic_test_registered(self, tree):
        registered = ExecutionEvent.dynamic_test_registered(tree.third, at(0))
        assert ev.dynamic_test_registered("third")(registered)
        assert ev.dynamic_test_registered(ev.display_name("third()"))(registered)
        assert not ev.dynamic_test_registered("third")(ExecutionEvent.started(tree.third, at(0)))

    def test_event_description(self, tree):
        condition = ev.event(ev.engine(), ev.started())
        assert condition.description == "all of:[is an engine, type is STARTED]"
