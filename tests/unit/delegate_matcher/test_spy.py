"""Tests for DelegateSpy and CallLog."""

import copy

import pytest

from delegate_matcher import Call, CallLog, DelegateSpy
from tests.helpers import Mailman


class TestRecording:
    """Every public method call on the spy lands in the log."""

    def test_records_name_and_arguments(self):
        log = CallLog()
        spy = DelegateSpy(log)

        spy.deliver_mail("221B Baker St.", hastily=True)

        assert log.calls == [
            Call(name="deliver_mail", args=("221B Baker St.",), kwargs={"hastily": True})
        ]

    def test_records_in_order(self):
        log = CallLog()
        spy = DelegateSpy(log)

        spy.sort_letters()
        spy.deliver_mail()
        spy.sort_letters(2)

        assert [call.name for call in log.calls] == ["sort_letters", "deliver_mail", "sort_letters"]
        assert len(log.calls_to("sort_letters")) == 2

    def test_calls_return_none_without_passthrough(self):
        spy = DelegateSpy(CallLog(), wrapped=Mailman())

        assert spy.deliver_mail() is None

    def test_attribute_lookup_alone_is_not_recorded(self):
        """Only invoking the attribute counts as a call."""
        log = CallLog()
        spy = DelegateSpy(log)

        spy.deliver_mail

        assert log.calls == []

    def test_recorder_is_named_after_method(self):
        spy = DelegateSpy(CallLog())

        assert spy.deliver_mail.__name__ == "deliver_mail"

    def test_names_that_look_like_inspection_methods_are_recorded(self):
        """The spy has no public API of its own to collide with delegate methods."""
        log = CallLog()
        spy = DelegateSpy(log)

        spy.calls()
        spy.reset()

        assert [call.name for call in log.calls] == ["calls", "reset"]


class TestDunderLookups:
    def test_dunder_lookup_raises_attribute_error(self):
        spy = DelegateSpy(CallLog())

        with pytest.raises(AttributeError):
            spy.__deliver__

    def test_copy_does_not_record(self):
        log = CallLog()
        spy = DelegateSpy(log)

        copy.copy(spy)

        assert log.calls == []

    def test_repr_mentions_wrapped_delegate(self):
        log = CallLog()
        spy = DelegateSpy(log, wrapped="the mailman")
        spy.deliver_mail()

        assert repr(spy) == "<DelegateSpy for 'the mailman': 1 call(s)>"

    def test_setting_attributes_is_rejected(self):
        spy = DelegateSpy(CallLog())

        with pytest.raises(AttributeError):
            spy.route = "north"


class TestPassthrough:
    def test_forwards_to_wrapped_delegate(self):
        log = CallLog()
        spy = DelegateSpy(log, wrapped=Mailman(), passthrough=True)

        assert spy.deliver_mail_and_avoid_dogs() == "delivered without incident"
        assert log.was_called("deliver_mail_and_avoid_dogs")

    def test_missing_method_on_wrapped_returns_none(self):
        log = CallLog()
        spy = DelegateSpy(log, wrapped=Mailman(), passthrough=True)

        assert spy.watch_tv() is None
        assert log.was_called("watch_tv")

    def test_without_wrapped_delegate_returns_none(self):
        spy = DelegateSpy(CallLog(), passthrough=True)

        assert spy.deliver_mail() is None


class TestCallLog:
    def test_reset_clears_calls(self):
        log = CallLog()
        DelegateSpy(log).deliver_mail()

        log.reset()

        assert log.calls == []
        assert len(log) == 0

    def test_calls_returns_a_copy(self):
        log = CallLog()
        DelegateSpy(log).deliver_mail()

        log.calls.clear()

        assert len(log) == 1

    def test_was_called(self):
        log = CallLog()
        DelegateSpy(log).deliver_mail()

        assert log.was_called("deliver_mail")
        assert not log.was_called("watch_tv")
