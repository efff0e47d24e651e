"""Tests for Call records and argument rendering."""

import pytest

from delegate_matcher import Call, format_arguments


class TestFormatArguments:
    def test_no_arguments(self):
        assert format_arguments((), {}) == "()"

    def test_positional_and_keyword(self):
        assert (
            format_arguments(("221B Baker St.",), {"hastily": True})
            == "('221B Baker St.', hastily=True)"
        )

    def test_keyword_order_is_preserved(self):
        assert format_arguments((), {"b": 1, "a": 2}) == "(b=1, a=2)"

    def test_nested_values_use_repr(self):
        assert format_arguments(("foo",), {"bar": [1, 2]}) == "('foo', bar=[1, 2])"

    def test_long_reprs_are_truncated(self):
        rendered = format_arguments(("x" * 50,), {}, max_repr_length=10)

        assert rendered == "('xxxxxx...)"

    def test_short_reprs_are_untouched_by_limit(self):
        assert format_arguments((1,), {"a": 2}, max_repr_length=10) == "(1, a=2)"


class TestCall:
    def test_format(self):
        call = Call(name="deliver_mail", args=("221B Baker St.",), kwargs={"hastily": True})

        assert call.format() == "deliver_mail('221B Baker St.', hastily=True)"
        assert str(call) == call.format()

    def test_format_without_arguments(self):
        assert str(Call(name="deliver_mail_and_avoid_dogs")) == "deliver_mail_and_avoid_dogs()"

    def test_has_arguments_is_ordered(self):
        call = Call(name="send", args=(1, 2))

        assert call.has_arguments((1, 2), {})
        assert not call.has_arguments((2, 1), {})

    def test_has_arguments_compares_keywords_by_value(self):
        call = Call(name="send", kwargs={"a": 1, "b": [2]})

        assert call.has_arguments((), {"b": [2], "a": 1})
        assert not call.has_arguments((), {"a": 1})
        assert not call.has_arguments((), {"a": 1, "b": [3]})

    def test_keywords_are_not_positional(self):
        call = Call(name="send", args=(1,))

        assert not call.has_arguments((), {"value": 1})

    def test_compares_by_value_but_is_unhashable(self):
        """Arguments may be unhashable, so calls are too."""
        call = Call(name="send", args=([1],), kwargs={"a": 1})

        assert call == Call(name="send", args=([1],), kwargs={"a": 1})
        with pytest.raises(TypeError, match="unhashable"):
            hash(call)
