"""Tests for scrub.models module."""

import pytest
from pydantic import ValidationError

from scrub import ScrubOptions, TypeClassifier


@pytest.fixture
def classifier():
    return TypeClassifier()


class TestScrubOptions:
    """Test option defaults and merging."""

    def test_defaults(self):
        options = ScrubOptions()
        assert options.model_dump() == {
            "return_value": False,
            "ignore_defaults": False,
            "ignore_required": False,
            "do_not_coerce": False,
            "strict": False,
            "log": False,
            "key": None,
        }

    def test_aliases(self):
        options = ScrubOptions.from_root({"returnValue": True, "ignoreDefaults": True})
        assert options.return_value is True
        assert options.ignore_defaults is True

    def test_root_ignores_unknown_keys(self):
        options = ScrubOptions.from_root({"strict": True, "n3": 1})
        assert options.strict is True
        assert "n3" not in options.model_dump()

    def test_root_ignores_mistyped_values(self):
        options = ScrubOptions.from_root({"strict": "yes", "log": 1})
        assert options.strict is False
        assert options.log is False

    def test_root_from_instance_clears_key(self):
        options = ScrubOptions.from_root(ScrubOptions(strict=True, key="x"))
        assert options.strict is True
        assert options.key is None

    def test_override_returns_copy(self, classifier):
        options = ScrubOptions()
        overridden = options.override({"strict": True}, classifier)
        assert overridden.strict is True
        assert options.strict is False

    def test_override_never_sets_key(self, classifier):
        options = ScrubOptions().with_key("a")
        assert options.override({"key": "b"}, classifier).key == "a"

    def test_override_ignores_non_mappings(self, classifier):
        options = ScrubOptions()
        assert options.override("strict", classifier) is options

    def test_frozen(self):
        with pytest.raises(ValidationError):
            ScrubOptions().strict = True

    def test_extra_fields_forbidden(self):
        with pytest.raises(ValidationError):
            ScrubOptions(unknown=True)

    def test_pruned(self):
        options = ScrubOptions(strict=True).with_key("s1")
        assert options.pruned() == {"strict": True, "key": "s1"}
