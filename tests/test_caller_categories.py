"""
Unit tests for caller tags and category parsing.
"""

import pytest

from dmrhub.hublog.caller import CallerTagger
from dmrhub.hublog.categories import DEFAULT_POLICIES, LogCategory, parse_category
from dmrhub.hublog.errors import UnknownCategoryError


def handle_login():
    pass


class Repeater:
    def ping(self):
        pass


class TestCallerTagger:
    def test_explicit_tag_has_prefix_stripped(self):
        assert CallerTagger("dmrhub.").tag("dmrhub.hub.server.handle_login") == "hub.server.handle_login"

    def test_tag_without_prefix_is_kept(self):
        assert CallerTagger("dmrhub.").tag("tools.logwrite") == "tools.logwrite"

    def test_functions_are_named_by_module_and_qualname(self):
        tagger = CallerTagger(prefix="")
        assert tagger.tag(handle_login) == f"{__name__}.handle_login"
        assert tagger.tag(Repeater.ping) == f"{__name__}.Repeater.ping"

    def test_function_prefix_is_stripped(self):
        tagger = CallerTagger(prefix=f"{__name__}.")
        assert tagger.tag(Repeater) == "Repeater"

    @pytest.mark.parametrize("caller", [None, "", "   ", "dmrhub."])
    def test_empty_tags_become_unknown(self, caller):
        assert CallerTagger("dmrhub.").tag(caller) == "unknown"

    def test_tagged_line(self):
        assert CallerTagger().tagged("dmrhub.api", "up") == "api: up"


class TestCategories:
    def test_parse_accepts_members_and_values(self):
        assert parse_category(LogCategory.ERROR) is LogCategory.ERROR
        assert parse_category("access") is LogCategory.ACCESS

    def test_parse_rejects_unknown(self):
        with pytest.raises(UnknownCategoryError):
            parse_category("audit")

    def test_unknown_category_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse_category("audit")

    def test_only_error_mirrors(self):
        assert DEFAULT_POLICIES[LogCategory.ERROR].mirror_stderr is True
        assert DEFAULT_POLICIES[LogCategory.ACCESS].mirror_stderr is False

    def test_str_is_the_value(self):
        assert str(LogCategory.ACCESS) == "access"
