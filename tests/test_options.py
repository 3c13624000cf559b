"""Tests for capability options and the gate."""

import pytest

from multibooru.booru.errors import FeatureUnavailable, TooManyTags
from multibooru.booru.options import BooruOptions, Capability, CapabilityGate, clean_tags, is_enabled


class TestIsEnabled:

    def test_everything_enabled_by_default(self):
        for capability in Capability:
            assert is_enabled(BooruOptions.NONE, capability)

    def test_flag_disables_capability(self):
        assert not is_enabled(BooruOptions.NO_WIKI, Capability.wiki)
        assert is_enabled(BooruOptions.NO_WIKI, Capability.related)

    def test_last_comments_need_comment_api(self):
        assert not is_enabled(BooruOptions.NO_COMMENT, Capability.last_comments)
        assert not is_enabled(BooruOptions.NO_LAST_COMMENTS, Capability.last_comments)
        assert is_enabled(BooruOptions.NO_LAST_COMMENTS, Capability.comment)


class TestCleanTags:

    def test_drops_none_and_blank(self):
        assert clean_tags(["a", None, "", "  ", "b"]) == ["a", "b"]

    def test_none(self):
        assert clean_tags(None) == []


class TestCapabilityGate:

    def test_check_raises_feature_unavailable(self):
        gate = CapabilityGate(BooruOptions.NO_RELATED)
        with pytest.raises(FeatureUnavailable) as exc_info:
            gate.check(Capability.related)
        assert exc_info.value.feature == "related"

    def test_check_passes(self):
        CapabilityGate(BooruOptions.NONE).check(Capability.related)

    def test_check_tags_limit(self):
        gate = CapabilityGate(BooruOptions.NO_MORE_THAN_2_TAGS)
        assert gate.check_tags(["a", "b"]) == ["a", "b"]
        with pytest.raises(TooManyTags):
            gate.check_tags(["a", "b", "c"])

    def test_blank_tags_do_not_count(self):
        gate = CapabilityGate(BooruOptions.NO_MORE_THAN_2_TAGS)
        assert gate.check_tags(["a", " ", None, "b"]) == ["a", "b"]

    def test_no_limit_without_quirk(self):
        gate = CapabilityGate(BooruOptions.NONE)
        assert gate.check_tags(["a", "b", "c", "d"]) == ["a", "b", "c", "d"]
