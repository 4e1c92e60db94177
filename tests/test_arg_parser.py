"""
Unit tests for the function-argument parser.

Run with: pytest tests/test_arg_parser.py -v
"""

import pytest

from core.domain.modes import LinkDirection, RelationMode
from core.services.arg_parser import parse_argument


class TestModePrefix:

    @pytest.mark.parametrize(
        "raw, mode",
        [
            ("linked: project = ABC", RelationMode.LINKED),
            ("parent: project = ABC", RelationMode.PARENT),
            ("epic-of: project = ABC", RelationMode.EPIC_OF),
            ("subtask: project = ABC", RelationMode.SUBTASK),
            ("substask: project = ABC", RelationMode.SUBTASK),
            ("EPIC-OF : project = ABC", RelationMode.EPIC_OF),
            ("  Parent   :   project = ABC  ", RelationMode.PARENT),
        ],
    )
    def test_recognized_modes(self, raw, mode):
        parsed = parse_argument(raw)
        assert parsed.mode is mode
        assert parsed.inner_jql == "project = ABC"
        assert parsed.link_filter is None

    def test_inner_query_keeps_its_own_colons(self):
        parsed = parse_argument('parent: summary ~ "a: b"')
        assert parsed.mode is RelationMode.PARENT
        assert parsed.inner_jql == 'summary ~ "a: b"'

    @pytest.mark.parametrize(
        "raw",
        [
            "project = ABC",
            "issuekey = ABC-1 order by created",
            "children: project = ABC",
            "parentx: project = ABC",
            "linked project = ABC",
        ],
    )
    def test_unprefixed_defaults_to_linked_whole_string(self, raw):
        parsed = parse_argument(f"  {raw} ")
        assert parsed.mode is RelationMode.LINKED
        assert parsed.inner_jql == raw
        assert parsed.link_filter is None

    def test_mode_without_inner_query_falls_back(self):
        parsed = parse_argument("epic-of:   ")
        assert parsed.mode is RelationMode.LINKED
        assert parsed.inner_jql == "epic-of:"

    @pytest.mark.parametrize("raw", [None, "", "   ", "\t\n"])
    def test_blank_argument(self, raw):
        parsed = parse_argument(raw)
        assert parsed.mode is RelationMode.LINKED
        assert parsed.inner_jql == ""


class TestLinkFilter:

    def test_type_hint_only(self):
        parsed = parse_argument("linked[relates to]: project = ABC")
        assert parsed.mode is RelationMode.LINKED
        assert parsed.link_filter.type_hint == "relates to"
        assert parsed.link_filter.direction is None
        assert parsed.inner_jql == "project = ABC"

    def test_type_hint_and_direction(self):
        parsed = parse_argument("linked[blocks->outward]: project = ABC")
        assert parsed.link_filter.type_hint == "blocks"
        assert parsed.link_filter.direction is LinkDirection.OUTWARD

    def test_whitespace_and_case_are_insignificant(self):
        parsed = parse_argument("LINKED [  is blocked by  ->  INWARD ]  :  project = ABC")
        assert parsed.link_filter.type_hint == "is blocked by"
        assert parsed.link_filter.direction is LinkDirection.INWARD
        assert parsed.inner_jql == "project = ABC"

    def test_direction_only(self):
        parsed = parse_argument("linked[ -> outward ]: project = ABC")
        assert parsed.link_filter.type_hint is None
        assert parsed.link_filter.direction is LinkDirection.OUTWARD

    def test_hyphenated_type_hint(self):
        parsed = parse_argument("linked[is cloned-by]: project = ABC")
        assert parsed.link_filter.type_hint == "is cloned-by"

    def test_filter_on_other_modes_is_ignored(self):
        parsed = parse_argument("parent[blocks]: project = ABC")
        assert parsed.mode is RelationMode.PARENT
        assert parsed.link_filter is None
        assert parsed.inner_jql == "project = ABC"

    @pytest.mark.parametrize(
        "raw",
        [
            "linked[blocks->sideways]: project = ABC",
            "linked[]: project = ABC",
            "linked[ ]: project = ABC",
            "linked[blocks: project = ABC",
            "linked[blocks] project = ABC",
        ],
    )
    def test_malformed_filter_falls_back_to_whole_string(self, raw):
        parsed = parse_argument(raw)
        assert parsed.mode is RelationMode.LINKED
        assert parsed.link_filter is None
        assert parsed.inner_jql == raw
