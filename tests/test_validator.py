"""
Test suite for the sentence-case validator and its allow-list.

The validator is a pure function, so every test here is a plain
input → violations check. No documents, no files, no network.

Run: pytest tests/ -v
"""

from __future__ import annotations

import json

import pytest

from heading_case.allow_list import (
    DEFAULT_ALLOWED_WORDS,
    AllowList,
    load_allow_list,
    strip_edge_punctuation,
)
from heading_case.exceptions import AllowListError
from heading_case.models import HeadingKind, HeadingText, Severity
from heading_case.validator import (
    FIRST_WORD_NOT_CAPITALIZED,
    INTERIOR_WORD_CAPITALIZED,
    HeadingCaseValidator,
    extract_frontmatter_title,
    validate,
)


@pytest.fixture(scope="module")
def validator() -> HeadingCaseValidator:
    return HeadingCaseValidator()


def _words(violations) -> list[str]:
    return [v.details["word"] for v in violations if v.code == INTERIOR_WORD_CAPITALIZED]


# ═══════════════════════════════════════════════════════════════════════
# SCENARIOS
# ═══════════════════════════════════════════════════════════════════════


class TestScenarios:
    """The reference cases every implementation of this rule must agree on."""

    def test_allow_listed_proper_noun_passes(self, validator):
        assert validator.validate("Getting started with Claude") == []

    def test_title_case_heading_flags_each_word(self, validator):
        violations = validator.validate("Getting Started With the API")
        assert len(violations) == 2
        assert _words(violations) == ["Started", "With"]
        assert all(v.code == INTERIOR_WORD_CAPITALIZED for v in violations)

    def test_title_case_message_names_word_and_heading(self, validator):
        violations = validator.validate("Getting Started With the API")
        assert violations[0].message == (
            "Only the first word of a sentence-case heading may be capitalized "
            "(unless it's a proper noun or technical term): "
            "\"Started\" in \"Getting Started With the API\""
        )

    def test_frontmatter_title_must_start_uppercase(self, validator):
        violations = validator.validate("title: 'my New Project'")
        assert violations[0].code == FIRST_WORD_NOT_CAPITALIZED
        assert violations[0].message == (
            "Title should start with an uppercase letter (Sentence case): "
            "\"title: my New Project\""
        )

    def test_frontmatter_title_also_checks_interior_words(self, validator):
        violations = validator.validate("title: 'my New Project'")
        assert _words(violations) == ["New", "Project"]

    def test_all_caps_heading_is_exempt(self, validator):
        assert validator.validate("NASA") == []


# ═══════════════════════════════════════════════════════════════════════
# NUMBERED HEADINGS
# ═══════════════════════════════════════════════════════════════════════


class TestNumberedHeadings:
    def test_number_prefix_is_ignored_for_first_letter(self, validator):
        violations = validator.validate("3. Deploy the Service to Production")
        codes = {v.code for v in violations}
        assert FIRST_WORD_NOT_CAPITALIZED not in codes

    def test_interior_words_after_number_are_flagged(self, validator):
        violations = validator.validate("3. Deploy the Service to Production")
        assert _words(violations) == ["Service", "Production"]
        assert 'in "3. Deploy the Service to Production"' in violations[0].message

    def test_lowercase_after_number_uses_numbered_wording(self, validator):
        violations = validator.validate("2. install the CLI")
        assert len(violations) == 1
        assert violations[0].message == (
            "Numbered heading should have first letter capitalized after the number: "
            "\"2. install the CLI\""
        )

    def test_multi_digit_number(self, validator):
        assert validator.validate("12. Configure the webhook") == []

    def test_number_without_period_is_a_plain_heading(self, validator):
        violations = validator.validate("2024 roadmap")
        assert violations[0].code == FIRST_WORD_NOT_CAPITALIZED
        assert violations[0].message.startswith("Heading should start with an uppercase letter")

    def test_all_caps_numbered_heading_is_exempt(self, validator):
        assert validator.validate("1. FAQ") == []


# ═══════════════════════════════════════════════════════════════════════
# FRONT MATTER
# ═══════════════════════════════════════════════════════════════════════


class TestFrontmatter:
    def test_block_without_title_is_not_checked(self, validator):
        block = "description: Some Odd Description\nkeywords: Foo, Bar"
        assert validator.validate(block) == []

    def test_only_title_field_is_checked(self, validator):
        block = "title: Quickstart guide\ndescription: Learn The Basics"
        assert validator.validate(block) == []

    def test_title_key_is_case_insensitive(self, validator):
        block = "description: Intro\nTitle: my docs"
        violations = validator.validate(block)
        assert len(violations) == 1
        assert violations[0].message.endswith('"title: my docs"')

    def test_first_title_wins(self, validator):
        block = "title: First title\ntitle: second Title"
        assert validator.validate(block) == []

    def test_double_quotes_are_stripped(self, validator):
        assert validator.validate('title: "Getting started"') == []

    def test_curly_quotes_are_stripped(self, validator):
        violations = validator.validate("title: “Hello World”")
        assert _words(violations) == ["World"]
        assert '"title: Hello World"' in violations[0].message

    def test_numbered_title(self, validator):
        block = 'title: "5. Build the Portfolio"\ndescription: Step five'
        violations = validator.validate(block)
        assert len(violations) == 1
        assert violations[0].message == (
            "Only the first word of a sentence-case title may be capitalized "
            "(unless it's a proper noun or technical term): "
            "\"Portfolio\" in \"title: 5. Build the Portfolio\""
        )

    def test_numbered_title_lowercase_start(self, validator):
        violations = validator.validate("title: 5. build the portfolio")
        assert violations[0].message == (
            "Title should have first letter capitalized after the number: "
            "\"title: 5. build the portfolio\""
        )

    def test_empty_title_value_is_ignored(self, validator):
        assert validator.validate("title:\ndescription: Nothing Here") == []

    def test_frontmatter_kind_recorded(self, validator):
        violations = validator.validate("title: my docs")
        assert violations[0].details["kind"] == HeadingKind.FRONTMATTER.value

    def test_crlf_line_endings(self, validator):
        assert validator.validate("title: 'Getting started'\r\ndescription: x") == []

    def test_crlf_not_in_message(self, validator):
        violations = validator.validate("title: my docs\r\ndescription: x")
        assert len(violations) == 1
        assert violations[0].message.endswith('"title: my docs"')

    @pytest.mark.parametrize("block", ["title: ...", "title: '—'", "title: \"?!\"\ndescription: x"])
    def test_punctuation_only_title_is_ignored(self, validator, block):
        assert validator.validate(block) == []


# ═══════════════════════════════════════════════════════════════════════
# WORD CHECK
# ═══════════════════════════════════════════════════════════════════════


class TestWordCheck:
    def test_lowercase_first_letter_flagged(self, validator):
        violations = validator.validate("install the CLI")
        assert len(violations) == 1
        assert violations[0].code == FIRST_WORD_NOT_CAPITALIZED
        assert violations[0].details["word"] == "install"

    def test_first_letter_violation_comes_first(self, validator):
        violations = validator.validate("getting Started")
        assert [v.code for v in violations] == [
            FIRST_WORD_NOT_CAPITALIZED,
            INTERIOR_WORD_CAPITALIZED,
        ]

    def test_all_violations_collected(self, validator):
        violations = validator.validate("getting Started With The Basics")
        assert len(violations) == 5

    @pytest.mark.parametrize(
        "heading",
        [
            "Upgrade to Version-2",
            "Edit Config.yaml first",
            "Rename My_Module",
            "Release notes for 2024",
        ],
    )
    def test_technical_tokens_are_skipped(self, validator, heading):
        assert validator.validate(heading) == []

    def test_trailing_punctuation_stripped_before_lookup(self, validator):
        assert validator.validate("Is it on Desktop?") == []

    def test_comma_separated_allowed_words(self, validator):
        assert validator.validate("Works with GitHub, Linux") == []

    def test_unlisted_word_with_punctuation_is_flagged(self, validator):
        violations = validator.validate("Why use Rust?")
        assert _words(violations) == ["Rust?"]

    def test_allow_list_is_case_sensitive(self, validator):
        violations = validator.validate("Hosted on Github")
        assert _words(violations) == ["Github"]

    def test_leading_whitespace_is_ignored(self, validator):
        violations = validator.validate("  getting started")
        assert violations[0].details["word"] == "getting"

    def test_non_ascii_uppercase_start(self, validator):
        assert validator.validate("Élan vital") == []


# ═══════════════════════════════════════════════════════════════════════
# PROPERTIES
# ═══════════════════════════════════════════════════════════════════════


class TestProperties:
    @pytest.mark.parametrize("text", ["", " ", "   \t\n  "])
    def test_empty_input_has_no_violations(self, validator, text):
        assert validator.validate(text) == []

    @pytest.mark.parametrize("text", ["?!", "...", "—"])
    def test_punctuation_only_does_not_raise(self, validator, text):
        assert validator.validate(text) == []

    @pytest.mark.parametrize("text", ["Getting Started", "overview", "title: my Docs", "3. deploy"])
    def test_every_violation_is_a_warning(self, validator, text):
        violations = validator.validate(text)
        assert violations
        assert all(v.severity is Severity.WARNING for v in violations)

    @pytest.mark.parametrize("text", ["FAQ", "HTTP API REFERENCE", "V2 MIGRATION", "READ ME FIRST!"])
    def test_all_caps_exemption(self, validator, text):
        assert validator.validate(text) == []

    @pytest.mark.parametrize("text", ["overview", "a Guide", "next steps"])
    def test_lowercase_start_always_flagged(self, validator, text):
        codes = [v.code for v in validator.validate(text)]
        assert FIRST_WORD_NOT_CAPITALIZED in codes

    @pytest.mark.parametrize(
        "text",
        ["Using API SDK CLI", "Deploy GitHub OAuth Vercel", "Run Python on Windows Linux macOS"],
    )
    def test_allow_list_transparency(self, validator, text):
        assert validator.validate(text) == []

    def test_idempotent(self, validator):
        text = "getting Started With the API"
        assert validator.validate(text) == validator.validate(text)

    def test_location_is_passed_through(self, validator):
        handle = object()
        violations = validator.validate("getting Started", location=handle)
        assert all(v.location is handle for v in violations)


# ═══════════════════════════════════════════════════════════════════════
# CLASSIFICATION
# ═══════════════════════════════════════════════════════════════════════


class TestHeadingText:
    @pytest.mark.parametrize(
        ("text", "kind"),
        [
            ("", HeadingKind.EMPTY),
            ("   ", HeadingKind.EMPTY),
            ("title: Hello", HeadingKind.FRONTMATTER),
            ("keywords: a, b", HeadingKind.FRONTMATTER),
            ("NASA", HeadingKind.ALL_CAPS),
            ("3. Deploy", HeadingKind.NUMBERED),
            ("Getting started", HeadingKind.PLAIN),
        ],
    )
    def test_classify(self, text, kind):
        assert HeadingText(raw=text).classify() is kind

    def test_frontmatter_wins_over_numbered(self):
        assert HeadingText(raw="title: 1. Intro").classify() is HeadingKind.FRONTMATTER

    def test_number_prefix(self):
        assert HeadingText(raw="3. Deploy the service").number_prefix == "3. "
        assert HeadingText(raw="Deploy the service").number_prefix is None

    def test_all_caps_flag(self):
        assert HeadingText(raw="API v2").is_all_caps is False
        assert HeadingText(raw="API V2").is_all_caps is True


class TestFrontmatterTitleExtraction:
    def test_plain_value(self):
        assert extract_frontmatter_title("title: Hello world") == "Hello world"

    def test_single_quote_layer_removed(self):
        assert extract_frontmatter_title("title: \"'Nested'\"") == "'Nested'"

    def test_missing_title(self):
        assert extract_frontmatter_title("description: none") is None

    def test_title_inside_other_key_is_ignored(self):
        assert extract_frontmatter_title("subtitle: nope") is None


# ═══════════════════════════════════════════════════════════════════════
# ALLOW-LIST
# ═══════════════════════════════════════════════════════════════════════


class TestAllowList:
    def test_defaults_cover_each_category(self):
        for word in ("API", "GitHub", "Python", "macOS", "Setup"):
            assert word in DEFAULT_ALLOWED_WORDS

    def test_custom_words_via_functional_api(self):
        assert validate("Deploy to Acme Cloud", allow_list={"Acme", "Cloud"}) == []

    def test_custom_list_replaces_defaults(self):
        violations = validate("Deploy to GitHub", allow_list=AllowList({"Acme"}))
        assert _words(violations) == ["GitHub"]

    def test_allows_checks_stripped_form(self):
        allow_list = AllowList()
        assert allow_list.allows("(OAuth),")
        assert not allow_list.allows("Oauth")

    def test_strip_edge_punctuation_keeps_inner_characters(self):
        assert strip_edge_punctuation("\"DALL-E\"!") == "DALL-E"

    def test_union_returns_new_list(self):
        base = AllowList({"A"})
        merged = base.union({"B"})
        assert "B" in merged
        assert "B" not in base

    def test_is_immutable(self):
        allow_list = AllowList()
        with pytest.raises(AttributeError):
            allow_list.extra = "nope"  # type: ignore[attr-defined]


class TestLoadAllowList:
    def test_no_path_returns_defaults(self):
        assert len(load_allow_list()) == len(DEFAULT_ALLOWED_WORDS)

    def test_list_file_replaces_defaults(self, tmp_path):
        path = tmp_path / "words.json"
        path.write_text(json.dumps(["Acme", "Widget"]), encoding="utf-8")
        allow_list = load_allow_list(path)
        assert len(allow_list) == 2
        assert "GitHub" not in allow_list

    def test_extend_file_merges_with_defaults(self, tmp_path):
        path = tmp_path / "words.json"
        path.write_text(json.dumps({"extend": True, "words": ["Acme"]}), encoding="utf-8")
        allow_list = load_allow_list(path)
        assert "Acme" in allow_list
        assert "GitHub" in allow_list

    def test_extend_false_replaces_defaults(self, tmp_path):
        path = tmp_path / "words.json"
        path.write_text(json.dumps({"extend": False, "words": ["Acme"]}), encoding="utf-8")
        assert set(load_allow_list(path)) == {"Acme"}

    def test_invalid_json_raises(self, tmp_path):
        path = tmp_path / "words.json"
        path.write_text("[not json", encoding="utf-8")
        with pytest.raises(AllowListError) as exc_info:
            load_allow_list(path)
        assert exc_info.value.code == "ALLOW_LIST_INVALID"

    def test_wrong_shape_raises(self, tmp_path):
        path = tmp_path / "words.json"
        path.write_text(json.dumps({"words": [1, 2]}), encoding="utf-8")
        with pytest.raises(AllowListError, match="list of strings"):
            load_allow_list(path)

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(AllowListError, match="Could not read"):
            load_allow_list(tmp_path / "missing.json")
