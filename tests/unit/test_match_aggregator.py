from __future__ import annotations

from history_search.aggregator import MatchAggregator, aggregate
from history_search.parser import parse_history
from history_search.terms import TermSet

EXPORT = """\
commit c1
Author: Dev <dev@example.com>

    rotate token for staging

diff --git a/token.txt b/token.txt
new file mode 100644
--- /dev/null
+++ b/token.txt
@@ -0,0 +2 @@
+token=abc
+token=def
diff --git a/README.md b/README.md
--- a/README.md
+++ b/README.md
@@ -1 +1 @@
+nothing to see
"""


def test_matches_land_in_three_buckets() -> None:
    result = aggregate(parse_history(EXPORT), TermSet.from_lookup("token"))

    assert result.names == {"token.txt": {"token"}}
    assert result.contents == {"token.txt": {"token"}}
    assert result.commits == {"c1": {"token"}}
    assert result.matched_files == ["token.txt"]


def test_commit_message_match_is_only_recorded_under_commits() -> None:
    export = "commit c9\n\n    remove internal.example.com\n"

    result = aggregate(parse_history(export), TermSet.from_lookup("internal"))

    assert result.commits == {"c9": {"internal"}}
    assert result.contents == {}
    assert result.names == {}
    assert result.matched_files == []


def test_case_insensitive_matching() -> None:
    export = "commit c1\n\n    this is secret\n"
    terms = TermSet.from_lookup("Secret")

    sensitive = aggregate(parse_history(export), terms)
    insensitive = aggregate(parse_history(export), terms, case_insensitive=True)

    assert sensitive.is_empty()
    assert insensitive.commits == {"c1": {"Secret"}}


def test_repeated_matches_collapse_to_one_membership() -> None:
    terms = TermSet(replacements={"abc": "", "def": "", "zzz": ""})

    result = aggregate(parse_history(EXPORT), terms)

    assert result.contents == {"token.txt": {"abc", "def"}}


def test_lines_before_any_marker_are_not_recorded() -> None:
    export = "token in preamble\ncommit c1\n"

    result = aggregate(parse_history(export), TermSet.from_lookup("token"))

    assert result.is_empty()


def test_pipeline_is_idempotent() -> None:
    terms = TermSet(replacements={"token": "", "README": "", "abc": ""})

    first = aggregate(parse_history(EXPORT), terms)
    second = aggregate(parse_history(EXPORT), terms)

    assert first == second
    assert list(first.contents) == list(second.contents)
    assert list(first.commits) == list(second.commits)


def test_aggregator_counts_lines() -> None:
    aggregator = MatchAggregator(TermSet.from_lookup("token"))

    aggregator.consume(parse_history(EXPORT))

    assert aggregator.lines_seen == len(EXPORT.splitlines())


def test_form_feed_in_body_does_not_fake_a_commit() -> None:
    export = (
        "commit c1\n"
        "diff --git a/notes.txt b/notes.txt\n"
        "+page one\x0ccommit token\n"
        "+token=abc\n"
    )

    result = aggregate(parse_history(export), TermSet.from_lookup("token"))

    assert result.contents == {"notes.txt": {"token"}}
    assert result.commits == {}


def test_term_around_line_separator_still_matches() -> None:
    export = "commit c1\ndiff --git a/app.js b/app.js\n+var s = 'x\u2028secret';\n"

    result = aggregate(parse_history(export), TermSet.from_lookup("x\u2028secret"))

    assert result.contents == {"app.js": {"x\u2028secret"}}
