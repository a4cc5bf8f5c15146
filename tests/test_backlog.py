"""Tests for refactoring backlog synthesis."""

from codebase_archeologist.backlog import synthesize_backlog, tally_hits
from codebase_archeologist.models import AntiPatternHit, Category, FileChurn, Severity


def _hit(file, severity=Severity.INFO, category=Category.DEPRECATED_API):
    return AntiPatternHit(
        category=category, severity=severity, file=file, message="m", suggestion="s"
    )


def _churn(file, commits):
    return FileChurn(file=file, commits=commits, authors=1, last_modified="")


class TestTallyHits:
    def test_worst_hit_first_seen_on_tie(self):
        tallies = tally_hits(
            [
                _hit("A.h", Severity.WARNING, Category.HARD_CODED_ASSET_PATH),
                _hit("A.h", Severity.WARNING, Category.UNTRACKED_NEWOBJECT),
                _hit("A.h", Severity.INFO, Category.DEPRECATED_API),
            ]
        )
        assert tallies["A.h"].count == 3
        assert tallies["A.h"].top_category == Category.HARD_CODED_ASSET_PATH
        assert tallies["A.h"].top_severity == Severity.WARNING

    def test_more_severe_later_hit_wins(self):
        tallies = tally_hits(
            [
                _hit("A.h", Severity.INFO),
                _hit("A.h", Severity.CRITICAL, Category.GOD_CLASS),
            ]
        )
        assert tallies["A.h"].top_severity == Severity.CRITICAL
        assert tallies["A.h"].top_category == Category.GOD_CLASS


class TestSynthesizeBacklog:
    def test_score_is_hits_times_churn(self):
        hits = [_hit("Source/Hero.cpp") for _ in range(4)]
        backlog = synthesize_backlog(hits, [_churn("Source/Hero.cpp", 15)])

        assert len(backlog) == 1
        item = backlog[0]
        assert (item.score, item.anti_patterns, item.churn) == (60, 4, 15)

    def test_missing_churn_defaults_to_one(self):
        backlog = synthesize_backlog([_hit("A.h"), _hit("A.h")], [])
        assert (backlog[0].score, backlog[0].churn) == (2, 1)

    def test_zero_churn_treated_as_one(self):
        backlog = synthesize_backlog([_hit("A.h")], [_churn("A.h", 0)])
        assert backlog[0].churn == 1

    def test_sorted_descending_with_stable_ties(self):
        hits = [_hit("First.h"), _hit("Second.h"), _hit("Big.h"), _hit("Big.h")]
        backlog = synthesize_backlog(hits, [])
        assert [i.file for i in backlog] == ["Big.h", "First.h", "Second.h"]

    def test_churn_reorders(self):
        hits = [_hit("Busy.h"), _hit("Busy.h"), _hit("Hot.cpp")]
        backlog = synthesize_backlog(hits, [_churn("Hot.cpp", 10)])
        assert [i.file for i in backlog] == ["Hot.cpp", "Busy.h"]

    def test_files_without_hits_excluded(self):
        backlog = synthesize_backlog([_hit("A.h")], [_churn("Untouched.cpp", 99)])
        assert [i.file for i in backlog] == ["A.h"]

    def test_limit(self):
        hits = [_hit(f"F{i}.h") for i in range(60)]
        assert len(synthesize_backlog(hits, [])) == 50
        assert len(synthesize_backlog(hits, [], limit=5)) == 5

    def test_score_invariant(self):
        hits = [_hit(f"F{i % 7}.h") for i in range(30)]
        churn = [_churn(f"F{i}.h", i) for i in range(7)]
        for item in synthesize_backlog(hits, churn):
            assert item.score == item.anti_patterns * item.churn
            assert item.churn >= 1
