"""Tests for joining reviews onto the submission catalog."""

from review_tracker.core.aggregator import join_reviews
from review_tracker.models.records import ReviewRecord, SubmissionRecord


def submission(code, title=None):
    return SubmissionRecord(
        code=code,
        review_url=f"https://example.org/{code}",
        title=title or code,
        track="JuliaCon",
        submission_type="Talk",
        state="submitted",
        pending_state="submitted",
    )


def review(code, score=5.0, text=""):
    return ReviewRecord(score=score, text=text, submission_code=code, reviewer_id="r")


def test_join_counts_and_concatenates_text():
    catalog = (submission("A"), submission("B"))
    reviews = [review("A", 8, "t1"), review("A", 7, "t2"), review("X", 5)]

    joined = join_reviews(catalog, reviews)

    a, b = joined
    assert a.review_count == 2
    assert a.review_text == "t1\nt2\n"
    assert b.review_count == 0
    assert b.review_text == ""


def test_join_does_not_mutate_input():
    catalog = (submission("A"),)
    joined = join_reviews(catalog, [review("A", text="x")])

    assert catalog[0].review_count == 0
    assert joined[0].review_count == 1
    assert joined is not catalog


def test_join_keeps_catalog_order():
    catalog = (submission("C"), submission("A"), submission("B"))
    joined = join_reviews(catalog, [review("B"), review("C")])
    assert [s.code for s in joined] == ["C", "A", "B"]
    assert [s.review_count for s in joined] == [1, 0, 1]


def test_join_only_credits_first_duplicate():
    catalog = (submission("A", "first"), submission("A", "second"))
    joined = join_reviews(catalog, [review("A"), review("A")])
    assert joined[0].review_count == 2
    assert joined[1].review_count == 0


def test_join_with_no_reviews():
    catalog = (submission("A"),)
    assert join_reviews(catalog, []) == catalog


def test_join_empty_catalog_drops_all_reviews():
    assert join_reviews((), [review("A")]) == ()


def test_join_is_repeatable():
    catalog = (submission("A"),)
    reviews = [review("A", text="t")]
    assert join_reviews(catalog, reviews) == join_reviews(catalog, reviews)
