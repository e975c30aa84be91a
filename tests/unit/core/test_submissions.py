"""Tests for building the submission catalog from raw submissions."""

import pytest

from conftest import make_submission
from review_tracker.core.submissions import build_catalog, localized_label, submission_to_record
from review_tracker.exceptions import ParseError
from review_tracker.models.records import SubmissionRecord


def review_url(code):
    return f"https://pretalx.example.org/orga/event/testcon/submissions/{code}/reviews/"


@pytest.mark.parametrize("state", ["submitted", "accepted", "rejected", "confirmed"])
def test_valid_states_are_kept(state):
    catalog = build_catalog([make_submission("A", state=state)], review_url)
    assert [s.code for s in catalog] == ["A"]


@pytest.mark.parametrize("state", ["withdrawn", "canceled", "draft", None])
def test_other_states_are_excluded(state):
    raw = make_submission("W", state=state, track="Workshop", submission_type="Keynote")
    assert build_catalog([raw], review_url) == ()


def test_withdrawn_submission_never_appears_among_others():
    raws = [
        make_submission("A"),
        make_submission("W", state="withdrawn", title="A title that sorts first"),
        make_submission("B"),
    ]
    catalog = build_catalog(raws, review_url)
    assert "W" not in {s.code for s in catalog}
    assert len(catalog) == 2


def test_track_and_type_defaults():
    record = submission_to_record(make_submission("A"), review_url)
    assert record.track == "JuliaCon"
    assert record.submission_type == "Talk"


def test_track_and_type_use_english_label():
    raw = make_submission("A", track="Workshop", submission_type="Lightning talk")
    record = submission_to_record(raw, review_url)
    assert record.track == "Workshop"
    assert record.submission_type == "Lightning talk"


def test_configurable_default_labels():
    record = submission_to_record(make_submission("A"), review_url, default_track="Main", default_type="Poster")
    assert record.track == "Main"
    assert record.submission_type == "Poster"


@pytest.mark.parametrize("value, expected", [
    (None, "Default"),
    ({"en": "English"}, "English"),
    ({"de": "Deutsch"}, "Default"),
    ({"en": None}, "Default"),
    ({"en": ""}, ""),
    ("", ""),
    ("Plain", "Plain"),
    (42, "Default"),
])
def test_localized_label(value, expected):
    assert localized_label(value, "Default") == expected


def test_empty_english_track_label_is_kept():
    raw = make_submission("A")
    raw["track"] = {"en": ""}
    record = submission_to_record(raw, review_url)
    assert record.track == ""
    assert record.submission_type == "Talk"


def test_pending_state_falls_back_to_state():
    record = submission_to_record(make_submission("A", state="accepted"), review_url)
    assert record.pending_state == "accepted"

    raw = make_submission("B", state="submitted", pending_state="accepted")
    assert submission_to_record(raw, review_url).pending_state == "accepted"


def test_record_fields():
    record = submission_to_record(make_submission("ABC123", title="Fast code"), review_url)
    assert isinstance(record, SubmissionRecord)
    assert record.code == "ABC123"
    assert record.title == "Fast code"
    assert record.review_url == review_url("ABC123")
    assert record.review_count == 0
    assert record.review_text == ""


def test_catalog_sorted_by_title_stable():
    raws = [
        make_submission("C", title="beta"),
        make_submission("A", title="alpha"),
        make_submission("B", title="beta"),
    ]
    catalog = build_catalog(raws, review_url)
    assert [s.code for s in catalog] == ["A", "C", "B"]


def test_missing_title_raises_parse_error():
    raw = make_submission("A")
    del raw["title"]
    with pytest.raises(ParseError) as exc_info:
        submission_to_record(raw, review_url)
    assert exc_info.value.field == "title"


def test_malformed_submissions_are_skipped():
    broken = make_submission("X")
    broken["code"] = None
    raws = [broken, "garbage", make_submission("A")]
    catalog = build_catalog(raws, review_url)
    assert [s.code for s in catalog] == ["A"]


def test_custom_valid_states():
    raws = [make_submission("A", state="accepted"), make_submission("B", state="submitted")]
    catalog = build_catalog(raws, review_url, valid_states=["accepted"])
    assert [s.code for s in catalog] == ["A"]
