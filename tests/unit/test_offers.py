import pytest

from core.offers import INTRO_OFFER_MARKER, is_intro_offer_note, normalize_email


@pytest.mark.parametrize(
    "raw",
    ["user@example.com", "User@Example.com ", "  USER@EXAMPLE.COM\n"],
)
def test_normalize_email(raw):
    assert normalize_email(raw) == "user@example.com"


def test_intro_offer_note_matches_marker_case_insensitively():
    assert is_intro_offer_note(f"{INTRO_OFFER_MARKER} - 3 Sessions (purchased by Ann)")
    assert is_intro_offer_note("introductory offer, comp'd by staff")


def test_intro_offer_note_rejects_other_notes():
    assert not is_intro_offer_note("Gift card top-up")
    assert not is_intro_offer_note("")
    assert not is_intro_offer_note(None)
