"""Unit tests for press kit slug and publish bookkeeping."""

import pytest

from src.models.press_kit import DEFAULT_CUSTOMIZATION, PressKit, default_customization, make_slug


@pytest.mark.parametrize(
    "title,slug",
    [
        ("My Band", "my-band"),
        ("  my   BAND! ", "my-band"),
        ("Sigur Rós", "sigur-ros"),
        ("AC/DC Tribute", "ac-dc-tribute"),
        ("!!!", ""),
    ],
)
def test_make_slug(title, slug):
    assert make_slug(title) == slug


def test_default_customization_is_a_copy():
    customization = default_customization()
    customization["colors"]["primary"] = "#000000"
    assert DEFAULT_CUSTOMIZATION["colors"]["primary"] == "#1976d2"


def test_title_change_rederives_slug():
    press_kit = PressKit(owner_id=1)
    press_kit.apply_changes({"title": "First Name", "template": "classic"})
    assert press_kit.slug == "first-name"

    press_kit.apply_changes({"title": "Second Name"})
    assert press_kit.slug == "second-name"


def test_other_changes_leave_slug_alone():
    press_kit = PressKit(owner_id=1)
    press_kit.apply_changes({"title": "My Band", "template": "classic"})
    press_kit.apply_changes({"template": "modern", "sections": []})
    assert press_kit.slug == "my-band"


def test_publish_transition_stamps_once():
    press_kit = PressKit(owner_id=1, is_published=False)
    press_kit.apply_changes({"title": "My Band", "template": "classic"})
    assert press_kit.last_published_at is None

    press_kit.apply_changes({"is_published": True})
    stamp = press_kit.last_published_at
    assert stamp is not None

    press_kit.apply_changes({"template": "modern"})
    assert press_kit.last_published_at == stamp

    press_kit.apply_changes({"is_published": False})
    assert press_kit.last_published_at == stamp

    press_kit.apply_changes({"is_published": True})
    assert press_kit.last_published_at >= stamp


def test_created_published_is_stamped():
    press_kit = PressKit(owner_id=1)
    press_kit.apply_changes({"title": "My Band", "template": "classic", "is_published": True})
    assert press_kit.last_published_at is not None


def test_owner_is_not_editable():
    press_kit = PressKit(owner_id=1)
    with pytest.raises(ValueError, match="owner_id"):
        press_kit.apply_changes({"owner_id": 2})
    assert press_kit.owner_id == 1
