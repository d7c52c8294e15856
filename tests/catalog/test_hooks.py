"""Tests for product write hooks."""

from storefront.catalog.hooks import BEFORE_VALIDATE_HOOKS, assign_slug, run_before_validate


class TestAssignSlug:
    """Tests for the slug assignment hook."""

    def test_derives_slug_from_name(self) -> None:
        """Missing slug is derived from the name."""
        draft = {"name": "Стикер №1"}
        assert assign_slug(draft) is draft
        assert draft["slug"] == "stiker-1"

    def test_empty_slug_is_treated_as_missing(self) -> None:
        """Empty or null slug is filled in."""
        assert assign_slug({"name": "Дождь", "slug": ""})["slug"] == "dozhd"
        assert assign_slug({"name": "Дождь", "slug": None})["slug"] == "dozhd"

    def test_existing_slug_is_kept(self) -> None:
        """An explicit slug is never regenerated."""
        draft = assign_slug({"name": "Новое имя", "slug": "custom-slug"})
        assert draft["slug"] == "custom-slug"

    def test_no_name_leaves_draft_alone(self) -> None:
        """Without a name the hook does nothing."""
        draft = assign_slug({"pricing": {"price": 10}})
        assert "slug" not in draft

    def test_name_without_letters_gives_empty_slug(self) -> None:
        """Rejecting an empty slug is left to validation."""
        assert assign_slug({"name": "!!!"})["slug"] == ""


class TestRunBeforeValidate:
    """Tests for hook execution."""

    def test_slug_hook_is_registered(self) -> None:
        """Slug assignment runs on every write."""
        assert assign_slug in BEFORE_VALIDATE_HOOKS

    def test_runs_hooks_in_order(self) -> None:
        """Hooks run in order, each receiving the previous result."""
        calls: list[str] = []

        def first(draft):
            calls.append("first")
            draft["name"] = "Товар 2"
            return draft

        def second(draft):
            calls.append("second")
            return assign_slug(draft)

        draft = run_before_validate({}, hooks=[first, second])
        assert calls == ["first", "second"]
        assert draft["slug"] == "tovar-2"

    def test_default_hooks(self) -> None:
        """Default hooks fill the slug."""
        assert run_before_validate({"name": "Худи"})["slug"] == "hudi"


class TestBlankSlug:
    """Tests for whitespace-only slugs."""

    def test_whitespace_slug_is_treated_as_missing(self) -> None:
        """A slug of spaces is replaced by one derived from the name."""
        assert assign_slug({"name": "Товар", "slug": "   "})["slug"] == "tovar"

    def test_whitespace_slug_without_name_is_left_alone(self) -> None:
        """Without a name the blank slug stays for validation to reject."""
        assert assign_slug({"slug": "  "})["slug"] == "  "
