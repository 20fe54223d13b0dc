# tests/test_intake.py
# -----------------------------------------------------------------------
# Unit tests for statement_engine/intake.py
#
# Covers content-type validation, the one-entry-per-category slot rule,
# supersession and removal, and preview handle release.
# -----------------------------------------------------------------------

import itertools
import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from statement_engine.constants import CATEGORY_IDS
from statement_engine.exceptions import UnknownCategoryError
from statement_engine.intake import CategoryIntake, NON_IMAGE_ERROR, PreviewRegistry


# ── Helpers ────────────────────────────────────────────────────────────

def _make_intake() -> CategoryIntake:
    """Intake with a deterministic millisecond clock starting at 1000."""
    ticks = itertools.count(1000)
    return CategoryIntake(clock=lambda: next(ticks))


def _add_png(intake, category="cash-flow", name="stmt.png", data=b"\x89PNG-bytes"):
    return intake.add_file(category, name, "image/png", data)


# ═══════════════════════════════════════════════════════════════════════
# Validation
# ═══════════════════════════════════════════════════════════════════════

class TestValidation:
    def test_image_accepted(self):
        intake = _make_intake()
        entry = _add_png(intake)
        assert entry is not None
        assert entry.category == "cash-flow"
        assert entry.id == "cash-flow-1000"
        assert entry.progress == 0
        assert entry.processed is False
        assert intake.last_error is None

    def test_pdf_rejected_without_state_change(self):
        intake = _make_intake()
        assert intake.add_file("profit", "report.pdf", "application/pdf", b"%PDF") is None
        assert intake.last_error == NON_IMAGE_ERROR
        assert len(intake) == 0
        assert intake.previews.active_count() == 0

    def test_missing_content_type_rejected(self):
        intake = _make_intake()
        assert intake.add_file("profit", "blob", None, b"x") is None
        assert intake.last_error == NON_IMAGE_ERROR

    def test_rejection_keeps_existing_entry(self):
        intake = _make_intake()
        first = _add_png(intake, "profit")
        intake.add_file("profit", "notes.txt", "text/plain", b"hello")
        assert intake.get("profit") is first

    def test_successful_add_clears_previous_error(self):
        intake = _make_intake()
        intake.add_file("profit", "notes.txt", "text/plain", b"hello")
        assert intake.last_error
        _add_png(intake, "profit")
        assert intake.last_error is None

    def test_unknown_category_raises(self):
        intake = _make_intake()
        with pytest.raises(UnknownCategoryError):
            intake.add_file("income-tax", "a.png", "image/png", b"x")

    @pytest.mark.parametrize("ctype", ["image/jpeg", "image/gif", "image/webp"])
    def test_any_image_subtype_accepted(self, ctype):
        intake = _make_intake()
        assert intake.add_file("balance-sheet", "img", ctype, b"x") is not None


# ═══════════════════════════════════════════════════════════════════════
# Slots
# ═══════════════════════════════════════════════════════════════════════

class TestSlots:
    def test_at_most_one_entry_per_category(self):
        intake = _make_intake()
        _add_png(intake, "cash-flow", "a.png")
        _add_png(intake, "cash-flow", "b.png")
        _add_png(intake, "cash-flow", "c.png")
        assert len(intake) == 1
        assert intake.get("cash-flow").file_name == "c.png"

    def test_supersede_releases_old_preview(self):
        intake = _make_intake()
        old = _add_png(intake, "cash-flow", "a.png")
        new = _add_png(intake, "cash-flow", "b.png")
        assert intake.previews.resolve(old.preview) is None
        assert intake.previews.resolve(new.preview) == new.data
        assert intake.previews.active_count() == 1

    def test_remove_releases_preview(self):
        intake = _make_intake()
        entry = _add_png(intake, "profit")
        assert intake.remove_file("profit") is True
        assert intake.get("profit") is None
        assert intake.previews.resolve(entry.preview) is None
        assert intake.remove_file("profit") is False

    def test_entries_follow_category_order(self):
        intake = _make_intake()
        for category in reversed(CATEGORY_IDS):
            _add_png(intake, category)
        assert [e.category for e in intake.entries()] == CATEGORY_IDS
        assert intake.all_categories_filled()

    def test_can_proceed_needs_one_file(self):
        intake = _make_intake()
        assert not intake.can_proceed()
        _add_png(intake, "balance-sheet")
        assert intake.can_proceed()
        assert not intake.all_categories_filled()

    def test_metadata_shape(self):
        intake = _make_intake()
        _add_png(intake, "profit", "p.png", b"12345")
        meta = intake.metadata()[0]
        assert meta.to_dict() == {
            "id": "profit-1000",
            "category": "profit",
            "originalFileName": "p.png",
            "fileType": "image/png",
            "fileSize": 5,
        }

    def test_clear_releases_everything(self):
        intake = _make_intake()
        _add_png(intake, "profit")
        _add_png(intake, "cash-flow")
        intake.clear()
        assert len(intake) == 0
        assert intake.previews.active_count() == 0


class TestPreviewRegistry:
    def test_handles_are_unique(self):
        reg = PreviewRegistry()
        assert reg.issue(b"a") != reg.issue(b"a")
        assert reg.active_count() == 2

    def test_release_twice(self):
        reg = PreviewRegistry()
        h = reg.issue(b"a")
        assert reg.release(h) is True
        assert reg.release(h) is False
