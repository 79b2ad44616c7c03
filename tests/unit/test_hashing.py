#!/usr/bin/env python3
"""Tests for slide fingerprints and presentation diffs."""

import copy

from slide_renderer.hashing import build_presentation_cache, diff_presentations, hash_slide
from slide_renderer.models import PresentationDocument


def _doc(*texts, **frontmatter):
    return PresentationDocument.from_dict({
        "frontmatter": frontmatter,
        "slides": [{"elements": [{"type": "paragraph", "content": t}]} for t in texts],
    })


def test_fingerprint_is_stable():
    a, b = _doc("one"), _doc("one")
    assert hash_slide(a.slides[0]) == hash_slide(b.slides[0])


def test_metadata_change_keeps_content_hash():
    doc = _doc("one")
    before = hash_slide(doc.slides[0])
    doc.slides[0].metadata.layout = "title"
    after = hash_slide(doc.slides[0])
    assert before.content_hash == after.content_hash
    assert before.metadata_hash != after.metadata_hash


def test_hidden_flag_changes_fingerprint():
    doc = _doc("one")
    before = hash_slide(doc.slides[0])
    doc.slides[0].hidden = True
    assert hash_slide(doc.slides[0]).combined_hash != before.combined_hash


def test_no_changes():
    doc = _doc("one", "two")
    assert diff_presentations(build_presentation_cache(doc), copy.deepcopy(doc)).type == "none"


def test_content_only_change():
    cache = build_presentation_cache(_doc("one", "two"))
    diff = diff_presentations(cache, _doc("one", "TWO"))
    assert diff.type == "content-only"
    assert diff.modified_indices == [1]
    assert not diff.frontmatter_changed


def test_frontmatter_change():
    cache = build_presentation_cache(_doc("one", title="A"))
    diff = diff_presentations(cache, _doc("one", title="B"))
    assert diff.type == "content-only"
    assert diff.modified_indices == []
    assert diff.frontmatter_changed and diff.theme_changed


def test_structural_change():
    cache = build_presentation_cache(_doc("one", "two", "three"))
    diff = diff_presentations(cache, _doc("one", "new", "two", "three"))
    assert diff.type == "structural"
    assert diff.added_indices == [1]
    assert diff.removed_indices == []

    diff = diff_presentations(cache, _doc("one", "three"))
    assert diff.removed_indices == [1]
    assert diff.added_indices == []
