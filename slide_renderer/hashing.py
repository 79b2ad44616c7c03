"""
Slide fingerprints for incremental re-rendering.

A host keeps the :class:`PresentationCache` of the last render and asks
:func:`diff_presentations` which slides need new thumbnails.
"""
import dataclasses
import hashlib
import json
from dataclasses import dataclass, field
from typing import List

from .models import Config, PresentationDocument, Slide


@dataclass(frozen=True)
class SlideFingerprint:
    content_hash: str
    metadata_hash: str
    combined_hash: str


@dataclass
class PresentationCache:
    frontmatter_hash: str
    slide_fingerprints: List[SlideFingerprint] = field(default_factory=list)

    @property
    def slide_count(self) -> int:
        return len(self.slide_fingerprints)


@dataclass
class SlideDiff:
    type: str  # none | content-only | structural
    modified_indices: List[int] = field(default_factory=list)
    added_indices: List[int] = field(default_factory=list)
    removed_indices: List[int] = field(default_factory=list)
    frontmatter_changed: bool = False
    theme_changed: bool = False


def _digest(text: str) -> str:
    return hashlib.sha1(text.encode("utf-8")).hexdigest()[:16]


def hash_slide(slide: Slide) -> SlideFingerprint:
    """Content covers elements and notes; metadata includes the hidden flag."""
    parts = [f"{e.type}:{e.content}:{e.raw}:{e.column_index}:{e.visible}" for e in slide.elements]
    parts.append("notes:" + "|".join(slide.speaker_notes))
    parts.append("footnotes:" + "|".join(f"{f.id}={f.content}" for f in slide.footnotes))
    content_hash = _digest("||".join(parts))

    metadata = dataclasses.asdict(slide.metadata)
    metadata["hidden"] = slide.hidden
    metadata_hash = _digest(json.dumps(metadata, sort_keys=True))

    return SlideFingerprint(content_hash, metadata_hash, _digest(f"{content_hash}::{metadata_hash}"))


def hash_frontmatter(config: Config) -> str:
    return _digest(json.dumps(dataclasses.asdict(config), sort_keys=True))


def build_presentation_cache(presentation: PresentationDocument) -> PresentationCache:
    return PresentationCache(
        frontmatter_hash=hash_frontmatter(presentation.frontmatter),
        slide_fingerprints=[hash_slide(s) for s in presentation.slides],
    )


def diff_presentations(old: PresentationCache, presentation: PresentationDocument) -> SlideDiff:
    """
    Compare a new document against the cache of the previous one.

    Same slide count: per-index comparison (``none`` or ``content-only``).
    Different count: slides are matched by combined hash and the rest are
    reported as added or removed (``structural``).
    """
    frontmatter_changed = hash_frontmatter(presentation.frontmatter) != old.frontmatter_hash
    # Theme settings live in the frontmatter.
    theme_changed = frontmatter_changed
    new = [hash_slide(s) for s in presentation.slides]

    if len(new) == old.slide_count:
        modified = [
            i for i, fp in enumerate(new)
            if fp.combined_hash != old.slide_fingerprints[i].combined_hash
        ]
        if not modified and not frontmatter_changed:
            return SlideDiff(type="none")
        return SlideDiff(
            type="content-only",
            modified_indices=modified,
            frontmatter_changed=frontmatter_changed,
            theme_changed=theme_changed,
        )

    matched_old, matched_new = set(), set()
    old_hashes = [fp.combined_hash for fp in old.slide_fingerprints]
    for new_index, fp in enumerate(new):
        for old_index, old_hash in enumerate(old_hashes):
            if old_index not in matched_old and old_hash == fp.combined_hash:
                matched_old.add(old_index)
                matched_new.add(new_index)
                break

    return SlideDiff(
        type="structural",
        added_indices=[i for i in range(len(new)) if i not in matched_new],
        removed_indices=[i for i in range(old.slide_count) if i not in matched_old],
        frontmatter_changed=frontmatter_changed,
        theme_changed=theme_changed,
    )
