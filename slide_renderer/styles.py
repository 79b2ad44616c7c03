"""
Base stylesheet.

Every length is a multiple of ``--slide-unit`` so a slide looks the same
in a 200px thumbnail and on a projector. Header, footer, title and
content regions are positioned absolutely from the slide edges, so each
margin setting moves exactly one region.
"""

SLIDE_UNIT = "calc((1vw + 1vh) / 2 * var(--slide-unit-scale, 1))"

_MARGIN_LEFT = "calc(var(--content-left, 5) * var(--slide-unit))"
_MARGIN_RIGHT = "calc(var(--content-right, 5) * var(--slide-unit))"

SLIDE_CSS = """
.slide {
  width: 100%;
  height: 100%;
  position: relative;
  overflow: hidden;
}

/* Colour modes */
.slide.light { background: var(--light-background, #ffffff); color: var(--light-body-text, #333333); }
.slide.light h1 { color: var(--light-h1-color, var(--light-title-text)); }
.slide.light h2 { color: var(--light-h2-color, var(--light-title-text)); }
.slide.light h3 { color: var(--light-h3-color, var(--light-title-text)); }
.slide.light h4 { color: var(--light-h4-color, var(--light-title-text)); }
.slide.light h5, .slide.light h6 { color: var(--light-title-text); }
.slide.light .slide-header { color: var(--light-header-text, inherit); }
.slide.light .slide-footer { color: var(--light-footer-text, inherit); }
.slide.dark { background: var(--dark-background, #1a1a1a); color: var(--dark-body-text, #e0e0e0); }
.slide.dark h1 { color: var(--dark-h1-color, var(--dark-title-text)); }
.slide.dark h2 { color: var(--dark-h2-color, var(--dark-title-text)); }
.slide.dark h3 { color: var(--dark-h3-color, var(--dark-title-text)); }
.slide.dark h4 { color: var(--dark-h4-color, var(--dark-title-text)); }
.slide.dark h5, .slide.dark h6 { color: var(--dark-title-text); }
.slide.dark .slide-header { color: var(--dark-header-text, inherit); }
.slide.dark .slide-footer { color: var(--dark-footer-text, inherit); }

/* Layout backgrounds */
.slide.light.cover-container { background: var(--light-bg-cover, var(--light-background)); }
.slide.light.title-container { background: var(--light-bg-title, var(--light-background)); }
.slide.light.section-container { background: var(--light-bg-section, var(--accent1)); }
.slide.dark.cover-container { background: var(--dark-bg-cover, var(--dark-background)); }
.slide.dark.title-container { background: var(--dark-bg-title, var(--dark-background)); }
.slide.dark.section-container { background: var(--dark-bg-section, var(--accent1)); }

/* Background layers */
.slide-background, .slide-image-background {
  position: absolute;
  top: 0; left: 0; right: 0; bottom: 0;
  z-index: 0;
  overflow: hidden;
  background-size: cover;
  background-position: center;
  background-repeat: no-repeat;
}
.slide-image-background img { display: block; width: 100%; height: 100%; }
.slide-overlay {
  position: absolute;
  top: 0; left: 0; right: 0; bottom: 0;
  z-index: 1;
  pointer-events: none;
  background-size: cover;
  background-position: center;
  background-repeat: no-repeat;
}

/* Several full-bleed images */
.slide-image-background .image-panel { overflow: hidden; min-width: 0; min-height: 0; }
.slide-image-background .image-panel img { width: 100%; height: 100%; }
.slide-image-background.dual-image { display: flex; flex-direction: row; }
.slide-image-background.dual-image .image-panel { flex: 1; }
.slide-image-background.multi-image.count-3 {
  display: grid;
  grid-template-columns: repeat(3, 1fr);
  grid-template-rows: 1fr;
}
@media (orientation: portrait), (max-aspect-ratio: 1/1) {
  .slide-image-background.dual-image { flex-direction: column; }
  .slide-image-background.multi-image.count-3 {
    grid-template-columns: 1fr;
    grid-template-rows: repeat(3, 1fr);
  }
}
.slide-image-background.multi-image.count-4 {
  display: grid;
  grid-template-columns: 1fr 1fr;
  grid-template-rows: 1fr 1fr;
}
.slide-image-background.multi-image.count-5 {
  display: grid;
  grid-template-columns: repeat(6, 1fr);
  grid-template-rows: 1fr 1fr;
}
.slide-image-background.multi-image.count-5 .image-1 { grid-column: 1 / 4; grid-row: 1; }
.slide-image-background.multi-image.count-5 .image-2 { grid-column: 4 / 7; grid-row: 1; }
.slide-image-background.multi-image.count-5 .image-3 { grid-column: 1 / 3; grid-row: 2; }
.slide-image-background.multi-image.count-5 .image-4 { grid-column: 3 / 5; grid-row: 2; }
.slide-image-background.multi-image.count-5 .image-5 { grid-column: 5 / 7; grid-row: 2; }
.slide-image-background.multi-image.count-6 {
  display: grid;
  grid-template-columns: 1fr 1fr 1fr;
  grid-template-rows: 1fr 1fr;
}
.slide-image-background.multi-image:not(.count-3):not(.count-4):not(.count-5):not(.count-6) {
  display: flex;
  flex-wrap: wrap;
}
.slide-image-background.multi-image:not(.count-3):not(.count-4):not(.count-5):not(.count-6) .image-panel {
  flex: 1 1 33.333%;
}

.slide-body {
  position: absolute;
  top: 0; left: 0; right: 0; bottom: 0;
  z-index: 2;
  display: flex;
  flex-direction: column;
}

/* Header / footer */
.slide-header, .slide-footer {
  position: absolute;
  left: MARGIN_LEFT;
  right: MARGIN_RIGHT;
  z-index: 10;
  display: flex;
  justify-content: space-between;
}
.slide-header {
  top: calc(var(--header-top, 2.5) * var(--slide-unit));
  align-items: flex-start;
  font-family: var(--header-font, var(--body-font, system-ui, -apple-system, sans-serif));
  font-weight: var(--header-font-weight, var(--body-font-weight, 400));
  font-size: calc(var(--slide-unit) * 1.8 * var(--header-font-scale, 1) * var(--font-scale, 1));
}
.slide-footer {
  bottom: calc(var(--footer-bottom, 2.5) * var(--slide-unit));
  align-items: flex-end;
  font-family: var(--footer-font, var(--body-font, system-ui, -apple-system, sans-serif));
  font-weight: var(--footer-font-weight, var(--body-font-weight, 400));
  font-size: calc(var(--slide-unit) * 1.8 * var(--footer-font-scale, 1) * var(--font-scale, 1));
}
.slide-header > div, .slide-footer > div { flex: 1; display: flex; }
.header-left, .footer-left { justify-content: flex-start; }
.header-middle, .footer-middle { justify-content: center; }
.header-right, .footer-right { justify-content: flex-end; }
.image-container .slide-header span,
.image-container .slide-footer span {
  background: rgba(0, 0, 0, 0.5);
  padding: calc(var(--slide-unit) * 0.5) calc(var(--slide-unit) * 1);
  border-radius: calc(var(--slide-unit) * 0.5);
  color: #fff;
}

/* Content area */
.slide-content {
  position: absolute;
  left: MARGIN_LEFT;
  right: MARGIN_RIGHT;
  top: 0;
  bottom: 0;
  display: flex;
  flex-direction: column;
  gap: calc(var(--slide-unit) * 1.5);
  z-index: 5;
}
.slot-header {
  position: absolute;
  top: calc(var(--title-top, 5) * var(--slide-unit));
  left: 0;
  right: 0;
}
.slot-columns {
  position: absolute;
  top: calc(var(--content-top, 12) * var(--slide-unit) + var(--content-top-offset, 0%));
  left: 0;
  right: 0;
  bottom: calc(var(--footer-bottom, 2.5) * var(--slide-unit) + var(--slide-unit) * 4);
  display: flex;
  flex-direction: row;
  gap: calc(var(--slide-unit) * 3);
  align-items: stretch;
  overflow: hidden;
}
.slot-columns .column {
  flex: 1;
  display: flex;
  flex-direction: column;
  min-height: 0;
  min-width: 0;
  overflow: hidden;
}
.slot-columns.columns-1 { flex-direction: column; }
.slot-columns.columns-3 { gap: calc(var(--slide-unit) * 5); }
.slot-columns.ratio-narrow-wide .column[data-column="1"] { flex: 1; }
.slot-columns.ratio-narrow-wide .column[data-column="2"] { flex: 2; }
.slot-columns.ratio-wide-narrow .column[data-column="1"] { flex: 2; }
.slot-columns.ratio-wide-narrow .column[data-column="2"] { flex: 1; }

/* Typography */
h1, h2, h3, h4, h5, h6 {
  font-family: var(--title-font, system-ui, -apple-system, sans-serif);
  font-weight: var(--title-font-weight, 700);
  line-height: var(--line-height, 1.1);
  margin-top: calc(var(--headline-spacing-before, 0) * var(--slide-unit));
  margin-bottom: calc(var(--headline-spacing-after, 0.5) * var(--slide-unit));
}
h1 { font-size: calc(var(--slide-unit) * 7 * var(--title-font-scale, 1) * var(--font-scale, 1)); }
h2 { font-size: calc(var(--slide-unit) * 5.5 * var(--title-font-scale, 1) * var(--font-scale, 1)); }
h3 { font-size: calc(var(--slide-unit) * 4.5 * var(--title-font-scale, 1) * var(--font-scale, 1)); }
h4 { font-size: calc(var(--slide-unit) * 3.5 * var(--title-font-scale, 1) * var(--font-scale, 1)); }
h5 { font-size: calc(var(--slide-unit) * 3 * var(--title-font-scale, 1) * var(--font-scale, 1)); }
h6 { font-size: calc(var(--slide-unit) * 2.5 * var(--title-font-scale, 1) * var(--font-scale, 1)); }
p, ul, ol, blockquote, table {
  font-weight: var(--body-font-weight, 400);
  font-size: calc(var(--slide-unit) * 2.8 * var(--body-font-scale, 1) * var(--font-scale, 1));
  line-height: var(--line-height, 1.1);
}
ul, ol { padding-left: calc(var(--slide-unit) * 2); }
li { margin-bottom: calc(var(--list-item-spacing, 1) * var(--slide-unit)); }
li > ul, li > ol { font-size: 1em; margin-top: calc(var(--list-item-spacing, 1) * var(--slide-unit)); }
blockquote { border-left: calc(var(--slide-unit) * 0.4) solid var(--accent1, currentColor); padding-left: calc(var(--slide-unit) * 2); }
pre { font-size: calc(var(--slide-unit) * 2 * var(--body-font-scale, 1) * var(--font-scale, 1)); overflow: hidden; }
table { border-collapse: collapse; }
th, td { padding: calc(var(--slide-unit) * 0.5) calc(var(--slide-unit) * 1); }
.math-block { font-family: 'Times New Roman', serif; font-size: calc(var(--slide-unit) * 3 * var(--font-scale, 1)); }
.kicker {
  font-size: calc(var(--slide-unit) * 1.8 * var(--body-font-scale, 1) * var(--font-scale, 1));
  text-transform: uppercase;
  letter-spacing: 0.08em;
  opacity: 0.7;
}
.footnote-ref { font-size: 0.6em; }

/* Images in the content flow */
.image-figure {
  margin: 0;
  width: 100%;
  flex: 1;
  min-height: 0;
  overflow: hidden;
  position: relative;
}
.image-figure img {
  display: block;
  width: 100%;
  height: 100%;
  position: absolute;
  top: 0;
  left: 0;
}

/* Cover / title / section */
.layout-cover, .layout-title, .layout-section {
  display: flex;
  justify-content: center;
  align-items: center;
}
.cover-content, .title-content, .section-content {
  display: flex;
  flex-direction: column;
  justify-content: center;
  align-items: center;
  text-align: center;
  padding: calc(var(--slide-unit) * 5);
}
.cover-content h1, .title-content h1 { font-size: calc(var(--slide-unit) * 9 * var(--title-font-scale, 1) * var(--font-scale, 1)); }
.cover-content h2, .title-content h2 { font-size: calc(var(--slide-unit) * 7 * var(--title-font-scale, 1) * var(--font-scale, 1)); }
.section-content h1, .section-content h2, .section-content h3 { color: var(--light-body-text, #fff); }

/* Full image */
.image-container .slide-content { left: 0; right: 0; }

/* Caption */
.caption-container .slide-content { left: 0; right: 0; gap: 0; }
.layout-caption .slot-title-bar {
  height: calc(var(--slide-unit) * 5);
  padding: 0 calc(var(--slide-unit) * 2);
  display: flex;
  align-items: center;
  flex-shrink: 0;
}
.layout-caption .slot-title-bar h1, .layout-caption .slot-title-bar h2,
.layout-caption .slot-title-bar h3, .layout-caption .slot-title-bar h4,
.layout-caption .slot-title-bar .kicker {
  font-size: calc(var(--slide-unit) * 2.5 * var(--title-font-scale, 1) * var(--font-scale, 1));
  margin: 0;
  line-height: 1.2;
}
.layout-caption .slot-image { flex: 1; display: flex; min-height: 0; overflow: hidden; position: relative; }
.layout-caption .slot-image .image-slot { position: absolute; top: 0; left: 0; right: 0; bottom: 0; }
.layout-caption .slot-image img { width: 100%; height: 100%; display: block; }
.layout-caption .slot-caption {
  padding: calc(var(--slide-unit) * 1) calc(var(--slide-unit) * 2);
  text-align: center;
  font-size: calc(var(--slide-unit) * 2 * var(--body-font-scale, 1) * var(--font-scale, 1));
  flex-shrink: 0;
}
.caption-container > .slide-header, .caption-container > .slide-footer { display: none; }

/* Half image */
.split-container, .split-horizontal-container { display: flex; }
.split-container { flex-direction: row; }
.split-container.image-right { flex-direction: row-reverse; }
.split-horizontal-container { flex-direction: column; }
.split-horizontal-container.image-bottom { flex-direction: column-reverse; }
.half-image-panel, .half-content-panel {
  flex: 1;
  min-width: 0;
  min-height: 0;
  overflow: hidden;
  position: relative;
}
.half-image-panel { z-index: 2; }
.half-image-panel img { display: block; width: 100%; height: 100%; }
.half-image-panel .image-slot { height: 50%; }
.half-content-panel {
  display: flex;
  flex-direction: column;
  padding: calc(var(--slide-unit) * 4);
  z-index: 3;
}
.half-content-panel .slide-header, .half-content-panel .slide-footer {
  position: relative;
  top: auto; bottom: auto; left: auto; right: auto;
}
.half-content-panel .slide-header { margin-bottom: calc(var(--slide-unit) * 1); }
.half-content-panel .slide-footer { margin-top: auto; }
.half-content-panel .slide-body { position: relative; flex: 1; justify-content: center; }
.half-content-panel .slide-content { position: relative; left: auto; right: auto; gap: calc(var(--slide-unit) * 1); }

/* Footnotes */
.slide-footnotes {
  position: absolute;
  left: MARGIN_LEFT;
  right: MARGIN_RIGHT;
  bottom: calc(var(--footer-bottom, 2.5) * var(--slide-unit) + var(--slide-unit) * 3);
  z-index: 6;
  font-size: calc(var(--slide-unit) * 1.4 * var(--body-font-scale, 1) * var(--font-scale, 1));
  opacity: 0.8;
}
.slide-footnotes[style*="width"] { right: auto; }
.footnotes-list { list-style: none; padding-left: 0; }
.footnotes-list li { margin-bottom: calc(var(--slide-unit) * 0.3); }
.footnote-id { font-size: 0.75em; vertical-align: super; }
.layout-footnotes .footnotes-list {
  font-size: calc(var(--slide-unit) * 2 * var(--body-font-scale, 1) * var(--font-scale, 1));
}
.slot-footnotes {
  position: absolute;
  top: calc(var(--content-top, 12) * var(--slide-unit));
  left: 0;
  right: 0;
  bottom: calc(var(--footer-bottom, 2.5) * var(--slide-unit) + var(--slide-unit) * 4);
  overflow: hidden;
}

.speaker-notes { display: none; }
""".replace("MARGIN_LEFT", _MARGIN_LEFT).replace("MARGIN_RIGHT", _MARGIN_RIGHT)

BODY_CLASSES = {
    "thumbnail": "slide-thumbnail",
    "preview": "slide-preview",
    "presentation": "slide-presentation",
}


def base_styles(context_name: str = "thumbnail") -> str:
    """Reset, slide unit and slide CSS for a single-slide document."""
    body_class = BODY_CLASSES.get(context_name, BODY_CLASSES["thumbnail"])
    return f"""
* {{ margin: 0; padding: 0; box-sizing: border-box; }}
:root {{ --slide-unit: {SLIDE_UNIT}; }}
html, body {{
  width: 100%;
  height: 100%;
  font-family: var(--body-font, system-ui, -apple-system, sans-serif);
  overflow: hidden;
}}
.{body_class} {{ background: var(--light-background); width: 100%; height: 100%; }}
{SLIDE_CSS}"""


EXPORT_CSS = """
* { margin: 0; padding: 0; box-sizing: border-box; }
html, body {
  width: 100%;
  height: 100%;
  overflow: hidden;
  font-family: var(--body-font, system-ui, -apple-system, sans-serif);
  background: #000;
}
.deck { width: 100%; height: 100%; position: relative; }
""" + SLIDE_CSS + """
.deck > .slide {
  position: absolute;
  top: 0;
  left: 0;
  opacity: 0;
  visibility: hidden;
  transition: opacity 0.4s ease, transform 0.4s ease, visibility 0s 0.4s;
}
.deck > .slide.active {
  opacity: 1;
  visibility: visible;
  transition: opacity 0.4s ease, transform 0.4s ease, visibility 0s 0s;
}
.transition-none .deck > .slide { transition: none; }
.transition-slide .deck > .slide { transform: translateX(100%); }
.transition-slide .deck > .slide.active { transform: translateX(0); }
.transition-slide .deck > .slide.prev { transform: translateX(-100%); }

body:not(.show-hidden) .deck > .slide.hidden-slide { display: none; }
.hidden-slide::after {
  content: "hidden";
  position: absolute;
  top: calc(var(--slide-unit) * 1);
  right: calc(var(--slide-unit) * 1);
  z-index: 20;
  font-size: calc(var(--slide-unit) * 1.2);
  padding: 0 calc(var(--slide-unit) * 0.5);
  background: rgba(0, 0, 0, 0.5);
  color: #fff;
}

.progress-bar {
  position: fixed;
  bottom: 0;
  left: 0;
  height: calc(var(--slide-unit) * 0.5);
  background: var(--accent1, #007acc);
  transition: width 0.3s ease;
  z-index: 100;
}
.export-controls {
  position: fixed;
  top: calc(var(--slide-unit) * 1);
  left: calc(var(--slide-unit) * 1);
  z-index: 100;
  display: flex;
  gap: calc(var(--slide-unit) * 0.5);
  opacity: 0.2;
  transition: opacity 0.2s ease;
}
.export-controls:hover { opacity: 1; }
.export-controls button {
  font-size: calc(var(--slide-unit) * 1.2);
  padding: calc(var(--slide-unit) * 0.3) calc(var(--slide-unit) * 0.8);
  cursor: pointer;
}
"""


def export_styles() -> str:
    return f":root {{ --slide-unit: {SLIDE_UNIT}; }}\n{EXPORT_CSS}"
