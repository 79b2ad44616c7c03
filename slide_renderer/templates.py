"""
Jinja2 document shells.

Slide markup is built by the renderer; the templates only assemble the
style blocks, the slide fragments and, for export, the navigation script.
"""
from jinja2 import DictLoader, Environment

SINGLE_SLIDE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8" />
  <style>{{ custom_font_css }}</style>
  <style>{{ base_css }}</style>
  <style>{{ theme_css }}</style>
  <style>{{ frontmatter_css }}</style>
  <style>{{ font_scale_css }}</style>
</head>
<body class="{{ body_classes }}">
{{ slide_html }}
</body>
</html>
"""

EXPORT_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="viewport-fit=cover, width=device-width, height=device-height, initial-scale=1" />
  <title>{{ title | e }}</title>
{% if author %}  <meta name="author" content="{{ author | e }}" />
{% endif %}  <style>{{ custom_font_css }}</style>
  <style>{{ base_css }}</style>
  <style>{{ theme_css }}</style>
  <style>{{ frontmatter_css }}</style>
  <style>{{ font_scale_css }}</style>
</head>
<body class="{{ body_classes }}" data-default-mode="{{ default_mode }}">
  <div class="export-controls">
    <button type="button" class="toggle-theme" data-mode="{{ default_mode }}">{{ 'Light' if default_mode == 'dark' else 'Dark' }}</button>
    <button type="button" class="toggle-hidden">Show hidden slides</button>
  </div>
  <div class="deck">
{% for slide_html in slides %}{{ slide_html }}
{% endfor %}  </div>
{% if show_progress %}  <div class="progress-bar"></div>
{% endif %}  <script>{{ script }}</script>
</body>
</html>
"""

EXPORT_SCRIPT = """
(function () {
  var body = document.body;
  var slides = Array.prototype.slice.call(document.querySelectorAll('.deck > .slide'));
  var current = 0;

  function navigable() {
    var showHidden = body.classList.contains('show-hidden');
    return slides.filter(function (s) { return showHidden || s.dataset.hidden !== 'true'; });
  }

  function show(slide) {
    var list = navigable();
    if (!list.length) return;
    var pos = list.indexOf(slide);
    if (pos < 0) pos = 0;
    slides.forEach(function (s) { s.classList.remove('active', 'prev'); });
    list.forEach(function (s, i) { if (i < pos) s.classList.add('prev'); });
    list[pos].classList.add('active');
    current = slides.indexOf(list[pos]);
    var bar = document.querySelector('.progress-bar');
    if (bar) bar.style.width = ((pos + 1) / list.length * 100) + '%';
  }

  function step(delta) {
    var list = navigable();
    var pos = list.indexOf(slides[current]);
    if (pos < 0) {
      pos = list.findIndex(function (s) { return slides.indexOf(s) > current; });
      if (pos < 0) pos = list.length - 1;
      if (delta > 0) delta = 0;
    }
    show(list[Math.max(0, Math.min(list.length - 1, pos + delta))]);
  }

  function applyMode(mode) {
    slides.forEach(function (s) {
      if (s.classList.contains('mode-override')) return;
      s.classList.remove('light', 'dark');
      s.classList.add(mode);
      var panel = s.querySelector('.half-content-panel');
      if (panel) { panel.classList.remove('light', 'dark'); panel.classList.add(mode); }
      var bg = s.getAttribute('data-bg-' + mode);
      s.style.backgroundColor = bg || '';
    });
    var button = document.querySelector('.toggle-theme');
    button.dataset.mode = mode;
    button.textContent = mode === 'dark' ? 'Light' : 'Dark';
  }

  document.querySelector('.toggle-theme').addEventListener('click', function (e) {
    e.stopPropagation();
    applyMode(e.currentTarget.dataset.mode === 'dark' ? 'light' : 'dark');
  });

  document.querySelector('.toggle-hidden').addEventListener('click', function (e) {
    e.stopPropagation();
    var on = body.classList.toggle('show-hidden');
    e.currentTarget.textContent = on ? 'Hide hidden slides' : 'Show hidden slides';
    step(0);
  });

  document.addEventListener('keydown', function (e) {
    switch (e.key) {
      case 'ArrowRight': case 'ArrowDown': case ' ': case 'PageDown':
        e.preventDefault(); step(1); break;
      case 'ArrowLeft': case 'ArrowUp': case 'PageUp':
        e.preventDefault(); step(-1); break;
      case 'Home':
        e.preventDefault(); show(navigable()[0]); break;
      case 'End':
        e.preventDefault(); var list = navigable(); show(list[list.length - 1]); break;
    }
  });

  document.addEventListener('click', function (e) {
    if (e.target.closest('.export-controls')) return;
    step(e.clientX > window.innerWidth / 2 ? 1 : -1);
  });

  applyMode(body.dataset.defaultMode);
  show(navigable()[0]);
})();
"""

_env = Environment(loader=DictLoader({
    "single_slide.html": SINGLE_SLIDE_TEMPLATE,
    "export.html": EXPORT_TEMPLATE,
}), autoescape=False, keep_trailing_newline=True)


def render_template(name: str, **context) -> str:
    return _env.get_template(name).render(**context)
