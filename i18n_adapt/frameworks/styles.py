"""Stylesheet installed into projects for language-responsive layouts."""

RESPONSIVE_CSS = """\
/* Language-responsive UI helpers (generated by i18n-adapt) */

.lang-wrap {
  overflow-wrap: anywhere;
  word-break: normal;
  hyphens: auto;
  max-width: 100%;
}

.lang-btn {
  min-width: fit-content;
  padding-inline: 0.75em;
  white-space: normal;
  line-height: 1.3;
}

/* Languages whose text runs noticeably longer than English */
:lang(de) .lang-wrap,
:lang(ru) .lang-wrap,
:lang(fr) .lang-wrap,
:lang(es) .lang-wrap,
:lang(pt) .lang-wrap {
  font-size: 0.95em;
}

/* Scripts that need extra line height */
:lang(hi) .lang-wrap,
:lang(hi) .lang-btn {
  line-height: 1.6;
}

:lang(zh) .lang-wrap,
:lang(ja) .lang-wrap,
:lang(ko) .lang-wrap {
  word-break: keep-all;
  line-height: 1.5;
}

/* Right-to-left languages */
:lang(ar) {
  direction: rtl;
}

:lang(ar) .lang-btn {
  padding-inline: 0.75em;
}
"""
