"""Shared test fixtures for taglit."""

from __future__ import annotations

import pytest

from taglit.lexer.leaders import LeaderMatcher
from taglit.service.completion import CompletionProvider
from taglit.service.diagnostics import DiagnosticProvider
from taglit.service.folding import FoldingProvider
from taglit.service.session_manager import SessionManager


@pytest.fixture
def matcher() -> LeaderMatcher:
    return LeaderMatcher()


@pytest.fixture
def diagnostics() -> DiagnosticProvider:
    return DiagnosticProvider()


@pytest.fixture
def folding() -> FoldingProvider:
    return FoldingProvider()


@pytest.fixture
def completion() -> CompletionProvider:
    return CompletionProvider()


@pytest.fixture
def session_manager() -> SessionManager:
    """SessionManager with long TTL and no cleanup thread (for tests)."""
    return SessionManager(ttl_seconds=3600, cleanup_interval=9999)


# A small component module: one valid list literal with a nested item
# literal, and a one-line literal with a mismatched closing tag.
SAMPLE_COMPONENT = """\
import { html } from "./dom.js";

export function list(items) {
  return html`
    <ul class="items">
      ${items.map((item) => html`<li>${item.name}</li>`)}
    </ul>
  `;
}

export const card = html`<div><p>broken</span></div>`;
"""

SAMPLE_CLEAN = """\
const view = html`
  <section>
    <h1>${title}</h1>
    <img src="${src}">
    <br/>
  </section>
`;
"""
