"""Tag tokenizer and stack-based tag balance validator."""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum

from taglit.html.catalog import is_void
from taglit.html.cleaned import CleanedText
from taglit.models.diagnostics import Diagnostic, DiagnosticCode, Severity

_TAG = re.compile(r"<(/?)([a-zA-Z][a-zA-Z0-9-]*)[^>]*>")


class TagKind(StrEnum):
    OPEN = "open"
    CLOSE = "close"
    SELF_CLOSE = "self_close"


@dataclass(frozen=True)
class TagToken:
    """A tag found in cleaned text; offsets are cleaned-text offsets."""

    name: str
    offset: int
    end: int
    kind: TagKind


def tokenize(text: str) -> Iterator[TagToken]:
    """Yield tags left to right.  Void elements count as self-closing."""
    for m in _TAG.finditer(text):
        name = m.group(2)
        if m.group(1):
            kind = TagKind.CLOSE
        elif m.group(0).endswith("/>") or is_void(name):
            kind = TagKind.SELF_CLOSE
        else:
            kind = TagKind.OPEN
        yield TagToken(name=name, offset=m.start(), end=m.end(), kind=kind)


class TagBalanceValidator:
    """Checks that tags in one literal open and close in order.

    Names compare case-sensitively.  A mismatched close still pops the open
    tag; there is no recovery lookahead.
    """

    def validate(self, cleaned: CleanedText) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        stack: list[TagToken] = []

        for token in tokenize(cleaned.text):
            if token.kind is TagKind.CLOSE:
                if not stack:
                    diagnostics.append(
                        self._diagnostic(
                            cleaned,
                            token,
                            DiagnosticCode.UNMATCHED_CLOSING_TAG,
                            f"Unmatched closing tag </{token.name}>",
                            Severity.ERROR,
                        )
                    )
                    continue
                top = stack.pop()
                if top.name != token.name:
                    diagnostics.append(
                        self._diagnostic(
                            cleaned,
                            token,
                            DiagnosticCode.MISMATCHED_CLOSING_TAG,
                            f"Expected closing tag </{top.name}> but found </{token.name}>",
                            Severity.ERROR,
                        )
                    )
            elif token.kind is TagKind.OPEN:
                stack.append(token)

        for unclosed in stack:
            diagnostics.append(
                self._diagnostic(
                    cleaned,
                    unclosed,
                    DiagnosticCode.UNCLOSED_TAG,
                    f"Unclosed tag <{unclosed.name}>",
                    Severity.WARNING,
                )
            )
        return diagnostics

    @staticmethod
    def _diagnostic(
        cleaned: CleanedText,
        token: TagToken,
        code: DiagnosticCode,
        message: str,
        severity: Severity,
    ) -> Diagnostic:
        return Diagnostic(
            code=code,
            message=message,
            severity=severity,
            start=cleaned.to_source(token.offset),
            end=cleaned.to_source(token.end, end=True),
        )
