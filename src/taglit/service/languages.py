"""Language gate and cancellation protocol shared by the providers."""

from __future__ import annotations

from typing import Protocol

SUPPORTED_LANGUAGES: frozenset[str] = frozenset(
    {"javascript", "typescript", "javascriptreact", "typescriptreact"}
)


class CancellationSignal(Protocol):
    """Anything with ``is_set()``; ``threading.Event`` qualifies."""

    def is_set(self) -> bool: ...


def is_supported(language_id: str) -> bool:
    return language_id in SUPPORTED_LANGUAGES


def is_cancelled(cancel: CancellationSignal | None) -> bool:
    return cancel is not None and cancel.is_set()
