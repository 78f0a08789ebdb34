"""controller.py

State machine behind the two linked amount fields of the live converter.

The user may type into either field. Whichever field was edited last is
the *provenance*: it is the input, the other field is the output. Edits
and currency changes only *schedule* a recomputation (debounced); the
recomputation itself runs on a later `tick()` and writes the output field
without touching provenance, so a write never feeds back into another
recomputation.

All methods are expected to be called from one thread (the Streamlit
script run that owns the session).
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from forex_converter.config import settings

from .engine import ConversionEngine, format_amount
from .errors import ConversionFailed, InvalidAmount
from .model import ConversionRequest, Direction, LoadState, Provenance, get_currency
from .scheduler import Debouncer, Scheduler

logger = logging.getLogger(__name__)

FAILED_MESSAGE = "Failed to convert currency. Please try again."


class BidirectionalController:
    """Owns `source_amount` / `target_amount` and keeps them converted.

    Parameters
    ----------
    engine : ConversionEngine
        Shared engine; its cache lives as long as the session.
    scheduler : Scheduler | None
        Timer source; a wall-clock one is created when omitted.
    debounce_ms : int | None
        Quiet window before a recomputation; defaults to ``DEBOUNCE_MS``.
    """

    def __init__(
        self,
        engine: ConversionEngine,
        scheduler: Scheduler | None = None,
        debounce_ms: int | None = None,
        source_currency: str | None = None,
        target_currency: str | None = None,
    ) -> None:
        cfg = settings()
        self.engine = engine
        self.scheduler = scheduler or Scheduler()
        delay_ms = cfg["DEBOUNCE_MS"] if debounce_ms is None else debounce_ms
        self._debouncer = Debouncer(self.scheduler, delay_ms / 1000)

        self.source_currency = get_currency(source_currency or cfg["DEFAULT_SOURCE"]).code
        self.target_currency = get_currency(target_currency or cfg["DEFAULT_TARGET"]).code
        self.source_amount = ""
        self.target_amount = ""
        self.provenance = Provenance.SOURCE
        self.load_state = LoadState.IDLE
        self.error: str | None = None

    # -------------------------------------------------------------------------
    # User events
    # -------------------------------------------------------------------------

    def edit_source(self, text: str) -> None:
        self.source_amount = text
        self.provenance = Provenance.SOURCE
        self._schedule(Direction.FORWARD)

    def edit_target(self, text: str) -> None:
        self.target_amount = text
        self.provenance = Provenance.TARGET
        self._schedule(Direction.REVERSE)

    def select_source_currency(self, code: str) -> None:
        code = get_currency(code).code
        if code == self.source_currency:
            return
        self.source_currency = code
        self._schedule(Direction.from_provenance(self.provenance))

    def select_target_currency(self, code: str) -> None:
        code = get_currency(code).code
        if code == self.target_currency:
            return
        self.target_currency = code
        self._schedule(Direction.from_provenance(self.provenance))

    def swap(self) -> None:
        """Exchange currencies and amounts in one step.

        The values are only relabelled, nothing is converted. Provenance
        follows the field the user typed into, and a recomputation that was
        still waiting is moved to the mirrored direction.
        """
        old = Direction.from_provenance(self.provenance)
        was_pending = self._debouncer.cancel(old)

        (self.source_currency, self.target_currency,
         self.source_amount, self.target_amount,
         self.provenance) = (self.target_currency, self.source_currency,
                             self.target_amount, self.source_amount,
                             self.provenance.other)

        if was_pending:
            self._schedule(Direction.from_provenance(self.provenance))

    def tick(self) -> int:
        """Run the recomputations whose quiet window has elapsed."""
        return self.scheduler.run_due()

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    @property
    def pending(self) -> bool:
        return any(self._debouncer.is_pending(d) for d in Direction)

    @property
    def busy(self) -> bool:
        return self.load_state is LoadState.BUSY

    def snapshot(self) -> dict:
        return {
            "source_currency": self.source_currency,
            "target_currency": self.target_currency,
            "source_amount": self.source_amount,
            "target_amount": self.target_amount,
            "provenance": self.provenance.value,
            "load_state": self.load_state.value,
            "error": self.error,
        }

    # -------------------------------------------------------------------------
    # Recomputation
    # -------------------------------------------------------------------------

    @contextmanager
    def loading(self) -> Iterator[None]:
        """Hold `LoadState.BUSY` for the duration of the block."""
        self.load_state = LoadState.BUSY
        try:
            yield
        finally:
            self.load_state = LoadState.IDLE

    def _schedule(self, direction: Direction) -> None:
        self._debouncer.trigger(direction, lambda: self._recompute(direction))

    def _request(self, direction: Direction) -> ConversionRequest:
        amount = self.source_amount if direction is Direction.FORWARD else self.target_amount
        return ConversionRequest(
            source=self.source_currency,
            target=self.target_currency,
            amount=amount,
            direction=direction,
        )

    def _write_output(self, direction: Direction, text: str) -> None:
        # provenance is deliberately left alone here
        if direction is Direction.FORWARD:
            self.target_amount = text
        else:
            self.source_amount = text

    def _recompute(self, direction: Direction) -> None:
        if Direction.from_provenance(self.provenance) is not direction:
            logger.debug("Skipping %s recomputation: provenance is %s", direction.value, self.provenance.value)
            return

        request = self._request(direction)
        self.error = None
        try:
            with self.loading():
                value = self.engine.convert(request.amount, request.from_code, request.to_code)
        except InvalidAmount:
            self._write_output(direction, "")
            return
        except ConversionFailed:
            logger.exception("Conversion error for %s -> %s", request.from_code, request.to_code)
            self._write_output(direction, "")
            self.error = FAILED_MESSAGE
            return

        self._write_output(direction, format_amount(value))
        logger.debug("%s %s %s -> %s", direction.value, request.amount, request.from_code, value)
