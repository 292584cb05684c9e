"""Generic async polling service abstraction.

Provides a reusable base class for services that follow the
poll → display → audit pattern on a fixed interval.
"""

import asyncio
import signal
from abc import ABC, abstractmethod

from ocypus.lib.config import get_settings
from ocypus.logging import get_logger


class PollingService[T](ABC):
    """Abstract base class for async polling services.

    Implements the common polling loop pattern with:
    - Fixed polling interval (no overlapping ticks, no backoff)
    - Cooperative shutdown checked at each tick boundary
    - Error recovery: a failing tick never stops the loop
    """

    def __init__(
        self,
        name: str,
        frequency_sec: float | None = None,
    ) -> None:
        """Initialize the polling service.

        Args:
            name: Service name for logging.
            frequency_sec: Polling interval in seconds.
        """
        self.name = name
        self.frequency_sec = (
            frequency_sec or get_settings().update_interval_sec
        )
        self._stop = asyncio.Event()
        self._logger = get_logger(f"polling.{name}")

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize any resources needed before polling starts."""

    @abstractmethod
    async def cleanup(self) -> None:
        """Release resources before exit."""

    @abstractmethod
    async def poll(self) -> T | None:
        """Poll the source for a new reading.

        Returns:
            A reading object, or None if the reading failed and the rest
            of the tick should be skipped.
        """

    @abstractmethod
    async def display(self, reading: T) -> None:
        """Deliver the reading to its output. Failures must not raise."""

    @abstractmethod
    async def audit(self, reading: T) -> None:
        """Evaluate the reading against alert thresholds."""

    def on_poll_error(self, error: Exception) -> None:
        """Handle an error that escaped a poll cycle.

        Override to customize error handling. Default logs the error.
        """
        self._logger.error("%s poll error: %s", self.name, error)

    @property
    def shutdown_requested(self) -> bool:
        return self._stop.is_set()

    def request_shutdown(self) -> None:
        """Stop the loop after the current tick."""
        if not self._stop.is_set():
            self._logger.info("Shutdown requested, finishing current cycle")
        self._stop.set()

    def _handle_shutdown(self, sig: signal.Signals) -> None:
        """Handle shutdown signals gracefully."""
        self._logger.info(
            "Received %s, initiating graceful shutdown...", sig.name
        )
        self.request_shutdown()

    def _setup_signal_handlers(self) -> None:
        """Register signal handlers for graceful shutdown."""
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGTERM, signal.SIGINT):
            loop.add_signal_handler(sig, self._handle_shutdown, sig)

    async def _poll_cycle(self) -> None:
        """Execute a single poll → display → audit cycle."""
        reading = await self.poll()
        if reading is None:
            return
        await self.display(reading)
        await self.audit(reading)

    async def _sleep(self, seconds: float) -> None:
        """Sleep until the next tick, waking early on shutdown."""
        try:
            await asyncio.wait_for(self._stop.wait(), timeout=seconds)
        except TimeoutError:
            pass

    async def run_loop(self) -> None:
        """Run the async polling loop with precise timing."""
        await self.initialize()
        self._logger.info("%s polling service started", self.name)

        loop = asyncio.get_running_loop()

        try:
            while not self._stop.is_set():
                cycle_start = loop.time()

                try:
                    await self._poll_cycle()
                except Exception as e:
                    self.on_poll_error(e)

                # Sleep only the remaining time to keep a fixed interval
                elapsed = loop.time() - cycle_start
                sleep_time = max(0, self.frequency_sec - elapsed)
                if sleep_time > 0:
                    await self._sleep(sleep_time)
        finally:
            self._logger.info("Cleaning up resources...")
            await self.cleanup()
            self._logger.info("%s shutdown complete", self.name)

    async def _run_with_signals(self) -> None:
        self._setup_signal_handlers()
        await self.run_loop()

    def run(self) -> None:
        """Run the polling loop.

        This is the main entry point. It:
        1. Sets up signal handlers for graceful shutdown
        2. Calls initialize()
        3. Enters the polling loop (poll → display → audit)
        4. Calls cleanup() on exit
        """
        asyncio.run(self._run_with_signals())
