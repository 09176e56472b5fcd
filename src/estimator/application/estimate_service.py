"""
Kiosk Estimator - Estimate Service

Fire-and-forget save/export. The record or totals are snapshotted on the
caller's thread; only the I/O runs in the background, so editing can carry
on while a save is in flight.
"""
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable

from estimator.domain.exceptions import EstimatorException, PersistenceFailure
from estimator.domain.interfaces import EstimateRepository
from estimator.domain.models import EstimateRecord
from .controller import EstimateController
from .exporter import DocumentExporter

logger = logging.getLogger(__name__)


class EstimateService:
    """
    Background persistence and export for one or more controllers.

    Failures surface on the returned Future as PersistenceFailure; the
    in-memory estimate is never touched, so the user can simply retry.
    """

    def __init__(
        self,
        repository: EstimateRepository,
        exporter: DocumentExporter | None = None,
        max_workers: int = 2,
    ):
        """
        Initialize EstimateService.

        Args:
            repository: Estimate storage
            exporter: Document exporter (default: DocumentExporter())
            max_workers: Background worker threads
        """
        self.repository = repository
        self.exporter = exporter or DocumentExporter()
        self.max_workers = max_workers
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="estimate-io")
        logger.info(f"EstimateService initialized: {max_workers} workers")

    def save(self, record: EstimateRecord, estimate_id: str | None = None) -> str:
        """
        Save synchronously.

        Raises:
            PersistenceFailure: If the repository call fails
        """
        try:
            saved_id = self.repository.save(record, estimate_id)
        except PersistenceFailure:
            raise
        except Exception as e:
            logger.error(f"Saving estimate failed: {e}", exc_info=True)
            raise PersistenceFailure(f"Failed to save estimate: {e}", operation="save", estimate_id=estimate_id)
        logger.info(f"✅ Saved estimate {saved_id} ({record.item_count()} items, total {record.grand_total:.2f})")
        return saved_id

    def save_async(self, controller: EstimateController, estimate_id: str | None = None) -> "Future[str]":
        """
        Snapshot the controller's estimate now and save it in the background.

        Returns:
            Future resolving to the estimate ID
        """
        record = controller.to_record(estimate_id=estimate_id)
        return self._executor.submit(self.save, record, estimate_id)

    def load(self, estimate_id: str) -> EstimateRecord | None:
        """
        Load a saved estimate.

        Raises:
            PersistenceFailure: If the repository call fails
        """
        try:
            return self.repository.get(estimate_id)
        except PersistenceFailure:
            raise
        except Exception as e:
            logger.error(f"Loading estimate {estimate_id} failed: {e}", exc_info=True)
            raise PersistenceFailure(f"Failed to load estimate: {e}", operation="load", estimate_id=estimate_id)

    def load_into(self, controller: EstimateController, estimate_id: str) -> bool:
        """
        Load a saved estimate into a controller for editing.

        Returns:
            False when the estimate does not exist (controller untouched)
        """
        record = self.load(estimate_id)
        if record is None:
            logger.warning(f"Estimate {estimate_id} not found")
            return False
        controller.load_record(record)
        return True

    def export_async(
        self,
        controller: EstimateController,
        sink: Callable[[bytes], None] | None = None,
    ) -> "Future[bytes]":
        """
        Snapshot items and totals now, render CSV in the background.

        Args:
            controller: Estimate to export
            sink: Optional callable receiving the CSV bytes (upload, file write, mailer)

        Returns:
            Future resolving to the CSV bytes
        """
        collections = controller.store.snapshot()
        totals = controller.totals()

        def _run() -> bytes:
            try:
                payload = self.exporter.to_csv_bytes(collections, totals)
                if sink is not None:
                    sink(payload)
                return payload
            except EstimatorException:
                raise
            except Exception as e:
                logger.error(f"Export failed: {e}", exc_info=True)
                raise PersistenceFailure(f"Failed to export estimate: {e}", operation="export")

        return self._executor.submit(_run)

    @staticmethod
    def cancel(future: Future) -> bool:
        """Abandon a pending save/export (e.g. on navigation). False if already running."""
        return future.cancel()

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
