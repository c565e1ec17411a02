import signal
import threading
from types import FrameType

from app.config.settings import Settings
from app.database.connection import close_pool, ensure_schema, init_pool
from app.database.repositories.document_repository import DocumentRepository
from app.logging.logger import Log
from app.processor.processor import build_processor
from app.worker.document_runner import DocumentRunner
from app.worker.pool import WorkerPool
from app.worker.recovery import RecoveryScanner


def run_until_shutdown(
    scanner: RecoveryScanner,
    shutdown: threading.Event,
    scan_interval_seconds: float,
) -> None:
    """Block until shutdown, rescanning for timed-out documents periodically."""
    if scan_interval_seconds <= 0:
        shutdown.wait()
        return
    while not shutdown.wait(scan_interval_seconds):
        scanner.rescan_stuck()


def main() -> None:
    """Entry point: initialize pool -> build dependencies -> recover -> serve."""
    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)

    shutdown = threading.Event()

    def _request_shutdown(signum: int, _frame: FrameType | None) -> None:
        Log.info(f"Received signal {signum}, shutting down")
        shutdown.set()

    signal.signal(signal.SIGTERM, _request_shutdown)

    processor = None
    pool = None
    try:
        ensure_schema()
        doc_repo = DocumentRepository()
        processor = build_processor(settings, doc_repo)
        pool = WorkerPool(doc_repo, DocumentRunner(processor, doc_repo), settings)
        scanner = RecoveryScanner(doc_repo, pool, settings)

        pool.start()
        scanner.requeue_pending()
        run_until_shutdown(scanner, shutdown, settings.recovery_scan_interval_seconds)
    except KeyboardInterrupt:
        Log.info("Shutting down gracefully")
    finally:
        if pool is not None:
            pool.stop()
        if processor is not None:
            processor.close()
        close_pool()


if __name__ == "__main__":
    main()
