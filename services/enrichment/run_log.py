"""
Run logging - Capture an enrichment run's log, gzip it, and archive it
locally and/or to S3.
"""

import gzip
import io
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import boto3
from loguru import logger


class RunLogger:
    """
    Captures logs during an enrichment run and archives them on exit.

    Usage:
        with RunLogger("enrich", s3_bucket="my-bucket") as run_log:
            logger.info("Processing...")
        # Log is compressed, saved and uploaded

    Archiving failures are logged, never raised.
    """

    def __init__(
        self,
        run_name: str = "enrich",
        s3_bucket: Optional[str] = None,
        s3_prefix: str = "enrich-logs/",
        local_dir: Optional[str] = None,
    ):
        self.run_name = run_name
        self.s3_bucket = s3_bucket
        self.s3_prefix = s3_prefix
        self.local_dir = local_dir

        self._log_buffer = io.StringIO()
        self._handler_id: Optional[int] = None
        self._start_time: Optional[datetime] = None
        self.s3_key: Optional[str] = None
        self.local_path: Optional[Path] = None

    @property
    def content(self) -> str:
        return self._log_buffer.getvalue()

    def __enter__(self) -> "RunLogger":
        self._start_time = datetime.now(timezone.utc)
        self._handler_id = logger.add(
            self._log_buffer,
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {message}",
            level="DEBUG",
        )
        logger.info(f"=== Run started: {self.run_name} ===")
        logger.info(f"Start time: {self._start_time.isoformat()}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        end_time = datetime.now(timezone.utc)

        if exc_type:
            logger.error(f"Run failed with error: {exc_val}")

        logger.info(f"End time: {end_time.isoformat()}")
        logger.info(f"Duration: {end_time - self._start_time}")
        logger.info(f"=== Run completed: {self.run_name} ===")

        if self._handler_id is not None:
            logger.remove(self._handler_id)
            self._handler_id = None

        self._archive(self.content, end_time)
        return False

    def filename(self, timestamp: datetime) -> str:
        return f"{self.run_name}_{timestamp:%Y-%m-%d}_{timestamp:%H%M%S}.log.gz"

    def _archive(self, content: str, timestamp: datetime) -> None:
        if not self.s3_bucket and not self.local_dir:
            return

        filename = self.filename(timestamp)
        compressed = gzip.compress(content.encode("utf-8"))

        if self.s3_bucket:
            try:
                self.s3_key = self._upload_to_s3(compressed, filename)
                logger.info(f"Log uploaded to s3://{self.s3_bucket}/{self.s3_key}")
            except Exception as e:
                logger.error(f"S3 upload failed: {e}")

        if self.local_dir:
            try:
                self.local_path = self._save_local(compressed, filename)
                logger.info(f"Log saved locally: {self.local_path}")
            except OSError as e:
                logger.error(f"Local save failed: {e}")

    def _upload_to_s3(self, content: bytes, filename: str) -> str:
        s3 = boto3.client("s3")
        key = f"{self.s3_prefix}{filename}"
        s3.put_object(
            Bucket=self.s3_bucket,
            Key=key,
            Body=content,
            ContentType="application/gzip",
            ContentEncoding="gzip",
        )
        return key

    def _save_local(self, content: bytes, filename: str) -> Path:
        backup_dir = Path(self.local_dir)
        backup_dir.mkdir(parents=True, exist_ok=True)
        filepath = backup_dir / filename
        filepath.write_bytes(content)
        return filepath
