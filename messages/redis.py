"""
Progress Publisher uses Redis for Render Updates
Publishes job status changes while content documents are rendered
"""

import json
import os
import logging
from typing import Optional, Dict, Any

import redis

from content_designer.generator import RenderResult

logger = logging.getLogger(__name__)


class ProgressPublisher:
    """Publishes render progress updates to Redis"""

    def __init__(self, redis_url: Optional[str] = None, client=None):
        """
        Initialize Redis publisher

        Args:
            redis_url: Redis connection URL (defaults to env var REDIS_URL)
            client: Already-connected client to publish through
        """
        self.redis_url = redis_url or os.getenv('REDIS_URL')
        self.redis_client = client

        if self.redis_client is None and self.redis_url:
            try:
                self.connect()
            except Exception as e:  # pylint: disable=broad-exception-caught
                # progress updates are optional
                logger.error("Failed to connect to Redis: %s", e)

    def connect(self):
        """Establish Redis connection"""
        try:
            self.redis_client = redis.from_url(
                self.redis_url,
                decode_responses=True,
                socket_connect_timeout=5
            )
            self.redis_client.ping()
            logger.info("Connected to Redis at %s", self.redis_url)
        except Exception as e:
            logger.error("Redis connection failed: %s", e)
            self.redis_client = None
            raise

    @staticmethod
    def channel_for(job_id: str) -> str:
        return f"render:{job_id}"

    def start_job(self, job_id: str):
        """Publish that the job has started."""
        self.publish_status(job_id, "processing", {"details": "Rendering has started."})

    def publish_status(self, job_id: str, status: str, message_data: Dict[str, Any]):
        """
        Publish status change to Redis

        Args:
            job_id: Unique job identifier
            status: Status (processing, completed, failed)
            message_data: Data associated with the status
        """
        if not self.redis_client:
            return

        payload = {
            "status": status,
            "message": message_data
        }

        try:
            self.redis_client.publish(self.channel_for(job_id), json.dumps(payload))
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Failed to publish status: %s", e)

    def publish_progress(self, job_id: str, stage: str, details: Dict[str, Any]):
        """Publish a render stage reached by a running job"""
        self.publish_status(job_id, "processing", {"stage": stage, **details})

    def complete_job(self, job_id: str, output_path: str, result: RenderResult):
        """Mark job as completed with the render summary"""
        summary = {
            "outputFile": output_path,
            "blockCount": result.block_count,
            "components": result.components,
            "suggestions": result.suggestions,
            "readability": result.stats.to_data(),
        }

        self.publish_status(job_id, "completed", summary)

    def fail_job(self, job_id: str, error_message: str, error_details: Optional[str] = None):
        """Mark job as failed with error information"""
        error_data = {
            "code": "RENDER_FAILED",
            "message": error_message,
            "details": error_details
        }

        self.publish_status(job_id, "failed", error_data)

    def close(self):
        """Close Redis connection"""
        if self.redis_client:
            try:
                self.redis_client.close()
                logger.info("Redis connection closed")
            except Exception as e:  # pylint: disable=broad-exception-caught
                logger.error("Error closing Redis connection: %s", e)
