#!/usr/bin/env python3
# pylint: disable=too-many-instance-attributes
"""
RabbitMQ Consumer for Content Rendering
Listens to render_queue and processes render jobs
"""

import json
import os
import time
import logging
import traceback
from pathlib import Path
from typing import Optional

import pika
from pika.exceptions import AMQPConnectionError

from content_designer.generator import HtmlGenerator
from .redis import ProgressPublisher


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

RECONNECT_DELAY_SECONDS = 5


def output_name_for(input_filename: str) -> str:
    """Default output file for a job: the input path with an .html suffix"""
    return str(Path(input_filename).with_suffix('.html'))


class RenderConsumer:
    """Handles RabbitMQ message consumption and HTML rendering"""

    def __init__(self, rabbitmq_url: Optional[str] = None, shared_dir: Optional[str] = None,
                 progress_publisher: Optional[ProgressPublisher] = None,
                 generator: Optional[HtmlGenerator] = None):
        self.connection = None
        self.channel = None
        self.queue_name = os.getenv('RENDER_QUEUE', 'render_queue')

        self.rabbitmq_url = rabbitmq_url or os.getenv('RABBITMQ_URL')

        if not self.rabbitmq_url:
            raise ValueError("RABBITMQ_URL environment variable is not set")

        self.shared_dir = Path(shared_dir or os.getenv('SHARED_DIR', '/app/shared'))

        self.shared_dir.mkdir(parents=True, exist_ok=True)

        self.progress_publisher = progress_publisher or ProgressPublisher()

        self.generator = generator or HtmlGenerator()

        logger.info("Consumer initialized with queue: %s", self.queue_name)
        logger.info("Shared directory: %s", self.shared_dir)

    def connect(self):
        """Establish connection to RabbitMQ"""
        try:
            logger.info("Connecting to RabbitMQ: %s", self.rabbitmq_url)

            parameters = pika.URLParameters(self.rabbitmq_url)
            parameters.heartbeat = 600
            parameters.blocked_connection_timeout = 300

            self.connection = pika.BlockingConnection(parameters)
            self.channel = self.connection.channel()

            self.channel.queue_declare(queue=self.queue_name, durable=True)

            # one unacknowledged job at a time
            self.channel.basic_qos(prefetch_count=1)

            logger.info("Successfully connected to RabbitMQ")
            return True

        except AMQPConnectionError as e:
            logger.error("Failed to connect to RabbitMQ: %s", e)
            return False
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Unexpected error during connection: %s", e)
            return False

    def process_message(self, ch, method, properties, body):  # pylint: disable=unused-argument
        """
        Process a render job message

        Expected message format:
        {
            "id": "unique-job-id",
            "inputFile": "filename.json",  # relative to the shared dir
            "outputFile": "filename.html"  # optional, defaults to inputFile with .html
        }
        """
        job_id = 'unknown'
        try:
            message = json.loads(body)
            if not isinstance(message, dict):
                raise ValueError("Job message must be a JSON object")

            job_id = message.get('id') or 'unknown'
            logger.info("Processing job %s", job_id)

            self.progress_publisher.start_job(job_id)

            input_filename = message.get('inputFile', '')
            if not input_filename:
                raise ValueError("Missing required field: inputFile")

            output_filename = message.get('outputFile') or output_name_for(input_filename)

            input_path = self.shared_dir / input_filename
            output_path = self.shared_dir / output_filename

            if not input_path.exists():
                raise FileNotFoundError(f"Input file not found: {input_path}")

            output_path.parent.mkdir(parents=True, exist_ok=True)

            logger.info("Rendering %s to %s", input_path, output_path)

            result = self.generator.generate_from_json_data(
                str(input_path),
                str(output_path),
                progress=lambda stage, details: self.progress_publisher.publish_progress(
                    job_id, stage, details)
            )

            self.progress_publisher.complete_job(job_id, str(output_filename), result)

            logger.info("Successfully rendered job %s", job_id)
            logger.info("Output saved to: %s", result.output_path)

            ch.basic_ack(delivery_tag=method.delivery_tag)

        except ValueError as e:
            # JSONDecodeError is a ValueError
            logger.error("Invalid job %s: %s", job_id, e)
            self.progress_publisher.fail_job(job_id, "Invalid render document", str(e))
            ch.basic_nack(delivery_tag=method.delivery_tag, requeue=False)

        except FileNotFoundError as e:
            logger.error("File not found: %s", e)
            self.progress_publisher.fail_job(job_id, "Input file not found", str(e))
            ch.basic_nack(delivery_tag=method.delivery_tag, requeue=False)

        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Error processing job: %s", e)
            logger.error(traceback.format_exc())

            self.progress_publisher.fail_job(
                job_id,
                "Render failed",
                str(e)
            )

            # may be transient, let the broker redeliver
            ch.basic_nack(delivery_tag=method.delivery_tag, requeue=True)

    def start_consuming(self):
        """Start consuming messages from the queue"""
        try:
            self.channel.basic_consume(
                queue=self.queue_name,
                on_message_callback=self.process_message,
                auto_ack=False
            )

            logger.info("Starting to consume from %s", self.queue_name)
            logger.info("Waiting for messages. To exit press CTRL+C")

            self.channel.start_consuming()

        except KeyboardInterrupt:
            logger.info("Interrupted by user")
            self.stop_consuming()
            raise
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Error during consumption: %s", e)
            self.close_connection()

    def close_connection(self):
        """Close the channel and connection, keeping the publisher open"""
        if self.channel and not self.channel.is_closed:
            try:
                self.channel.stop_consuming()
                self.channel.close()
            except Exception as e:  # pylint: disable=broad-exception-caught
                logger.error("Error closing channel: %s", e)

        if self.connection and not self.connection.is_closed:
            try:
                self.connection.close()
            except Exception as e:  # pylint: disable=broad-exception-caught
                logger.error("Error closing connection: %s", e)

    def stop_consuming(self):
        """Gracefully stop consuming and close connections"""
        logger.info("Stopping consumer...")

        self.progress_publisher.close()
        self.close_connection()

        logger.info("Consumer stopped")

    def run(self):
        """Main run loop with automatic reconnection"""
        while True:
            try:
                if self.connect():
                    self.start_consuming()
                else:
                    logger.error("Failed to connect, retrying in %d seconds...",
                                 RECONNECT_DELAY_SECONDS)
                time.sleep(RECONNECT_DELAY_SECONDS)
            except KeyboardInterrupt:
                raise
            except Exception as e:  # pylint: disable=broad-exception-caught
                logger.error("Unexpected error in run loop: %s", e)
                logger.error(traceback.format_exc())
                time.sleep(RECONNECT_DELAY_SECONDS)
