"""
Message queue and progress communication module.

This module provides RabbitMQ consumer functionality and Redis progress publishing
for the content rendering service.
"""

from .redis import ProgressPublisher
from .rabbitmq import RenderConsumer

__all__ = [
    'ProgressPublisher',
    'RenderConsumer',
]
