"""
Triggers Package.

Azure Functions HTTP trigger implementations. Each module exposes singleton
trigger instances that function_app.py binds to routes.

Exports:
    Base classes for HTTP triggers
"""

# Only import base classes to avoid initialization at import time
# Trigger instances should be imported directly from their modules
from .http_base import BaseHttpTrigger, SystemMonitoringTrigger

__all__ = [
    'BaseHttpTrigger',
    'SystemMonitoringTrigger',
]
