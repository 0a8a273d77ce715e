"""
Core Data Management Components

Contains the encoder that turns documents into insert payloads.
"""

from .encoder import IngestEncoder, PAYLOAD_FORMAT

__all__ = ['IngestEncoder', 'PAYLOAD_FORMAT']
