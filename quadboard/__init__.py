"""
Quadboard - Source Package

A four-quadrant board of monetary notes with running totals per quadrant
and durable state across sessions.

DESIGN PRINCIPLES:
1. Every note lives in exactly one quadrant
2. Totals are derived on read, never stored
3. Every mutation is persisted immediately
4. Corrupted state degrades to defaults, one blob at a time
5. Storage substrate is swappable
"""

__version__ = "1.0.0"
__author__ = "Quadboard Team"
