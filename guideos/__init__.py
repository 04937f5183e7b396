"""
GuideOS - Source Package

The data core of a trip, calendar and payment tracker for outdoor
fishing guides. Presentation code calls into this package.

DESIGN PRINCIPLES:
1. One shared local store, full-collection rewrites, last write wins
2. Write first, then notify every subscriber
3. Never crash the view: bad data reads back as nothing
4. Invalid input is rejected quietly at the repository gate
5. Randomness and time are injected, never reached for
"""

__version__ = "1.0.0"
__author__ = "GuideOS Team"
