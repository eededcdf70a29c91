"""zonesync — keep several time zones in step and share them as a link.

Tracks an ordered list of (zone, instant) pairs, propagates date changes and
hour-dial shifts across every tracked zone, and serializes the result to a
restorable query-string link.
"""

__version__ = "0.1.0"
