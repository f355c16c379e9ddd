"""Unit lengths for speakable_time.

All values are durations in seconds. Month and year are calendar
approximations (30.44 and 365.25 days) so every duration decomposes the
same way regardless of the dates it came from.
"""

SECOND = 1
MINUTE = 60
HOUR = 3600
DAY = 86400
WEEK = 604800
MONTH = 2630016
YEAR = 31557600
