"""Error classification for timedcall.

- FailureSource: primary vs tick leg
- combine_failures: group for the both-legs-failed case
"""

from .errors import FailureSource, combine_failures, describe_failure

__all__ = ["FailureSource", "combine_failures", "describe_failure"]
