"""Testing fakes – in-memory doubles for routing ports."""
from logroute.kernel.time import FrozenClock
from logroute.testing.fakes.channel import CollectingErrorChannel
from logroute.testing.fakes.sinks import FailingSink, SpyFormatter

__all__ = [
    "CollectingErrorChannel",
    "FailingSink",
    "FrozenClock",
    "SpyFormatter",
]
