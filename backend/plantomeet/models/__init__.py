from plantomeet.models.participant import PollParticipant
from plantomeet.models.poll import Poll
from plantomeet.models.reaction import PollReaction
from plantomeet.models.response import PollResponse
from plantomeet.models.time_slot import PollTimeSlot

__all__ = [
    "Poll",
    "PollParticipant",
    "PollReaction",
    "PollResponse",
    "PollTimeSlot",
]
