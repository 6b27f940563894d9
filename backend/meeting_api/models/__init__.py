from meeting_api.models.candidate import Candidate
from meeting_api.models.enums import CandidateStatus, MeetingStatus, MeetingType, UserRole
from meeting_api.models.history import CandidateHistory
from meeting_api.models.meeting import InterviewParticipant, Meeting
from meeting_api.models.position import AppliedPosition, Position
from meeting_api.models.user import User

__all__ = [
    "AppliedPosition",
    "Candidate",
    "CandidateHistory",
    "CandidateStatus",
    "InterviewParticipant",
    "Meeting",
    "MeetingStatus",
    "MeetingType",
    "Position",
    "User",
    "UserRole",
]
