import enum


class UserRole(str, enum.Enum):
    HR = "hr"
    MANAGER = "manager"
    STAFF = "staff"


class MeetingType(str, enum.Enum):
    ONSITE = "onsite"
    ZOOM = "zoom"
    GOOGLE_MEET = "google_meet"


class MeetingStatus(str, enum.Enum):
    CONFIRMED = "confirmed"
    PENDING = "pending"


class CandidateStatus(str, enum.Enum):
    APPLIED = "applied"
    SCREENING = "screening"
    INTERVIEW = "interview"
    OFFER = "offer"
    REJECTED = "rejected"
    HIRED = "hired"
