"""Global constants for the ecovolunteer application."""

# Database-related constants
FIRESTORE_BATCH_LIMIT = 400

# Collection names
USERS_COLLECTION = "users"
EVENTS_COLLECTION = "events"

# User roles
ROLE_USER = "user"
ROLE_ORGANIZER = "organizer"
ROLE_ADMIN = "admin"
VALID_ROLES = [ROLE_USER, ROLE_ORGANIZER, ROLE_ADMIN]

# Event lifecycle statuses
STATUS_PENDING = "pending"
STATUS_APPROVED = "approved"
STATUS_REJECTED = "rejected"
STATUS_RESTRICTED = "restricted"
REVIEW_STATUSES = [STATUS_APPROVED, STATUS_REJECTED]

# Event types
EVENT_TYPE_VIRTUAL = "virtual"
EVENT_TYPE_IN_PERSON = "in-person"
VALID_EVENT_TYPES = [EVENT_TYPE_VIRTUAL, EVENT_TYPE_IN_PERSON]

# Presentation defaults
UNKNOWN_ORGANIZER_NAME = "Unknown"
PLACEHOLDER_IMAGE_URL = "https://placehold.co/400x200/a0eec0/1f4d1f?text={text}"

# Credentials
PASSWORD_MIN_LENGTH = 6
