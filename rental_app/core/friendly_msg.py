from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError

# First match wins, so subclasses come before their bases.
FRIENDLY_MESSAGES = (
    (IntegrityError, "This change conflicts with an existing record."),
    (OperationalError, "The marketplace database is unreachable. Please try again shortly."),
    (SQLAlchemyError, "Temporary issue while accessing marketplace data. Please try again shortly."),
    (TimeoutError, "The request took too long. Please try again later."),
    (ConnectionError, "Unable to reach a required service. Please try again later."),
)


def get_friendly_message(error: Exception) -> str:
    for error_type, message in FRIENDLY_MESSAGES:
        if isinstance(error, error_type):
            return message
    return "Internal server error"
