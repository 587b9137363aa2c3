# advisor_desk/services/errors.py


class AdvisorDeskError(Exception):
    """Base class for errors surfaced to the advisor"""


class RecordNotFoundError(AdvisorDeskError):
    def __init__(self, kind: str, record_id: str):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind.capitalize()} not found: {record_id}")


class StoreWriteError(AdvisorDeskError):
    """A create/update/delete against the store did not go through"""


class PartialWriteError(StoreWriteError):
    """The record was stored but a follow-up write to its parent failed"""

    def __init__(self, message: str, record):
        self.record = record
        super().__init__(message)


class AuthenticationError(AdvisorDeskError):
    pass
