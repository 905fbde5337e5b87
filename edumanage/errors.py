class EduManageError(Exception):
    """Base class for every error raised by the service."""


class ConfigurationError(EduManageError):
    pass


class AuthenticationError(EduManageError):
    def __init__(self, message_key: str = "invalid_credentials", detail: str = ""):
        super().__init__(detail or message_key)
        self.message_key = message_key


class StoreError(EduManageError):
    """A remote call to the entity store failed. Nothing was applied."""


class RecordNotFoundError(EduManageError):
    def __init__(self, kind: str, record_id: str):
        super().__init__(f"{kind} record {record_id} not found")
        self.kind = kind
        self.record_id = record_id


class InvalidRecordError(EduManageError):
    """A mutation was rejected because the resulting record would be invalid."""


class OperationInProgressError(EduManageError):
    def __init__(self, key: str):
        super().__init__(f"Operation already in progress: {key}")
        self.key = key
