class KimaiException(Exception):
    pass


class ConfigError(KimaiException):
    pass


class KimaiClientException(KimaiException):
    pass


class TransportError(KimaiClientException):
    pass


class ServerError(KimaiClientException):
    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Server returned status code {status_code}: {body}")


class DecodeError(KimaiClientException):
    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Could not decode server response: {reason}")


class DurationParseError(KimaiException, ValueError):
    pass


class EmptySelectionError(KimaiException):
    pass


class PromptAbort(KimaiException):
    pass
