class AppError(Exception):
    def __init__(self, message: str, code: str = "INTERNAL_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class LexiconUnavailableError(AppError):
    def __init__(self, message: str):
        super().__init__(message, code="LEXICON_UNAVAILABLE")
