from enum import StrEnum


class LLMProvider(StrEnum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"


class ExternalBackend(StrEnum):
    STRICT = "strict"
    HEURISTIC = "heuristic"
    NONE = "none"
