"""
Models describing what the orchestration layer must wait for before a container is usable.
"""
from enum import Enum
from pydantic import BaseModel, ConfigDict


class LogStream(str, Enum):
    """
    Container output streams a readiness marker can appear on.
    """
    STDOUT = "stdout"
    STDERR = "stderr"


class WaitFor(BaseModel):
    """
    A textual marker that must appear on a container stream before the
    container is considered ready.
    """
    model_config = ConfigDict(frozen=True)

    message: str
    stream: LogStream = LogStream.STDOUT

    @classmethod
    def message_on_stdout(cls, message: str) -> "WaitFor":
        return cls(message=message, stream=LogStream.STDOUT)

    @classmethod
    def message_on_stderr(cls, message: str) -> "WaitFor":
        return cls(message=message, stream=LogStream.STDERR)
