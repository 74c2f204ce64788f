from dataclasses import dataclass, field
from typing import Optional, Protocol, Tuple, Union

VERIFY_TYPE = "tts"
VERIFY_TEMPLATE = "Your account security code is %token."
UNREACHABLE_MESSAGE = "The verification provider is unreachable. Please try again later."


@dataclass(frozen=True)
class ProviderError:
    code: Union[int, str]
    description: str

    def __str__(self) -> str:
        return f"Error code {self.code}: {self.description}"


@dataclass(frozen=True)
class ErrorReport:
    """Errors returned by the provider, or a transport failure when empty."""

    errors: Tuple[ProviderError, ...] = ()
    transport_failure: bool = False

    @classmethod
    def from_errors(cls, errors) -> "ErrorReport":
        return cls(errors=tuple(errors))

    @classmethod
    def unreachable(cls) -> "ErrorReport":
        return cls(transport_failure=True)

    @property
    def message(self) -> str:
        if self.transport_failure:
            return UNREACHABLE_MESSAGE
        return "\n".join(str(error) for error in self.errors)


@dataclass(frozen=True)
class VerificationHandle:
    id: str


@dataclass(frozen=True)
class CreateResult:
    handle: Optional[VerificationHandle] = None
    error: Optional[ErrorReport] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class ConfirmResult:
    error: Optional[ErrorReport] = field(default=None)

    @property
    def ok(self) -> bool:
        return self.error is None


class VerifyProvider(Protocol):
    def create(self, number: str) -> CreateResult:
        ...

    def confirm(self, verification_id: str, token: str) -> ConfirmResult:
        ...

    def close(self) -> None:
        ...
