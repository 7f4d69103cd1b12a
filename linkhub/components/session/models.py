from dataclasses import dataclass

from linkhub.domain.entities import User


@dataclass
class SignInInput:
    email: str
    password: str


@dataclass
class SignUpInput:
    name: str
    username: str
    email: str
    password: str


@dataclass
class AuthOutput:
    user: User | None = None
    success: bool = False
    error: str | None = None
    # Where the caller should navigate next, if anywhere
    redirect_to: str | None = None
